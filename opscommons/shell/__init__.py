"""Helpers for starting and interacting with subprocesses and prompting the user."""