"""Cloning repositories and checking out refs through the git command line."""