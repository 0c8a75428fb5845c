[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "opscommons"
version = "0.1.0"
description = "Common helpers for operations tooling: logging, retries, random strings, URLs, shell commands, git, SSH and telemetry."
requires-python = ">=3.10"
keywords = ["cli", "devops", "shell", "git", "ssh", "retry", "logging", "telemetry", "url"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries",
    "Topic :: System :: Systems Administration",
    "Topic :: Utilities",
]
dependencies = [
    "paramiko",
    "termcolor",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["opscommons"]

[tool.pytest.ini_options]
addopts = "-ra"
