# opscommons

Small building blocks for command-line tools that automate infrastructure
work:

- `opscommons.logs` – loggers configured from a process-wide level and format.
- `opscommons.retry` – run an action until it succeeds, up to a retry limit.
- `opscommons.randomness` – cryptographically random strings from a character set.
- `opscommons.urls` – build URLs from a base, path parts, query and fragment; open a URL in a browser.
- `opscommons.shell` – run commands, capture their output, and prompt the user.
- `opscommons.git` – clone repositories and check out refs through the `git` CLI.
- `opscommons.ssh` – run commands on remote hosts over SSH, through jump hosts if needed.
- `opscommons.telemetry` – post usage events as JSON to an HTTP endpoint.
- `opscommons.version` – report the version of the running tool.

## Installation

```
pip install opscommons
```

The shell and git helpers need the programs they run (`git`, etc.) on `PATH`.

## Examples

### Logging

```python
from opscommons.logs import get_logger, set_global_log_level, set_global_log_formatter

set_global_log_level("DEBUG")
set_global_log_formatter("json")
logger = get_logger("my-tool", "v1.2.3")
logger.info("starting up")
```

Loggers write to stderr, in `key=value` text by default or as one JSON object
per line when the formatter is `"json"`. The global level and format apply
only to loggers created afterwards, so set them as early as possible.
`get_project_logger()` returns a logger tagged with `name=opscommons`.

### Retrying

```python
from opscommons.logs import get_logger
from opscommons.retry import do_with_retry, FatalError, MaxRetriesExceeded

def fetch():
    ...  # raise to retry, raise FatalError to stop immediately

try:
    result = do_with_retry(get_logger("my-tool", ""), "fetch data", 5, 2.0, fetch)
except MaxRetriesExceeded as err:
    print(err)  # 'fetch data' unsuccessful after 5 retries
```

The sleep between retries may be given in seconds or as a `timedelta`.

### Random strings

```python
from opscommons.randomness import random_string, BASE62_CHARS, DIGITS

suffix = random_string(6, BASE62_CHARS)
pin = random_string(4, DIGITS)
```

### URLs

```python
from opscommons.urls import format_url, open_url

format_url("http://www.example.com/", ["/foo", "bar/"], {"baz": ["blah"]}, "fragment")
# 'http://www.example.com/foo/bar?baz=blah#fragment'

open_url("https://www.example.com")  # xdg-open, open or rundll32, by platform
```

Query values passed to `format_url` override those already in the base URL.

### Shell commands

```python
from opscommons.shell import cmd, prompt
from opscommons.shell.options import ShellOptions

options = ShellOptions(env={"STAGE": "dev"})
print(cmd.run_shell_command_and_get_stdout(options, "echo", "hi"))   # 'hi\n'

output = cmd.run_shell_command_and_get_output_struct(options, "ls", "-l")
print(output.stdout, output.stderr, output.combined)

if prompt.prompt_user_for_yes_no("Continue?", options):
    cmd.run_shell_command(options, "make", "deploy")
```

Commands that cannot start or exit with a non-zero status raise
`ShellCommandError`; `require_command_installed` raises
`CommandNotInstalledError` when a program is missing from `PATH`. Setting
`sensitive_args=True` keeps arguments out of the log. With
`non_interactive=True`, prompts answer `"yes"` without reading, and
`prompt_user_for_password` raises `NonInteractivePasswordPromptError`.

### git

```python
from opscommons.git import repo

repo.clone(None, "https://github.com/example/project.git", "/tmp/project")
repo.checkout(None, "v1.0.0", "/tmp/project")
```

The target directory must already exist; otherwise
`TargetDirectoryNotExistsError` is raised.

### SSH

```python
from opscommons.ssh.options import Host
from opscommons.ssh.client import NoOpHostKeyPolicy, run_command_and_get_stdout

password = "password"
bastion = Host(hostname="bastion.example.com", ssh_user_name="ubuntu",
               password=password, host_key_policy=NoOpHostKeyPolicy())
inner = Host(hostname="10.0.0.5", ssh_user_name="ubuntu", password=password,
             jump_host=bastion, host_key_policy=NoOpHostKeyPolicy())
print(run_command_and_get_stdout(inner, "uname -a"))
```

Hosts authenticate with an SSH agent, a private key and/or a password; a host
with none of these raises `NoAuthMethodError`. Every host needs a
`host_key_policy`. `NoOpHostKeyPolicy` accepts any key and is meant only for
testing.

### Telemetry

```python
from opscommons.telemetry import EventContext, MixpanelTelemetryTracker

tracker = MixpanelTelemetryTracker("https://telemetry.example.com/track", "my-tool", "v1.2.3")
tracker.track_event(EventContext(command="deploy", event_name="started"), {"env": "staging"})
```

Tracking failures are logged and never raised.

## What this package does not do

It does not configure git credentials: there are no helpers for credential
caches, HTTPS authentication or forcing HTTPS remotes. Set up git
authentication yourself before cloning private repositories.

## Running the tests

```
pip install -e ".[test]"
pytest
```