"""Running commands on remote hosts over SSH, through jump hosts where needed."""

from __future__ import annotations

import socket
import threading
from typing import Callable

import paramiko

from .options import CloseStack, ConnectionOptions, Host

_TIMEOUT = 10.0
_CHUNK = 32768


class NoOpHostKeyPolicy:
    """Accepts every host key. Only for testing and other non-production use.

    A host key policy is called with the connection string and the server's key;
    it rejects the key by raising or by returning False. This policy never
    rejects, but remembers the last key it saw for each host in ``accepted``.
    """

    def __init__(self) -> None:
        self.accepted: dict[str, paramiko.PKey] = {}

    def __call__(self, hostname: str, key: paramiko.PKey) -> bool:
        self.accepted[hostname] = key
        return True


class _RemoteCommandError(paramiko.SSHException):
    """The remote command exited with a non-zero status."""

    def __init__(self, command: str, exit_status: int, output: str) -> None:
        super().__init__(f"remote command {command!r} exited with status {exit_status}")
        self.command = command
        self.exit_status = exit_status
        self.output = output


def run_command_and_get_stdout(host: Host, cmd: str) -> str:
    """Run the command on the host and return its stdout."""
    return _run_ssh_command(host, cmd, combined=False)


def run_command_and_get_output(host: Host, cmd: str) -> str:
    """Run the command on the host and return its stdout and stderr combined."""
    return _run_ssh_command(host, cmd, combined=True)


def _run_ssh_command(host: Host, cmd: str, combined: bool) -> str:
    options = _set_up_options(host)
    options.command = cmd

    stack = CloseStack()
    try:
        transport = _set_up_transport(options, stack)
        channel = transport.open_session(timeout=_TIMEOUT)
        stack.push(channel)
        result = _execute(channel, options.command, combined)
    except BaseException:
        try:
            stack.close_all()
        except Exception:
            pass
        raise
    stack.close_all()
    return result


def _set_up_options(host: Host) -> ConnectionOptions:
    options = host.connection_options()
    if host.jump_host is not None:
        options.jump_host_options = _set_up_options(host.jump_host)
    return options


def _require_host_key_policy(options: ConnectionOptions) -> None:
    if options.host_key_policy is None:
        raise paramiko.SSHException(
            f"a host key policy must be given for {options.connection_string()}"
        )


def _check_host_key(options: ConnectionOptions, key: paramiko.PKey) -> None:
    if options.host_key_policy(options.connection_string(), key) is False:
        raise paramiko.SSHException(
            f"host key for {options.connection_string()} was rejected"
        )


def _set_up_transport(options: ConnectionOptions, stack: CloseStack) -> paramiko.Transport:
    _require_host_key_policy(options)
    if options.jump_host_options is None:
        sock = socket.create_connection((options.address, options.port), timeout=_TIMEOUT)
    else:
        jump = _set_up_transport(options.jump_host_options, stack)
        sock = jump.open_channel(
            "direct-tcpip",
            (options.address, options.port),
            ("127.0.0.1", 0),
            timeout=_TIMEOUT,
        )
    stack.push(sock)

    transport = paramiko.Transport(sock)
    stack.push(transport)
    transport.start_client(timeout=_TIMEOUT)
    _check_host_key(options, transport.get_remote_server_key())
    _authenticate(transport, options)
    return transport


def _authenticate(transport: paramiko.Transport, options: ConnectionOptions) -> None:
    for key in options.keys:
        try:
            transport.auth_publickey(options.username, key)
        except paramiko.AuthenticationException:
            continue
        if transport.is_authenticated():
            return
    if options.password:
        transport.auth_password(options.username, options.password)
    if not transport.is_authenticated():
        raise paramiko.AuthenticationException(
            f"unable to authenticate to {options.connection_string()}"
        )


def _read_all(recv: Callable[[int], bytes]) -> bytes:
    chunks = []
    while data := recv(_CHUNK):
        chunks.append(data)
    return b"".join(chunks)


def _execute(channel: paramiko.Channel, command: str, combined: bool) -> str:
    if combined:
        channel.set_combine_stderr(True)
    channel.exec_command(command)

    if combined:
        data = _read_all(channel.recv)
    else:
        drain = threading.Thread(target=_read_all, args=(channel.recv_stderr,), daemon=True)
        drain.start()
        data = _read_all(channel.recv)
        drain.join()

    output = data.decode("utf-8", errors="replace")
    status = channel.recv_exit_status()
    if status != 0:
        raise _RemoteCommandError(command, status, output)
    return output