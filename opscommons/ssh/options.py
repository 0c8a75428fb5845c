"""Host settings and connection bookkeeping for SSH connections."""

from __future__ import annotations

import io
import os
import socket
from dataclasses import dataclass, field
from typing import Any, Callable

import paramiko
import paramiko.agent

DEFAULT_SSH_PORT = 22

_KEY_TYPES: tuple[type[paramiko.PKey], ...] = (
    paramiko.Ed25519Key,
    paramiko.ECDSAKey,
    paramiko.RSAKey,
)


class NoAuthMethodError(Exception):
    """Raised when a host has no way to authenticate configured."""

    def __init__(self) -> None:
        super().__init__("no authentication method defined")


class _CloseErrors(Exception):
    """Several resources failed to close."""

    def __init__(self, errors: list[BaseException]) -> None:
        self.errors = list(errors)
        super().__init__("; ".join(str(err) for err in self.errors))


class _AgentConnection(paramiko.agent.AgentSSH):
    """An SSH agent reached over an already connected socket."""

    def __init__(self, conn: socket.socket) -> None:
        super().__init__()
        self._connect(conn)


def _dial_unix(path: str) -> socket.socket:
    if not path:
        raise OSError("no agent socket path given")
    family = getattr(socket, "AF_UNIX", None)
    if family is None:
        raise OSError("unix sockets are not supported on this platform")
    sock = socket.socket(family, socket.SOCK_STREAM)
    try:
        sock.connect(path)
    except OSError:
        sock.close()
        raise
    return sock


def _agent_keys(path: str) -> list[paramiko.PKey]:
    return list(_AgentConnection(_dial_unix(path)).get_keys())


def _parse_private_key(text: str) -> paramiko.PKey:
    for key_type in _KEY_TYPES:
        try:
            return key_type.from_private_key(io.StringIO(text))
        except (paramiko.SSHException, ValueError):
            continue
    raise paramiko.SSHException("unable to parse the private key")


@dataclass
class ConnectionOptions:
    """Everything needed to open one SSH connection, possibly through a jump host."""

    username: str
    address: str
    port: int
    # Keys tried in order, followed by the password if one is set.
    keys: list[paramiko.PKey] = field(default_factory=list)
    password: str = ""
    host_key_policy: Callable[[str, paramiko.PKey], Any] | None = None
    command: str = ""
    jump_host_options: ConnectionOptions | None = None

    def connection_string(self) -> str:
        """Return the address and port joined as host:port."""
        address = f"[{self.address}]" if ":" in self.address else self.address
        return f"{address}:{self.port}"


@dataclass
class Host:
    """A remote host and the ways to authenticate to it.

    Authentication methods are tried in this order: the override agent, the
    local agent, the private key, then the password.
    """

    hostname: str = ""
    ssh_user_name: str = ""
    # Port to connect to; 0 means the standard SSH port.
    custom_port: int = 0
    jump_host: Host | None = None
    # Called with "host:port" and the server key; raises to reject the key.
    host_key_policy: Callable[[str, paramiko.PKey], Any] | None = None
    private_key: str = ""
    ssh_agent: bool = False
    # An in-process agent exposing a ``socket_file`` attribute.
    override_ssh_agent: Any = None
    password: str = ""

    @property
    def port(self) -> int:
        """The port used to reach the host."""
        return self.custom_port or DEFAULT_SSH_PORT

    def _auth_keys(self) -> list[paramiko.PKey]:
        keys: list[paramiko.PKey] = []
        if self.override_ssh_agent is not None:
            try:
                keys.extend(_agent_keys(self.override_ssh_agent.socket_file))
            except OSError as err:
                raise OSError(f"failed to dial in-memory ssh agent: {err}") from err
        if self.ssh_agent:
            keys.extend(_agent_keys(os.environ.get("SSH_AUTH_SOCK", "")))
        if self.private_key:
            keys.append(_parse_private_key(self.private_key))
        return keys

    def connection_options(self) -> ConnectionOptions:
        """Build the connection options for this host, without its jump host."""
        keys = self._auth_keys()
        if not keys and not self.password:
            raise NoAuthMethodError()
        return ConnectionOptions(
            username=self.ssh_user_name,
            address=self.hostname,
            port=self.port,
            keys=keys,
            password=self.password,
            host_key_policy=self.host_key_policy,
        )


def close(closeable: Any, *args: str) -> None:
    """Close the object, ignoring errors whose message is one of args.

    None is accepted and ignored.
    """
    if closeable is None:
        return
    try:
        closeable.close()
    except Exception as err:
        if str(err) in args:
            return
        raise


class CloseStack:
    """Resources to close at the end of a connection, most recent first."""

    def __init__(self) -> None:
        self._stack: list[Any] = []

    def push(self, item: Any) -> None:
        """Put an item on top of the stack."""
        self._stack.insert(0, item)

    def __len__(self) -> int:
        return len(self._stack)

    def close_all(self) -> None:
        """Close every item, then raise one error carrying every failure.

        End-of-file errors are ignored, as they only mean the item was already closed.
        """
        errors: list[BaseException] = []
        for item in self._stack:
            try:
                close(item, "EOF")
            except EOFError:
                continue
            except Exception as err:
                errors.append(err)
        if errors:
            raise _CloseErrors(errors)