import socket

import paramiko
import pytest

from opscommons.ssh.client import (
    NoOpHostKeyPolicy,
    run_command_and_get_output,
    run_command_and_get_stdout,
)
from opscommons.ssh.options import Host, NoAuthMethodError


def _free_port():
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_noop_host_key_policy_accepts_any_key():
    key = paramiko.RSAKey.generate(bits=2048)
    assert NoOpHostKeyPolicy()("example.com:22", key) is None


def test_host_without_auth_raises_before_connecting():
    with pytest.raises(NoAuthMethodError):
        run_command_and_get_stdout(Host(hostname="127.0.0.1"), "ip a")


def test_jump_host_without_auth_raises():
    password = "password"
    jump = Host(hostname="127.0.0.1")
    host = Host(hostname="10.0.0.1", password=password, jump_host=jump, host_key_policy=NoOpHostKeyPolicy())
    with pytest.raises(NoAuthMethodError):
        run_command_and_get_output(host, "ip a")


def test_missing_host_key_policy_raises():
    password = "password"
    host = Host(hostname="127.0.0.1", custom_port=_free_port(), password=password)
    with pytest.raises(paramiko.SSHException, match="host key policy"):
        run_command_and_get_stdout(host, "ip a")


def test_jump_host_missing_host_key_policy_raises():
    password = "password"
    jump = Host(hostname="127.0.0.1", custom_port=_free_port(), password=password)
    host = Host(hostname="10.0.0.1", password=password, jump_host=jump, host_key_policy=NoOpHostKeyPolicy())
    with pytest.raises(paramiko.SSHException, match="127.0.0.1"):
        run_command_and_get_output(host, "ip a")


def test_unreachable_host_raises_connection_error():
    password = "password"
    host = Host(
        hostname="127.0.0.1",
        custom_port=_free_port(),
        password=password,
        host_key_policy=NoOpHostKeyPolicy(),
    )
    with pytest.raises(OSError):
        run_command_and_get_stdout(host, "ip a")