"""Module with shared fixtures and flags to pytest to enable certain extra tests."""

from typing import Dict, List, Tuple, Union

import pytest

from sshfs_mount.ssh import CommandResult, Session

Response = Union[Tuple[str, str, int], Exception]


class FakeSession(Session):
    """Session that answers commands from a script and records what was executed."""

    def __init__(self, responses: Dict[str, Response]):
        self.responses = responses
        self.commands: List[str] = []
        self.closed = False

    def execute(self, command: str) -> CommandResult:
        self.commands.append(command)

        response = self.responses.get(command)

        if response is None:
            return CommandResult("", f"sh: 1: {command}: not found\n", 127)
        elif isinstance(response, Exception):
            raise response
        else:
            return CommandResult(*response)

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_session():
    """Return a factory for sessions that answer (stdout, stderr, status) per command."""
    return FakeSession


def pytest_addoption(parser):
    parser.addoption(
        "--ssh-host",
        action="store",
        default=None,
        help="Run SSH tests against this host",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "ssh: mark test as requiring an SSH host to run")


def pytest_collection_modifyitems(config, items):
    if not config.getoption("--ssh-host"):
        skip_ssh = pytest.mark.skip(reason="only runs with --ssh-host option")

        for item in items:
            if item.get_closest_marker("ssh") is not None:
                item.add_marker(skip_ssh)
