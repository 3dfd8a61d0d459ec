"""
Module that finds out how to invoke sshfs on the remote host.

sshfs can be present on the remote host in one of two ways. The multipass-sshfs snap
ships a private copy of sshfs along with its own libraries, which needs a custom
library path to run. Failing that, a copy of sshfs installed by the distribution's
package manager may be found on the search path. The snap is always preferred.

The version of libfuse that sshfs is linked against also matters, because libfuse 3.0
removed the nonempty mount option that older versions need to mount over a directory
that already contains files.
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Optional, Tuple

import semver

import sshfs_mount.constants as constants
from sshfs_mount.logger import get_logger
from sshfs_mount.ssh import CommandFailed, run_command, Session

log = get_logger("sshfs mount", operation="resolve_invocation")

# Version token after the marker, skipping any number of colons and spaces
_FUSE_VERSION_PATTERN = re.compile(
    re.escape(constants.FUSE_VERSION_STRING) + r"[:\s]*([^\s:]*)"
)


class SshfsMissingError(RuntimeError):
    """Exception raised when no usable sshfs can be found on the remote host."""

    def __init__(self) -> None:
        """Instantiate the exception with a hint about installing sshfs."""
        super().__init__(
            "sshfs is not installed on the remote host "
            "(install the multipass-sshfs snap or the sshfs package)"
        )


@dataclass(frozen=True)
class SshfsInvocation:
    """Command and mount options for starting sshfs on the remote host."""

    executable: str
    options: Tuple[str, ...] = constants.FIXED_OPTIONS
    fuse_version: Optional[semver.VersionInfo] = None

    @property
    def legacy(self) -> bool:
        """Check if the legacy option for libfuse 2.x is enabled."""
        return constants.LEGACY_OPTION in self.options

    def command_line(self) -> str:
        """Render the invocation as a shell command line."""
        return " ".join([self.executable] + [f"-o {opt}" for opt in self.options])

    def __str__(self) -> str:
        return self.command_line()


def resolve_invocation(session: Session) -> SshfsInvocation:
    """
    Determine the sshfs executable on the remote host and the options to run it with.

    Raises SshfsMissingError if neither the snap nor a distribution package of sshfs
    can be found.
    """
    executable = _find_snap_sshfs(session)

    if executable is None:
        executable = _find_system_sshfs(session)

    fuse_version = _query_fuse_version(session, executable)

    options: Tuple[str, ...] = constants.FIXED_OPTIONS
    if fuse_version is not None and needs_legacy_option(fuse_version):
        options += (constants.LEGACY_OPTION,)

    invocation = SshfsInvocation(executable, options, fuse_version)
    log.debug(f"resolved sshfs invocation: {invocation}")

    return invocation


def parse_fuse_version(banner: str) -> Optional[semver.VersionInfo]:
    """
    Extract the libfuse version from the output of `sshfs -V`.

    Returns None if the banner doesn't mention the libfuse version or if the version
    is not a valid semantic version.
    """
    line = _match_line_for(banner, constants.FUSE_VERSION_STRING)
    if line is None:
        return None

    match = _FUSE_VERSION_PATTERN.search(line)
    if match is None or not match.group(1):
        return None

    try:
        return semver.VersionInfo.parse(match.group(1))
    except ValueError:
        log.debug(f"ignoring unparsable libfuse version '{match.group(1)}'")
        return None


def needs_legacy_option(fuse_version: semver.VersionInfo) -> bool:
    """Check if sshfs linked against this libfuse version needs the legacy option."""
    return fuse_version < semver.VersionInfo.parse(constants.LEGACY_FUSE_VERSION)


def _find_snap_sshfs(session: Session) -> Optional[str]:
    """Build the command to run sshfs from the multipass-sshfs snap, if installed."""
    try:
        sshfs_env = run_command(session, constants.SNAP_ENV_COMMAND)

        ld_library_path = _match_line_for(
            sshfs_env, constants.LD_LIBRARY_PATH_KEY, prefix=True
        )
        snap_path = _match_line_for(sshfs_env, constants.SNAP_PATH_KEY, prefix=True)

        if ld_library_path is None or snap_path is None:
            raise ValueError("incomplete environment from multipass-sshfs.env")
    except (CommandFailed, ValueError) as e:
        log.debug(f"'multipass-sshfs' snap package is not installed: {e}")
        return None

    snap_path = snap_path[len(constants.SNAP_PATH_KEY) :]

    return f"env {ld_library_path} {snap_path}/bin/sshfs"


def _find_system_sshfs(session: Session) -> str:
    """Look up sshfs on the search path of the remote host."""
    try:
        executable = run_command(session, "sudo which sshfs").rstrip()
    except CommandFailed as e:
        log.warning(f"unable to determine if 'sshfs' is installed: {e}")
        raise SshfsMissingError()

    if not executable:
        log.warning("unable to determine if 'sshfs' is installed: no path returned")
        raise SshfsMissingError()

    return executable


def _query_fuse_version(
    session: Session, executable: str
) -> Optional[semver.VersionInfo]:
    """
    Ask sshfs for the version of libfuse it is linked against.

    A banner without a usable version is not an error, but a failing command is.
    """
    banner = run_command(session, f"sudo {executable} -V")

    fuse_version = parse_fuse_version(banner)

    if fuse_version is None:
        log.debug("sshfs did not report a libfuse version")

    return fuse_version


def _match_line_for(text: str, key: str, prefix: bool = False) -> Optional[str]:
    """Return the first line that contains (or starts with) the key, right-trimmed."""
    for line in text.splitlines():
        if line.startswith(key) if prefix else key in line:
            return line.rstrip()

    return None
