"""
Modules that probe and prepare the remote host before sshfs can be started there.

Mounting works in reverse compared to a regular sshfs mount: sshfs runs on the remote
host in slave mode and talks SFTP over the stdin/stdout of the SSH channel, while the
local machine serves the files. Before that can happen, the remote host needs to be
checked for a usable copy of sshfs and the mount target needs to exist.
"""

from .invocation import (
    needs_legacy_option,
    parse_fuse_version,
    resolve_invocation,
    SshfsInvocation,
    SshfsMissingError,
)
from .target import default_ids, MountTarget, provision_target

__all__ = [
    "MountTarget",
    "SshfsInvocation",
    "SshfsMissingError",
    "default_ids",
    "needs_legacy_option",
    "parse_fuse_version",
    "provision_target",
    "resolve_invocation",
]
