"""Module defining various global constants."""

# sshfs-mount version
VERSION = "1.0.0"

# Special exit code for when sshfs-mount itself fails.
SSHFS_MOUNT_ERROR_CODE = 254

# Helper shipped by the multipass-sshfs snap that prints the environment needed to run
# its private copy of sshfs.
SNAP_ENV_COMMAND = "sudo multipass-sshfs.env"

LD_LIBRARY_PATH_KEY = "LD_LIBRARY_PATH="
SNAP_PATH_KEY = "SNAP="

# Marker in the output of `sshfs -V` that precedes the libfuse version.
FUSE_VERSION_STRING = "FUSE library version"

# The nonempty option was removed in libfuse 3.0.
LEGACY_FUSE_VERSION = "3.0.0"
LEGACY_OPTION = "nonempty"

# Options that sshfs always needs when it runs on the passive side of an SFTP bridge.
FIXED_OPTIONS = ("slave", "transform_symlinks", "allow_other")
