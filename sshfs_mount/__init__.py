"""
Bootstrap sshfs mounts of local directories on remote hosts.

An SshfsMount (see sshfs_mount.mount) takes an authenticated SSH session to a remote
host, makes sure that sshfs can be run there, prepares the mount target and then hands
the session over to a bridge server that serves the local directory to sshfs until the
mount is stopped.
"""
