"""inodekit — inode tree walking and name=value parameter files."""

__version__ = "0.1.0"


class InodekitError(Exception):
    """User-facing CLI error.

    Raised for missing paths, unreadable parameter files, absent
    records, and other recoverable input errors. The message is
    printed to stderr and the process exits with code 1.
    """
