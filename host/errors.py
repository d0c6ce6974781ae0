"""Errors raised by host collaborators (clipboard and persistent store)."""


class HostError(Exception):
    """Base class for failures in the host environment."""


class ClipboardError(HostError):
    """The system clipboard could not be read or written."""


class StorageError(HostError):
    """The persistent key/value store could not be read or written."""
