"""
host/
-----
Host environment collaborators.

    from host import SystemClipboard, MemoryClipboard
    from host import JsonFileStore, MemoryStore
"""

from host.errors    import HostError, ClipboardError, StorageError
from host.clipboard import ClipboardSource, SystemClipboard, MemoryClipboard
from host.storage   import KeyValueStore, JsonFileStore, MemoryStore

__all__ = [
    "HostError", "ClipboardError", "StorageError",
    "ClipboardSource", "SystemClipboard", "MemoryClipboard",
    "KeyValueStore", "JsonFileStore", "MemoryStore",
]
