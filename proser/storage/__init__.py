"""Storage backends the scaffolding pipeline writes through.

Quick usage::

    from proser.storage import MemoryStorage, OSStorage

    storage = MemoryStorage()
    storage.write_file("/project/docs/README.md", b"# Docs\\n")
    storage.info("/project/docs").is_dir  # True
"""

from proser.storage.base import EntryInfo, Storage, WalkAction, normalize
from proser.storage.memory import MemoryStorage
from proser.storage.os_storage import OSStorage

__all__ = [
    "EntryInfo",
    "MemoryStorage",
    "OSStorage",
    "Storage",
    "WalkAction",
    "normalize",
]
