"""Repository layer: storage backends and identity."""

from .filesystem import FilesystemStorage
from .http import HttpStorage
from .identity import StaticIdentity
from .memory import MemoryStorage
from .ordering import apply_ordering
from .protocol import IdentityProtocol, StorageProtocol

__all__ = [
    "FilesystemStorage",
    "HttpStorage",
    "IdentityProtocol",
    "MemoryStorage",
    "StaticIdentity",
    "StorageProtocol",
    "apply_ordering",
]
