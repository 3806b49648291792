"""HTTP directory adapter."""

from __future__ import annotations

from .client import DirectoryAPIError, DirectoryClient, DirectoryUnreachableError
from .schema import DirectoryPerson
from .source import HttpAttributeSource

__all__ = [
    "DirectoryAPIError",
    "DirectoryClient",
    "DirectoryPerson",
    "DirectoryUnreachableError",
    "HttpAttributeSource",
]
