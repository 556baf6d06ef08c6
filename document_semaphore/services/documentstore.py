"""Base interface for versioned document stores.

A store keeps one object per ``(scope, path)`` and supports optimistic
concurrency control: every read returns a version token and every write must
present the token it last saw.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class VersionedDocument:
    """Raw document content together with its current version token.

    Attributes:
        content: Raw bytes as stored.
        version: Opaque token to hand back on the next write.
    """

    content: bytes
    version: str


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a version-checked write.

    Attributes:
        success: True if the write was applied.
        conflict: True if the store rejected a stale version token.
        version: The new version token after a successful write, if known.
    """

    success: bool
    conflict: bool = False
    version: Optional[str] = None

    @classmethod
    def applied(cls, version: Optional[str] = None) -> "WriteResult":
        return cls(success=True, version=version)

    @classmethod
    def rejected(cls) -> "WriteResult":
        return cls(success=False, conflict=True)


class DocumentStore(ABC):
    """Abstract base class for document store implementations."""

    @abstractmethod
    async def scope_exists(self, scope: str) -> bool:
        """Check whether the coordination scope has been provisioned.

        Args:
            scope: Namespace the document lives in (branch, store name, ...).

        Returns:
            bool: True if the scope exists.
        """

    @abstractmethod
    async def read(self, scope: str, path: str) -> VersionedDocument:
        """Read a document and its version token.

        Args:
            scope: Namespace the document lives in.
            path: Location of the document inside the scope.

        Returns:
            VersionedDocument: Content and version token.

        Raises:
            DocumentNotFoundError: If no document exists at ``path``.
            DocumentStoreError: On any other store failure.
        """

    @abstractmethod
    async def write(
        self,
        scope: str,
        path: str,
        content: bytes,
        version: Optional[str],
        message: str,
    ) -> WriteResult:
        """Write a document if ``version`` still matches the stored one.

        Args:
            scope: Namespace the document lives in.
            path: Location of the document inside the scope.
            content: New raw content.
            version: Token from the last read, or None to create a new
                document (which conflicts if one already exists).
            message: Human-readable description of the change.

        Returns:
            WriteResult: ``conflict=True`` when the version check failed.

        Raises:
            DocumentStoreError: On any failure other than a version conflict.
        """
