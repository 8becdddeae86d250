"""Abstract interfaces for source document and metadata storage."""

from abc import ABC, abstractmethod
from datetime import datetime

from stockledger.core.entities.documents import DocumentKind, SourceDocument


class IDocumentStore(ABC):
    """Interface for source document persistence."""

    @abstractmethod
    async def save(self, document: SourceDocument) -> SourceDocument:
        """Create or replace a source document."""
        pass

    @abstractmethod
    async def get(self, kind: DocumentKind, doc_id: str) -> SourceDocument | None:
        """Get a document by kind and ID."""
        pass

    @abstractmethod
    async def list_documents(
        self, kind: DocumentKind, limit: int = 100, offset: int = 0
    ) -> list[SourceDocument]:
        """List documents of one kind, newest first."""
        pass

    @abstractmethod
    async def delete(self, kind: DocumentKind, doc_id: str) -> bool:
        """Delete a document. Returns False if it did not exist."""
        pass

    @abstractmethod
    async def is_empty(self) -> bool:
        """True when no expense or sales document has been stored yet."""
        pass


class IMetadataStore(ABC):
    """Interface for the last-modified marker read by sync collaborators."""

    @abstractmethod
    async def get_last_modified(self) -> datetime | None:
        pass

    @abstractmethod
    async def set_last_modified(self, timestamp: datetime) -> None:
        pass
