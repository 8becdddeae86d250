"""
Transactional persistence port.

A store session groups every store the commit protocol writes to, bound to
a single transaction: reads see earlier writes of the same session, and all
writes commit or roll back together.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from stockledger.core.interfaces.catalog_store import ICatalogStore
from stockledger.core.interfaces.document_store import IDocumentStore
from stockledger.core.interfaces.inventory_store import IInventoryLedger, IMovementLog


@dataclass
class StoreSession:
    """Stores bound to one open transaction."""

    catalog: ICatalogStore
    ledger: IInventoryLedger
    movements: IMovementLog
    documents: IDocumentStore


class ITransactionManager(ABC):
    """Opens store sessions that commit on success and roll back on error."""

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[StoreSession]:
        """
        Open a transaction.

        Usage:
            async with manager.transaction() as session:
                await session.movements.record(...)
        """
        pass

    @abstractmethod
    def read_transaction(self) -> AbstractAsyncContextManager[StoreSession]:
        """
        Open a read transaction.

        Every read of the session sees the same committed state, even when
        other transactions commit in between.
        """
        pass
