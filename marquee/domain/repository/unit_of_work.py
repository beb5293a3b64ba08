"""Unit of work interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class UnitOfWork(ABC):
    """Transaction boundary shared by the repositories of one request.

    `transaction()` commits when the block exits normally and rolls back when
    it raises. Blocks may nest; an inner block behaves like a savepoint.
    Infrastructure failures inside the block surface as `StoreError`.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a transaction (or a savepoint when one is already open)."""
        pass
