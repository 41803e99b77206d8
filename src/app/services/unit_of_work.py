"""Unit of Work Interface

Transaction boundary shared by the repositories of one use case.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Abstract unit of work

    One instance wraps one database session. Use cases commit on success
    and roll back on any failure; after a rollback the same unit of work
    can run the transaction body again.
    """

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    def is_conflict(self, error: Exception) -> bool:
        """
        Whether an exception is a write conflict worth retrying

        Args:
            error: Exception raised while running or committing the transaction

        Returns:
            True if another transaction changed rows this one read or wrote
        """
        pass
