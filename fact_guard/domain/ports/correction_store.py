"""Port interface for correction-history storage."""

from abc import ABC, abstractmethod
from typing import List

from ..models.correction import CorrectionRecord


class CorrectionStore(ABC):
    """Abstract interface for per-user correction storage.

    Records are partitioned by user and never mutated after insertion.
    Concrete implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def append(self, record: CorrectionRecord) -> None:
        """Append a record to its owner's history.

        Raises:
            StorageError: If the record could not be stored
        """
        pass

    @abstractmethod
    async def list_for_user(self, user_id: str) -> List[CorrectionRecord]:
        """Get a user's history in insertion order."""
        pass
