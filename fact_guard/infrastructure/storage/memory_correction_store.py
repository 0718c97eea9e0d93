"""In-memory implementation of the correction store port."""

from collections import defaultdict
from typing import Dict, List

from ...domain.models.correction import CorrectionRecord
from ...domain.ports.correction_store import CorrectionStore


class InMemoryCorrectionStore(CorrectionStore):
    """Process-local correction history, lost on restart."""

    def __init__(self):
        """Initialize an empty store."""
        self._records: Dict[str, List[CorrectionRecord]] = defaultdict(list)

    async def append(self, record: CorrectionRecord) -> None:
        """Append a record to its owner's history."""
        self._records[record.user_id].append(record)

    async def list_for_user(self, user_id: str) -> List[CorrectionRecord]:
        """Get a copy of the user's history."""
        return list(self._records.get(user_id, ()))

    def __len__(self) -> int:
        return sum(len(records) for records in self._records.values())
