"""
In-memory table registry.

Tables live only in process memory; there is no persistence. When the
registry is full the least recently used table is dropped.
"""

import logging
from collections import OrderedDict

from deckpractice.config import settings
from deckpractice.models.failure import TableNotFoundError
from deckpractice.services.practice_table import PracticeTable

logger = logging.getLogger(__name__)


class TableRegistry:
    """LRU map of table id -> PracticeTable."""

    def __init__(self, max_tables: int | None = None) -> None:
        self._max_tables = max_tables if max_tables is not None else settings.max_tables
        self._tables: OrderedDict[str, PracticeTable] = OrderedDict()

    def __len__(self) -> int:
        return len(self._tables)

    def add(self, table: PracticeTable) -> PracticeTable:
        self._tables[table.table_id] = table
        self._tables.move_to_end(table.table_id)

        while len(self._tables) > self._max_tables:
            evicted_id, _ = self._tables.popitem(last=False)
            logger.info("Evicted table %s", evicted_id)

        return table

    def get(self, table_id: str) -> PracticeTable:
        """
        Look up a table and mark it recently used.

        Raises:
            TableNotFoundError: If no such table exists
        """
        table = self._tables.get(table_id)
        if table is None:
            raise TableNotFoundError(table_id)
        self._tables.move_to_end(table_id)
        return table

    def discard(self, table_id: str) -> None:
        """
        Drop a table (reset).

        Raises:
            TableNotFoundError: If no such table exists
        """
        if self._tables.pop(table_id, None) is None:
            raise TableNotFoundError(table_id)
        logger.info("Discarded table %s", table_id)


_registry = TableRegistry()


def get_registry() -> TableRegistry:
    """Process-wide registry (FastAPI dependency)."""
    return _registry
