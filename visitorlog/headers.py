"""
Header resolution across sheet schema versions.

The sheet's header row has been reworded, translated and mangled by exports
over time. A logical field is looked up by its known aliases, then by its own
name, and finally by its position in the canonical column order.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from .rules import HEADER_ALIASES, HEADER_ORDER

logger = logging.getLogger(__name__)


class HeaderResolver:
    """
    Maps logical field names to cells of raw rows.

    One instance covers one data load: the column sequence used for the
    positional fallback is captured from the first row it sees and kept until
    :meth:`reset` is called.
    """

    def __init__(
        self,
        aliases: Optional[Mapping[str, Sequence[str]]] = None,
        order: Optional[Sequence[str]] = None,
    ) -> None:
        self.aliases = dict(HEADER_ALIASES if aliases is None else aliases)
        self.order = list(HEADER_ORDER if order is None else order)
        self._index = {field: i for i, field in enumerate(self.order)}
        self._columns: Optional[List[str]] = None

    @property
    def columns(self) -> Optional[List[str]]:
        return self._columns

    def reset(self) -> None:
        self._columns = None

    def _header_for(self, row: Mapping[str, Any], field: str) -> Optional[str]:
        if self._columns is None:
            self._columns = list(row.keys())

        names = self.aliases.get(field)
        if names:
            for name in names:
                if name in row:
                    return name
        if field in row:
            return field

        index = self._index.get(field)
        if index is not None and index < len(self._columns):
            fallback = self._columns[index]
            if fallback in row:
                logger.debug("field %s resolved by position to column %r", field, fallback)
                return fallback
        return None

    def resolve(self, row: Optional[Mapping[str, Any]], field: str) -> Any:
        """Return the cell for ``field`` in ``row``, or ``""`` if nothing matches."""
        if not row:
            return ""
        header = self._header_for(row, field)
        if header is None:
            return ""
        return row[header]

    def resolved_headers(self, row: Mapping[str, Any]) -> Dict[str, Optional[str]]:
        """Header used for each canonical field (None when unresolved)."""
        return {field: self._header_for(row, field) for field in self.order}
