from __future__ import annotations

from typing import Mapping, Protocol, Sequence

from .model import Office


class OfficeRepository(Protocol):
    """Read-only view of office geofences.

    Offices are administered elsewhere; attendance only reads them.
    """

    def list_all(self) -> Sequence[Office]:
        """All offices in store order."""
        raise NotImplementedError

    def names_by_id(self) -> Mapping[int, str]:
        raise NotImplementedError
