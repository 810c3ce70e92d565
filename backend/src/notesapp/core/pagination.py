"""Pagination parameter handling."""

import math
from dataclasses import dataclass
from typing import Optional, Union

from ..config import get_settings

RawParam = Optional[Union[str, int]]

# largest offset the database accepts (signed 64-bit)
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class Page:
    number: int
    size: int

    @property
    def offset(self) -> int:
        return (self.number - 1) * self.size

    def total_pages(self, total: int) -> int:
        return math.ceil(total / self.size) if total else 0


def _positive_int(value: RawParam) -> Optional[int]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = int(str(value).strip())
    except ValueError:
        return None
    return number if number >= 1 else None


def normalize_pagination(page: RawParam = None, limit: RawParam = None) -> Page:
    """Parse raw ``page``/``limit`` values, falling back to defaults.

    Malformed or non-positive values never fail the request; ``limit`` is
    capped at ``max_page_size`` and ``page`` is clamped so the offset fits
    in a database integer.
    """
    settings = get_settings()
    page_size = min(_positive_int(limit) or settings.default_page_size, settings.max_page_size)
    page_number = min(_positive_int(page) or 1, MAX_OFFSET // page_size)
    return Page(number=page_number, size=page_size)
