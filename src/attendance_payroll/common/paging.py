from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Page(Generic[T]):
    items: Sequence[T]
    page: int
    limit: int
    total_records: int

    @property
    def pages(self) -> int:
        return math.ceil(self.total_records / self.limit) if self.limit else 0
