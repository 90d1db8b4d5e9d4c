from __future__ import annotations
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

PAGE_SIZE = 3
# ids, ages, pages and minimumAge are 32-bit signed on the wire
INT32_MIN = -(2 ** 31)
INT32_MAX = 2 ** 31 - 1


@dataclass(frozen=True)
class AnimalFilter:
    """
    Optional constraints on a listing.
    None (and minimum_age <= 0) means "no constraint", never "exclude".
    """
    species: Optional[str] = None
    name: Optional[str] = None
    minimum_age: int = 0

    @property
    def is_empty(self) -> bool:
        return self.species is None and self.name is None and self.minimum_age <= 0

    def where_clause(self) -> Tuple[str, List[Any]]:
        """Return ("WHERE ...", params) for sqlite3 qmark binding, or ("", [])."""
        if self.is_empty:
            return "", []
        terms: List[str] = []
        params: List[Any] = []
        if self.species is not None:
            terms.append("species = ?")
            params.append(self.species)
        if self.name is not None:
            terms.append("name = ?")
            params.append(self.name)
        if self.minimum_age > 0:
            terms.append("age >= ?")
            params.append(self.minimum_age)
        return "WHERE " + " AND ".join(terms), params


@dataclass(frozen=True)
class PageRequest:
    page: int = 1
    size: int = PAGE_SIZE

    def __post_init__(self):
        if self.page < 1:
            raise ValueError(f"page must be >= 1, got {self.page}")
        if self.size < 1:
            raise ValueError(f"page size must be >= 1, got {self.size}")

    @classmethod
    def from_query(cls, page: Optional[int]) -> "PageRequest":
        return cls(page=1 if page is None else page)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

    @property
    def limit(self) -> int:
        return self.size
