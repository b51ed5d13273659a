from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class BookFilter:
    """Partial-match criteria for books. Empty fields match everything."""
    title: Optional[str] = None
    author: Optional[str] = None


@dataclass(frozen=True)
class LoanFilter:
    """Exact-match criteria for loans, OR-combined. Empty fields never match."""
    isbn: Optional[str] = None
    customer: Optional[str] = None
