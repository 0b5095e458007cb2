import math
from dataclasses import dataclass

# keeps (page - 1) * limit well inside a 64-bit OFFSET
MAX_PAGE = 10 ** 9


@dataclass(frozen=True)
class Page:
    """A 1-indexed page request."""
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    def meta(self, total: int) -> dict:
        # computed from the full match count, independent of the slice
        return {
            "currentPage": self.page,
            "totalPages": math.ceil(total / self.limit) if total else 0,
            "totalPosts": total,
            "limit": self.limit,
        }
