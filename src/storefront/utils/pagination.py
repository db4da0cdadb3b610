"""Page-number pagination over Protean query results."""

import math
from dataclasses import dataclass, field

from storefront import config


def clamp(page, page_size, default_size=None) -> tuple[int, int]:
    """Normalize a 1-based page number and a page size to usable values."""
    page = max(int(page or 1), 1)
    page_size = int(page_size or default_size or config.DEFAULT_PAGE_SIZE)
    page_size = min(max(page_size, 1), config.MAX_PAGE_SIZE)
    return page, page_size


@dataclass(frozen=True)
class Page:
    items: list = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = config.DEFAULT_PAGE_SIZE

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    def pagination(self, noun: str) -> dict:
        return {
            "current_page": self.page,
            "total_pages": self.total_pages,
            f"total_{noun}": self.total,
        }
