# blog_search/services/search/pagination.py
"""Page arithmetic shared by search and history listing."""

from dataclasses import dataclass
import math

from ...core.constants import MAX_PAGE_SIZE

# OFFSET + LIMIT must fit a signed 64-bit integer (SQLite INTEGER, PostgreSQL bigint)
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageRequest:
    page: int
    page_size: int

    @classmethod
    def clamp(cls, page: int, page_size: int, max_page_size: int = MAX_PAGE_SIZE) -> "PageRequest":
        """
        Clamp both values to >= 1 and page_size to ``max_page_size``.

        Pages so far out that their offset would overflow the database integer
        are pulled back to the last addressable page, which is still empty.
        """
        size = min(max(1, page_size), max(1, max_page_size))
        return cls(page=min(max(1, page), MAX_OFFSET // size), page_size=size)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size

    def total_pages(self, total_count: int) -> int:
        if total_count <= 0:
            return 0
        return math.ceil(total_count / self.page_size)
