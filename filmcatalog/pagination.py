"""
Pagination helpers.
Two flavours: cumulative "load more" prefixes for movie grids, and disjoint
windows with clamped page numbers for the directory.
"""

import math  # ceil for page counts
from typing import List, Sequence, TypeVar  # generic over movies and directory entries

from .models import Page

T = TypeVar('T')


def paginate(items: Sequence[T], page: int, page_size: int) -> List[T]:
	"""Prefix of length min(page * page_size, len(items)); page numbers start at 1."""
	page = max(1, page)
	page_size = max(1, page_size)
	return list(items[:page * page_size])


def load_more_page(items: Sequence, page: int, page_size: int) -> Page:
	"""Visible prefix together with the total so the view knows whether to offer "Load More"."""
	return Page(items=paginate(items, page, page_size), total=len(items))


def total_pages(count: int, page_size: int) -> int:
	"""Number of windowed pages; 0 when there is nothing to show."""
	return math.ceil(count / max(1, page_size)) if count > 0 else 0


def clamp_page(page: int, pages: int) -> int:
	"""Keep a page number inside [1, pages]; an empty list still reports page 1."""
	return min(max(1, page), max(1, pages))


def window(items: Sequence[T], page: int, page_size: int) -> List[T]:
	"""Disjoint slice for `page` after clamping it into range."""
	page_size = max(1, page_size)
	page = clamp_page(page, total_pages(len(items), page_size))
	start = (page - 1) * page_size
	return list(items[start:start + page_size])
