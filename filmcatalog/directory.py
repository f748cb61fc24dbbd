"""
Cast/director directory.
Counts how many movies each cast member or director appears in, then filters
and windows that list for the directory page.
"""

import locale  # collation for name ordering
from collections import Counter  # frequency counts
from typing import Iterable, List, Sequence  # type hints

from .models import DirectoryEntry, DirectoryPage, DirectoryState, DirectoryTab, Movie
from .pagination import clamp_page, total_pages, window
from .data_loader import UNKNOWN_DIRECTOR  # normalizer default, never listed

from loguru import logger  # console logger


def _name_key(name: str):
	# Collate case-insensitively with the active locale, raw name as last resort for ties.
	# strxfrm rejects NUL characters, so they are dropped from the collation key only.
	return (locale.strxfrm(name.casefold().replace('\x00', '')), name)


def _names(movies: Iterable[Movie], tab: DirectoryTab) -> Iterable[str]:
	for movie in movies:
		if tab == DirectoryTab.CAST:
			for name in movie.cast:
				yield name.strip()
		else:
			director = movie.director.strip()
			if director != UNKNOWN_DIRECTOR:
				yield director


def aggregate(movies: Iterable[Movie], tab: DirectoryTab = DirectoryTab.CAST) -> List[DirectoryEntry]:
	"""
	Frequency of each trimmed, non-empty name across the catalog.
	Ordered by count (highest first), then by name.
	"""
	tab = DirectoryTab(tab)
	counts = Counter(name for name in _names(movies, tab) if name)
	entries = [DirectoryEntry(name=name, count=count) for name, count in counts.items()]
	entries.sort(key=lambda e: _name_key(e.name))  # secondary key first, sort is stable
	entries.sort(key=lambda e: e.count, reverse=True)
	return entries


def filter_entries(entries: Sequence[DirectoryEntry], text: str) -> List[DirectoryEntry]:
	"""Case-insensitive substring filter on names; blank text keeps everything."""
	needle = (text or '').strip().casefold()
	if not needle:
		return list(entries)
	return [e for e in entries if needle in e.name.casefold()]


def directory_page(movies: Sequence[Movie], state: DirectoryState, page_size: int = 40) -> DirectoryPage:
	"""Aggregate, filter, and cut one windowed page for the directory view."""
	entries = filter_entries(aggregate(movies, state.tab), state.name_filter)
	pages = total_pages(len(entries), page_size)
	page = clamp_page(state.page, pages)
	logger.debug(
		f"[Directory] tab={state.tab.value} filter={state.name_filter!r} -> {len(entries)} names, page {page}/{pages}"
	)
	return DirectoryPage(
		entries=window(entries, page, page_size),
		page=page,
		total_pages=pages,
		total_entries=len(entries),
	)
