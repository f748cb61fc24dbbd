"""
Data models for the Film Catalog engine.
Defines the core data structures used throughout the system.
"""

# Import dataclass to define simple "record-like" classes without boilerplate
from dataclasses import dataclass, field, replace  # auto-generates __init__, __repr__, etc.
# Enum gives us closed sets of values for sort keys, directions and filter types
from enum import Enum  # string-valued enums
# Import typing helpers for precise and self-documenting types
from typing import Any, Dict, List, Optional, Tuple  # lists, optional values, and fixed-size tuples


class SortKey(str, Enum):
	"""Sort keys offered by the home view."""
	YEAR = 'year'
	RATING = 'rating'
	TITLE = 'title'
	RUNTIME = 'runtime'
	RELEASED = 'released'
	POPULARITY = 'popularity'  # no vote counts in the data, aliases rating


class SortDirection(str, Enum):
	ASC = 'asc'
	DESC = 'desc'


class FilterType(str, Enum):
	"""Attributes the filtered-results view can match on."""
	YEAR = 'year'
	CAST = 'cast'
	DIRECTOR = 'director'
	GENRE = 'genre'


class DirectoryTab(str, Enum):
	CAST = 'cast'
	DIRECTOR = 'director'


@dataclass(frozen=True)
class Movie:
	"""
	Canonical movie record produced by the normalizer.
	Never mutated after creation; every field already carries its default.
	"""
	id: str  # unique identifier of the movie (string for consistency)
	title: str  # trimmed title, "Untitled" when missing
	year: Optional[int] = None  # positive release year or None
	rating: Optional[float] = None  # rating on a 0-10 scale or None
	genre: Tuple[str, ...] = ()  # trimmed genre names in source order
	runtime: str = 'N/A'  # display runtime, e.g. "165 min"
	runtime_minutes: int = 0  # parsed minutes, 0 when unparseable
	released: str = ''  # display release date as found in the source
	release_timestamp: int = 0  # sortable day ordinal, 0 when no date or year
	plot: str = 'No plot summary available.'  # synopsis
	director: str = 'Unknown director'  # director name
	cast: Tuple[str, ...] = ()  # cast names in billing order
	poster: str = 'default.png'  # resolved poster URL or placeholder path

	def to_dict(self) -> Dict[str, Any]:
		"""Serialize using the same field names the catalog file uses."""
		return {
			'id': self.id,
			'title': self.title,
			'year': self.year,
			'rating': self.rating,
			'genre': list(self.genre),
			'runtime': self.runtime,
			'runtimeMins': self.runtime_minutes,
			'released': self.released,
			'releaseTimestamp': self.release_timestamp,
			'plot': self.plot,
			'director': self.director,
			'cast': list(self.cast),
			'poster': self.poster,
		}

	@classmethod
	def from_dict(cls, payload: Dict[str, Any]) -> 'Movie':
		"""Rebuild an already-normalized movie (e.g. a stored favorite)."""
		return cls(
			id=str(payload['id']),
			title=payload.get('title') or 'Untitled',
			year=payload.get('year'),
			rating=payload.get('rating'),
			genre=tuple(payload.get('genre') or ()),
			runtime=payload.get('runtime') or 'N/A',
			runtime_minutes=int(payload.get('runtimeMins') or 0),
			released=payload.get('released') or '',
			release_timestamp=int(payload.get('releaseTimestamp') or 0),
			plot=payload.get('plot') or 'No plot summary available.',
			director=payload.get('director') or 'Unknown director',
			cast=tuple(payload.get('cast') or ()),
			poster=payload.get('poster') or 'default.png',
		)


@dataclass(frozen=True)
class FavoriteEntry:
	"""A movie snapshot frozen at the moment it was favorited."""
	movie: Movie  # copy of the catalog record at favorite time
	saved_at: int  # epoch milliseconds

	@property
	def id(self) -> str:
		return self.movie.id

	@property
	def title(self) -> str:
		return self.movie.title


@dataclass(frozen=True)
class AttributeFilter:
	"""
	Equality filter for the results view, e.g. ?type=cast&value=Vijay.
	`type` stays a plain string so unknown types from a query string survive
	until the engine, which answers them with an empty result.
	"""
	type: str  # one of FilterType values, or anything else
	value: str  # raw value from the query string

	@property
	def filter_type(self) -> Optional[FilterType]:
		try:
			return FilterType(self.type)
		except ValueError:
			return None


@dataclass(frozen=True)
class QueryState:
	"""
	Per-view browsing state owned by the view layer.
	Every helper returns a new state; the engine only ever reads it.
	"""
	search_term: str = ''  # free-text search box content
	page: int = 1  # number of "load more" pages revealed so far
	page_size: int = 36  # movies per page
	sort_by: SortKey = SortKey.YEAR  # home view sort key
	sort_direction: SortDirection = SortDirection.ASC  # home view sort direction

	def with_search(self, term: str) -> 'QueryState':
		# A new search always starts from the first page
		return replace(self, search_term=term, page=1)

	def next_page(self) -> 'QueryState':
		return replace(self, page=self.page + 1)

	def with_sort(self, key: SortKey) -> 'QueryState':
		return replace(self, sort_by=SortKey(key))

	def toggle_direction(self) -> 'QueryState':
		flipped = SortDirection.DESC if self.sort_direction == SortDirection.ASC else SortDirection.ASC
		return replace(self, sort_direction=flipped)


@dataclass(frozen=True)
class DirectoryState:
	"""State of the cast/director directory: tab, name filter and its own page cursor."""
	tab: DirectoryTab = DirectoryTab.CAST
	name_filter: str = ''
	page: int = 1

	def with_tab(self, tab: DirectoryTab) -> 'DirectoryState':
		# Switching tabs clears the filter as well as the cursor
		return replace(self, tab=DirectoryTab(tab), name_filter='', page=1)

	def with_filter(self, text: str) -> 'DirectoryState':
		return replace(self, name_filter=text, page=1)

	def previous_page(self) -> 'DirectoryState':
		if self.page > 1:
			return replace(self, page=self.page - 1)
		return self

	def next_page(self, total_pages: int) -> 'DirectoryState':
		if self.page < total_pages:
			return replace(self, page=self.page + 1)
		return self


@dataclass(frozen=True)
class DirectoryEntry:
	name: str  # cast member or director name
	count: int  # number of movies they appear in


@dataclass(frozen=True)
class DirectoryPage:
	"""One windowed page of the directory plus the numbers needed for prev/next controls."""
	entries: List[DirectoryEntry]
	page: int
	total_pages: int
	total_entries: int

	@property
	def has_previous(self) -> bool:
		return self.page > 1

	@property
	def has_next(self) -> bool:
		return self.page < self.total_pages


@dataclass(frozen=True)
class Page:
	"""Cumulative "load more" slice of a result list."""
	items: List[Movie] = field(default_factory=list)  # visible prefix
	total: int = 0  # size of the full result list

	@property
	def has_more(self) -> bool:
		return len(self.items) < self.total
