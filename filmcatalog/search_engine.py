"""
Search engine module.
Applies free-text search, attribute filters and sorting over the normalized catalog.
All functions are pure: they never mutate the movie list or the query state.
"""

from typing import Callable, Dict, List, Optional, Sequence, Union  # type annotations for clarity

# Import project modules for data structures and components
from .models import (  # core data classes
	AttributeFilter,
	DirectoryPage,
	DirectoryState,
	FilterType,
	Movie,
	Page,
	QueryState,
	SortDirection,
	SortKey,
)
from .pagination import load_more_page  # cumulative "load more" slicing
from .directory import directory_page  # cast/director aggregation

# Import loguru for console logging
from loguru import logger  # simple structured logger


# Value extractors per sort key; None means "missing" and always sorts last
SORT_VALUES: Dict[SortKey, Callable[[Movie], object]] = {
	SortKey.YEAR: lambda m: m.year,
	SortKey.RATING: lambda m: m.rating,
	SortKey.TITLE: lambda m: m.title.casefold(),
	SortKey.RUNTIME: lambda m: m.runtime_minutes,
	SortKey.RELEASED: lambda m: m.release_timestamp,
	SortKey.POPULARITY: lambda m: m.rating,  # aliases rating
}


def matches_search(movie: Movie, term: str) -> bool:
	"""Case-insensitive substring match on title, any cast member, or director."""
	needle = (term or '').strip().casefold()
	if not needle:  # empty search keeps everything
		return True
	return (
		needle in movie.title.casefold()
		or any(needle in name.casefold() for name in movie.cast)
		or needle in movie.director.casefold()
	)


def matches_title(movie: Movie, term: str) -> bool:
	"""Case-insensitive substring match on the title only."""
	needle = (term or '').strip().casefold()
	return not needle or needle in movie.title.casefold()


def search(movies: Sequence[Movie], term: str) -> List[Movie]:
	return [m for m in movies if matches_search(m, term)]


def sort_movies(
	movies: Sequence[Movie],
	key: Union[SortKey, str] = SortKey.YEAR,
	direction: Union[SortDirection, str] = SortDirection.ASC,
) -> List[Movie]:
	"""
	Stable sort by `key`. Movies without a value for the key go after all the
	others in both directions, keeping their incoming order.
	"""
	key = SortKey(key)
	descending = SortDirection(direction) == SortDirection.DESC
	value_of = SORT_VALUES[key]
	present = [m for m in movies if value_of(m) is not None]
	missing = [m for m in movies if value_of(m) is None]
	present.sort(key=value_of, reverse=descending)  # list.sort stays stable with reverse
	return present + missing


def filter_by_attribute(movies: Sequence[Movie], attribute_filter: AttributeFilter) -> List[Movie]:
	"""
	Equality filter on year, cast member, director or genre.
	String attributes compare case-insensitively; an unknown type matches nothing.
	"""
	filter_type = attribute_filter.filter_type
	value = (attribute_filter.value or '').strip()
	if filter_type is None:
		logger.debug(f"[Engine] Unknown filter type {attribute_filter.type!r}, returning no results")
		return []
	wanted = value.casefold()
	if filter_type == FilterType.YEAR:
		return [m for m in movies if m.year is not None and str(m.year) == value]
	if filter_type == FilterType.CAST:
		return [m for m in movies if any(c.casefold() == wanted for c in m.cast)]
	if filter_type == FilterType.DIRECTOR:
		return [m for m in movies if m.director.casefold() == wanted]
	if filter_type == FilterType.GENRE:
		return [m for m in movies if any(g.casefold() == wanted for g in m.genre)]
	return []


def query(movies: Sequence[Movie], state: QueryState) -> List[Movie]:
	"""Home view ordering: free-text search then the configurable sort."""
	results = search(movies, state.search_term)
	return sort_movies(results, state.sort_by, state.sort_direction)


def query_filtered(movies: Sequence[Movie], attribute_filter: AttributeFilter, search_term: str = '') -> List[Movie]:
	"""
	Filtered-results ordering: attribute filter, optional title narrowing,
	then a fixed newest-year-first order with unknown years last.
	"""
	results = filter_by_attribute(movies, attribute_filter)
	if search_term:
		results = [m for m in results if matches_title(m, search_term)]
	return sort_movies(results, SortKey.YEAR, SortDirection.DESC)


def find_by_id(movies: Sequence[Movie], movie_id: Optional[str]) -> Optional[Movie]:
	"""Detail lookup; ids compare as strings so ?id=12 finds an integer-indexed record."""
	if movie_id is None:
		return None
	wanted = str(movie_id)
	for movie in movies:
		if movie.id == wanted:
			return movie
	return None


class SearchEngine:
	"""
	High-level query API over one loaded catalog.
	Holds the immutable movie list and answers every view's query from a passed-in state.
	"""
	def __init__(self, movies: Sequence[Movie], directory_page_size: int = 40):
		# Store movies for use across every view; a tuple keeps the snapshot read-only
		self.movies = tuple(movies)  # keep dataset reference
		self.directory_page_size = directory_page_size  # names per directory page
		self._by_id = {m.id: m for m in self.movies}  # detail lookups
		logger.info(f"[Engine] Ready with {len(self.movies)} movies")

	def query(self, state: QueryState) -> List[Movie]:
		results = query(self.movies, state)
		logger.debug(
			f"[Engine] Query | term={state.search_term!r} sort={state.sort_by.value}/{state.sort_direction.value} -> {len(results)} movies"
		)
		return results

	def home_page(self, state: QueryState) -> Page:
		"""Home grid: searched, sorted, and revealed up to the current page."""
		return load_more_page(self.query(state), state.page, state.page_size)

	def filtered(self, attribute_filter: AttributeFilter, search_term: str = '') -> List[Movie]:
		results = query_filtered(self.movies, attribute_filter, search_term)
		logger.debug(
			f"[Engine] Filter | {attribute_filter.type}={attribute_filter.value!r} term={search_term!r} -> {len(results)} movies"
		)
		return results

	def filtered_page(self, attribute_filter: AttributeFilter, state: QueryState) -> Page:
		return load_more_page(self.filtered(attribute_filter, state.search_term), state.page, state.page_size)

	def get(self, movie_id: Optional[str]) -> Optional[Movie]:
		"""Look a movie up by id; None when unknown."""
		if movie_id is None:
			return None
		movie = self._by_id.get(str(movie_id))
		if movie is None:
			logger.debug(f"[Engine] No movie with id {movie_id!r}")
		return movie

	def years(self) -> List[int]:
		"""Distinct known years, newest first."""
		return sorted({m.year for m in self.movies if m.year}, reverse=True)

	def directory(self, state: DirectoryState) -> DirectoryPage:
		return directory_page(self.movies, state, page_size=self.directory_page_size)
