"""
Favorites and preferences.
Repositories over the local key-value store, and the favorites store the views toggle against.
Favorites are frozen snapshots: they are never reconciled with later catalog loads.
"""

import time  # default clock for savedAt
from typing import Callable, List, Optional  # type hints

# Pydantic validates what comes back from storage before it reaches the views
from pydantic import BaseModel, ConfigDict, Field, ValidationError  # stored schema

from .models import FavoriteEntry, Movie
from .search_engine import matches_title
from .storage import MemoryStore

from loguru import logger  # console logger


FAVORITES_KEY = 'imdbFavorites_v2'  # one key holds the whole favorites list
THEME_KEY = 'imdbTheme'
THEMES = ('dark', 'light')
DEFAULT_THEME = 'dark'


def _now_ms() -> int:
	return int(time.time() * 1000)


# Pydantic model describing one stored favorite: the movie fields plus savedAt
class StoredFavorite(BaseModel):
	model_config = ConfigDict(extra='ignore', coerce_numbers_to_str=True)  # older exports stored numeric ids

	id: str  # movie id
	title: str = 'Untitled'
	year: Optional[int] = None
	rating: Optional[float] = None
	genre: List[str] = Field(default_factory=list)
	runtime: str = 'N/A'
	runtimeMins: int = 0
	released: str = ''
	releaseTimestamp: int = 0
	plot: str = 'No plot summary available.'
	director: str = 'Unknown director'
	cast: List[str] = Field(default_factory=list)
	poster: str = 'default.png'
	savedAt: int = 0  # epoch milliseconds

	@classmethod
	def from_entry(cls, entry: FavoriteEntry) -> 'StoredFavorite':
		return cls(**entry.movie.to_dict(), savedAt=entry.saved_at)

	def to_entry(self) -> FavoriteEntry:
		payload = self.model_dump()
		saved_at = payload.pop('savedAt')
		return FavoriteEntry(movie=Movie.from_dict(payload), saved_at=saved_at)


class FavoritesRepository:
	"""Loads and saves the whole favorites list under a single storage key."""

	def __init__(self, store: Optional[MemoryStore] = None, key: str = FAVORITES_KEY):
		self.store = store if store is not None else MemoryStore()
		self.key = key

	def load(self) -> List[FavoriteEntry]:
		raw = self.store.get(self.key, [])
		if not isinstance(raw, list):
			logger.warning(f"[Favorites] Stored value under {self.key!r} is not a list, starting empty")
			return []
		entries: List[FavoriteEntry] = []
		for position, item in enumerate(raw, 1):
			try:
				entries.append(StoredFavorite.model_validate(item).to_entry())
			except ValidationError as e:
				logger.warning(f"[Favorites] Dropping malformed favorite at position {position}: {e.error_count()} errors")
		return entries

	def save(self, entries: List[FavoriteEntry]) -> None:
		self.store.set(self.key, [StoredFavorite.from_entry(e).model_dump() for e in entries])


class FavoritesStore:
	"""
	Insertion-ordered favorites with toggle semantics.
	Every toggle persists the full list through the repository.
	"""

	def __init__(self, repository: FavoritesRepository, clock: Callable[[], int] = _now_ms):
		self.repository = repository
		self.clock = clock  # returns epoch milliseconds
		self._entries: List[FavoriteEntry] = repository.load()
		logger.info(f"[Favorites] Loaded {len(self._entries)} favorites")

	def toggle(self, movie: Movie) -> bool:
		"""Add `movie` if absent, remove it if present. Returns True when it is now a favorite."""
		index = self._index_of(movie.id)
		if index is None:
			self._entries.append(FavoriteEntry(movie=movie, saved_at=self.clock()))
			added = True
		else:
			del self._entries[index]
			added = False
		self.repository.save(self._entries)
		logger.info(f"[Favorites] {'Added' if added else 'Removed'} {movie.id} ({movie.title}); {len(self._entries)} total")
		return added

	def is_favorite(self, movie_id: str) -> bool:
		return self._index_of(movie_id) is not None

	def list(self, search_term: str = '') -> List[FavoriteEntry]:
		"""Favorites in the order they were added, optionally narrowed by title."""
		return [e for e in self._entries if matches_title(e.movie, search_term)]

	def movies(self, search_term: str = '') -> List[Movie]:
		return [e.movie for e in self.list(search_term)]

	def __len__(self) -> int:
		return len(self._entries)

	def _index_of(self, movie_id: str) -> Optional[int]:
		for index, entry in enumerate(self._entries):
			if entry.movie.id == str(movie_id):
				return index
		return None


class PreferencesRepository:
	"""Theme preference, "dark" unless "light" has been stored."""

	def __init__(self, store: Optional[MemoryStore] = None, key: str = THEME_KEY):
		self.store = store if store is not None else MemoryStore()
		self.key = key

	def load_theme(self) -> str:
		theme = self.store.get(self.key, DEFAULT_THEME)
		return theme if theme in THEMES else DEFAULT_THEME

	def save_theme(self, theme: str) -> None:
		if theme not in THEMES:
			raise ValueError(f"Unknown theme {theme!r}; expected one of {THEMES}")
		self.store.set(self.key, theme)

	def toggle_theme(self) -> str:
		theme = 'light' if self.load_theme() == 'dark' else 'dark'
		self.save_theme(theme)
		return theme
