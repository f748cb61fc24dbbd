"""
Catalog browser.
The boundary the view layer talks to: turns a route plus the current view state
into a plain view model for each page. Missing movies and unknown filters become
"not found"/empty view models rather than errors.
"""

from dataclasses import dataclass, field  # view models
from typing import List, Optional  # type hints

from .config import Settings, get_settings
from .data_loader import DataLoader
from .favorites import FavoritesRepository, FavoritesStore, PreferencesRepository
from .models import AttributeFilter, DirectoryPage, DirectoryState, FilterType, Movie, Page, QueryState
from .pagination import load_more_page
from .routing import PageKind, Route, dispatch, ensure_exhaustive
from .search_engine import SearchEngine
from .storage import KeyValueStore, MemoryStore

from loguru import logger  # console logger

OLD_MOVIE_YEAR = 2005  # details page marks anything older as a classic

# Page colours per theme: (background, text, accent)
THEME_COLORS = {
	'dark': ('#0e1117', '#fafafa', '#f5c518'),
	'light': ('#ffffff', '#1f2328', '#b8860b'),
}


@dataclass
class DetailsView:
	movie: Optional[Movie]  # None when the id is unknown
	is_favorite: bool = False
	is_old: bool = False

	@property
	def found(self) -> bool:
		return self.movie is not None


@dataclass
class GridView:
	"""Home, results and favorites pages all render a titled "load more" grid."""
	title: Optional[str]
	page: Page
	show_sort: bool = False


@dataclass
class YearsView:
	years: List[int] = field(default_factory=list)


@dataclass
class DirectoryView:
	state: DirectoryState
	page: DirectoryPage


class CatalogBrowser:
	"""
	Computes view models from the engine, the favorites store and the preferences.
	Holds no browsing state of its own; callers pass QueryState/DirectoryState in.
	"""

	def __init__(self, engine: SearchEngine, favorites: FavoritesStore, preferences: PreferencesRepository):
		self.engine = engine
		self.favorites = favorites
		self.preferences = preferences

	def home(self, state: QueryState) -> GridView:
		return GridView(title=None, page=self.engine.home_page(state), show_sort=True)

	def details(self, movie_id: Optional[str]) -> DetailsView:
		movie = self.engine.get(movie_id)
		if movie is None:
			logger.info(f"[Browser] Movie {movie_id!r} not found")
			return DetailsView(movie=None)
		return DetailsView(
			movie=movie,
			is_favorite=self.favorites.is_favorite(movie.id),
			is_old=bool(movie.year and movie.year < OLD_MOVIE_YEAR),
		)

	def results(self, attribute_filter: AttributeFilter, state: QueryState) -> GridView:
		filter_type = attribute_filter.filter_type
		title = f"{filter_type.value.title()}: {attribute_filter.value}" if filter_type else 'Results'
		return GridView(title=title, page=self.engine.filtered_page(attribute_filter, state))

	def favorites_view(self, state: QueryState) -> GridView:
		movies = self.favorites.movies(state.search_term)
		return GridView(title='Favorites', page=load_more_page(movies, state.page, state.page_size))

	def years(self) -> YearsView:
		return YearsView(years=self.engine.years())

	def directory(self, state: DirectoryState) -> DirectoryView:
		page = self.engine.directory(state)
		# Hand back the clamped cursor so prev/next start from the page actually shown
		return DirectoryView(state=DirectoryState(tab=state.tab, name_filter=state.name_filter, page=page.page), page=page)

	def toggle_favorite(self, movie_id: str) -> Optional[bool]:
		"""Toggle by id; None when the id is not in the catalog."""
		movie = self.engine.get(movie_id)
		if movie is None:
			return None
		return self.favorites.toggle(movie)

	def theme(self) -> str:
		return self.preferences.load_theme()

	def toggle_theme(self) -> str:
		return self.preferences.toggle_theme()

	def render(self, route: Route, state: Optional[QueryState] = None, directory_state: Optional[DirectoryState] = None):
		"""View model for `route`, dispatched on its page kind."""
		state = state or QueryState()
		directory_state = directory_state or DirectoryState()
		handlers = {
			PageKind.HOME: lambda r: self.home(state),
			PageKind.DETAILS: lambda r: self.details(r.movie_id),
			PageKind.YEARS: lambda r: self.years(),
			PageKind.CAST: lambda r: self.directory(directory_state),
			PageKind.FAVORITES: lambda r: self.favorites_view(state),
			PageKind.RESULTS: lambda r: self.results(r.attribute_filter, state),
		}
		ensure_exhaustive(handlers)
		return dispatch(route, handlers)


def theme_stylesheet(theme: str) -> str:
	"""CSS the view layer injects to paint the page in `theme`; unknown themes get dark."""
	background, text, accent = THEME_COLORS.get(theme, THEME_COLORS['dark'])
	return (
		"<style>"
		f".stApp, [data-testid=\"stSidebar\"] {{ background-color: {background}; color: {text}; }}"
		f".stApp h1, .stApp h2, .stApp h3, .stApp p, .stApp label {{ color: {text}; }}"
		f".stApp a {{ color: {accent}; }}"
		"</style>"
	)


def year_link(year: int) -> AttributeFilter:
	"""Filter behind each entry of the year directory."""
	return AttributeFilter(type=FilterType.YEAR.value, value=str(year))


def open_browser(settings: Optional[Settings] = None, store: Optional[MemoryStore] = None) -> CatalogBrowser:
	"""
	Load the catalog once and wire the engine, favorites and preferences together.
	Raises CatalogLoadError when the catalog cannot be loaded.
	"""
	settings = settings or get_settings()
	loader = DataLoader(default_poster=settings.default_poster, request_timeout=settings.request_timeout)
	movies = loader.load_movies(settings.data_source)  # the one fatal step
	store = store if store is not None else KeyValueStore(settings.storage_path)
	engine = SearchEngine(movies, directory_page_size=settings.directory_page_size)
	favorites = FavoritesStore(FavoritesRepository(store))
	return CatalogBrowser(engine, favorites, PreferencesRepository(store))
