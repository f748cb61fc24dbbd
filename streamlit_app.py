"""
Streamlit UI for the Film Catalog.
Renders the view models computed by filmcatalog.browser; all filtering, sorting,
pagination and favorites logic lives in the engine.

Run UI:                streamlit run streamlit_app.py
Catalog location:      FILMCATALOG_DATA_SOURCE=path/or/url.json
"""

# Streamlit framework to build a simple interactive UI
import streamlit as st  # UI primitives
# Typing to make function signatures clearer
from typing import List, Optional  # indicates values can be None
from urllib.parse import urlencode  # rebuild ?id=..&type=.. for the router

# Engine imports: everything the page needs comes from the browser facade
from filmcatalog.browser import CatalogBrowser, DetailsView, DirectoryView, GridView, YearsView, open_browser, theme_stylesheet, year_link
from filmcatalog.config import get_settings
from filmcatalog.errors import CatalogLoadError
from filmcatalog.logging_setup import configure_logging
from filmcatalog.models import DirectoryState, DirectoryTab, Movie, QueryState, SortKey
from filmcatalog.routing import resolve_route

NAV_PAGES = ['home', 'years', 'cast', 'favorites']  # sidebar entries; details/results are reached by links
SORT_LABELS = {
	SortKey.YEAR: 'Year',
	SortKey.TITLE: 'A-Z',
	SortKey.RATING: 'User Rating',
	SortKey.RUNTIME: 'Run Time',
	SortKey.RELEASED: 'Release Date',
	SortKey.POPULARITY: 'Popularity (Rating)',
}

# Configure Streamlit page (title and layout width)
st.set_page_config(page_title="Film Catalog", layout="wide")  # wide layout


# Cache the browser so the catalog is fetched and normalized once per process
@st.cache_resource(show_spinner=True)
def init_browser() -> CatalogBrowser:
	settings = get_settings()
	configure_logging(settings.log_level)
	return open_browser(settings)


def go(page: str, **params: str) -> None:
	"""Navigate: new page, fresh search and pagination."""
	st.query_params.clear()
	st.query_params.update({'page': page, **params})
	st.session_state.query_state = QueryState(page_size=get_settings().page_size)
	st.rerun()


def movie_grid(movies: List[Movie], columns: int = 4) -> None:
	cols = st.columns(columns)  # grid with equal columns
	for i, movie in enumerate(movies):
		with cols[i % columns]:
			if movie.poster.startswith(('http://', 'https://')):
				st.image(movie.poster, width='stretch')  # poster
			rating = f" · ★ {movie.rating}" if movie.rating else ''
			st.caption(f"{movie.year or 'N/A'}{rating}")
			if st.button(movie.title, key=f"open-{movie.id}-{i}"):
				go('details', id=movie.id)


def render_grid(view: GridView) -> None:
	state: QueryState = st.session_state.query_state
	if view.title:
		st.subheader(view.title)
		st.caption(f"{view.page.total} movies")
	term = st.text_input("Search", value=state.search_term, placeholder="Search movies, cast, director...")
	if term != state.search_term:
		st.session_state.query_state = state.with_search(term)
		st.rerun()
	if view.show_sort:
		c1, c2 = st.columns([3, 1])
		with c1:
			keys = list(SORT_LABELS)
			chosen = st.selectbox("Sort by", keys, index=keys.index(state.sort_by), format_func=SORT_LABELS.get)
			if chosen != state.sort_by:
				st.session_state.query_state = state.with_sort(chosen)
				st.rerun()
		with c2:
			arrow = '↑' if state.sort_direction.value == 'asc' else '↓'
			if st.button(f"Direction {arrow}"):
				st.session_state.query_state = state.toggle_direction()
				st.rerun()
	if not view.page.items:
		st.info("No movies found.")
	movie_grid(view.page.items)
	if view.page.has_more and st.button("Load More"):
		st.session_state.query_state = state.next_page()
		st.rerun()


def render_details(browser: CatalogBrowser, view: DetailsView) -> None:
	if not view.found:
		st.warning("Movie not found")
		return
	movie = view.movie
	c1, c2 = st.columns([1, 3])  # small image column + large text column
	with c1:
		if movie.poster.startswith(('http://', 'https://')):
			st.image(movie.poster, width='stretch')
	with c2:
		st.title(movie.title)
		st.caption(f"{movie.year or 'N/A'} · {movie.runtime} · {movie.released or 'Release date unknown'}")
		if view.is_old:
			st.caption("Classic")
		if movie.rating:
			st.write(f"★ {movie.rating}")
		st.write(movie.plot)
		for genre in movie.genre:
			if st.button(genre, key=f"genre-{genre}"):
				go('results', type='genre', value=genre)
		if st.button(f"Director: {movie.director}"):
			go('results', type='director', value=movie.director)
		for name in movie.cast:
			if st.button(name, key=f"cast-{name}"):
				go('results', type='cast', value=name)
		label = "Remove from favorites" if view.is_favorite else "Add to favorites"
		if st.button(label, type="primary"):
			browser.toggle_favorite(movie.id)
			st.rerun()


def render_years(view: YearsView) -> None:
	st.subheader("Browse by year")
	cols = st.columns(6)
	for i, year in enumerate(view.years):
		with cols[i % 6]:
			if st.button(str(year), key=f"year-{year}"):
				link = year_link(year)
				go('results', type=link.type, value=link.value)


def render_directory(view: DirectoryView) -> None:
	state = view.state
	tab = st.radio("Browse by", list(DirectoryTab), index=list(DirectoryTab).index(state.tab), format_func=lambda t: t.value.title(), horizontal=True)
	if tab != state.tab:
		st.session_state.directory_state = state.with_tab(tab)
		st.rerun()
	text = st.text_input("Filter names", value=state.name_filter)
	if text != state.name_filter:
		st.session_state.directory_state = state.with_filter(text)
		st.rerun()
	if not view.page.entries:
		st.info("No results found.")
	for entry in view.page.entries:
		if st.button(f"{entry.name} ({entry.count})", key=f"dir-{entry.name}"):
			go('results', type=state.tab.value, value=entry.name)
	if view.page.total_pages > 1:
		c1, c2, c3 = st.columns([1, 2, 1])
		with c1:
			if st.button("Previous", disabled=not view.page.has_previous):
				st.session_state.directory_state = state.previous_page()
				st.rerun()
		with c2:
			st.caption(f"Page {view.page.page} of {view.page.total_pages}")
		with c3:
			if st.button("Next", disabled=not view.page.has_next):
				st.session_state.directory_state = state.next_page(view.page.total_pages)
				st.rerun()


def main() -> None:
	# Main page title
	st.title("🎬 Film Catalog")
	try:
		browser = init_browser()
	except CatalogLoadError as e:
		# Terminal state: nothing renders without the catalog
		st.error(f"Failed to load data. Please ensure the catalog JSON is present. ({e.reason})")
		return

	if 'query_state' not in st.session_state:
		st.session_state.query_state = QueryState(page_size=get_settings().page_size)
	if 'directory_state' not in st.session_state:
		st.session_state.directory_state = DirectoryState()

	params = dict(st.query_params)
	page: Optional[str] = params.pop('page', 'home')
	route = resolve_route(page, urlencode(params))

	# Sidebar contains navigation and the theme toggle
	with st.sidebar:
		st.header("Browse")
		for name in NAV_PAGES:
			if st.button(name.title(), key=f"nav-{name}", type="primary" if route.kind.value == name else "secondary"):
				go(name)
		st.markdown("---")  # separator
		theme = browser.theme()
		if st.toggle("Dark theme", value=theme == 'dark') != (theme == 'dark'):
			browser.toggle_theme()
			st.rerun()
	st.markdown(theme_stylesheet(theme), unsafe_allow_html=True)  # paint the stored theme

	view = browser.render(route, st.session_state.query_state, st.session_state.directory_state)
	if isinstance(view, GridView):
		render_grid(view)
	elif isinstance(view, DetailsView):
		render_details(browser, view)
	elif isinstance(view, YearsView):
		render_years(view)
	elif isinstance(view, DirectoryView):
		render_directory(view)


main()
