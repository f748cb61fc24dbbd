"""
Page routing.
Resolves a page name and a URL-like query string into one typed route, once,
and dispatches routes to handlers keyed by page kind.
"""

from dataclasses import dataclass  # route variants
from enum import Enum  # page kinds
from typing import Callable, Dict, Mapping, Optional, TypeVar, Union  # type hints
from urllib.parse import parse_qs  # ?id=..&type=..&value=..

from .errors import UnhandledRouteError
from .models import AttributeFilter

from loguru import logger  # console logger


class PageKind(str, Enum):
	HOME = 'home'
	DETAILS = 'details'
	YEARS = 'years'
	CAST = 'cast'
	FAVORITES = 'favorites'
	RESULTS = 'results'


@dataclass(frozen=True)
class HomeRoute:
	kind = PageKind.HOME


@dataclass(frozen=True)
class DetailsRoute:
	movie_id: Optional[str]
	kind = PageKind.DETAILS


@dataclass(frozen=True)
class YearsRoute:
	kind = PageKind.YEARS


@dataclass(frozen=True)
class CastRoute:
	kind = PageKind.CAST


@dataclass(frozen=True)
class FavoritesRoute:
	kind = PageKind.FAVORITES


@dataclass(frozen=True)
class ResultsRoute:
	filter_type: str  # kept raw, unknown types produce an empty result page
	value: str
	kind = PageKind.RESULTS

	@property
	def attribute_filter(self) -> AttributeFilter:
		return AttributeFilter(type=self.filter_type, value=self.value)


Route = Union[HomeRoute, DetailsRoute, YearsRoute, CastRoute, FavoritesRoute, ResultsRoute]
R = TypeVar('R')


def _page_kind(page: str) -> PageKind:
	# "details.html", "/site/details.html" and "details" all name the same page
	name = (page or '').strip().rstrip('/').rsplit('/', 1)[-1]
	if name.endswith('.html'):
		name = name[:-len('.html')]
	if name in ('', 'index'):
		return PageKind.HOME
	try:
		return PageKind(name)
	except ValueError:
		logger.debug(f"[Router] Unknown page {page!r}, falling back to home")
		return PageKind.HOME


def resolve_route(page: str, query_string: str = '') -> Route:
	"""Build the route for a page name plus its query string."""
	params = parse_qs((query_string or '').lstrip('?'), keep_blank_values=True)

	def param(name: str) -> Optional[str]:
		values = params.get(name)
		return values[0] if values else None

	kind = _page_kind(page)
	if kind == PageKind.DETAILS:
		route: Route = DetailsRoute(movie_id=param('id'))
	elif kind == PageKind.RESULTS:
		route = ResultsRoute(filter_type=param('type') or '', value=param('value') or '')
	elif kind == PageKind.YEARS:
		route = YearsRoute()
	elif kind == PageKind.CAST:
		route = CastRoute()
	elif kind == PageKind.FAVORITES:
		route = FavoritesRoute()
	else:
		route = HomeRoute()
	logger.debug(f"[Router] Resolved {page!r}?{query_string} -> {route}")
	return route


def ensure_exhaustive(handlers: Mapping[PageKind, Callable]) -> None:
	"""Fail fast when a page kind has no handler."""
	missing = [kind.value for kind in PageKind if kind not in handlers]
	if missing:
		raise UnhandledRouteError(f"No handler for page kinds: {', '.join(missing)}")


def dispatch(route: Route, handlers: Dict[PageKind, Callable[[Route], R]]) -> R:
	"""Call the handler registered for the route's kind."""
	handler = handlers.get(route.kind)
	if handler is None:
		raise UnhandledRouteError(f"No handler for page kind {route.kind.value!r}")
	return handler(route)
