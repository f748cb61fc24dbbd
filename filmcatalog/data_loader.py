"""
Data loading and normalization module.
Loads the static movie catalog (local file or URL) and turns each loosely-typed
record into a canonical Movie with every field defaulted.
"""

# Standard libs for JSON parsing, regex, dates, ids and paths
import json  # parse the catalog payload
import math  # reject NaN/inf ratings
import re  # runtime digits and poster URL shapes
import uuid  # ids for records that have none
from dataclasses import replace  # re-key duplicates without mutating
from datetime import MAXYEAR, date, datetime  # release date parsing
from pathlib import Path  # filesystem-safe paths
from typing import Any, Dict, Iterable, List, Optional, Tuple  # type hints

# HTTP client for catalogs served over the network
import requests  # single static fetch

# Import our Movie data class used across the project
from .models import Movie  # structured movie record
from .errors import CatalogLoadError  # fatal load failure

# Console logging
from loguru import logger  # console logger


DEFAULT_POSTER = 'default.png'  # placeholder shown when a record has no poster
UNKNOWN_DIRECTOR = 'Unknown director'  # sentinel excluded from the director directory
DEFAULT_PLOT = 'No plot summary available.'

# Poster CDN whose URLs carry sizing hints we can rewrite
IMAGE_HOST = 'm.media-amazon.com'
RE_IMAGE_BASE = re.compile(r'^(.+@\._V1_)')  # everything up to the templating marker
RE_IMAGE_EXT = re.compile(r'_\.(jpg|jpeg|png|webp)$', re.I)  # trailing extension
RE_DIGITS = re.compile(r'(\d+)')  # first run of digits in "165 min"
RE_COUNTRY_SUFFIX = re.compile(r'\s*\([^)]*\)\s*$')  # "(India)" after a release date

# Date shapes seen in catalog exports, tried in order before ISO parsing
RELEASE_DATE_FORMATS = (
	'%d %b %Y',  # 14 Jan 2016
	'%d %B %Y',  # 14 January 2016
	'%B %d, %Y',  # January 14, 2016
	'%b %d, %Y',  # Jan 14, 2016
	'%Y-%m-%d',
	'%Y/%m/%d',
	'%d/%m/%Y',
	'%d-%m-%Y',
)


def upgrade_poster_url(url: Optional[str]) -> Optional[str]:
	"""
	Rewrite a templated CDN poster URL so it requests a larger 600px rendition.
	Width-based originals (UX..) keep width sizing, everything else is sized by height.
	Anything that does not look like a templated CDN URL is returned untouched.
	"""
	if not url or not isinstance(url, str):  # nothing to rewrite
		return url
	if IMAGE_HOST not in url:  # foreign host
		return url
	try:
		base_match = RE_IMAGE_BASE.match(url)
		if not base_match:  # not the templated shape
			return url
		base_url = base_match.group(1)
		dimension = 'UX600' if 'UX' in url else 'UY600'  # keep the original sizing axis
		ext_match = RE_IMAGE_EXT.search(url)
		extension = f"_.{ext_match.group(1)}" if ext_match else '_.jpg'  # default to jpg
		return f"{base_url}QL100_{dimension}_{extension}"
	except Exception as e:
		logger.debug(f"[DataLoader] Poster rewrite failed for {url!r}: {e}")
		return url


def parse_runtime(value: Any) -> int:
	"""Minutes from a free-text runtime like "165 min"; 0 when absent or unparseable."""
	if value is None or isinstance(value, bool):
		return 0
	match = RE_DIGITS.search(str(value))
	return int(match.group(1)) if match else 0


def _parse_release_date(value: str) -> Optional[date]:
	text = RE_COUNTRY_SUFFIX.sub('', value.strip())  # "14 Jan 2016 (India)" -> "14 Jan 2016"
	if not text:
		return None
	for pattern in RELEASE_DATE_FORMATS:
		try:
			return datetime.strptime(text, pattern).date()
		except ValueError:
			continue
	try:
		return datetime.fromisoformat(text).date()
	except ValueError:
		return None


def parse_release_timestamp(released: Any, year: Optional[int]) -> int:
	"""
	Sortable release value: the proleptic Gregorian day ordinal of the release date.
	Falls back to January 1st of `year`, then to 0, so every movie has a total order.
	"""
	if isinstance(released, str) and released.strip():
		parsed = _parse_release_date(released)
		if parsed:
			return parsed.toordinal()
	if year:
		try:
			return date(year, 1, 1).toordinal()
		except (ValueError, OverflowError):  # year outside what datetime supports
			return 0
	return 0


def _parse_positive_int(value: Any) -> Optional[int]:
	"""Parse-or-None for years; junk, zero, negatives and years past MAXYEAR become None."""
	if value is None or isinstance(value, bool):
		return None
	try:
		number = float(str(value).strip())
	except (TypeError, ValueError):
		return None
	if not math.isfinite(number) or number <= 0 or number > MAXYEAR or number != int(number):
		return None
	return int(number)


def _parse_rating(value: Any) -> Optional[float]:
	"""Parse-or-None for ratings; zero counts as unrated."""
	if value is None or isinstance(value, bool):
		return None
	try:
		number = float(str(value).strip())
	except (TypeError, ValueError):
		return None
	if not math.isfinite(number) or number <= 0:
		return None
	return number


def _parse_list(value: Any) -> Tuple[str, ...]:
	"""
	Normalize a value that may be None, a list, or a comma-separated string
	into a tuple of trimmed, non-empty strings.
	"""
	if value is None:  # missing field
		return ()
	if isinstance(value, (list, tuple)):  # already a list
		return tuple(str(item).strip() for item in value if item is not None and str(item).strip())
	if isinstance(value, str):  # comma-separated string
		return tuple(item.strip() for item in value.split(',') if item.strip())
	return ()  # any other type becomes empty


def _text(value: Any) -> str:
	if value is None:
		return ''
	return str(value).strip()


class DataLoader:
	"""
	Handles loading and normalization of the movie catalog.
	"""

	def __init__(self, default_poster: str = DEFAULT_POSTER, request_timeout: float = 10.0):
		"""Keep the poster placeholder and the network timeout for the one remote fetch."""
		self.default_poster = default_poster  # placeholder path for missing posters
		self.request_timeout = request_timeout  # seconds

	def load_movies(self, source: str) -> List[Movie]:
		"""
		Load and normalize the whole catalog from a path or an http(s) URL.
		Raises CatalogLoadError when the resource cannot be read or is not a list of records.
		"""
		logger.info(f"[DataLoader] Loading movies from {source}...")  # log action
		records = self._read_records(source)  # raw dicts
		movies = self.normalize_all(records)
		logger.info(f"[DataLoader] Successfully loaded {len(movies)} movies.")  # summary
		return movies  # return list

	def normalize_all(self, records: Iterable[Any]) -> List[Movie]:
		"""Normalize every object record; non-objects are skipped, ids are kept unique."""
		movies: List[Movie] = []  # accumulator for parsed Movie objects
		seen_ids = set()  # ids already handed out in this load
		for position, record in enumerate(records, 1):  # keep position for diagnostics
			if not isinstance(record, dict):
				logger.warning(f"[DataLoader] Skipping non-object record at position {position}")
				continue  # move on
			movie = self.normalize(record)
			if movie.id in seen_ids:
				fresh_id = uuid.uuid4().hex
				logger.warning(f"[DataLoader] Duplicate id {movie.id!r} at position {position}, re-keyed as {fresh_id}")
				movie = replace(movie, id=fresh_id)
			seen_ids.add(movie.id)
			movies.append(movie)  # collect
		return movies

	def normalize(self, data: Dict[str, Any]) -> Movie:
		"""
		Convert a raw dictionary into a canonical Movie.
		Never raises: every field is coerced to a value or its default.
		"""
		# Identifier: explicit id, then index, then a fresh one
		raw_id = data.get('_id')
		if raw_id in (None, ''):
			raw_id = data.get('id')
		if raw_id in (None, ''):
			raw_id = data.get('index')
		movie_id = str(raw_id) if raw_id not in (None, '') else uuid.uuid4().hex

		# Numeric fields are parse-or-None, never zero as a sentinel
		year = _parse_positive_int(data.get('year'))
		rating = _parse_rating(data.get('rating'))

		# Runtime and release keep their display text and gain a sortable number
		runtime_text = _text(data.get('runtime'))
		released_text = _text(data.get('released'))

		raw_poster = data.get('poster') or data.get('image')  # either key may carry it
		poster = upgrade_poster_url(raw_poster) if raw_poster else self.default_poster

		movie = Movie(
			id=movie_id,
			title=_text(data.get('title')) or 'Untitled',
			year=year,
			rating=rating,
			genre=_parse_list(data.get('genre')),
			runtime=runtime_text or 'N/A',
			runtime_minutes=parse_runtime(runtime_text),
			released=released_text,
			release_timestamp=parse_release_timestamp(released_text, year),
			plot=_text(data.get('plot')) or DEFAULT_PLOT,
			director=_text(data.get('director')) or UNKNOWN_DIRECTOR,
			cast=_parse_list(data.get('cast')),
			poster=poster if isinstance(poster, str) else self.default_poster,
		)
		logger.debug(f"[DataLoader] Normalized {movie.id} | title={movie.title!r} year={movie.year} rating={movie.rating}")
		return movie  # return structured movie

	def _read_records(self, source: str) -> List[Any]:
		"""Fetch the raw payload and decode it into a list of records."""
		text = self._fetch_text(source)
		try:
			payload = json.loads(text)  # JSON array, the usual export
		except json.JSONDecodeError as e:
			lines = [line for line in text.splitlines() if line.strip()]
			if len(lines) < 2:
				raise CatalogLoadError(source, f"invalid JSON ({e})") from e
			try:  # JSON Lines: one object per line
				payload = [json.loads(line) for line in lines]
			except json.JSONDecodeError as line_error:
				raise CatalogLoadError(source, f"invalid JSON ({line_error})") from line_error
		if not isinstance(payload, list):
			raise CatalogLoadError(source, 'expected a list of movie records')
		return payload

	def _fetch_text(self, source: str) -> str:
		if source.startswith(('http://', 'https://')):
			try:
				response = requests.get(source, timeout=self.request_timeout)  # one-shot fetch
				response.raise_for_status()  # treat HTTP errors as load failures
			except requests.RequestException as e:
				raise CatalogLoadError(source, str(e)) from e
			return response.text
		filepath = Path(source)  # normalize path
		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise CatalogLoadError(source, 'file not found')
		try:
			return filepath.read_text(encoding='utf-8')
		except (OSError, UnicodeDecodeError) as e:
			raise CatalogLoadError(source, str(e)) from e

	def get_all_years(self, movies: List[Movie]) -> List[int]:
		"""Distinct known years, newest first (the year directory)."""
		return sorted({m.year for m in movies if m.year}, reverse=True)

	def get_all_genres(self, movies: List[Movie]) -> List[str]:
		"""Return a sorted list of all unique genres in the dataset."""
		genres = set()  # unique genres
		for movie in movies:  # iterate
			genres.update(movie.genre)
		return sorted(genres)  # sorted output
