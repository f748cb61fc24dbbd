"""
Shared fixtures: a small raw catalog with the usual gaps, its normalized form,
and in-memory storage with a fixed clock.
"""

import pytest

from filmcatalog.data_loader import DataLoader
from filmcatalog.favorites import FavoritesRepository, FavoritesStore, PreferencesRepository
from filmcatalog.search_engine import SearchEngine
from filmcatalog.storage import MemoryStore


RAW_RECORDS = [
	{
		'_id': 'tt001',
		'title': 'Rajapattai',
		'year': '2011',
		'rating': '5.1',
		'genre': 'Action, Comedy',
		'runtime': '140 min',
		'released': '23 Dec 2011 (India)',
		'plot': 'A stuntman takes on a land grabber.',
		'director': 'Suseenthiran',
		'cast': ['Vikram', 'Deeksha Seth'],
		'poster': 'https://m.media-amazon.com/images/M/abc@._V1_UX182_CR0,0,182,268_AL_.jpg',
	},
	{
		'_id': 'tt002',
		'title': 'Kaaval',
		'year': 2015,
		'rating': 6.4,
		'genre': 'Drama',
		'runtime': '120 min',
		'released': '2015-03-06',
		'director': 'Nagendran',
		'cast': ['Raja Kumar', 'Vimal'],
		'image': 'https://example.org/posters/kaaval.jpg',
	},
	{
		'index': 7,
		'title': '  Nayakan ',
		'year': '1987',
		'rating': '8.7',
		'genre': 'Crime, Drama',
		'runtime': '145 min',
		'director': 'Mani Ratnam',
		'cast': ['Kamal Haasan', 'Saranya'],
	},
	{
		'_id': 'tt004',
		'title': 'Untraced',
		'genre': 'Thriller',
		'director': 'Mani Ratnam',
		'cast': ['Vimal'],
	},
	{
		'_id': 'tt005',
		'title': 'Roja',
		'year': 1992,
		'rating': 8.1,
		'genre': 'Romance, Drama',
		'runtime': 'unknown',
		'released': 'not a date',
		'director': 'Mani Ratnam',
		'cast': ['Arvind Swamy', 'Madhoo'],
	},
]


@pytest.fixture
def raw_records():
	return [dict(r) for r in RAW_RECORDS]


@pytest.fixture
def loader():
	return DataLoader()


@pytest.fixture
def movies(loader, raw_records):
	return loader.normalize_all(raw_records)


@pytest.fixture
def engine(movies):
	return SearchEngine(movies, directory_page_size=2)


@pytest.fixture
def store():
	return MemoryStore()


class FixedClock:
	"""Returns 1000, 2000, 3000, ... so savedAt values are predictable."""

	def __init__(self):
		self.now = 0

	def __call__(self):
		self.now += 1000
		return self.now


@pytest.fixture
def clock():
	return FixedClock()


@pytest.fixture
def favorites(store, clock):
	return FavoritesStore(FavoritesRepository(store), clock=clock)


@pytest.fixture
def preferences(store):
	return PreferencesRepository(store)
