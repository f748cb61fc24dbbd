"""
Tests for DataLoader: record normalization, poster upgrades and catalog loading.
"""

import json
from datetime import date

import pytest
import requests

from filmcatalog.data_loader import DataLoader, parse_release_timestamp, parse_runtime, upgrade_poster_url
from filmcatalog.errors import CatalogLoadError


CDN = 'https://m.media-amazon.com/images/M/abc'


def test_normalize_full_record(movies):
	raja = movies[0]
	assert raja.id == 'tt001'
	assert raja.title == 'Rajapattai'
	assert raja.year == 2011
	assert raja.rating == pytest.approx(5.1)
	assert raja.genre == ('Action', 'Comedy')
	assert raja.runtime == '140 min'
	assert raja.runtime_minutes == 140
	assert raja.released == '23 Dec 2011 (India)'
	assert raja.release_timestamp == date(2011, 12, 23).toordinal()
	assert raja.cast == ('Vikram', 'Deeksha Seth')
	assert raja.poster == f"{CDN}@._V1_QL100_UX600__.jpg"


def test_identifier_falls_back_to_index_then_generated(loader):
	assert loader.normalize({'index': 7}).id == '7'
	generated = loader.normalize({'title': 'No id'}).id
	assert generated and generated != loader.normalize({'title': 'No id'}).id


def test_empty_record_gets_defaults(loader):
	movie = loader.normalize({})
	assert movie.title == 'Untitled'
	assert movie.year is None
	assert movie.rating is None
	assert movie.genre == ()
	assert movie.cast == ()
	assert movie.runtime == 'N/A'
	assert movie.runtime_minutes == 0
	assert movie.released == ''
	assert movie.release_timestamp == 0
	assert movie.plot == 'No plot summary available.'
	assert movie.director == 'Unknown director'
	assert movie.poster == 'default.png'


@pytest.mark.parametrize('raw_year', ['abc', '', 0, -5, None, 'N/A', True, 2011.5, '1e300', 10**20, 10000])
def test_invalid_year_is_absent(loader, raw_year):
	assert loader.normalize({'year': raw_year}).year is None


@pytest.mark.parametrize('raw_rating', ['abc', '', 0, 'NaN', None, 'N/A'])
def test_invalid_rating_is_absent(loader, raw_rating):
	assert loader.normalize({'rating': raw_rating}).rating is None


def test_title_is_trimmed(movies):
	assert movies[2].title == 'Nayakan'


def test_genre_string_is_split_and_trimmed(loader):
	movie = loader.normalize({'genre': ' Action ,Drama,, '})
	assert movie.genre == ('Action', 'Drama')


def test_cast_accepts_list_or_comma_string(loader):
	assert loader.normalize({'cast': [' Vikram ', '', None]}).cast == ('Vikram',)
	assert loader.normalize({'cast': 'Vikram, Trisha'}).cast == ('Vikram', 'Trisha')


def test_missing_fields_never_raise_and_stay_non_negative(movies):
	for movie in movies:
		assert movie.runtime_minutes >= 0
		assert movie.release_timestamp >= 0


def test_runtime_parsing():
	assert parse_runtime('165 min') == 165
	assert parse_runtime('2h 30min') == 2
	assert parse_runtime('unknown') == 0
	assert parse_runtime(None) == 0


def test_release_timestamp_falls_back_to_year_then_zero():
	assert parse_release_timestamp('not a date', 1992) == date(1992, 1, 1).toordinal()
	assert parse_release_timestamp('', 1987) == date(1987, 1, 1).toordinal()
	assert parse_release_timestamp(None, None) == 0
	assert parse_release_timestamp('March 6, 2015', None) == date(2015, 3, 6).toordinal()


def test_release_timestamp_orders_dates(movies):
	by_id = {m.id: m for m in movies}
	assert by_id['7'].release_timestamp < by_id['tt005'].release_timestamp < by_id['tt001'].release_timestamp


def test_poster_width_based_url():
	url = f"{CDN}@._V1_UX182_CR0,0,182,268_AL_.jpg"
	assert upgrade_poster_url(url) == f"{CDN}@._V1_QL100_UX600__.jpg"


def test_poster_height_based_url_keeps_extension():
	url = f"{CDN}@._V1_SY300_.png"
	assert upgrade_poster_url(url) == f"{CDN}@._V1_QL100_UY600__.png"


def test_poster_without_extension_defaults_to_jpg():
	assert upgrade_poster_url(f"{CDN}@._V1_") == f"{CDN}@._V1_QL100_UY600__.jpg"


def test_poster_unrecognized_urls_pass_through():
	assert upgrade_poster_url('https://example.org/posters/kaaval.jpg') == 'https://example.org/posters/kaaval.jpg'
	assert upgrade_poster_url('https://m.media-amazon.com/images/plain.jpg') == 'https://m.media-amazon.com/images/plain.jpg'


def test_poster_image_key_and_placeholder(movies):
	assert movies[1].poster == 'https://example.org/posters/kaaval.jpg'
	assert movies[3].poster == 'default.png'


def test_custom_placeholder():
	assert DataLoader(default_poster='img/none.png').normalize({}).poster == 'img/none.png'


def test_duplicate_ids_are_rekeyed(loader):
	movies = loader.normalize_all([{'_id': 'x', 'title': 'A'}, {'_id': 'x', 'title': 'B'}])
	assert movies[0].id == 'x'
	assert movies[1].id != 'x'
	assert movies[1].title == 'B'


def test_non_object_records_are_skipped(loader):
	movies = loader.normalize_all([{'title': 'A'}, 'junk', 42, None, {'title': 'B'}])
	assert [m.title for m in movies] == ['A', 'B']


def test_load_json_array(tmp_path, loader, raw_records):
	path = tmp_path / 'movies.json'
	path.write_text(json.dumps(raw_records), encoding='utf-8')
	movies = loader.load_movies(str(path))
	assert len(movies) == len(raw_records)


def test_load_json_lines(tmp_path, loader, raw_records):
	path = tmp_path / 'movies.jsonl'
	path.write_text('\n'.join(json.dumps(r) for r in raw_records) + '\n', encoding='utf-8')
	assert [m.id for m in loader.load_movies(str(path))][:2] == ['tt001', 'tt002']


def test_load_missing_file_raises(tmp_path, loader):
	with pytest.raises(CatalogLoadError):
		loader.load_movies(str(tmp_path / 'absent.json'))


def test_load_invalid_json_raises(tmp_path, loader):
	path = tmp_path / 'broken.json'
	path.write_text('[{"title": ', encoding='utf-8')
	with pytest.raises(CatalogLoadError):
		loader.load_movies(str(path))


def test_load_non_list_payload_raises(tmp_path, loader):
	path = tmp_path / 'object.json'
	path.write_text('{"title": "not a list"}', encoding='utf-8')
	with pytest.raises(CatalogLoadError) as excinfo:
		loader.load_movies(str(path))
	assert 'list' in excinfo.value.reason


class FakeResponse:
	def __init__(self, text, status=200):
		self.text = text
		self.status = status

	def raise_for_status(self):
		if self.status >= 400:
			raise requests.HTTPError(f"{self.status} error")


def test_load_from_url(monkeypatch, loader, raw_records):
	calls = []

	def fake_get(url, timeout):
		calls.append((url, timeout))
		return FakeResponse(json.dumps(raw_records))

	monkeypatch.setattr(requests, 'get', fake_get)
	movies = loader.load_movies('https://catalog.example.org/movies.json')
	assert len(movies) == len(raw_records)
	assert calls == [('https://catalog.example.org/movies.json', 10.0)]


def test_load_from_url_http_error_raises(monkeypatch, loader):
	monkeypatch.setattr(requests, 'get', lambda url, timeout: FakeResponse('', status=404))
	with pytest.raises(CatalogLoadError):
		loader.load_movies('https://catalog.example.org/missing.json')


def test_year_and_genre_listings(loader, movies):
	assert loader.get_all_years(movies) == [2015, 2011, 1992, 1987]
	assert loader.get_all_genres(movies) == ['Action', 'Comedy', 'Crime', 'Drama', 'Romance', 'Thriller']


def test_huge_year_never_breaks_normalization(loader):
	movie = loader.normalize({'title': 'X', 'year': '1e300', 'released': 'soon'})
	assert movie.year is None
	assert movie.release_timestamp == 0
	assert parse_release_timestamp('', 10**20) == 0


@pytest.mark.parametrize('payload', ['42', '"movies"', 'null', '{"title": "a"}\n'])
def test_load_scalar_or_single_object_raises(tmp_path, loader, payload):
	path = tmp_path / 'catalog.json'
	path.write_text(payload, encoding='utf-8')
	with pytest.raises(CatalogLoadError):
		loader.load_movies(str(path))


def test_load_json_lines_with_bad_line_raises(tmp_path, loader):
	path = tmp_path / 'movies.jsonl'
	path.write_text('{"title": "A"}\n{"title": \n', encoding='utf-8')
	with pytest.raises(CatalogLoadError):
		loader.load_movies(str(path))
