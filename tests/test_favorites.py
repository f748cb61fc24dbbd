"""
Tests for the favorites store, preferences and the local key-value storage.
"""

import json
from dataclasses import replace

import pytest

from filmcatalog.favorites import FAVORITES_KEY, THEME_KEY, FavoritesRepository, FavoritesStore, PreferencesRepository
from filmcatalog.storage import KeyValueStore, MemoryStore


def test_toggle_adds_then_removes(favorites, movies):
	assert favorites.toggle(movies[0]) is True
	assert favorites.is_favorite('tt001')
	assert favorites.toggle(movies[0]) is False
	assert not favorites.is_favorite('tt001')
	assert len(favorites) == 0


def test_toggle_twice_restores_membership_but_not_saved_at(favorites, movies):
	favorites.toggle(movies[1])
	first_saved = favorites.list()[0].saved_at
	favorites.toggle(movies[0])
	favorites.toggle(movies[0])
	assert [e.id for e in favorites.list()] == ['tt002']
	favorites.toggle(movies[1])
	favorites.toggle(movies[1])
	assert favorites.list()[0].saved_at != first_saved


def test_list_keeps_insertion_order(favorites, movies):
	for movie in (movies[4], movies[0], movies[2]):
		favorites.toggle(movie)
	assert [e.id for e in favorites.list()] == ['tt005', 'tt001', '7']
	assert [e.saved_at for e in favorites.list()] == [1000, 2000, 3000]


def test_list_filters_by_title_only(favorites, movies):
	favorites.toggle(movies[0])  # Rajapattai
	favorites.toggle(movies[1])  # Kaaval, cast Raja Kumar
	assert [e.id for e in favorites.list('RAJA')] == ['tt001']
	assert [m.title for m in favorites.movies('kaa')] == ['Kaaval']


def test_every_toggle_is_persisted(store, favorites, movies):
	favorites.toggle(movies[0])
	stored = store.get(FAVORITES_KEY)
	assert [item['id'] for item in stored] == ['tt001']
	assert stored[0]['savedAt'] == 1000
	assert stored[0]['runtimeMins'] == 140
	favorites.toggle(movies[0])
	assert store.get(FAVORITES_KEY) == []


def test_favorites_survive_reload_as_frozen_snapshots(store, clock, favorites, movies):
	favorites.toggle(movies[0])
	reloaded = FavoritesStore(FavoritesRepository(store), clock=clock)
	entry = reloaded.list()[0]
	assert entry.movie == movies[0]
	assert entry.saved_at == 1000

	# A later catalog change does not reach the stored snapshot
	renamed = replace(movies[0], title='Rajapattai (Remastered)')
	assert reloaded.is_favorite(renamed.id)
	assert reloaded.list()[0].title == 'Rajapattai'


def test_malformed_stored_favorites_are_dropped():
	store = MemoryStore({FAVORITES_KEY: [{'title': 'no id'}, {'id': 'ok', 'title': 'Fine', 'savedAt': 5}, 'junk']})
	entries = FavoritesRepository(store).load()
	assert [(e.id, e.saved_at) for e in entries] == [('ok', 5)]


def test_non_list_favorites_value_starts_empty():
	assert FavoritesRepository(MemoryStore({FAVORITES_KEY: {'id': 'x'}})).load() == []


def test_theme_defaults_to_dark(preferences):
	assert preferences.load_theme() == 'dark'


def test_theme_toggle_persists(store, preferences):
	assert preferences.toggle_theme() == 'light'
	assert store.get(THEME_KEY) == 'light'
	assert PreferencesRepository(store).load_theme() == 'light'
	assert preferences.toggle_theme() == 'dark'


def test_invalid_stored_theme_falls_back(store):
	store.set(THEME_KEY, 'sepia')
	assert PreferencesRepository(store).load_theme() == 'dark'
	with pytest.raises(ValueError):
		PreferencesRepository(store).save_theme('sepia')


def test_key_value_store_round_trips_through_file(tmp_path):
	path = tmp_path / 'state' / 'storage.json'
	store = KeyValueStore(str(path))
	store.set(THEME_KEY, 'light')
	store.set('other', [1, 2])
	store.remove('other')
	assert json.loads(path.read_text(encoding='utf-8')) == {THEME_KEY: 'light'}
	assert KeyValueStore(str(path)).get(THEME_KEY) == 'light'
	assert list(tmp_path.joinpath('state').glob('*.tmp')) == []


def test_key_value_store_ignores_corrupt_file(tmp_path):
	path = tmp_path / 'storage.json'
	path.write_text('{not json', encoding='utf-8')
	store = KeyValueStore(str(path))
	assert store.get(FAVORITES_KEY, []) == []
	store.set(THEME_KEY, 'dark')
	assert json.loads(path.read_text(encoding='utf-8')) == {THEME_KEY: 'dark'}


def test_favorites_persist_across_file_stores(tmp_path, movies, clock):
	path = str(tmp_path / 'storage.json')
	FavoritesStore(FavoritesRepository(KeyValueStore(path)), clock=clock).toggle(movies[2])
	reopened = FavoritesStore(FavoritesRepository(KeyValueStore(path)))
	assert [m.title for m in reopened.movies()] == ['Nayakan']


def test_key_value_store_ignores_undecodable_file(tmp_path):
	path = tmp_path / 'storage.json'
	path.write_bytes(b'{"imdbTheme": "\xff\xfe"}')
	store = KeyValueStore(str(path))
	assert store.keys() == []
	assert PreferencesRepository(store).load_theme() == 'dark'
