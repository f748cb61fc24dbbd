"""
Load the catalog and log a short summary.

This script:
1) Loads and normalizes the configured catalog (FILMCATALOG_DATA_SOURCE)
2) Reports the year span and genres
3) Lists the most frequent cast members and directors

Usage:
    python -m scripts.catalog_summary [--top 10]

Handy for checking a new catalog export before pointing the Streamlit UI at it.
"""

import argparse  # command-line options
import sys  # exit codes

from loguru import logger  # console logging

from filmcatalog.config import get_settings  # env-driven settings
from filmcatalog.data_loader import DataLoader  # data ingestion
from filmcatalog.directory import aggregate  # cast/director counts
from filmcatalog.errors import CatalogLoadError
from filmcatalog.logging_setup import configure_logging
from filmcatalog.models import DirectoryTab


def main(argv=None) -> int:
	parser = argparse.ArgumentParser(description="Summarize a movie catalog file")
	parser.add_argument('--source', help="catalog path or URL (defaults to FILMCATALOG_DATA_SOURCE)")
	parser.add_argument('--top', type=int, default=10, help="how many cast members/directors to list")
	args = parser.parse_args(argv)

	settings = get_settings()
	configure_logging(settings.log_level)
	source = args.source or settings.data_source

	# Headline banner for visibility in console
	logger.info("=" * 60)
	logger.info("Catalog Summary")
	logger.info("=" * 60)

	# 1) Load data
	logger.info("[1/3] Loading movies...")
	loader = DataLoader(default_poster=settings.default_poster, request_timeout=settings.request_timeout)
	try:
		movies = loader.load_movies(source)  # read dataset
	except CatalogLoadError as e:
		logger.error(f"[FAIL] {e}")
		return 1
	logger.info(f"[OK] Loaded {len(movies)} movies")  # confirm count

	# 2) Years and genres
	logger.info("[2/3] Years and genres...")
	years = loader.get_all_years(movies)
	if years:
		logger.info(f"[OK] {len(years)} distinct years, {years[-1]} - {years[0]}")
	else:
		logger.info("[OK] No movie has a known year")
	missing_year = sum(1 for m in movies if m.year is None)
	logger.info(f"[OK] {missing_year} movies without a year, {sum(1 for m in movies if m.rating is None)} without a rating")
	logger.info(f"[OK] Genres: {', '.join(loader.get_all_genres(movies)) or '-'}")

	# 3) Directory leaders
	logger.info("[3/3] Most frequent names...")
	for tab in DirectoryTab:
		entries = aggregate(movies, tab)[:args.top]
		listing = ', '.join(f"{e.name} ({e.count})" for e in entries) or '-'
		logger.info(f"[OK] Top {tab.value}: {listing}")

	logger.info("=" * 60)
	return 0


if __name__ == '__main__':
	sys.exit(main())  # invoke summary
