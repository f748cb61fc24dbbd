"""Console logging setup shared by the Streamlit app and scripts."""

import sys  # stderr sink

from loguru import logger  # console logger


def configure_logging(level: str = 'INFO') -> None:
	"""Replace loguru's default sink with a single stderr sink at `level`."""
	logger.remove()  # drop the default DEBUG sink
	logger.add(sys.stderr, level=level.upper(), format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | {message}")
	logger.debug(f"[Logging] Console sink configured at {level.upper()}")
