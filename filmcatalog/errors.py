"""
Error types for the Film Catalog engine.
Only a failed catalog load is fatal; everything else degrades to empty results.
"""


class CatalogError(Exception):
	"""Base class for all catalog errors."""


class CatalogLoadError(CatalogError):
	"""The catalog resource could not be fetched or parsed."""

	def __init__(self, source: str, reason: str):
		self.source = source  # path or URL that failed
		self.reason = reason  # short human-readable cause
		super().__init__(f"Failed to load catalog from {source}: {reason}")


class UnhandledRouteError(CatalogError):
	"""A page kind has no handler registered."""
