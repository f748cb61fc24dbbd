"""
Local key-value storage.
A small JSON-file store that survives restarts, plus an in-memory twin with the same interface.
"""

import json  # on-disk format
import os  # atomic replace
import tempfile  # write-then-rename
from pathlib import Path  # filesystem paths
from typing import Any, Dict, Optional  # type hints

from loguru import logger  # console logger


class MemoryStore:
	"""Process-local key-value store; nothing is written anywhere."""

	def __init__(self, initial: Optional[Dict[str, Any]] = None):
		self._data: Dict[str, Any] = dict(initial or {})

	def get(self, key: str, default: Any = None) -> Any:
		return self._data.get(key, default)

	def set(self, key: str, value: Any) -> None:
		self._data[key] = value

	def remove(self, key: str) -> None:
		self._data.pop(key, None)

	def keys(self):
		return list(self._data.keys())


class KeyValueStore(MemoryStore):
	"""
	JSON-file backed key-value store.
	The whole file is read once on construction and rewritten atomically on every change.
	A missing or unreadable file starts an empty store.
	"""

	def __init__(self, path: str):
		self.path = Path(path)  # storage file
		super().__init__(self._read())
		logger.debug(f"[Storage] Opened {self.path} with {len(self._data)} keys")

	def _read(self) -> Dict[str, Any]:
		if not self.path.exists():
			return {}
		try:
			with open(self.path, 'r', encoding='utf-8') as handle:
				payload = json.load(handle)
		except (OSError, ValueError) as e:  # ValueError covers bad JSON and bad UTF-8
			logger.warning(f"[Storage] Ignoring unreadable storage file {self.path}: {e}")
			return {}
		if not isinstance(payload, dict):
			logger.warning(f"[Storage] Ignoring storage file {self.path}: top level is not an object")
			return {}
		return payload

	def set(self, key: str, value: Any) -> None:
		super().set(key, value)
		self._flush()

	def remove(self, key: str) -> None:
		super().remove(key)
		self._flush()

	def _flush(self) -> None:
		directory = self.path.parent
		directory.mkdir(parents=True, exist_ok=True)
		fd, temp_path = tempfile.mkstemp(dir=str(directory), suffix='.tmp')
		try:
			with os.fdopen(fd, 'w', encoding='utf-8') as temp:
				json.dump(self._data, temp, indent=2, ensure_ascii=False)
			os.replace(temp_path, self.path)
		finally:
			if os.path.exists(temp_path):
				os.remove(temp_path)
