import os
import re
from abc import ABC, abstractmethod
from typing import Optional

from BackEnd.core.paths import scope_dir

_SAFE_KEY = re.compile(r"^[A-Za-z0-9_.-]+$")


class ScopedKeyValueStore(ABC):
	"""Durable string storage for a single scope (one user, one app)."""

	@abstractmethod
	def get(self, key: str) -> Optional[str]:
		...

	@abstractmethod
	def set(self, key: str, value: str) -> None:
		...

	@abstractmethod
	def delete(self, key: str) -> None:
		...


class FileKeyValueStore(ScopedKeyValueStore):
	"""One file per key under the per-user data dir."""

	def __init__(self, scope="default", directory=None):
		self.directory = directory or scope_dir(scope)

	def _path(self, key):
		if not _SAFE_KEY.match(key):
			raise ValueError(f"invalid storage key: {key!r}")
		return self.directory / f"{key}.json"

	def get(self, key):
		path = self._path(key)
		if not path.exists():
			return None
		with open(path, "r", encoding="utf-8") as f:
			return f.read()

	def set(self, key, value):
		path = self._path(key)
		tmp = path.with_suffix(".tmp")
		with open(tmp, "w", encoding="utf-8") as f:
			f.write(value)
		# readers only ever see a complete file
		os.replace(tmp, path)

	def delete(self, key):
		path = self._path(key)
		if path.exists():
			path.unlink()


class MemoryKeyValueStore(ScopedKeyValueStore):
	def __init__(self, initial=None):
		self.data = dict(initial or {})

	def get(self, key):
		return self.data.get(key)

	def set(self, key, value):
		self.data[key] = value

	def delete(self, key):
		self.data.pop(key, None)
