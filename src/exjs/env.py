"""Environment-backed configuration."""

from __future__ import annotations

import os

ENV_EXJS_LOG_LEVEL = "EXJS_LOG_LEVEL"
ENV_EXJS_NO_OPTIMIZE = "EXJS_NO_OPTIMIZE"

_TRUTHY = {"1", "true", "yes", "on"}


class EnvVars:
	"""Typed view over the EXJS_* environment variables.

	Reads and writes go straight to os.environ so that values set by a
	parent process, a CLI flag or a test's monkeypatch are all seen.
	"""

	def _get(self, key: str) -> str | None:
		return os.environ.get(key)

	def _set(self, key: str, value: str | None) -> None:
		if value is None:
			os.environ.pop(key, None)
		else:
			os.environ[key] = value

	@property
	def log_level(self) -> str:
		return (self._get(ENV_EXJS_LOG_LEVEL) or "WARNING").upper()

	@log_level.setter
	def log_level(self, value: str | None) -> None:
		self._set(ENV_EXJS_LOG_LEVEL, value)

	@property
	def optimize(self) -> bool:
		value = self._get(ENV_EXJS_NO_OPTIMIZE)
		return value is None or value.strip().lower() not in _TRUTHY

	@optimize.setter
	def optimize(self, value: bool) -> None:
		self._set(ENV_EXJS_NO_OPTIMIZE, None if value else "1")


env = EnvVars()
