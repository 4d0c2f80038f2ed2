"""
Environment-backed settings.

Values are read from the process environment on every access so tests and the
CLI can change them with `os.environ` or the setters below.
"""

from __future__ import annotations

import logging
import os
from typing import Literal, cast

PangeaEnv = Literal["dev", "prod"]

ENV_PANGEA_ENV = "PANGEA_ENV"
ENV_PANGEA_LOG_LEVEL = "PANGEA_LOG_LEVEL"
ENV_PANGEA_STRICT = "PANGEA_STRICT"

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}


class EnvVars:
	@property
	def pangea_env(self) -> PangeaEnv:
		value = os.environ.get(ENV_PANGEA_ENV, "dev").strip().lower()
		if value not in ("dev", "prod"):
			raise ValueError(f"{ENV_PANGEA_ENV} must be 'dev' or 'prod', got {value!r}")
		return cast(PangeaEnv, value)

	@pangea_env.setter
	def pangea_env(self, value: PangeaEnv) -> None:
		os.environ[ENV_PANGEA_ENV] = value

	@property
	def log_level(self) -> int:
		raw = os.environ.get(ENV_PANGEA_LOG_LEVEL, "INFO").strip().upper()
		level = logging.getLevelName(raw)
		if not isinstance(level, int):
			raise ValueError(f"Unknown log level in {ENV_PANGEA_LOG_LEVEL}: {raw!r}")
		return level

	@log_level.setter
	def log_level(self, value: str) -> None:
		os.environ[ENV_PANGEA_LOG_LEVEL] = value

	@property
	def strict(self) -> bool:
		"""Validate that non-function props are JSON values while serializing.

		Defaults to on in dev and off in prod.
		"""
		raw = os.environ.get(ENV_PANGEA_STRICT)
		if raw is None or raw.strip() == "":
			return self.pangea_env == "dev"
		value = raw.strip().lower()
		if value in _TRUTHY:
			return True
		if value in _FALSY:
			return False
		raise ValueError(f"{ENV_PANGEA_STRICT} must be a boolean, got {raw!r}")

	@strict.setter
	def strict(self, value: bool) -> None:
		os.environ[ENV_PANGEA_STRICT] = "1" if value else "0"


env = EnvVars()

__all__ = [
	"ENV_PANGEA_ENV",
	"ENV_PANGEA_LOG_LEVEL",
	"ENV_PANGEA_STRICT",
	"PangeaEnv",
	"EnvVars",
	"env",
]
