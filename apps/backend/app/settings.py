"""Environment driven settings for the slimpdf backend."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Mapping, TypeVar

from slimpdf.compress import CompressionConfig, CompressionPolicy, ConfigurationError
from slimpdf.compress.config import DEFAULT_FALLBACK_MIN_GAIN, DEFAULT_PRIMARY_MIN_GAIN
from slimpdf.compress.gate import DEFAULT_SIZE_THRESHOLD

T = TypeVar("T")

DEFAULT_MAX_UPLOAD_MB = 100


@dataclass(frozen=True)
class Settings:
    """Service level compression settings."""

    size_threshold: int = DEFAULT_SIZE_THRESHOLD
    primary_min_gain: float = DEFAULT_PRIMARY_MIN_GAIN
    fallback_min_gain: float = DEFAULT_FALLBACK_MIN_GAIN
    image_quality: int = CompressionConfig().image_quality
    max_upload_bytes: int = DEFAULT_MAX_UPLOAD_MB * 1024 * 1024

    def policy(self) -> CompressionPolicy:
        return CompressionPolicy(
            size_threshold=self.size_threshold,
            primary_min_gain=self.primary_min_gain,
            fallback_min_gain=self.fallback_min_gain,
        )

    def config(self) -> CompressionConfig:
        return CompressionConfig(image_quality=self.image_quality)


def _read(environ: Mapping[str, str], name: str, parse: Callable[[str], T], default: T) -> T:
    raw = environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return parse(raw.strip())
    except ValueError as exc:
        raise RuntimeError(f"{name} has an invalid value: {raw!r}") from exc


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Build :class:`Settings` from ``SLIMPDF_*`` environment variables."""

    environ = os.environ if environ is None else environ
    settings = Settings(
        size_threshold=_read(environ, "SLIMPDF_SIZE_THRESHOLD", int, DEFAULT_SIZE_THRESHOLD),
        primary_min_gain=_read(environ, "SLIMPDF_PRIMARY_MIN_GAIN", float, DEFAULT_PRIMARY_MIN_GAIN),
        fallback_min_gain=_read(environ, "SLIMPDF_FALLBACK_MIN_GAIN", float, DEFAULT_FALLBACK_MIN_GAIN),
        image_quality=_read(environ, "SLIMPDF_IMAGE_QUALITY", int, Settings.image_quality),
        max_upload_bytes=_read(environ, "SLIMPDF_MAX_UPLOAD_MB", int, DEFAULT_MAX_UPLOAD_MB) * 1024 * 1024,
    )

    try:
        settings.policy()
        settings.config()
    except ConfigurationError as exc:
        raise RuntimeError(f"Invalid slimpdf settings: {exc}") from exc
    if settings.max_upload_bytes <= 0:
        raise RuntimeError("SLIMPDF_MAX_UPLOAD_MB must be positive.")

    return settings


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return load_settings()


__all__ = ["Settings", "get_settings", "load_settings"]
