"""Configuration values for the :mod:`slimpdf.compress` pipeline."""

from __future__ import annotations

import dataclasses
from typing import Any, Mapping

from .exceptions import ConfigurationError
from .gate import DEFAULT_SIZE_THRESHOLD, needs_compression
from .utils import get_logger

_LOGGER = get_logger("slimpdf.compress")

DEFAULT_PRIMARY_MIN_GAIN = 5.0
DEFAULT_FALLBACK_MIN_GAIN = 1.0

# Public option names accepted from JSON payloads and CLI callers.
_OPTION_ALIASES: dict[str, str] = {
    "imageQuality": "image_quality",
    "imageMaxWidth": "image_max_width",
    "imageMaxHeight": "image_max_height",
    "removeMetadata": "remove_metadata",
    "optimizeFonts": "optimize_fonts",
    "compressStreams": "compress_streams",
}


@dataclasses.dataclass(frozen=True, slots=True)
class CompressionConfig:
    """Options controlling how a single document is rebuilt."""

    image_quality: int = 60
    image_max_width: int = 1200
    image_max_height: int = 1600
    remove_metadata: bool = True
    optimize_fonts: bool = True
    compress_streams: bool = True

    def __post_init__(self) -> None:
        for name in ("image_quality", "image_max_width", "image_max_height"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
        if not 0 <= self.image_quality <= 100:
            raise ConfigurationError(f"image_quality must be between 0 and 100, got {self.image_quality}")
        if self.image_max_width < 1 or self.image_max_height < 1:
            raise ConfigurationError("image_max_width and image_max_height must be positive")
        for name in ("remove_metadata", "optimize_fonts", "compress_streams"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigurationError(f"{name} must be a boolean")

    @classmethod
    def merge(
        cls,
        overrides: Mapping[str, Any] | None = None,
        *,
        base: "CompressionConfig | None" = None,
        strict: bool = False,
    ) -> "CompressionConfig":
        """Return a new config built from *base* (or the defaults) and *overrides*.

        Keys may use either the Python attribute names or their camelCase
        aliases. Unknown keys raise :class:`ConfigurationError` when *strict*
        is set and are otherwise ignored with a warning.
        """

        base = base or DEFAULT_CONFIG
        if not overrides:
            return base

        known = {field.name for field in dataclasses.fields(cls)}
        updates: dict[str, Any] = {}
        unknown: list[str] = []
        for key, value in overrides.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                unknown.append(str(key))
                continue
            if value is None:
                continue
            updates[name] = value

        if unknown:
            if strict:
                raise ConfigurationError(f"Unknown compression options: {', '.join(sorted(unknown))}")
            _LOGGER.warning("Ignoring unknown compression options: %s", ", ".join(sorted(unknown)))

        return base.with_overrides(**updates)

    def with_overrides(self, **updates: Any) -> "CompressionConfig":
        try:
            return dataclasses.replace(self, **updates)
        except TypeError as exc:
            raise ConfigurationError(str(exc)) from exc

    def as_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclasses.dataclass(frozen=True, slots=True)
class CompressionPolicy:
    """Size gate and minimum-gain floors applied around the pipeline."""

    size_threshold: int = DEFAULT_SIZE_THRESHOLD
    primary_min_gain: float = DEFAULT_PRIMARY_MIN_GAIN
    fallback_min_gain: float = DEFAULT_FALLBACK_MIN_GAIN

    def __post_init__(self) -> None:
        if self.size_threshold < 0:
            raise ConfigurationError("size_threshold must not be negative")
        for name in ("primary_min_gain", "fallback_min_gain"):
            value = getattr(self, name)
            if not 0 <= value <= 100:
                raise ConfigurationError(f"{name} must be a percentage between 0 and 100, got {value}")
        if self.fallback_min_gain > self.primary_min_gain:
            raise ConfigurationError("fallback_min_gain must not exceed primary_min_gain")

    def needs_compression(self, document: bytes | bytearray | memoryview) -> bool:
        return needs_compression(document, self.size_threshold)


DEFAULT_CONFIG = CompressionConfig()
DEFAULT_POLICY = CompressionPolicy()


__all__ = [
    "CompressionConfig",
    "CompressionPolicy",
    "DEFAULT_CONFIG",
    "DEFAULT_POLICY",
    "DEFAULT_SIZE_THRESHOLD",
    "DEFAULT_PRIMARY_MIN_GAIN",
    "DEFAULT_FALLBACK_MIN_GAIN",
]
