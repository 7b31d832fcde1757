"""
Configuration for the conjugation engine
"""

import os
from dataclasses import dataclass


def _env_int(name: str, default: int) -> int:
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    return int(value)


@dataclass(frozen=True)
class ConjugatorConfig:
    """Engine-wide settings."""

    # Cache
    cache_ttl: int = 3600                # full records, seconds
    generated_cache_ttl: int = 3600 * 24  # generated paradigms never go stale
    cache_key_prefix: str = "conjugation:"

    # Generation
    default_pattern: str = "form1"

    @classmethod
    def from_env(cls) -> "ConjugatorConfig":
        """Build a config, letting MUFRADAT_* environment variables override defaults."""
        defaults = cls()
        return cls(
            cache_ttl=_env_int('MUFRADAT_CACHE_TTL', defaults.cache_ttl),
            generated_cache_ttl=_env_int(
                'MUFRADAT_GENERATED_CACHE_TTL', defaults.generated_cache_ttl),
            cache_key_prefix=os.environ.get(
                'MUFRADAT_CACHE_PREFIX', defaults.cache_key_prefix),
            default_pattern=os.environ.get(
                'MUFRADAT_DEFAULT_PATTERN', defaults.default_pattern),
        )


# Global config instance
config = ConjugatorConfig.from_env()
