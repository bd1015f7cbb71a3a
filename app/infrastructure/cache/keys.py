"""Cache key builders. Single place for key format (DRY).

Stored keys are <namespace>:v<version>:<name>. Bumping cache_version
orphans every entry written by an older layout. Components must not
contain CACHE_KEY_SEP to avoid ambiguous or colliding keys.
"""

from enum import Enum

from app.core.constants import CACHE_KEY_SEP


def _validate_key_component(value: str, name: str) -> None:
    """Raise ValueError if value is empty or contains the cache key separator.

    Args:
        value: String component used in a cache key.
        name: Name of the component (for error message).

    Raises:
        ValueError: If value is empty or contains CACHE_KEY_SEP.
    """
    if not value:
        raise ValueError(f"Cache key component {name!r} must be non-empty")
    if CACHE_KEY_SEP in value:
        raise ValueError(
            f"Cache key component {name!r} must not contain separator {CACHE_KEY_SEP!r}"
        )


def key_name(key: str | Enum) -> str:
    """Return the plain string name of a key (enum members use their value)."""
    return str(key.value) if isinstance(key, Enum) else key


def namespace_prefix(namespace: str, version: int) -> str:
    """Prefix shared by every key of one namespace/version (with trailing separator)."""
    _validate_key_component(namespace, "namespace")
    return f"{namespace}{CACHE_KEY_SEP}v{version}{CACHE_KEY_SEP}"


def cache_key(key: str | Enum, namespace: str, version: int) -> str:
    """Full stored key for a logical cache key name."""
    name = key_name(key)
    _validate_key_component(name, "key")
    return f"{namespace_prefix(namespace, version)}{name}"
