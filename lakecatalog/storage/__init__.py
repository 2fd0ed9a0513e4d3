"""Metadata backend system for lakecatalog.

This module provides storage abstraction with support for:
- In-memory storage (tests, ephemeral catalogs)
- Local filesystem storage as JSON documents

Usage:
    backend = get_metadata_backend("local", {"path": "/data/lakecatalog"})
    backend.put_database("sales", CatalogDatabase())
"""

from pathlib import Path

from lakecatalog.exceptions import ConfigurationError
from lakecatalog.storage.backend import InMemoryBackend, MetadataBackend

__all__ = [
    "MetadataBackend",
    "InMemoryBackend",
    "get_metadata_backend",
]


def get_metadata_backend(
    backend_type: str,
    config: dict[str, str] | None = None,
) -> MetadataBackend:
    """Create a metadata backend instance.

    Args:
        backend_type: Type of backend ("memory", "local")
        config: Backend-specific configuration dictionary

    Returns:
        Configured MetadataBackend instance

    Raises:
        ConfigurationError: If backend_type is unknown

    Examples:
        In-memory backend:
        >>> backend = get_metadata_backend("memory")

        Local filesystem backend:
        >>> backend = get_metadata_backend("local", {"path": "/data/lakecatalog"})
    """
    config = config or {}

    if backend_type == "memory":
        return InMemoryBackend()

    elif backend_type == "local":
        from lakecatalog.storage.local_backend import LocalBackend

        path = config.get("path", "~/.lakecatalog/metadata")
        return LocalBackend(Path(path))

    else:
        raise ConfigurationError(
            f"Unknown metadata backend: {backend_type}. Supported backends: memory, local",
            backend_type=backend_type,
        )
