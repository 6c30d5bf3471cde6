"""
YAML manifest loader with per-path caching.

Usage::

    from apiversioning.manifest.loader import ManifestLoader

    loader = ManifestLoader()
    manifest = loader.load(Path("contoso.versions.yaml"))
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import ClassVar

import yaml

from apiversioning.manifest.schema import VersioningManifest

logger = logging.getLogger(__name__)


class ManifestLoader:
    """Loads and caches versioning manifests from YAML files."""

    _cache: ClassVar[dict[str, VersioningManifest]] = {}

    @classmethod
    def clear_cache(cls) -> None:
        """Clear the manifest cache (useful in tests)."""
        cls._cache.clear()

    def load(self, path: Path) -> VersioningManifest:
        """Load a manifest from a YAML file.

        Args:
            path: Path to the YAML manifest.

        Returns:
            Validated ``VersioningManifest`` instance.

        Raises:
            FileNotFoundError: If the file does not exist.
            TypeError: If the YAML root is not a mapping.
            yaml.YAMLError: If the file contains invalid YAML.
            pydantic.ValidationError: If the YAML does not match the schema.
        """
        key = str(path.resolve())
        if key in self._cache:
            logger.debug("Manifest cache hit: %s", key)
            return self._cache[key]

        if not path.exists():
            raise FileNotFoundError(f"Manifest file not found: {path}")

        with open(path, encoding="utf-8") as fh:
            raw = yaml.safe_load(fh)

        manifest = self._validate(raw, str(path))
        self._cache[key] = manifest

        logger.debug(
            "Loaded versioning manifest: namespaces=%d versioned=%d",
            len(manifest.namespaces),
            sum(1 for ns in manifest.namespaces if ns.versions),
        )
        return manifest

    def load_from_string(self, yaml_str: str) -> VersioningManifest:
        """Load a manifest from a YAML string (convenience for testing)."""
        return self._validate(yaml.safe_load(yaml_str), "<string>")

    @staticmethod
    def _validate(raw: object, source: str) -> VersioningManifest:
        if not isinstance(raw, dict):
            raise TypeError(
                f"Expected YAML mapping at root of {source}, got {type(raw).__name__}"
            )
        return VersioningManifest.model_validate(raw)
