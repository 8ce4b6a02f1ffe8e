"""Feature file discovery service."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from .feature_models import FeatureFile

_LOGGER = logging.getLogger(__name__)


class FeatureDiscoveryError(Exception):
    """Raised when a configured feature root cannot be searched."""


def discover_feature_files(roots: Sequence[Path], pattern: str) -> tuple[FeatureFile, ...]:
    """Return feature files under every root, roots in configured order, files sorted per root."""
    discovered: list[FeatureFile] = []
    seen: set[Path] = set()
    for root in roots:
        if not root.is_dir():
            raise FeatureDiscoveryError(f"Feature root not found: {root}")
        for candidate in sorted(root.glob(pattern)):
            resolved = candidate.resolve()
            if not candidate.is_file() or resolved in seen:
                continue
            seen.add(resolved)
            discovered.append(FeatureFile(path=resolved))
    _LOGGER.debug("Discovered %d feature files under %d roots", len(discovered), len(roots))
    return tuple(discovered)
