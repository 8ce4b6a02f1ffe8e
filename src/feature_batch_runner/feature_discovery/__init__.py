"""Feature discovery exports."""

from .feature_locator import FeatureDiscoveryError, discover_feature_files
from .feature_models import FeatureFile

__all__ = ["FeatureFile", "FeatureDiscoveryError", "discover_feature_files"]
