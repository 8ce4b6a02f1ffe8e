"""Result parsing exports."""

from .feature_results import FeatureResult
from .result_parser import (
    ResultParseError,
    create_feature_result,
    parse_feature_reports,
    parse_result_file,
)

__all__ = [
    "FeatureResult",
    "ResultParseError",
    "create_feature_result",
    "parse_feature_reports",
    "parse_result_file",
]
