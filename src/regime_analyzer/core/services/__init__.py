"""Services that turn raw inputs into canonical profiles."""

from regime_analyzer.core.services.activity import ActivityClassifier
from regime_analyzer.core.services.jurisdiction import JurisdictionNormalizer

__all__ = [
    "ActivityClassifier",
    "JurisdictionNormalizer",
]
