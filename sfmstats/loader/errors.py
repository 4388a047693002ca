"""Errors raised by the feature and match loaders.

Authors: sfmstats developers
"""


class StatisticsLoadError(Exception):
    """Loading the data needed by a statistic failed."""


class FeatureLoadError(StatisticsLoadError):
    """Features could not be loaded."""


class MatchLoadError(StatisticsLoadError):
    """Pairwise matches could not be loaded."""
