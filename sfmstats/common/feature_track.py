"""Feature tracks built from pairwise matches, before any 3d point is known.

A track is the set of features, one or more per view, that the matching process associates with a single landmark.

Authors: sfmstats developers
"""

from typing import List, NamedTuple, Set


class FeatureMeasurement(NamedTuple):
    """Feature of a track."""

    i: int  # view id
    k: int  # index of the feature in the view


class FeatureTrack(NamedTuple):
    """Features of a single describer type associated with one landmark."""

    describer_type: str
    measurements: List[FeatureMeasurement]

    def number_measurements(self) -> int:
        """Returns the number of measurements."""
        return len(self.measurements)

    def measurement(self, idx: int) -> FeatureMeasurement:
        """Getter for measurement at a particular index.

        Args:
            idx: index to fetch.

        Returns:
            measurement at the requested index.
        """
        return self.measurements[idx]

    def view_ids(self) -> Set[int]:
        """Returns the distinct views touched by the track."""
        return {measurement.i for measurement in self.measurements}

    def validate_unique_views(self) -> bool:
        """Validates the track by checking that no two measurements are from the same view (no fork).

        Returns:
            boolean result of the validation.
        """
        return len(self.view_ids()) == len(self.measurements)

    def __eq__(self, other: object) -> bool:
        """Checks equality with the other object, insensitive to the order of the measurements."""
        if not isinstance(other, FeatureTrack):
            return False

        if self.describer_type != other.describer_type:
            return False

        return sorted(self.measurements) == sorted(other.measurements)

    def __ne__(self, other: object) -> bool:
        """Checks inequality with the other object."""
        return not self == other
