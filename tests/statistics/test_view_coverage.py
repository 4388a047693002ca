"""Unit tests for the per-view landmark coverage statistics.

Authors: sfmstats developers
"""

import unittest

import numpy as np

from sfmstats.common.sfm_data import Landmark, Observation, SfmData, View
from sfmstats.statistics.view_coverage import (
    LANDMARKS_PER_VIEW_NUM_BINS,
    compute_landmarks_per_view,
    compute_landmarks_per_view_histogram,
    count_landmarks_per_view,
)


def _build_sfm_data() -> SfmData:
    """Views are added in the order 2, 1, 0 and view 0 observes nothing."""
    sfm_data = SfmData()
    for view_id in [2, 1, 0]:
        sfm_data.add_view(View(view_id=view_id, intrinsic_id=0, pose_id=view_id))

    sfm_data.add_landmark(
        0,
        Landmark(np.zeros(3), {1: Observation(np.zeros(2)), 2: Observation(np.zeros(2))}),
    )
    sfm_data.add_landmark(1, Landmark(np.zeros(3), {1: Observation(np.zeros(2))}))
    return sfm_data


class TestViewCoverage(unittest.TestCase):
    """Unit tests for the landmarks-per-view statistics."""

    def setUp(self) -> None:
        super().setUp()
        self.sfm_data = _build_sfm_data()

    def test_count_landmarks_per_view(self) -> None:
        """Only observed views have an entry, keyed in ascending view id order."""
        counts = count_landmarks_per_view(self.sfm_data)

        self.assertEqual(counts, {1: 2, 2: 1})
        self.assertEqual(list(counts.keys()), [1, 2])

    def test_compute_landmarks_per_view(self) -> None:
        self.assertEqual(compute_landmarks_per_view(self.sfm_data), [2, 1])

    def test_histogram(self) -> None:
        stats, histogram = compute_landmarks_per_view_histogram(self.sfm_data)

        self.assertEqual(stats.count, 2)
        self.assertEqual(stats.min, 1)
        self.assertEqual(stats.max, 2)
        self.assertEqual(histogram.num_bins, LANDMARKS_PER_VIEW_NUM_BINS)
        self.assertEqual(histogram.low, 1.0)
        self.assertEqual(histogram.high, 3.0)
        self.assertEqual(int(histogram.counts.sum()), 2)
        self.assertEqual(histogram.counts[0], 1)

    def test_without_histogram(self) -> None:
        stats, histogram = compute_landmarks_per_view_histogram(self.sfm_data, with_histogram=False)

        self.assertEqual(stats.count, 2)
        self.assertIsNone(histogram)

    def test_no_landmark(self) -> None:
        sfm_data = SfmData()
        sfm_data.add_view(View(view_id=0, intrinsic_id=0, pose_id=0))

        self.assertEqual(compute_landmarks_per_view(sfm_data), [])
        stats, histogram = compute_landmarks_per_view_histogram(sfm_data)
        self.assertTrue(stats.is_empty())
        self.assertTrue(histogram.is_empty())


if __name__ == "__main__":
    unittest.main()
