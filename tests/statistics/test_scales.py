"""Unit tests for the observation scale statistics.

Authors: sfmstats developers
"""

import unittest

import numpy as np

from sfmstats.common.sfm_data import Landmark, Observation, SfmData, View
from sfmstats.statistics.scales import collect_scales, compute_scale_histogram


def _build_sfm_data() -> SfmData:
    sfm_data = SfmData()
    for view_id in [1, 2]:
        sfm_data.add_view(View(view_id=view_id, intrinsic_id=0, pose_id=view_id))

    sfm_data.add_landmark(
        0,
        Landmark(
            np.zeros(3),
            {1: Observation(np.zeros(2), scale=2.0), 2: Observation(np.zeros(2), scale=4.5)},
        ),
    )
    sfm_data.add_landmark(1, Landmark(np.zeros(3), {1: Observation(np.zeros(2), scale=1.0)}))
    return sfm_data


class TestScales(unittest.TestCase):
    """Unit tests for compute_scale_histogram."""

    def setUp(self) -> None:
        super().setUp()
        self.sfm_data = _build_sfm_data()

    def test_collect_scales(self) -> None:
        self.assertEqual(collect_scales(self.sfm_data), [2.0, 4.5, 1.0])
        self.assertEqual(collect_scales(self.sfm_data, {2}), [4.5])

    def test_all_views(self) -> None:
        stats, histogram = compute_scale_histogram(self.sfm_data)

        self.assertEqual(stats.count, 3)
        self.assertEqual(stats.min, 1.0)
        self.assertEqual(stats.max, 4.5)
        self.assertAlmostEqual(stats.mean, 2.5)
        self.assertEqual(stats.median, 2.0)

        # [0, ceil(4.5)] with ceil(4.5) + 1 bins
        self.assertEqual(histogram.low, 0.0)
        self.assertEqual(histogram.high, 5.0)
        self.assertEqual(histogram.num_bins, 6)
        self.assertEqual(int(histogram.counts.sum()), 3)

    def test_specific_views(self) -> None:
        stats, _ = compute_scale_histogram(self.sfm_data, specific_views={2})

        self.assertEqual(stats.count, 1)
        self.assertEqual(stats.median, 4.5)

    def test_zero_scales(self) -> None:
        """Readers without scales store 0, the histogram range then collapses."""
        sfm_data = SfmData()
        sfm_data.add_landmark(0, Landmark(np.zeros(3), {0: Observation(np.zeros(2))}))

        stats, histogram = compute_scale_histogram(sfm_data)

        self.assertEqual(stats.count, 1)
        self.assertEqual(stats.max, 0.0)
        self.assertTrue(histogram.is_empty())

    def test_no_landmark(self) -> None:
        stats, histogram = compute_scale_histogram(SfmData(), with_histogram=False)

        self.assertTrue(stats.is_empty())
        self.assertIsNone(histogram)


if __name__ == "__main__":
    unittest.main()
