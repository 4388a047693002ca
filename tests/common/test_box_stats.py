"""Unit tests for BoxStats.

Authors: sfmstats developers
"""

import unittest

import numpy as np

from sfmstats.common.box_stats import BoxStats


class TestBoxStats(unittest.TestCase):
    """Unit tests for BoxStats."""

    def test_empty_samples_give_zero_summary(self) -> None:
        """An empty sequence is a defined condition, with every field at 0."""
        stats = BoxStats.from_samples([])

        self.assertTrue(stats.is_empty())
        self.assertEqual(stats, BoxStats())
        self.assertEqual(stats.count, 0)
        for value in (stats.min, stats.max, stats.mean, stats.median, stats.first_quartile, stats.third_quartile):
            self.assertEqual(value, 0)

    def test_odd_count(self) -> None:
        """The median is the middle sample of the sorted sequence."""
        stats = BoxStats.from_samples([3.0, 1.0, 2.0])

        self.assertEqual(stats.count, 3)
        self.assertEqual(stats.min, 1.0)
        self.assertEqual(stats.max, 3.0)
        self.assertEqual(stats.mean, 2.0)
        self.assertEqual(stats.median, 2.0)
        self.assertEqual(stats.first_quartile, 1.0)  # rank 3 // 4 = 0
        self.assertEqual(stats.third_quartile, 3.0)  # rank 9 // 4 = 2

    def test_even_count(self) -> None:
        """The median is the average of the two central samples."""
        stats = BoxStats.from_samples([4, 1, 3, 2])

        self.assertEqual(stats.count, 4)
        self.assertEqual(stats.min, 1)
        self.assertEqual(stats.max, 4)
        self.assertEqual(stats.mean, 2.5)
        self.assertEqual(stats.median, 2.5)
        self.assertEqual(stats.first_quartile, 2)  # rank 1
        self.assertEqual(stats.third_quartile, 4)  # rank 3

    def test_nearest_rank_quartiles_on_ties(self) -> None:
        """Quartiles pick samples of the sorted sequence, without interpolation."""
        samples = [5.0, 1.0, 1.0, 1.0, 2.0, 2.0, 9.0, 7.0]
        stats = BoxStats.from_samples(samples)

        # sorted: 1 1 1 2 2 5 7 9
        self.assertEqual(stats.first_quartile, 1.0)  # rank 2
        self.assertEqual(stats.median, 2.0)  # (2 + 2) / 2
        self.assertEqual(stats.third_quartile, 7.0)  # rank 6
        self.assertEqual(stats.mean, 3.5)

    def test_single_sample(self) -> None:
        stats = BoxStats.from_samples(np.array([0.25]))

        self.assertEqual(stats.count, 1)
        self.assertEqual(stats.min, 0.25)
        self.assertEqual(stats.max, 0.25)
        self.assertEqual(stats.median, 0.25)
        self.assertEqual(stats.first_quartile, 0.25)
        self.assertEqual(stats.third_quartile, 0.25)

    def test_input_is_not_modified(self) -> None:
        samples = [3.0, 1.0, 2.0]
        BoxStats.from_samples(samples)
        self.assertEqual(samples, [3.0, 1.0, 2.0])

    def test_to_dict(self) -> None:
        stats_dict = BoxStats.from_samples([1, 2, 3]).to_dict()
        self.assertEqual(
            set(stats_dict.keys()),
            {"count", "min", "max", "mean", "median", "first_quartile", "third_quartile"},
        )
        self.assertEqual(stats_dict["count"], 3)


if __name__ == "__main__":
    unittest.main()
