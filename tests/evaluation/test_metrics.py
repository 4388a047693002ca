"""Tests for SfmMetric and SfmMetricsGroup.

Authors: sfmstats developers
"""
import os
import tempfile
import unittest

import numpy as np

import sfmstats.utils.io as io_utils
from sfmstats.common.box_stats import BoxStats
from sfmstats.common.histogram import Histogram
from sfmstats.evaluation.metrics import HISTOGRAM_KEY, SfmMetric, SfmMetricsGroup


class TestSfmMetric(unittest.TestCase):
    """Unit tests for SfmMetric class."""

    def setUp(self) -> None:
        super().setUp()
        self._metric_dict = {
            "foo_metric": {
                "summary": BoxStats.from_samples([0, 1, 2, 3]).to_dict(),
                "full_data": [0, 1, 2, 3],
            }
        }

    def test_scalar_metric(self) -> None:
        metric = SfmMetric("number_views", 3)

        self.assertEqual(metric.dim, 0)
        self.assertEqual(metric.get_metric_as_dict(), {"number_views": 3})

    def test_1d_metric_summary(self) -> None:
        metric = SfmMetric("foo_metric", [3, 1, 2, 0])

        self.assertEqual(metric.dim, 1)
        self.assertEqual(metric.summary["count"], 4)
        self.assertEqual(metric.summary["median"], 1.5)
        self.assertEqual(metric.summary["max"], 3)

    def test_store_full_data(self) -> None:
        metric = SfmMetric("foo_metric", np.arange(4), store_full_data=False)

        self.assertIsNone(metric.data)
        self.assertNotIn("full_data", metric.get_metric_as_dict()["foo_metric"])

    def test_2d_data_raises(self) -> None:
        with self.assertRaises(ValueError):
            SfmMetric("foo_metric", np.zeros((2, 2)))

    def test_no_data_no_summary_raises(self) -> None:
        with self.assertRaises(ValueError):
            SfmMetric("foo_metric")

    def test_from_box_stats(self) -> None:
        histogram = Histogram(0.0, 2.0, 2)
        histogram.add_samples([0.5, 1.5, 1.7])

        metric = SfmMetric.from_box_stats("residuals", BoxStats.from_samples([0.5, 1.5, 1.7]), histogram)

        self.assertIsNone(metric.data)
        self.assertEqual(metric.summary["count"], 3)
        self.assertEqual(metric.summary[HISTOGRAM_KEY], {"0.00-1.00": 1, "1.00-2.00": 2})

    def test_from_box_stats_empty_histogram(self) -> None:
        metric = SfmMetric.from_box_stats("residuals", BoxStats(), Histogram())
        self.assertNotIn(HISTOGRAM_KEY, metric.summary)

    def test_parse_from_dict(self) -> None:
        metric = SfmMetric.parse_from_dict(self._metric_dict)

        self.assertEqual(metric.name, "foo_metric")
        np.testing.assert_array_equal(metric.data, [0, 1, 2, 3])
        self.assertEqual(metric.get_metric_as_dict(), self._metric_dict)

    def test_save_to_json(self) -> None:
        metric = SfmMetric.parse_from_dict(self._metric_dict)
        with tempfile.TemporaryDirectory() as tempdir:
            json_path = os.path.join(tempdir, "metric.json")
            metric.save_to_json(json_path)
            saved_metric = SfmMetric.parse_from_dict(io_utils.read_json_file(json_path))

        self.assertEqual(saved_metric.get_metric_as_dict(), self._metric_dict)


class TestSfmMetricsGroup(unittest.TestCase):
    """Unit tests for SfmMetricsGroup class."""

    def setUp(self) -> None:
        super().setUp()
        self._metrics_group = SfmMetricsGroup(
            "reconstruction_statistics",
            [
                SfmMetric("number_views", 2),
                SfmMetric("landmarks_per_view_counts", [2, 1]),
                SfmMetric.from_box_stats("track_lengths", BoxStats.from_samples([1, 2])),
            ],
        )

    def test_get_metric(self) -> None:
        self.assertEqual(self._metrics_group.get_metric("number_views").get_metric_as_dict(), {"number_views": 2})
        self.assertIsNone(self._metrics_group.get_metric("missing"))

    def test_get_metrics_as_dict(self) -> None:
        metrics_dict = self._metrics_group.get_metrics_as_dict()

        self.assertEqual(list(metrics_dict.keys()), ["reconstruction_statistics"])
        self.assertEqual(
            set(metrics_dict["reconstruction_statistics"].keys()),
            {"number_views", "landmarks_per_view_counts", "track_lengths"},
        )
        self.assertNotIn("full_data", metrics_dict["reconstruction_statistics"]["track_lengths"])

    def test_save_and_parse_json(self) -> None:
        with tempfile.TemporaryDirectory() as tempdir:
            json_path = os.path.join(tempdir, "nested", "metrics.json")
            self._metrics_group.save_to_json(json_path)
            parsed_group = SfmMetricsGroup.parse_from_json(json_path)

        self.assertEqual(parsed_group.name, "reconstruction_statistics")
        self.assertEqual(parsed_group.get_metrics_as_dict(), self._metrics_group.get_metrics_as_dict())

    def test_parse_from_dict_invalid(self) -> None:
        with self.assertRaises(AttributeError):
            SfmMetricsGroup.parse_from_dict({"a": {}, "b": {}})


if __name__ == "__main__":
    unittest.main()
