"""Classes to store the statistics computed over a reconstruction, for report generators and viewers.

Authors: sfmstats developers
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

import numpy as np

import sfmstats.utils.io as io_utils
from sfmstats.common.box_stats import BoxStats
from sfmstats.common.histogram import Histogram

DATA_KEY = "full_data"
SUMMARY_KEY = "summary"
HISTOGRAM_KEY = "histogram"


class SfmMetric:
    """A scalar or a 1D distribution, with the box summary of the distribution."""

    def __init__(
        self,
        name: str,
        data: Optional[Union[np.ndarray, float, List[Union[int, float]]]] = None,
        summary: Optional[Dict[str, Any]] = None,
        store_full_data: bool = True,
    ) -> None:
        if summary is None and data is None:
            raise ValueError("Data and summary cannot both be None.")

        self._name = name
        self._summary = summary
        self._data = None
        if data is not None:
            data = np.asarray(data)
            if data.ndim > 1:
                raise ValueError("Metrics must be scalars or 1D-distributions.")
            self._dim = data.ndim
            if self._dim == 1 and summary is None:
                self._summary = BoxStats.from_samples(data.tolist()).to_dict()
            if self._dim == 0 or store_full_data:
                self._data = data
        else:
            self._dim = 1

    @classmethod
    def from_box_stats(cls, name: str, stats: BoxStats, histogram: Optional[Histogram] = None) -> SfmMetric:
        """Creates a distribution metric from already computed statistics, without the full data."""
        summary: Dict[str, Any] = stats.to_dict()
        if histogram is not None and not histogram.is_empty():
            summary[HISTOGRAM_KEY] = histogram.to_dict()
        return cls(name, summary=summary)

    @property
    def name(self) -> str:
        return self._name

    @property
    def data(self) -> Optional[np.ndarray]:
        return self._data

    @property
    def dim(self) -> int:
        return self._dim

    @property
    def summary(self) -> Optional[Dict[str, Any]]:
        return self._summary

    def get_metric_as_dict(self) -> Dict[str, Any]:
        if self._dim == 0:
            return {self._name: self._data.tolist()}

        metric_dict: Dict[str, Any] = {SUMMARY_KEY: self._summary}
        if self._data is not None:
            metric_dict[DATA_KEY] = self._data.tolist()
        return {self._name: metric_dict}

    def save_to_json(self, json_filename: str) -> None:
        io_utils.save_json_file(json_filename, self.get_metric_as_dict())

    @classmethod
    def parse_from_dict(cls, metric_dict: Dict[str, Any]) -> SfmMetric:
        if len(metric_dict) != 1:
            raise AttributeError("Input metric dict should have a single key-value pair.")

        metric_name = list(metric_dict.keys())[0]
        metric_value = metric_dict[metric_name]

        # 1D distribution metrics
        if isinstance(metric_value, dict):
            if DATA_KEY in metric_value:
                return cls(metric_name, metric_value[DATA_KEY], summary=metric_value.get(SUMMARY_KEY))
            if SUMMARY_KEY not in metric_value:
                raise ValueError(f"Metric {metric_name} does not have summary or data.")
            return cls(metric_name, summary=metric_value[SUMMARY_KEY])

        # Scalar metrics
        return cls(metric_name, metric_value)


class SfmMetricsGroup:
    """Stores SfmMetrics computed by the same module."""

    def __init__(self, name: str, metrics: List[SfmMetric]) -> None:
        self._name = name
        self._metrics = metrics

    @property
    def name(self) -> str:
        return self._name

    @property
    def metrics(self) -> List[SfmMetric]:
        return self._metrics

    def add_metric(self, metric: SfmMetric) -> None:
        self._metrics.append(metric)

    def add_metrics(self, metrics: List[SfmMetric]) -> None:
        self._metrics.extend(metrics)

    def get_metric(self, name: str) -> Optional[SfmMetric]:
        for metric in self._metrics:
            if metric.name == name:
                return metric
        return None

    def get_metrics_as_dict(self) -> Dict[str, Dict[str, Any]]:
        metrics_dict: Dict[str, Any] = {}
        for metric in self._metrics:
            metrics_dict.update(metric.get_metric_as_dict())
        return {self._name: metrics_dict}

    def save_to_json(self, path: str) -> None:
        io_utils.save_json_file(path, self.get_metrics_as_dict())

    @classmethod
    def parse_from_dict(cls, metrics_group_dict: Dict[str, Any]) -> SfmMetricsGroup:
        if len(metrics_group_dict) != 1:
            raise AttributeError("Metrics group dict must have a single key-value pair.")
        metrics_group_name = list(metrics_group_dict.keys())[0]
        metrics_dict = metrics_group_dict[metrics_group_name]
        metrics_list = [
            SfmMetric.parse_from_dict({metric_name: metric_value}) for metric_name, metric_value in metrics_dict.items()
        ]
        return cls(metrics_group_name, metrics_list)

    @classmethod
    def parse_from_json(cls, json_filename: str) -> SfmMetricsGroup:
        return cls.parse_from_dict(io_utils.read_json_file(json_filename))
