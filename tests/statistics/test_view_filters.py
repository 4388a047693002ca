"""Unit tests for the view-subset filters.

Authors: sfmstats developers
"""

import unittest

import numpy as np

from sfmstats.common.sfm_data import Landmark, Observation
from sfmstats.statistics.view_filters import landmark_participates, observation_in_filter

LANDMARK = Landmark(np.zeros(3), {1: Observation(np.zeros(2)), 2: Observation(np.zeros(2))})


class TestViewFilters(unittest.TestCase):
    def test_empty_filter_accepts_everything(self) -> None:
        for specific_views in [None, set()]:
            self.assertTrue(observation_in_filter(7, specific_views))
            self.assertTrue(landmark_participates(LANDMARK, specific_views))

    def test_observation_in_filter(self) -> None:
        self.assertTrue(observation_in_filter(1, {1, 3}))
        self.assertFalse(observation_in_filter(2, {1, 3}))

    def test_landmark_participates(self) -> None:
        """One selected observation is enough for the whole landmark to be selected."""
        self.assertTrue(landmark_participates(LANDMARK, {2, 5}))
        self.assertFalse(landmark_participates(LANDMARK, {3}))


if __name__ == "__main__":
    unittest.main()
