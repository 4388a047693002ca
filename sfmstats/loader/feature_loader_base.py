"""Base class for the loaders of detected features.

Authors: sfmstats developers
"""

import abc
from typing import Dict, List

from sfmstats.common.sfm_data import SfmData


class FeatureLoaderBase(metaclass=abc.ABCMeta):
    """Provides the number of detected features of each view."""

    @abc.abstractmethod
    def load_num_features_per_view(self, sfm_data: SfmData, describer_types: List[str]) -> Dict[int, int]:
        """Load the number of features detected in each view, summed over the describer types.

        Args:
            sfm_data: reconstruction whose views (and feature folders) are used.
            describer_types: describer types to load.

        Returns:
            Number of features per view id, only for the views with loaded features.

        Raises:
            FeatureLoadError: if the features could not be loaded.
        """
