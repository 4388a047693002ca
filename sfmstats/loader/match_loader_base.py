"""Base class for the loaders of pairwise matches.

Authors: sfmstats developers
"""

import abc
from typing import List

from sfmstats.common.sfm_data import SfmData
from sfmstats.common.types import PairwiseMatches


class MatchLoaderBase(metaclass=abc.ABCMeta):
    """Provides the matched features between pairs of views."""

    @abc.abstractmethod
    def load_pairwise_matches(self, sfm_data: SfmData, describer_types: List[str]) -> PairwiseMatches:
        """Load the pairwise matches between the views of the reconstruction.

        Args:
            sfm_data: reconstruction whose views (and match folders) are used.
            describer_types: describer types to load.

        Returns:
            Matched feature indices per image pair and describer type.

        Raises:
            MatchLoadError: if the matches could not be loaded.
        """
