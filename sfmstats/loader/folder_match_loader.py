"""Loads pairwise matches from the `*.matches` text files of match folders.

Authors: sfmstats developers
"""

from pathlib import Path
from typing import List, Optional

import numpy as np

import sfmstats.utils.io as io_utils
import sfmstats.utils.logger as logger_utils
from sfmstats.common.sfm_data import SfmData
from sfmstats.common.types import PairwiseMatches
from sfmstats.loader.errors import MatchLoadError
from sfmstats.loader.match_loader_base import MatchLoaderBase

logger = logger_utils.get_logger()

MATCHES_FILE_PATTERN = "*.matches"


class FolderMatchLoader(MatchLoaderBase):
    """Match loader reading every match file of the reconstruction's match folders.

    Matches of image pairs with a view outside the reconstruction, and of unrequested describer types, are dropped.
    """

    def __init__(self, extra_folders: Optional[List[str]] = None) -> None:
        """
        Args:
            extra_folders: folders read after the ones declared by the reconstruction.
        """
        self._extra_folders = list(extra_folders or [])

    def load_pairwise_matches(self, sfm_data: SfmData, describer_types: List[str]) -> PairwiseMatches:
        folders = [Path(folder) for folder in sfm_data.matches_folders + self._extra_folders]
        if len(folders) == 0:
            raise MatchLoadError("No match folder to load from.")
        missing_folders = [str(folder) for folder in folders if not folder.is_dir()]
        if len(missing_folders) > 0:
            raise MatchLoadError(f"Match folders do not exist: {missing_folders}.")

        match_files = sorted(fpath for folder in folders for fpath in folder.glob(MATCHES_FILE_PATTERN))
        if len(match_files) == 0:
            raise MatchLoadError(f"No match file found in {[str(folder) for folder in folders]}.")

        view_ids = set(sfm_data.view_ids())
        pairwise_matches: PairwiseMatches = {}
        for fpath in match_files:
            try:
                file_matches = io_utils.read_matches_txt(fpath)
            except (OSError, ValueError) as e:
                raise MatchLoadError(f"Invalid match file {fpath}.") from e

            for (i1, i2), matches_per_desc_type in file_matches.items():
                if i1 not in view_ids or i2 not in view_ids:
                    continue
                for describer_type, k_pairs in matches_per_desc_type.items():
                    if describer_type not in describer_types:
                        continue
                    pair_matches = pairwise_matches.setdefault((i1, i2), {})
                    if describer_type in pair_matches:
                        k_pairs = np.vstack([pair_matches[describer_type], k_pairs])
                    pair_matches[describer_type] = k_pairs

        logger.info("Loaded matches of %d image pairs from %d files.", len(pairwise_matches), len(match_files))
        return pairwise_matches
