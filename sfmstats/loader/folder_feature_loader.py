"""Loads the number of detected features of each view from feature folders.

A view's features of one describer type are stored in `<view_id>.<describer_type>.feat`, in the first feature folder
holding such a file.

Authors: sfmstats developers
"""

from pathlib import Path
from typing import Dict, List, Optional

import sfmstats.utils.io as io_utils
import sfmstats.utils.logger as logger_utils
from sfmstats.common.sfm_data import SfmData
from sfmstats.loader.errors import FeatureLoadError
from sfmstats.loader.feature_loader_base import FeatureLoaderBase

logger = logger_utils.get_logger()


class FolderFeatureLoader(FeatureLoaderBase):
    """Feature loader reading text feature files from the reconstruction's feature folders."""

    def __init__(self, extra_folders: Optional[List[str]] = None) -> None:
        """
        Args:
            extra_folders: folders searched after the ones declared by the reconstruction.
        """
        self._extra_folders = list(extra_folders or [])

    def _find_feature_file(self, folders: List[Path], view_id: int, describer_type: str) -> Optional[Path]:
        for folder in folders:
            fpath = folder / f"{view_id}.{describer_type}.feat"
            if fpath.exists():
                return fpath
        return None

    def load_num_features_per_view(self, sfm_data: SfmData, describer_types: List[str]) -> Dict[int, int]:
        folders = [Path(folder) for folder in sfm_data.features_folders + self._extra_folders]
        if len(folders) == 0:
            raise FeatureLoadError("No feature folder to load from.")
        missing_folders = [str(folder) for folder in folders if not folder.is_dir()]
        if len(missing_folders) > 0:
            raise FeatureLoadError(f"Feature folders do not exist: {missing_folders}.")

        num_features_per_view: Dict[int, int] = {}
        for view_id in sfm_data.view_ids():
            for describer_type in describer_types:
                fpath = self._find_feature_file(folders, view_id, describer_type)
                if fpath is None:
                    logger.debug("No %s features for view %d.", describer_type, view_id)
                    continue
                try:
                    features = io_utils.read_features_txt(fpath)
                except (OSError, ValueError) as e:
                    raise FeatureLoadError(f"Invalid feature file {fpath}.") from e
                num_features_per_view[view_id] = num_features_per_view.get(view_id, 0) + features.shape[0]

        if len(num_features_per_view) == 0 and sfm_data.number_views() > 0:
            raise FeatureLoadError(f"No feature file found for describer types {describer_types} in {folders}.")

        logger.info("Loaded features of %d / %d views.", len(num_features_per_view), sfm_data.number_views())
        return num_features_per_view
