"""Class to hold the views, cameras and landmarks of a sparse 3D reconstruction.

The statistics modules only read from this container; it is populated by the readers (BAL, `.sfm` JSON) or by the
caller directly.

Authors: sfmstats developers
"""

from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Set

import gtsam  # type: ignore
import numpy as np
from gtsam import Pose3

import sfmstats.common.types as sfmstats_types
import sfmstats.utils.logger as logger_utils

logger = logger_utils.get_logger()

UNKNOWN_DESCRIBER_TYPE = "unknown"


class Observation(NamedTuple):
    """2d detection of a landmark in one view."""

    uv: np.ndarray  # 2d measurement
    scale: float = 0.0  # detection scale of the feature
    feature_id: int = -1  # index of the feature in the view's feature file


@dataclass
class Landmark:
    """3d point with its observations, keyed by view id (one observation per view)."""

    point3: np.ndarray
    observations: Dict[int, Observation] = field(default_factory=dict)
    describer_type: str = UNKNOWN_DESCRIBER_TYPE

    def number_observations(self) -> int:
        return len(self.observations)

    def view_ids(self) -> Set[int]:
        return set(self.observations.keys())


@dataclass(frozen=True)
class View:
    """An image of the reconstruction, referencing one intrinsic and one pose."""

    view_id: int
    intrinsic_id: int
    pose_id: int
    image_path: str = ""


class SfmData:
    """Views, intrinsics, poses and landmarks, essentially describing the complete sparse reconstruction.

    Views and landmarks keep their insertion order, which defines the "dataset view order" used by the per-view
    statistics. Poses are camera-to-world (wTi), following the gtsam convention.
    """

    def __init__(
        self,
        features_folders: Optional[List[str]] = None,
        matches_folders: Optional[List[str]] = None,
    ) -> None:
        """Initializes an empty reconstruction.

        Args:
            features_folders: folders holding the per-view feature files.
            matches_folders: folders holding the pairwise match files.
        """
        self._views: Dict[int, View] = {}
        self._intrinsics: Dict[int, sfmstats_types.CALIBRATION_TYPE] = {}
        self._poses: Dict[int, Pose3] = {}
        self._landmarks: Dict[int, Landmark] = {}
        self.features_folders: List[str] = list(features_folders or [])
        self.matches_folders: List[str] = list(matches_folders or [])

    def __repr__(self) -> str:
        return (
            f"SfmData(num_views={len(self._views)}, num_intrinsics={len(self._intrinsics)}, "
            f"num_poses={len(self._poses)}, num_landmarks={len(self._landmarks)})"
        )

    @classmethod
    def from_gtsam_sfm_data(cls, gtsam_sfm_data: gtsam.SfmData) -> "SfmData":
        """Initialize from a gtsam.SfmData instance.

        Every camera becomes a view with its own intrinsic and pose, all indexed by the camera index. Scales are not
        available in gtsam's type and default to 0.

        Args:
            gtsam_sfm_data: camera parameters and point tracks.

        Returns:
            A new SfmData instance.
        """
        sfm_data = cls()
        for i in range(gtsam_sfm_data.numberCameras()):
            camera = gtsam_sfm_data.camera(i)
            sfm_data.add_view(View(view_id=i, intrinsic_id=i, pose_id=i))
            sfm_data.add_intrinsic(i, camera.calibration())
            sfm_data.add_pose(i, camera.pose())

        for j in range(gtsam_sfm_data.numberTracks()):
            track = gtsam_sfm_data.track(j)
            observations: Dict[int, Observation] = {}
            for k in range(track.numberMeasurements()):
                i, uv = track.measurement(k)
                if i in observations:
                    logger.warning("Track %d has more than one measurement in camera %d, keeping the first.", j, i)
                    continue
                observations[i] = Observation(uv=np.asarray(uv, dtype=np.float64), feature_id=k)
            sfm_data.add_landmark(j, Landmark(np.asarray(track.point3(), dtype=np.float64), observations))

        return sfm_data

    @classmethod
    def read_bal(cls, file_path: str) -> "SfmData":
        """Read a "Bundle Adjustment in the Large" (BAL) file.

        See https://grail.cs.washington.edu/projects/bal/ for more details on the format.

        Args:
            file_path: File path of the BAL file.

        Returns:
            The data as a SfmData object.
        """
        return cls.from_gtsam_sfm_data(gtsam.readBal(file_path))

    def add_view(self, view: View) -> None:
        self._views[view.view_id] = view

    def add_intrinsic(self, intrinsic_id: int, calibration: sfmstats_types.CALIBRATION_TYPE) -> None:
        self._intrinsics[intrinsic_id] = calibration

    def add_pose(self, pose_id: int, wTi: Pose3) -> None:
        self._poses[pose_id] = wTi

    def add_landmark(self, landmark_id: int, landmark: Landmark) -> None:
        self._landmarks[landmark_id] = landmark

    def views(self) -> Dict[int, View]:
        """Returns all views, in dataset order."""
        return self._views

    def view_ids(self) -> List[int]:
        return list(self._views.keys())

    def number_views(self) -> int:
        return len(self._views)

    def get_view(self, view_id: int) -> View:
        return self._views[view_id]

    def intrinsics(self) -> Dict[int, sfmstats_types.CALIBRATION_TYPE]:
        return self._intrinsics

    def get_intrinsic(self, view: View) -> sfmstats_types.CALIBRATION_TYPE:
        return self._intrinsics[view.intrinsic_id]

    def poses(self) -> Dict[int, Pose3]:
        return self._poses

    def get_pose(self, view: View) -> Pose3:
        """Returns the camera-to-world pose of the view."""
        return self._poses[view.pose_id]

    def landmarks(self) -> Dict[int, Landmark]:
        return self._landmarks

    def number_landmarks(self) -> int:
        return len(self._landmarks)

    def get_landmark_describer_types(self) -> List[str]:
        """Returns the sorted describer types used by the landmarks."""
        return sorted({landmark.describer_type for landmark in self._landmarks.values()})
