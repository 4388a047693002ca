"""
Module to compute the reprojection residual of a landmark observation.

Authors: sfmstats developers
"""

import numpy as np
from gtsam import Pose3

import sfmstats.utils.logger as logger_utils
from sfmstats.common.types import CALIBRATION_TYPE, get_camera_class_for_calibration

logger = logger_utils.get_logger()


def compute_observation_residual(
    wTi: Pose3, calibration: CALIBRATION_TYPE, point3d: np.ndarray, uv_measured: np.ndarray
) -> np.ndarray:
    """Compute the residual of a 2d measurement against the projection of its 3d point.

    Args:
        wTi: camera-to-world pose of the view.
        calibration: intrinsics of the view.
        point3d: 3d point/landmark.
        uv_measured: observed 2d position (measured in pixels).

    Returns:
        residual (observed - projected), of shape (2,).
    """
    camera_class = get_camera_class_for_calibration(calibration)
    camera = camera_class(wTi, calibration)
    uv_reprojected, success_flag = camera.projectSafe(point3d)
    if not success_flag:
        logger.debug("Point %s projects behind the camera, residual is kept as is.", point3d)

    return np.asarray(uv_measured, dtype=np.float64) - np.asarray(uv_reprojected, dtype=np.float64)
