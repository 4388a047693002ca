"""Common definitions and helper functions for calibration and camera types

Authors: sfmstats developers
"""

from typing import Dict, Tuple, Union

import gtsam  # type: ignore
import numpy as np

CALIBRATION_TYPE = Union[gtsam.Cal3Bundler, gtsam.Cal3_S2, gtsam.Cal3DS2, gtsam.Cal3Fisheye]
CAMERA_TYPE = Union[
    gtsam.PinholeCameraCal3Bundler,
    gtsam.PinholeCameraCal3_S2,
    gtsam.PinholeCameraCal3DS2,
    gtsam.PinholeCameraCal3Fisheye,
]

# Matched feature indices per describer type, for one image pair.
# Each array is (N, 2), every row being (feature_idx in view i, feature_idx in view j).
MatchesPerDescType = Dict[str, np.ndarray]
PairwiseMatches = Dict[Tuple[int, int], MatchesPerDescType]


def get_camera_class_for_calibration(calibration: CALIBRATION_TYPE) -> CAMERA_TYPE:
    """Get the camera class corresponding to the calibration.

    Args:
        calibration: the calibration object for which the camera class is required.

    Returns:
        Camera class needed for the calibration object.
    """
    if isinstance(calibration, gtsam.Cal3Bundler):
        return gtsam.PinholeCameraCal3Bundler
    if isinstance(calibration, gtsam.Cal3_S2):
        return gtsam.PinholeCameraCal3_S2
    if isinstance(calibration, gtsam.Cal3DS2):
        return gtsam.PinholeCameraCal3DS2
    if isinstance(calibration, gtsam.Cal3Fisheye):
        return gtsam.PinholeCameraCal3Fisheye
    else:  # If the calibration type is not recognized, raise an error.
        raise ValueError(f"Unsupported calibration type: {type(calibration)}. Supported types are {CALIBRATION_TYPE}.")
