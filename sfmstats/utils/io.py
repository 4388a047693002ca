"""Functions to provide I/O APIs for all the modules.

Authors: sfmstats developers
"""
import os
from pathlib import Path
from typing import Any, Dict, List, Union

import numpy as np
import simplejson as json
from gtsam import Cal3_S2, Cal3Bundler, Pose3, Rot3

import sfmstats.utils.logger as logger_utils
from sfmstats.common.sfm_data import UNKNOWN_DESCRIBER_TYPE, Landmark, Observation, SfmData, View
from sfmstats.common.types import CALIBRATION_TYPE, PairwiseMatches

logger = logger_utils.get_logger()

# Columns of a feature file: x, y, scale, orientation.
FEATURE_FILE_NUM_COLUMNS = 4


def save_json_file(
    json_fpath: str,
    data: Union[Dict[Any, Any], List[Any]],
) -> None:
    """Save a Python dictionary or list to a JSON file.
    Args:
        json_fpath: Path to file to create.
        data: Python dictionary or list to be serialized.
    """
    os.makedirs(os.path.dirname(os.path.abspath(json_fpath)), exist_ok=True)
    with open(json_fpath, "w") as f:
        # ignore_nan=True replaces any NaN with null so that report viewers can parse it
        json.dump(data, f, indent=4, ignore_nan=True)


def read_json_file(fpath: Union[str, Path]) -> Any:
    """Load dictionary from JSON file.

    Args:
        fpath: Path to JSON file.

    Returns:
        Deserialized Python dictionary or list.
    """
    with open(fpath, "r") as f:
        return json.load(f)


def read_features_txt(fpath: Union[str, Path]) -> np.ndarray:
    """Read a feature file, one feature per line as `x y scale orientation`.

    Args:
        fpath: path to the .feat file.

    Returns:
        Array of shape (N, 4).

    Raises:
        ValueError: if a line does not hold 4 numbers.
    """
    rows: List[List[float]] = []
    with open(fpath, "r") as f:
        for line_idx, line in enumerate(f):
            entries = line.split()
            if len(entries) == 0:
                continue
            if len(entries) != FEATURE_FILE_NUM_COLUMNS:
                raise ValueError(f"Line {line_idx} of {fpath} has {len(entries)} entries, expected 4.")
            rows.append([float(entry) for entry in entries])

    if len(rows) == 0:
        return np.zeros((0, FEATURE_FILE_NUM_COLUMNS), dtype=np.float64)
    return np.array(rows, dtype=np.float64)


def read_matches_txt(fpath: Union[str, Path]) -> PairwiseMatches:
    """Read a text file of pairwise matches.

    The file is a sequence of blocks, one per image pair:
        I J
        number of describer types
        then for each describer type:
            describer_type number_of_matches
            feat_i feat_j  (repeated number_of_matches times)

    Args:
        fpath: path to the .matches file.

    Returns:
        Matched feature indices, as (N, 2) arrays, per image pair and describer type.

    Raises:
        ValueError: if the file is truncated or malformed.
    """
    with open(fpath, "r") as f:
        tokens = f.read().split()

    def next_token(idx: int) -> str:
        if idx >= len(tokens):
            raise ValueError(f"Unexpected end of file in {fpath}.")
        return tokens[idx]

    pairwise_matches: PairwiseMatches = {}
    idx = 0
    while idx < len(tokens):
        i1, i2 = int(next_token(idx)), int(next_token(idx + 1))
        num_desc_types = int(next_token(idx + 2))
        idx += 3
        matches_per_desc_type = pairwise_matches.setdefault((i1, i2), {})
        for _ in range(num_desc_types):
            describer_type = next_token(idx)
            num_matches = int(next_token(idx + 1))
            idx += 2
            flat = [int(next_token(idx + n)) for n in range(2 * num_matches)]
            idx += 2 * num_matches
            k_pairs = np.array(flat, dtype=np.int64).reshape(num_matches, 2)
            if describer_type in matches_per_desc_type:
                k_pairs = np.vstack([matches_per_desc_type[describer_type], k_pairs])
            matches_per_desc_type[describer_type] = k_pairs

    return pairwise_matches


def _calibration_from_sfm_json(intrinsic: Dict[str, Any]) -> CALIBRATION_TYPE:
    """Convert an intrinsic entry of a .sfm file to a gtsam calibration."""
    focal_length = intrinsic["pxFocalLength"]
    if isinstance(focal_length, list):
        fx, fy = float(focal_length[0]), float(focal_length[1])
    else:
        fx = fy = float(focal_length)
    u0, v0 = (float(c) for c in intrinsic["principalPoint"])
    distortion = [float(d) for d in intrinsic.get("distortionParams", [])]

    intrinsic_type = intrinsic["type"]
    if intrinsic_type == "pinhole":
        return Cal3_S2(fx, fy, 0.0, u0, v0)
    if intrinsic_type in ("radial1", "radial3"):
        if fx != fy:
            logger.warning("Intrinsic %s has fx != fy, using fx as the single focal length.", intrinsic["intrinsicId"])
        k1 = distortion[0] if len(distortion) > 0 else 0.0
        k2 = distortion[1] if len(distortion) > 1 else 0.0
        if len(distortion) > 2 and distortion[2] != 0.0:
            logger.warning("Ignoring k3 of intrinsic %s.", intrinsic["intrinsicId"])
        return Cal3Bundler(fx, k1, k2, u0, v0)

    raise ValueError(f"Unsupported intrinsic type: {intrinsic_type}.")


def _pose_from_sfm_json(pose: Dict[str, Any]) -> Pose3:
    """Convert a pose entry of a .sfm file (world-to-camera rotation and camera center) to wTi."""
    transform = pose["pose"]["transform"]
    iRw = np.array([float(r) for r in transform["rotation"]], dtype=np.float64).reshape(3, 3)
    center = np.array([float(c) for c in transform["center"]], dtype=np.float64)
    return Pose3(Rot3(iRw.T), center)


def read_sfm_json(fpath: Union[str, Path]) -> SfmData:
    """Read a reconstruction stored in the .sfm JSON layout.

    Identifiers may be stored as strings or integers. Relative feature and match folders are resolved against the
    directory of the file.

    Args:
        fpath: path to the .sfm file.

    Returns:
        The reconstruction as a SfmData object.
    """
    fpath = Path(fpath)
    if not fpath.exists():
        raise FileNotFoundError(f"{fpath} does not exist.")
    data = read_json_file(fpath)

    def resolve(folder: str) -> str:
        return str(fpath.parent / folder) if not os.path.isabs(folder) else folder

    sfm_data = SfmData(
        features_folders=[resolve(folder) for folder in data.get("featuresFolders", [])],
        matches_folders=[resolve(folder) for folder in data.get("matchesFolders", [])],
    )

    for view in data.get("views", []):
        sfm_data.add_view(
            View(
                view_id=int(view["viewId"]),
                intrinsic_id=int(view["intrinsicId"]),
                pose_id=int(view["poseId"]),
                image_path=view.get("path", ""),
            )
        )
    for intrinsic in data.get("intrinsics", []):
        sfm_data.add_intrinsic(int(intrinsic["intrinsicId"]), _calibration_from_sfm_json(intrinsic))
    for pose in data.get("poses", []):
        sfm_data.add_pose(int(pose["poseId"]), _pose_from_sfm_json(pose))

    for landmark in data.get("structure", []):
        observations: Dict[int, Observation] = {}
        for observation in landmark.get("observations", []):
            observations[int(observation["observationId"])] = Observation(
                uv=np.array([float(x) for x in observation["x"]], dtype=np.float64),
                scale=float(observation.get("scale", 0.0)),
                feature_id=int(observation.get("featureId", -1)),
            )
        sfm_data.add_landmark(
            int(landmark["landmarkId"]),
            Landmark(
                point3=np.array([float(x) for x in landmark["X"]], dtype=np.float64),
                observations=observations,
                describer_type=landmark.get("descType", UNKNOWN_DESCRIBER_TYPE),
            ),
        )

    logger.info("Read %s from %s.", sfm_data, fpath)
    return sfm_data
