"""View-subset filters used by the statistics.

Two strategies are kept apart on purpose:
1. the per-observation filter keeps individual observations made in one of the selected views (residuals, scales).
2. the per-landmark participation filter keeps a whole landmark, with its full track, as soon as one of its
   observations is made in one of the selected views (track lengths).

An empty (or None) selection accepts everything in both strategies.

Authors: sfmstats developers
"""

from typing import AbstractSet, Optional

from sfmstats.common.sfm_data import Landmark


def observation_in_filter(view_id: int, specific_views: Optional[AbstractSet[int]]) -> bool:
    """Per-observation filter: whether an observation made in `view_id` is selected."""
    if not specific_views:
        return True
    return view_id in specific_views


def landmark_participates(landmark: Landmark, specific_views: Optional[AbstractSet[int]]) -> bool:
    """Per-landmark participation filter: whether at least one observation of the landmark is in a selected view."""
    if not specific_views:
        return True
    return any(view_id in specific_views for view_id in landmark.observations)
