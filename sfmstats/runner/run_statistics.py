"""Runner computing the quality-control statistics of a reconstruction and saving them as JSON.

Example:
    python sfmstats/runner/run_statistics.py --sfm_path cameras.sfm --output_dir results

Authors: sfmstats developers
"""

import argparse
import logging
from pathlib import Path
from typing import List, Optional

import hydra
from hydra.utils import instantiate
from omegaconf import OmegaConf

import sfmstats.utils.io as io_utils
import sfmstats.utils.logger as logger_utils
from sfmstats.common.sfm_data import SfmData
from sfmstats.evaluation.metrics import SfmMetricsGroup
from sfmstats.reconstruction_statistics import ReconstructionStatistics

logger = logger_utils.get_logger()

OUTPUT_FILENAME = "reconstruction_statistics.json"
BAL_SUFFIXES = (".txt", ".bal")


def construct_argparser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Quality-control statistics of a sparse reconstruction.")
    parser.add_argument("--sfm_path", type=str, required=True, help="Path to the reconstruction (.sfm JSON or BAL).")
    parser.add_argument(
        "--input_format",
        type=str,
        choices=["sfm", "bal"],
        default=None,
        help="Format of the reconstruction. Inferred from the file suffix if not provided.",
    )
    parser.add_argument(
        "--config_name",
        type=str,
        default="default_statistics.yaml",
        help="Config to use, from sfmstats/configs. Options include `default_statistics.yaml` and"
        " `geometry_only.yaml`.",
    )
    parser.add_argument("--output_dir", type=str, default="results", help="Directory to save the statistics to.")
    parser.add_argument(
        "--features_folder", type=str, action="append", default=[], help="Extra folder to load features from."
    )
    parser.add_argument(
        "--matches_folder", type=str, action="append", default=[], help="Extra folder to load matches from."
    )
    parser.add_argument(
        "--skip_feat_match", action="store_true", help="Skip the feature and match statistics (no loading)."
    )
    parser.add_argument("--log", type=str, default="info", help="Log level, e.g. `debug` or `warning`.")
    return parser


def load_sfm_data(sfm_path: str, input_format: Optional[str] = None) -> SfmData:
    """Reads the reconstruction, in the given format or in the one matching the file suffix."""
    if input_format is None:
        input_format = "bal" if Path(sfm_path).suffix in BAL_SUFFIXES else "sfm"
    if input_format == "bal":
        return SfmData.read_bal(sfm_path)
    return io_utils.read_sfm_json(sfm_path)


def has_feat_match_folders(sfm_data: SfmData) -> bool:
    """Whether the reconstruction declares both feature and match folders, which BAL input never does."""
    return len(sfm_data.features_folders) > 0 and len(sfm_data.matches_folders) > 0


def construct_statistics(config_name: str, skip_feat_match: bool) -> ReconstructionStatistics:
    """Instantiates the statistics driver from its hydra config. All configs are relative to the sfmstats module."""
    overrides: List[str] = []
    if skip_feat_match:
        overrides += ["ReconstructionStatistics.feature_loader=null", "ReconstructionStatistics.match_loader=null"]

    with hydra.initialize_config_module(config_module="sfmstats.configs", version_base=None):
        main_cfg = hydra.compose(config_name=config_name, overrides=overrides)
        logger.info("\n\nReconstructionStatistics config: " + OmegaConf.to_yaml(main_cfg))
        return instantiate(main_cfg.ReconstructionStatistics)


def run_statistics(override_args: Optional[List[str]] = None) -> SfmMetricsGroup:
    args = construct_argparser().parse_args(args=override_args)

    log_level = getattr(logging, args.log.upper(), None)
    if log_level is not None:
        logger.setLevel(log_level)

    sfm_data = load_sfm_data(args.sfm_path, args.input_format)
    sfm_data.features_folders.extend(args.features_folder)
    sfm_data.matches_folders.extend(args.matches_folder)

    skip_feat_match = args.skip_feat_match
    if not skip_feat_match and not has_feat_match_folders(sfm_data):
        logger.info("No feature or match folder for %s, skipping the feature and match statistics.", args.sfm_path)
        skip_feat_match = True

    statistics = construct_statistics(args.config_name, skip_feat_match)
    metrics = statistics.run(sfm_data)

    output_fpath = Path(args.output_dir) / OUTPUT_FILENAME
    metrics.save_to_json(str(output_fpath))
    logger.info("Saved reconstruction statistics to %s.", output_fpath)
    return metrics


if __name__ == "__main__":
    run_statistics()
