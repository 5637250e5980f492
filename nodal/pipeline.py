"""Lymph-node involvement versus recurrence analysis.

Compares the distribution of positive lymph nodes between the recurrence and
no-recurrence groups and converts the group densities into a posterior
probability of recurrence.
"""

__authors__ = ["Dominik Dahlem"]
__status__ = "Development"

import json
from pathlib import Path
from typing import Dict

import hydra
import pandas as pd
from logdecorator import log_on_end, log_on_error, log_on_start
from omegaconf import DictConfig

from nodal.analysis import bootstrap, difference, kde, logistic, posterior, summary
from nodal.exceptions import NonConvergenceError
from nodal.utils import config, logging, rand

logger = logging.get_default_logger()

# reference group of the posterior -> reference curve of the difference
_DIFFERENCE_REFERENCE = {"no": "a", "yes": "b"}


def _group_curves(samples: summary.GroupedSamples, adjust: float, cfg: DictConfig):
    curve_no = kde.estimate(
        samples.no_recurrence, adjust, grid_size=cfg.kde.grid_size, cut=cfg.kde.cut
    )
    curve_yes = kde.estimate(
        samples.recurrence, adjust, grid_size=cfg.kde.grid_size, cut=cfg.kde.cut
    )
    return curve_no, curve_yes


@rand.require_seed
def _run_analysis(cfg: DictConfig, frame: pd.DataFrame) -> Dict:
    """Run the analysis on a cleaned in-memory table.

    Args:
        cfg: Configuration
        frame: Table with the count column and the 0/1 label column

    Returns:
        Dict: summary table, curves, bootstrap test and logistic fit
    """
    value_col = cfg.data.value_col
    label_col = cfg.data.label_col
    reference = cfg.reference_group

    results = {"n": len(frame)}

    table = summary.summary_table(frame, value_col, label_col)
    logger.info(f"Summary statistics:\n{table.to_string()}")
    results["summary"] = table.reset_index().to_dict(orient="records")

    samples = summary.split_groups(frame, value_col, label_col)
    results["priors"] = {"no_recurrence": samples.prior_no, "recurrence": samples.prior_yes}

    # Visual comparison of the two groups
    curve_no, curve_yes = _group_curves(samples, cfg.kde.comparison_adjust, cfg)
    results["density"] = {
        "no_recurrence": curve_no,
        "recurrence": curve_yes,
    }

    # recurrence minus no-recurrence
    results["difference"] = difference.difference(
        curve_no, curve_yes, reference=_DIFFERENCE_REFERENCE[reference]
    )

    logger.info(f"Run bootstrap test with {cfg.bootstrap.n_boot} samples")
    test = bootstrap.test_equal(
        samples.no_recurrence,
        samples.recurrence,
        n_boot=cfg.bootstrap.n_boot,
        seed=cfg.seed,
        bandwidth_adjust=cfg.bootstrap.bandwidth_adjust,
        grid_size=cfg.kde.grid_size,
        cut=cfg.kde.cut,
        chunk_size=cfg.bootstrap.chunk_size,
        num_threads=cfg.bootstrap.num_threads,
    )
    results["bootstrap"] = test.to_dict()

    # Classification with smoother densities
    class_no, class_yes = _group_curves(samples, cfg.kde.classification_adjust, cfg)
    post = posterior.posterior(
        class_no, class_yes, samples.prior_no, samples.prior_yes, reference=reference
    )
    results["posterior"] = post

    observations = frame[[value_col, label_col]].to_numpy(dtype=float)
    try:
        model = logistic.fit_logistic(
            observations, max_iter=cfg.logistic.max_iter, tol=cfg.logistic.tol
        )
        results["logistic"] = model.to_dict()
        results["logistic_curve"] = pd.DataFrame(
            {"x": post.x, "probability": model.predict(post.x)}
        )
    except NonConvergenceError as e:
        logger.warning(f"Logistic regression cross-check failed: {e}")
        results["logistic"] = {"error": str(e)}
        if e.params is not None:
            results["logistic"]["partial_params"] = list(e.params)

    return results


def write_results(results: Dict, output_dir: str) -> None:
    """Write the scalar results as JSON and every curve as CSV."""
    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    curves = {
        "density_no_recurrence": results["density"]["no_recurrence"].to_frame(),
        "density_recurrence": results["density"]["recurrence"].to_frame(),
        "difference": results["difference"].to_frame("difference"),
        "posterior": results["posterior"].to_frame(),
    }
    if "logistic_curve" in results:
        curves["logistic"] = results["logistic_curve"]

    for name, df in curves.items():
        path = out_dir / f"{name}.csv"
        df.to_csv(path, index=False)
        logger.debug(f"Saved curve to {path}")

    scalars = {
        k: v
        for k, v in results.items()
        if k in ("n", "summary", "priors", "bootstrap", "logistic")
    }
    with open(out_dir / "analysis_summary.json", "w") as f:
        json.dump(scalars, f, indent=2, cls=logging.NpEncoder)

    logger.info(f"Analysis completed. Results saved to {out_dir}")


@log_on_start(logging.DEBUG, "Starting the recurrence analysis...", logger=logger)
@log_on_error(
    logging.ERROR,
    "Error during the recurrence analysis: {e!r}",
    logger=logger,
    on_exceptions=Exception,
    reraise=True,
)
@log_on_end(logging.DEBUG, "done!", logger=logger)
@hydra.main(version_base=None, config_path="../conf", config_name="analysis.yaml")
def run_analysis(cfg: DictConfig) -> None:
    """Entry point for the recurrence analysis."""
    config.Config()
    frame = hydra.utils.call(cfg.data.load)
    results = _run_analysis(cfg, frame)
    write_results(results, cfg.output_dir)


if __name__ == "__main__":
    run_analysis()
