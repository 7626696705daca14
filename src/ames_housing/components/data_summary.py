"""
Descriptive summary component.

This module computes the statistics used to judge the shape of the outcome
distribution (moments, quantiles, skewness) and the per-neighborhood price
pattern, and persists them as JSON/CSV artifacts.
"""

import json
import logging
from dataclasses import asdict, dataclass
from pathlib import Path

import numpy as np
import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype

from ames_housing.core.config_definitions import ArtifactsConfig, SummaryConfig
from ames_housing.core.exceptions import (
    DataValidationError,
    OutcomeSchemaError,
    ReportingError,
)
from ames_housing.utils.artifact_naming import get_artifact_filename

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class OutcomeSummary:
    """
    Immutable container for the descriptive statistics of one column.

    Attributes:
        column: Name of the summarized column.
        count: Number of non-missing observations.
        mean: Arithmetic mean.
        std: Sample standard deviation (NaN for a single observation).
        min: Smallest observation.
        max: Largest observation.
        quantiles: Mapping of quantile label (e.g. 'p50') to value.
        skewness: Sample skewness (NaN below three observations).
    """

    column: str
    count: int
    mean: float
    std: float
    min: float
    max: float
    quantiles: dict[str, float]
    skewness: float

    def to_dict(self) -> dict:
        return asdict(self)


def _quantile_label(q: float) -> str:
    return f"p{q * 100:g}".replace(".", "_")


def describe_outcome(
    series: pd.Series, percentiles: list[float] | None = None
) -> OutcomeSummary:
    """
    Summarize a numeric column.

    Args:
        series (pd.Series): The values to summarize; missing values are ignored.
        percentiles (list[float] | None): Quantiles to report. Defaults to quartiles.

    Raises:
        OutcomeSchemaError: If the series is not numeric.
        DataValidationError: If the series has no non-missing values.

    Returns:
        OutcomeSummary: The computed statistics.
    """
    if percentiles is None:
        percentiles = [0.25, 0.5, 0.75]

    if is_bool_dtype(series) or not is_numeric_dtype(series):
        raise OutcomeSchemaError(
            f"Cannot summarize non-numeric column '{series.name}' ({series.dtype})."
        )

    clean = series.dropna().astype("float64")
    if clean.empty:
        raise DataValidationError(
            f"Column '{series.name}' has no values to summarize."
        )

    quantiles = clean.quantile(percentiles)
    return OutcomeSummary(
        column=str(series.name),
        count=int(clean.count()),
        mean=float(clean.mean()),
        std=float(clean.std()),
        min=float(clean.min()),
        max=float(clean.max()),
        quantiles={_quantile_label(q): float(v) for q, v in quantiles.items()},
        skewness=float(clean.skew()),
    )


def summarize_by_group(
    df: pd.DataFrame, group_col: str, value_col: str
) -> pd.DataFrame:
    """
    Count, median and mean of a value column per category.

    Groups are ordered from the highest median to the lowest, which puts the
    most expensive neighborhoods first.

    Raises:
        OutcomeSchemaError: If either column is missing.
    """
    missing = {group_col, value_col} - set(df.columns)
    if missing:
        raise OutcomeSchemaError(f"Missing required columns: {sorted(missing)}")

    summary = (
        df.groupby(group_col, observed=True)[value_col]
        .agg(["count", "median", "mean"])
        .sort_values("median", ascending=False)
    )
    summary["count"] = summary["count"].astype(np.int64)
    return summary


class DataSummary:
    """
    Compute and persist descriptive summaries.

    Keeps the summary configuration and artifact locations in one place so the
    raw and the log-scale outcome are summarized the same way.
    """

    def __init__(
        self, summary_config: SummaryConfig, artifacts_config: ArtifactsConfig
    ) -> None:
        """
        Args:
            summary_config (SummaryConfig): Quantiles, grouping column and filename templates.
            artifacts_config (ArtifactsConfig): Where summary files are written.
        """
        self.config = summary_config
        self.artifacts_config = artifacts_config

    @property
    def output_dir(self) -> Path:
        return self.artifacts_config.root_dir / self.artifacts_config.summaries_dir

    def describe(self, df: pd.DataFrame, column: str, stage: str) -> OutcomeSummary:
        """Summarize `column` of `df` and log the headline numbers."""
        if column not in df.columns:
            raise OutcomeSchemaError(f"Column '{column}' not found in dataset.")

        summary = describe_outcome(df[column], self.config.percentiles)
        logger.info(
            "Summary of '%s' (%s): n=%s | mean=%.4f | std=%.4f | skew=%.4f",
            column,
            stage,
            summary.count,
            summary.mean,
            summary.std,
            summary.skewness,
        )
        return summary

    def by_group(self, df: pd.DataFrame, column: str) -> pd.DataFrame:
        summary = summarize_by_group(df, self.config.group_col, column)
        logger.info(
            "Summarized '%s' across %s groups of '%s'.",
            column,
            len(summary),
            self.config.group_col,
        )
        return summary

    def save_summary(self, summary: OutcomeSummary, stage: str) -> Path:
        """
        Persist a summary to a JSON file in the artifacts directory.

        Raises:
            ReportingError: If the file cannot be written.

        Returns:
            Path: The path to the saved JSON file.
        """
        path = self.output_dir / get_artifact_filename(
            self.config.filename, column=summary.column, stage=stage
        )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w") as f:
                json.dump(summary.to_dict(), f, indent=4, sort_keys=True)
        except OSError as e:
            raise ReportingError(f"Failed to write summary to {path}: {e}") from e

        logger.debug("Summary written to %s", path)
        return path

    def save_group_summary(
        self, summary: pd.DataFrame, column: str, stage: str
    ) -> Path:
        """
        Persist a per-group summary to CSV.

        Raises:
            ReportingError: If the file cannot be written.
        """
        path = self.output_dir / get_artifact_filename(
            self.config.group_filename, column=column, stage=stage
        )
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            summary.to_csv(path)
        except OSError as e:
            raise ReportingError(
                f"Failed to write group summary to {path}: {e}"
            ) from e

        logger.debug("Group summary written to %s", path)
        return path
