"""
Histogram rendering component.

Draws the distribution of the outcome column to a PNG file, once on the
dollar scale and once after the log10 transform, so the reduction in skew
can be checked by eye.
"""

import logging
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from ames_housing.core.config_definitions import (  # noqa: E402
    ArtifactsConfig,
    HistogramConfig,
)
from ames_housing.core.exceptions import (  # noqa: E402
    DataValidationError,
    ReportingError,
)
from ames_housing.utils.artifact_naming import get_artifact_filename  # noqa: E402

logger = logging.getLogger(__name__)

AXIS_LABELS = {
    "raw": "{column} (USD)",
    "log10": "{column} (log10 USD)",
}


class HistogramPlotter:
    """Render histograms of a numeric column into the figures directory."""

    def __init__(
        self, config: HistogramConfig, artifacts_config: ArtifactsConfig
    ) -> None:
        self.config = config
        self.artifacts_config = artifacts_config

    @property
    def output_dir(self) -> Path:
        return self.artifacts_config.root_dir / self.artifacts_config.figures_dir

    def plot(self, series: pd.Series, stage: str) -> Path:
        """
        Draw and save a histogram of `series`.

        Args:
            series (pd.Series): Values to plot; missing values are dropped.
            stage (str): Pipeline stage, used in the title, axis label and filename.

        Raises:
            DataValidationError: If there is nothing to plot.
            ReportingError: If the figure cannot be rendered or written.

        Returns:
            Path: Location of the PNG file.
        """
        column = str(series.name)
        values = series.dropna()
        if values.empty:
            raise DataValidationError(f"Column '{column}' has no values to plot.")

        path = self.output_dir / get_artifact_filename(
            self.config.filename, column=column, stage=stage
        )
        xlabel = AXIS_LABELS.get(stage, "{column}").format(column=column)

        fig, ax = plt.subplots(
            figsize=(self.config.figure_width, self.config.figure_height)
        )
        try:
            ax.hist(
                values,
                bins=self.config.bins,
                color=self.config.color,
                edgecolor="white",
            )
            ax.set_title(f"Distribution of {column} ({stage})")
            ax.set_xlabel(xlabel)
            ax.set_ylabel("Number of houses")

            path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(path, dpi=self.config.dpi, bbox_inches="tight")
        except (OSError, ValueError) as e:
            raise ReportingError(f"Failed to render histogram to {path}: {e}") from e
        finally:
            plt.close(fig)

        logger.info("Histogram of '%s' (%s) saved to %s", column, stage, path)
        return path
