"""
Orchestration module for the outcome exploration pipeline.

This module defines the `ExplorationPipeline` class, which runs the linear
load -> transform -> consume lifecycle of the dataset:
1. Data Ingestion (CSV/SQLite + schema contract)
2. Raw Summary (statistics and histogram of the dollar-scale outcome)
3. Outcome Transform (log10, applied exactly once)
4. Log Summary (statistics, histogram and neighborhood pattern on the log scale)

Failures are logged with the step they occurred in before being re-raised
to the caller.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import pandas as pd
from pandera.errors import SchemaErrors

from ames_housing.components.data_ingestion import DataIngestion
from ames_housing.components.data_summary import DataSummary, OutcomeSummary
from ames_housing.components.histogram_plotter import HistogramPlotter
from ames_housing.components.outcome_transformer import log10_outcome
from ames_housing.core.config_definitions import ArtifactsConfig
from ames_housing.core.exceptions import (
    DataValidationError,
    IngestionError,
    OutcomeDomainError,
    OutcomeSchemaError,
    ReportingError,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplorationResult:
    """
    Immutable record of a completed exploration run.

    Attributes:
        data: The dataset with the outcome column on the log10 scale.
        raw_summary: Statistics of the outcome before the transform.
        log_summary: Statistics of the outcome after the transform.
        group_summary: Per-group count/median/mean of the log outcome.
        artifacts: Every file written during the run.
    """

    data: pd.DataFrame
    raw_summary: OutcomeSummary
    log_summary: OutcomeSummary
    group_summary: pd.DataFrame
    artifacts: list[Path] = field(default_factory=list)


class ExplorationPipeline:
    """
    Coordinates ingestion, transformation and summaries of the outcome.

    Components are injected so each one can be replaced in tests; the
    pipeline itself owns only the ordering and the error reporting.
    """

    def __init__(
        self,
        target_col: str,
        artifacts_config: ArtifactsConfig,
        data_ingestion: DataIngestion,
        data_summary: DataSummary,
        histogram_plotter: HistogramPlotter,
    ) -> None:
        """
        Initialize the pipeline with injected dependencies.

        Args:
            target_col (str): The outcome column to transform (e.g. 'Sale_Price').
            artifacts_config (ArtifactsConfig): Root of all written artifacts.
            data_ingestion (DataIngestion): Loads and validates the dataset.
            data_summary (DataSummary): Computes and saves descriptive summaries.
            histogram_plotter (HistogramPlotter): Renders distribution figures.
        """
        self.target_col = target_col
        self.artifacts_config = artifacts_config
        self.ingestion = data_ingestion
        self.summary = data_summary
        self.plotter = histogram_plotter

    def run(self) -> ExplorationResult:
        """
        Execute the exploration workflow.

        Raises:
            IngestionError: If the data source cannot be accessed.
            SchemaErrors: If the input data violates the Pandera schema.
            OutcomeSchemaError: If the outcome column is missing or non-numeric.
            OutcomeDomainError: If the outcome holds non-positive values.
            DataValidationError: If the data is empty or cannot be summarized.
            ReportingError: If an artifact cannot be written.

        Returns:
            ExplorationResult: The transformed data, summaries and artifact paths.
        """
        logger.info("--- Starting exploration of outcome '%s' ---", self.target_col)
        current_step = "initialization"
        artifacts: list[Path] = []

        try:
            # STEP 1: Data Ingestion
            current_step = "data_ingestion"
            logger.info("Step 1: Data Ingestion")
            raw_df = self.ingestion.get_data()

            # STEP 2: Raw Summary
            current_step = "raw_summary"
            logger.info("Step 2: Summary of the untransformed outcome")
            raw_summary = self.summary.describe(raw_df, self.target_col, stage="raw")
            artifacts.append(self.summary.save_summary(raw_summary, stage="raw"))
            artifacts.append(self.plotter.plot(raw_df[self.target_col], stage="raw"))

            # STEP 3: Outcome Transform
            current_step = "outcome_transform"
            logger.info("Step 3: Log10 transform of '%s'", self.target_col)
            log_df = log10_outcome(raw_df, self.target_col)

            # STEP 4: Log Summary
            current_step = "log_summary"
            logger.info("Step 4: Summary of the log10 outcome")
            log_summary = self.summary.describe(log_df, self.target_col, stage="log10")
            artifacts.append(self.summary.save_summary(log_summary, stage="log10"))
            artifacts.append(
                self.plotter.plot(log_df[self.target_col], stage="log10")
            )

            group_summary = self.summary.by_group(log_df, self.target_col)
            artifacts.append(
                self.summary.save_group_summary(
                    group_summary, column=self.target_col, stage="log10"
                )
            )

        # --- Centralized Error Handling ---

        # 1. Infrastructure Failures (file missing, table missing)
        except IngestionError as e:
            self._handle_ingestion_error(e, current_step)
            raise

        # 2a. Data Structure Failures (Pandera: wrong types, unknown labels)
        except SchemaErrors as e:
            self._handle_data_quality_error(e, current_step)
            raise

        # 2b. Outcome Failures (missing column, non-positive prices)
        except (OutcomeSchemaError, OutcomeDomainError) as e:
            self._handle_outcome_error(e, current_step)
            raise

        # 2c. Other data problems (empty tables, nothing to summarize)
        except DataValidationError as e:
            self._handle_statistical_error(e, current_step)
            raise

        # 3. Artifact Failures (permissions, disk, bad figure settings)
        except ReportingError as e:
            self._handle_reporting_error(e, current_step)
            raise

        logger.info(
            "--- Exploration complete: %s rows, %s artifacts written ---",
            len(log_df),
            len(artifacts),
        )
        return ExplorationResult(
            data=log_df,
            raw_summary=raw_summary,
            log_summary=log_summary,
            group_summary=group_summary,
            artifacts=artifacts,
        )

    # --- Specialized Error Handlers ---

    def _handle_ingestion_error(self, e: IngestionError, step: str) -> None:
        is_debug = logger.isEnabledFor(level=logging.DEBUG)
        logger.error(
            "Infrastructure failure at step '%s': %s", step, e, exc_info=is_debug
        )

    def _handle_data_quality_error(self, e: SchemaErrors, step: str) -> None:
        """
        Log a Pandera failure and keep its failure cases next to the artifacts.

        Writing the failure cases is best-effort; the original error is what
        the caller receives.
        """
        is_debug = logger.isEnabledFor(level=logging.DEBUG)
        logger.error(
            "Data Quality check failed at step '%s': %s", step, e, exc_info=is_debug
        )

        violations_path = self.artifacts_config.root_dir / "data_validation_failures.csv"
        try:
            violations_path.parent.mkdir(parents=True, exist_ok=True)
            e.failure_cases.to_csv(violations_path, index=False)
            logger.info("Schema failure cases written to %s", violations_path)
        except OSError as write_error:
            logger.warning(
                "Could not write failure cases to %s: %s", violations_path, write_error
            )

    def _handle_outcome_error(self, e: DataValidationError, step: str) -> None:
        is_debug = logger.isEnabledFor(level=logging.DEBUG)
        logger.error(
            "Outcome column '%s' rejected at step '%s': %s",
            self.target_col,
            step,
            e,
            exc_info=is_debug,
        )

    def _handle_statistical_error(self, e: DataValidationError, step: str) -> None:
        is_debug = logger.isEnabledFor(level=logging.DEBUG)
        logger.error(
            "Data Validation failed at step '%s': %s", step, e, exc_info=is_debug
        )

    def _handle_reporting_error(self, e: ReportingError, step: str) -> None:
        is_debug = logger.isEnabledFor(level=logging.DEBUG)
        logger.error(
            "Artifact could not be written at step '%s': %s. "
            "ACTION: Check permissions and free space under '%s'.",
            step,
            e,
            self.artifacts_config.root_dir,
            exc_info=is_debug,
        )
