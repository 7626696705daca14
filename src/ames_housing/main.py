"""
Application Entry Point.

This module is the Command Line Interface (CLI) for the Ames Housing
exploration. It routes user commands (explore, transform) to the components
and the pipeline orchestrator.
"""

import logging
import sys
from pathlib import Path

import click
from pandera.errors import SchemaErrors

from ames_housing.components.data_ingestion import DataIngestion
from ames_housing.components.data_summary import DataSummary
from ames_housing.components.histogram_plotter import HistogramPlotter
from ames_housing.components.outcome_transformer import log10_outcome
from ames_housing.core.config import ConfigurationManager
from ames_housing.core.exceptions import (
    ConfigurationError,
    DataValidationError,
    IngestionError,
    ReportingError,
)
from ames_housing.core.version import __version__
from ames_housing.pipeline.exploration_pipeline import ExplorationPipeline

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    force=True,
)

logging.getLogger("matplotlib").setLevel(logging.WARNING)
logging.getLogger("PIL").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)

KNOWN_ERRORS = (
    IngestionError,
    DataValidationError,
    ReportingError,
    SchemaErrors,
)


def _load_config(ctx: click.Context) -> ConfigurationManager:
    """Build the configuration manager or exit with status 1."""
    try:
        return ConfigurationManager(config_filename=ctx.obj["config"])
    except ConfigurationError as e:
        logger.error("Startup Failed: %s", e, exc_info=ctx.obj["verbose"])
        sys.exit(1)
    except Exception as e:
        logger.critical(
            "CRITICAL: Unexpected System Crash during startup: %s", e, exc_info=True
        )
        sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="ames-housing")
@click.option(
    "--config", default="config.yaml", help="Filename of the configuration file."
)
@click.option("--verbose", is_flag=True, help="Enable debug-level logging.")
@click.pass_context
def cli(ctx, config: str, verbose: bool) -> None:
    """
    Ames Housing exploration CLI.

    Root command group that initializes the application context (logging, config).
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["verbose"] = verbose


# =============================================================================
# EXPLORE COMMAND
# =============================================================================


@cli.command()
@click.pass_context
def explore(ctx) -> None:
    """
    Summarize and plot the outcome before and after the log10 transform.

    Runs Ingest -> Raw Summary -> Transform -> Log Summary and writes the
    summaries and histograms to the artifacts directory.
    """
    config_manager = _load_config(ctx)
    globals_config = config_manager.get_globals_config()
    artifacts_config = config_manager.get_artifacts_config()

    try:
        pipeline = ExplorationPipeline(
            target_col=globals_config.target_col,
            artifacts_config=artifacts_config,
            data_ingestion=DataIngestion(
                config=config_manager.get_data_ingestion_config()
            ),
            data_summary=DataSummary(
                summary_config=config_manager.get_summary_config(),
                artifacts_config=artifacts_config,
            ),
            histogram_plotter=HistogramPlotter(
                config=config_manager.get_histogram_config(),
                artifacts_config=artifacts_config,
            ),
        )
        result = pipeline.run()
    except KNOWN_ERRORS as e:
        logger.error("Exploration failed: %s. See logs above for details.", e)
        sys.exit(1)
    except Exception as e:
        logger.critical("--- Critical Pipeline Crash ---: %s", e, exc_info=True)
        sys.exit(1)

    logger.info(
        "Skewness of '%s': %.3f (raw) -> %.3f (log10)",
        globals_config.target_col,
        result.raw_summary.skewness,
        result.log_summary.skewness,
    )
    logger.info("--- Most expensive groups (log10 median) ---")
    for name, row in result.group_summary.head(5).iterrows():
        logger.info("%s: %.4f (n=%s)", name, row["median"], int(row["count"]))

    for path in result.artifacts:
        logger.info("Artifact: %s", path)


# =============================================================================
# TRANSFORM COMMAND
# =============================================================================


@cli.command()
@click.option(
    "--output",
    "output_path",
    required=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Destination CSV for the dataset with the log10 outcome.",
)
@click.pass_context
def transform(ctx, output_path: Path) -> None:
    """
    Write the dataset with its outcome column on the log10 scale.
    """
    config_manager = _load_config(ctx)
    target_col = config_manager.get_globals_config().target_col

    try:
        df = DataIngestion(config=config_manager.get_data_ingestion_config()).get_data()
        transformed = log10_outcome(df, target_col)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        transformed.to_csv(output_path, index=False)
    except KNOWN_ERRORS as e:
        logger.error("Transform failed: %s", e)
        sys.exit(1)
    except OSError as e:
        logger.error("Could not write %s: %s", output_path, e)
        sys.exit(1)
    except Exception as e:
        logger.critical("--- Critical Transform Crash ---: %s", e, exc_info=True)
        sys.exit(1)

    logger.info(
        "Wrote %s rows with log10 '%s' to %s", len(transformed), target_col, output_path
    )


if __name__ == "__main__":
    cli()
