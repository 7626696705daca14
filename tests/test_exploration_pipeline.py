import numpy as np
import pytest
from pandera.errors import SchemaErrors

from ames_housing.components.data_ingestion import DataIngestion
from ames_housing.components.data_summary import DataSummary
from ames_housing.components.histogram_plotter import HistogramPlotter
from ames_housing.core.config_definitions import DataIngestionConfig
from ames_housing.core.exceptions import IngestionError, OutcomeSchemaError
from ames_housing.pipeline.exploration_pipeline import ExplorationPipeline


def build_pipeline(
    ingestion_config,
    summary_config,
    histogram_config,
    artifacts_config,
    target_col="Sale_Price",
):
    return ExplorationPipeline(
        target_col=target_col,
        artifacts_config=artifacts_config,
        data_ingestion=DataIngestion(ingestion_config),
        data_summary=DataSummary(summary_config, artifacts_config),
        histogram_plotter=HistogramPlotter(histogram_config, artifacts_config),
    )


def test_run_transforms_once_and_writes_artifacts(
    csv_path, ames_df, summary_config, histogram_config, artifacts_config
):
    pipeline = build_pipeline(
        DataIngestionConfig(type="csv", path=csv_path),
        summary_config,
        histogram_config,
        artifacts_config,
    )

    result = pipeline.run()

    np.testing.assert_allclose(
        result.data["Sale_Price"].to_numpy(), np.log10(ames_df["Sale_Price"].to_numpy())
    )
    assert result.raw_summary.mean == pytest.approx(ames_df["Sale_Price"].mean())
    assert result.log_summary.max == pytest.approx(
        np.log10(ames_df["Sale_Price"].max())
    )
    assert result.group_summary["median"].is_monotonic_decreasing
    assert len(result.artifacts) == 5
    assert all(path.exists() for path in result.artifacts)


def test_missing_source_propagates_ingestion_error(
    tmp_path, summary_config, histogram_config, artifacts_config
):
    pipeline = build_pipeline(
        DataIngestionConfig(type="csv", path=tmp_path / "missing.csv"),
        summary_config,
        histogram_config,
        artifacts_config,
    )

    with pytest.raises(IngestionError):
        pipeline.run()


def test_schema_failure_cases_are_kept(
    tmp_path, ames_df, summary_config, histogram_config, artifacts_config
):
    ames_df.loc[0, "Sale_Price"] = 0
    path = tmp_path / "bad.csv"
    ames_df.to_csv(path, index=False)
    pipeline = build_pipeline(
        DataIngestionConfig(type="csv", path=path),
        summary_config,
        histogram_config,
        artifacts_config,
    )

    with pytest.raises(SchemaErrors):
        pipeline.run()

    assert (artifacts_config.root_dir / "data_validation_failures.csv").exists()


def test_unknown_target_raises_outcome_schema_error(
    csv_path, summary_config, histogram_config, artifacts_config
):
    pipeline = build_pipeline(
        DataIngestionConfig(type="csv", path=csv_path),
        summary_config,
        histogram_config,
        artifacts_config,
        target_col="Price",
    )

    with pytest.raises(OutcomeSchemaError):
        pipeline.run()


def test_infinite_price_fails_at_ingestion(
    tmp_path, ames_df, summary_config, histogram_config, artifacts_config
):
    ames_df.loc[0, "Sale_Price"] = np.inf
    path = tmp_path / "inf.csv"
    ames_df.to_csv(path, index=False)
    pipeline = build_pipeline(
        DataIngestionConfig(type="csv", path=path),
        summary_config,
        histogram_config,
        artifacts_config,
    )

    with pytest.raises(SchemaErrors) as exc_info:
        pipeline.run()

    failures = exc_info.value.failure_cases
    assert "is_finite" in set(failures["check"])
    assert not (artifacts_config.root_dir / "summaries").exists()
    assert not (artifacts_config.root_dir / "figures").exists()
