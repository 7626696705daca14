"""
Pydantic model definitions for the pipeline configuration.

This module provides strict type-validation and 'fail-fast' checks for the
YAML configuration, so a bad path or an impossible histogram setting is caught
before any data is read.
"""

import re
from pathlib import Path
from typing import Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
    model_validator,
)

ARTIFACT_PLACEHOLDERS = ("{column}", "{stage}")


def _require_artifact_placeholders(template: str, artifact: str) -> str:
    """
    Reject filename templates that would map two stages to one file.

    Raises:
        ValueError: If `{column}` or `{stage}` is missing from the template.
    """
    missing = [p for p in ARTIFACT_PLACEHOLDERS if p not in template]
    if missing:
        raise ValueError(f"{artifact} filename must contain placeholders: {missing}")
    return template


# =============================================================================
# 1. CONSTANTS & SHARED LEAVES (Foundations)
# =============================================================================


class ArtifactsConfig(BaseModel):
    """Configuration for storing pipeline artifacts."""

    model_config = ConfigDict(extra="forbid")

    root_dir: Path = Field(description="Root directory for all pipeline artifacts.")
    summaries_dir: str = Field(
        default="summaries", description="Subdirectory for descriptive summaries."
    )
    figures_dir: str = Field(
        default="figures", description="Subdirectory for rendered figures."
    )


# =============================================================================
# 2. DOMAIN CONFIGURATIONS (Trunks)
# =============================================================================


class GlobalsConfig(BaseModel):
    """Global configuration settings applicable to the entire pipeline."""

    model_config = ConfigDict(extra="forbid")

    target_col: str = Field(
        default="Sale_Price",
        description="The outcome column that is log-transformed before analysis.",
    )
    artifacts: ArtifactsConfig


class DataIngestionConfig(BaseModel):
    """Configuration for the data source from which to ingest data."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["csv", "sqlite"]
    path: Path
    table_name: None | str = None

    @field_validator("table_name")
    def table_name_must_be_sane(cls, v: str | None) -> str | None:
        """
        Ensure the SQL table name contains only safe, alphanumeric characters.

        Raises:
            ValueError: If the table name contains spaces, special
                characters, or potential SQL injection patterns.
        """
        if v is not None and not re.match(r"^[a-zA-Z0-9_]+$", v):
            raise ValueError("table_name contains invalid characters")
        return v

    @model_validator(mode="after")
    def check_table_for_sqlite(self) -> "DataIngestionConfig":
        """
        Verify that a table is named whenever the source is a database.

        Raises:
            ValueError: If `type` is 'sqlite' and `table_name` is missing.
        """
        if self.type == "sqlite" and self.table_name is None:
            raise ValueError("`table_name` must be provided for 'sqlite' sources.")
        return self


class SummaryConfig(BaseModel):
    """Configuration for the descriptive summaries of the outcome column."""

    model_config = ConfigDict(extra="forbid")

    group_col: str = Field(
        default="Neighborhood",
        description="Categorical column used for the per-group price summary.",
    )
    percentiles: list[float] = Field(
        default_factory=lambda: [0.25, 0.5, 0.75],
        description="Quantiles reported alongside the moments.",
    )
    filename: str = Field(default="{stage}_{column}_summary.json")
    group_filename: str = Field(default="{stage}_{column}_by_group.csv")

    @field_validator("filename", "group_filename")
    def check_filename_placeholders(cls, v: str) -> str:
        """
        Ensure the raw and log10 summaries are written to separate files.

        Raises:
            ValueError: If either placeholder is missing from the template.
        """
        return _require_artifact_placeholders(v, "Summary")

    @field_validator("percentiles")
    def check_percentiles_in_unit_interval(cls, v: list[float]) -> list[float]:
        """
        Raises:
            ValueError: If any requested quantile falls outside the open interval (0, 1).
        """
        invalid = [p for p in v if not 0 < p < 1]
        if invalid:
            raise ValueError(f"Percentiles must lie strictly between 0 and 1: {invalid}")
        return sorted(set(v))


class HistogramConfig(BaseModel):
    """Configuration for the outcome distribution figures."""

    model_config = ConfigDict(extra="forbid")

    bins: int = Field(default=50, gt=0)
    figure_width: float = Field(default=8.0, gt=0)
    figure_height: float = Field(default=5.0, gt=0)
    dpi: int = Field(default=100, gt=0)
    color: str = Field(default="#4c72b0")
    filename: str = Field(default="{stage}_{column}_histogram.png")

    @field_validator("filename")
    def check_filename_placeholders(cls, v: str) -> str:
        """
        Ensure each figure gets a unique file per column and stage.

        Raises:
            ValueError: If either placeholder is missing from the template.
        """
        return _require_artifact_placeholders(v, "Histogram")


# =============================================================================
# 3. THE ROOT SCHEMA
# =============================================================================
class ConfigSchema(BaseModel):
    """The root configuration schema for the exploration pipeline."""

    model_config = ConfigDict(extra="forbid")

    globals: GlobalsConfig
    data_ingestion: DataIngestionConfig
    summary: SummaryConfig = Field(default_factory=SummaryConfig)
    histogram: HistogramConfig = Field(default_factory=HistogramConfig)
