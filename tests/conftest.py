import sqlite3
from pathlib import Path

import numpy as np
import pandas as pd
import pytest
import yaml

from ames_housing.core.config_definitions import (
    ArtifactsConfig,
    HistogramConfig,
    SummaryConfig,
)


@pytest.fixture
def ames_df() -> pd.DataFrame:
    """Small Ames-shaped frame with a right-skewed sale price."""
    rng = np.random.default_rng(42)
    n_rows = 60
    neighborhoods = ["North_Ames", "College_Creek", "Old_Town", "Stone_Brook"]
    zoning = ["Residential_Low_Density", "Residential_Medium_Density"]
    return pd.DataFrame(
        {
            "Sale_Price": np.round(rng.lognormal(mean=12.0, sigma=0.4, size=n_rows)),
            "Lot_Area": rng.integers(2000, 20000, size=n_rows).astype(float),
            "Neighborhood": [neighborhoods[i % 4] for i in range(n_rows)],
            "MS_Zoning": [zoning[i % 2] for i in range(n_rows)],
            "Longitude": rng.uniform(-93.69, -93.58, size=n_rows),
            "Latitude": rng.uniform(41.98, 42.06, size=n_rows),
            "Year_Built": rng.integers(1880, 2010, size=n_rows),
        }
    )


@pytest.fixture
def csv_path(tmp_path: Path, ames_df: pd.DataFrame) -> Path:
    path = tmp_path / "ames.csv"
    ames_df.to_csv(path, index=False)
    return path


@pytest.fixture
def sqlite_path(tmp_path: Path, ames_df: pd.DataFrame) -> Path:
    path = tmp_path / "ames.db"
    with sqlite3.connect(path) as conn:
        ames_df.to_sql("ames", conn, index=False)
    return path


@pytest.fixture
def artifacts_config(tmp_path: Path) -> ArtifactsConfig:
    return ArtifactsConfig(root_dir=tmp_path / "artifacts")


@pytest.fixture
def summary_config() -> SummaryConfig:
    return SummaryConfig()


@pytest.fixture
def histogram_config() -> HistogramConfig:
    return HistogramConfig(bins=10, figure_width=4.0, figure_height=3.0, dpi=50)


@pytest.fixture
def config_dict(tmp_path: Path, csv_path: Path) -> dict:
    return {
        "globals": {
            "target_col": "Sale_Price",
            "artifacts": {"root_dir": str(tmp_path / "artifacts")},
        },
        "data_ingestion": {"type": "csv", "path": str(csv_path)},
        "summary": {"group_col": "Neighborhood", "percentiles": [0.5, 0.25]},
        "histogram": {"bins": 10, "dpi": 50},
    }


@pytest.fixture
def config_file(tmp_path: Path, config_dict: dict) -> Path:
    path = tmp_path / "config.yaml"
    with open(path, "w") as f:
        yaml.safe_dump(config_dict, f)
    return path
