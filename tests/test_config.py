import pytest
import yaml
from pydantic import ValidationError

from ames_housing.core.config import ConfigurationManager
from ames_housing.core.config_definitions import (
    DataIngestionConfig,
    HistogramConfig,
    SummaryConfig,
)
from ames_housing.core.exceptions import ConfigurationError


def test_loads_config_from_explicit_path(config_file, csv_path):
    manager = ConfigurationManager(config_filename=str(config_file))

    assert manager.get_globals_config().target_col == "Sale_Price"
    assert manager.get_data_ingestion_config().path == csv_path
    assert manager.get_summary_config().percentiles == [0.25, 0.5]
    assert manager.get_histogram_config().bins == 10
    assert manager.get_artifacts_config().figures_dir == "figures"


def test_config_path_env_var_takes_precedence(config_file, monkeypatch, tmp_path):
    monkeypatch.setenv("CONFIG_PATH", str(config_file))
    monkeypatch.chdir(tmp_path)

    manager = ConfigurationManager(config_filename="does_not_exist.yaml")

    assert manager.get_full_config().data_ingestion.type == "csv"


def test_missing_file_raises_configuration_error(tmp_path, monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    monkeypatch.chdir(tmp_path)

    with pytest.raises(ConfigurationError, match="not found"):
        ConfigurationManager(config_filename="nowhere.yaml")


def test_invalid_yaml_raises_configuration_error(tmp_path, monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    path = tmp_path / "broken.yaml"
    path.write_text("globals: [unclosed")

    with pytest.raises(ConfigurationError, match="invalid YAML"):
        ConfigurationManager(config_filename=str(path))


def test_unknown_key_raises_configuration_error(tmp_path, config_dict, monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    config_dict["globals"]["random_state"] = 42
    path = tmp_path / "extra.yaml"
    path.write_text(yaml.safe_dump(config_dict))

    with pytest.raises(ConfigurationError, match="schema validation"):
        ConfigurationManager(config_filename=str(path))


def test_sqlite_source_requires_table_name(tmp_path):
    with pytest.raises(ValidationError, match="table_name"):
        DataIngestionConfig(type="sqlite", path=tmp_path / "ames.db")


def test_table_name_must_be_sane(tmp_path):
    with pytest.raises(ValidationError, match="invalid characters"):
        DataIngestionConfig(
            type="sqlite", path=tmp_path / "ames.db", table_name="ames; DROP"
        )


def test_unsupported_source_type(tmp_path):
    with pytest.raises(ValidationError):
        DataIngestionConfig(type="parquet", path=tmp_path / "ames.parquet")


@pytest.mark.parametrize("percentiles", [[0.0, 0.5], [0.5, 1.5]])
def test_percentiles_must_be_inside_unit_interval(percentiles):
    with pytest.raises(ValidationError, match="strictly between"):
        SummaryConfig(percentiles=percentiles)


def test_histogram_filename_needs_placeholders():
    with pytest.raises(ValidationError, match="placeholders"):
        HistogramConfig(filename="histogram.png")


def test_histogram_bins_must_be_positive():
    with pytest.raises(ValidationError):
        HistogramConfig(bins=0)


@pytest.mark.parametrize("field", ["filename", "group_filename"])
def test_summary_filenames_need_placeholders(field):
    with pytest.raises(ValidationError, match="placeholders"):
        SummaryConfig(**{field: "summary.json"})


def test_summary_filename_without_stage_is_rejected():
    with pytest.raises(ValidationError, match="stage"):
        SummaryConfig(filename="{column}_summary.json")
