import numpy as np
import pandas as pd
import yaml
from click.testing import CliRunner

from ames_housing.main import cli


def test_explore_writes_artifacts(config_file, tmp_path):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "explore"])

    assert result.exit_code == 0, result.output
    figures = tmp_path / "artifacts" / "figures"
    assert (figures / "raw_Sale_Price_histogram.png").exists()
    assert (figures / "log10_Sale_Price_histogram.png").exists()
    summaries = tmp_path / "artifacts" / "summaries"
    assert (summaries / "log10_Sale_Price_by_group.csv").exists()


def test_transform_writes_log_outcome(config_file, tmp_path, ames_df):
    output = tmp_path / "out" / "ames_log.csv"

    result = CliRunner().invoke(
        cli, ["--config", str(config_file), "transform", "--output", str(output)]
    )

    assert result.exit_code == 0, result.output
    written = pd.read_csv(output)
    assert list(written.columns) == list(ames_df.columns)
    np.testing.assert_allclose(written["Sale_Price"], np.log10(ames_df["Sale_Price"]))


def test_transform_rejects_non_positive_prices(tmp_path, config_dict, ames_df):
    ames_df.loc[2, "Sale_Price"] = -5
    bad_csv = tmp_path / "bad.csv"
    ames_df.to_csv(bad_csv, index=False)
    config_dict["data_ingestion"]["path"] = str(bad_csv)
    config_path = tmp_path / "bad_config.yaml"
    config_path.write_text(yaml.safe_dump(config_dict))
    output = tmp_path / "never.csv"

    result = CliRunner().invoke(
        cli, ["--config", str(config_path), "transform", "--output", str(output)]
    )

    assert result.exit_code == 1
    assert not output.exists()


def test_missing_config_exits_with_error(tmp_path, monkeypatch):
    monkeypatch.delenv("CONFIG_PATH", raising=False)
    monkeypatch.chdir(tmp_path)

    result = CliRunner().invoke(cli, ["--config", "nowhere.yaml", "explore"])

    assert result.exit_code == 1


def test_transform_requires_output(config_file):
    result = CliRunner().invoke(cli, ["--config", str(config_file), "transform"])

    assert result.exit_code == 2


def test_transform_unexpected_error_exits_cleanly(config_file, tmp_path, monkeypatch):
    def crash(df, column):
        raise RuntimeError("boom")

    monkeypatch.setattr("ames_housing.main.log10_outcome", crash)

    result = CliRunner().invoke(
        cli,
        ["--config", str(config_file), "transform", "--output", str(tmp_path / "o.csv")],
    )

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
