"""
Data ingestion component for the Ames Housing pipeline.

This module provides the DataIngestion class, which is responsible for
reading the reference dataset from the configured local source (CSV file or
SQLite table) and enforcing the dataset contract via Pandera schemas.
"""

import logging
import sqlite3
from pathlib import Path

import pandas as pd

from ames_housing.core.config_definitions import DataIngestionConfig
from ames_housing.core.data_definitions import AmesSchema
from ames_housing.core.exceptions import DataValidationError, IngestionError

logger = logging.getLogger(__name__)


class DataIngestion:
    """
    Handle the extraction and initial validation of the housing data.

    This component is the 'Inlet' of the pipeline. The dataset is loaded
    once, checked for emptiness and validated against the schema; it is
    treated as read-only by everything downstream.
    """

    def __init__(self, config: DataIngestionConfig) -> None:
        """
        Initialize the DataIngestion component.

        Args:
            config (DataIngestionConfig): Validated configuration block
                containing the source 'type', 'path' and optional 'table_name'.
        """
        self.config = config

    def get_data(self) -> pd.DataFrame:
        """
        Orchestrate the loading and validation of housing data.

        Raises:
            IngestionError: If the underlying file or database fails, or if the
                source type is unsupported.
            DataValidationError: If the dataset is empty.
            SchemaErrors: If the dataset violates the Pandera contract.

        Returns:
            pd.DataFrame: The schema-validated housing dataset.
        """
        # ---------------------------------------------------------
        # 1. MECHANISM: Try to load the raw rows
        # ---------------------------------------------------------
        try:
            if self.config.type == "csv":
                df = self._load_from_csv(self.config.path)
            elif self.config.type == "sqlite":
                df = self._load_from_sqlite(
                    db_path=self.config.path,
                    table_name=str(self.config.table_name),
                )
            else:
                raise ValueError(f"Unsupported data source type: {self.config.type}")
        except (
            FileNotFoundError,
            sqlite3.Error,
            pd.errors.ParserError,
            ValueError,
        ) as e:
            raise IngestionError(
                f"Failed to load data from source '{self.config.type}': {e}"
            ) from e

        # ---------------------------------------------------------
        # 2. POLICY: Check if the data is usable at all
        # ---------------------------------------------------------
        if df.empty:
            raise DataValidationError(
                f"Data Quality Violation: Source '{self.config.path}' contains no rows."
            )

        # ---------------------------------------------------------
        # 3. VALIDATION: Check Schema
        # ---------------------------------------------------------
        logger.info("Validating schema for %s rows...", len(df))
        df = AmesSchema.validate(df, lazy=True)
        logger.info("Schema validation passed.")
        return df

    def _load_from_csv(self, csv_path: Path) -> pd.DataFrame:
        """
        Read a delimited text export of the dataset.

        Raises:
            FileNotFoundError: If the file does not exist at the provided path.
        """
        if not csv_path.is_file():
            raise FileNotFoundError(f"CSV file not found at path: {csv_path}")

        try:
            return pd.read_csv(csv_path)
        except pd.errors.EmptyDataError:
            logger.warning("CSV file %s has no content.", csv_path)
            return pd.DataFrame()

    def _load_from_sqlite(self, db_path: Path, table_name: str) -> pd.DataFrame:
        """
        Execute low-level SQLite extraction logic.

        Connects to the database file, verifies table existence via the
        master schema, and performs a full table read into memory.

        Args:
            db_path (Path): The filesystem path to the .db file.
            table_name (str): The specific SQL table to query.

        Raises:
            FileNotFoundError: If the database file does not exist at the provided path.
            ValueError: If the requested table name is missing from the database.

        Returns:
            pd.DataFrame: All rows from the table.
        """
        if not db_path.is_file():
            raise FileNotFoundError(f"Database file not found at path: {db_path}")

        with sqlite3.connect(db_path) as conn:
            cursor = conn.cursor()

            cursor.execute(
                "SELECT name FROM sqlite_master WHERE type='table' AND name=?",
                (table_name,),
            )

            if cursor.fetchone() is None:
                raise ValueError(
                    f"Table '{table_name}' not found in database: {db_path}"
                )

            return pd.read_sql_query(f"SELECT * FROM [{table_name}]", conn)
