"""
Outcome transformation component.

Sale prices are strictly positive and right-skewed, so the outcome column is
replaced by its base-10 logarithm before any downstream analysis. On the log
scale predictions cannot go negative, expensive houses no longer dominate
error metrics, and the original dollar scale is recovered with `10 ** x`.

The transform is applied exactly once: log10 of an already logged column is
not the original value.
"""

import logging

import numpy as np
import pandas as pd
from pandas.api.types import is_bool_dtype, is_numeric_dtype
from sklearn.base import BaseEstimator, TransformerMixin

from ames_housing.core.exceptions import OutcomeDomainError, OutcomeSchemaError

logger = logging.getLogger(__name__)

# Number of offending index labels quoted in a domain error message
_MAX_REPORTED_ROWS = 5


def _check_outcome_column(df: pd.DataFrame, column: str) -> pd.Series:
    """
    Verify the column exists and holds numeric values.

    Raises:
        OutcomeSchemaError: If the column is absent, or its dtype is not numeric.
    """
    if column not in df.columns:
        raise OutcomeSchemaError(
            f"Column '{column}' not found in dataset. "
            f"Available columns: {list(df.columns)}"
        )

    values = df[column]
    if isinstance(values, pd.DataFrame):
        raise OutcomeSchemaError(f"Column label '{column}' is not unique.")

    if is_bool_dtype(values) or not is_numeric_dtype(values):
        raise OutcomeSchemaError(
            f"Column '{column}' must be numeric, got dtype '{values.dtype}'."
        )
    return values


def log10_outcome(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """
    Replace a strictly positive outcome column by its base-10 logarithm.

    The result keeps the row count, the index, the column set and the column
    order of the input; every other column is passed through unchanged. The
    input frame is never modified.

    Args:
        df (pd.DataFrame): Dataset holding the outcome column.
        column (str): Name of the outcome column (e.g. 'Sale_Price').

    Raises:
        OutcomeSchemaError: If the column is absent or non-numeric.
        OutcomeDomainError: If any value is zero, negative, missing or infinite.

    Returns:
        pd.DataFrame: A new DataFrame with the column on the log10 scale.
    """
    values = _check_outcome_column(df, column).astype("float64")

    invalid_mask = ~(np.isfinite(values) & (values > 0))
    if invalid_mask.any():
        offending = values.index[invalid_mask].tolist()
        raise OutcomeDomainError(
            f"Column '{column}' must be strictly positive and finite for a log10 "
            f"transform: {len(offending)} invalid value(s) at rows "
            f"{offending[:_MAX_REPORTED_ROWS]}"
            f"{' ...' if len(offending) > _MAX_REPORTED_ROWS else ''}"
        )

    transformed = df.copy()
    transformed[column] = np.log10(values.to_numpy())

    logger.info(
        "Applied log10 transform to '%s' (%s rows, range %.4f to %.4f).",
        column,
        len(transformed),
        transformed[column].min() if len(transformed) else float("nan"),
        transformed[column].max() if len(transformed) else float("nan"),
    )
    return transformed


def restore_outcome(df: pd.DataFrame, column: str) -> pd.DataFrame:
    """
    Map a log10 outcome column back to its original scale.

    Values above roughly 308 overflow float64 and come back as `inf`; missing
    values stay missing. Neither raises: the count of non-finite results is
    logged as a warning so callers can check `np.isfinite` on the output.

    Raises:
        OutcomeSchemaError: If the column is absent or non-numeric.
    """
    values = _check_outcome_column(df, column).astype("float64")

    with np.errstate(over="ignore"):
        restored_values = np.power(10.0, values.to_numpy())

    n_non_finite = int((~np.isfinite(restored_values)).sum())
    if n_non_finite:
        logger.warning(
            "Restoring '%s' produced %s non-finite value(s) (overflow or missing input).",
            column,
            n_non_finite,
        )

    restored = df.copy()
    restored[column] = restored_values
    return restored


class Log10OutcomeTransformer(BaseEstimator, TransformerMixin):
    """
    Scikit-Learn wrapper around `log10_outcome`.

    Stateless: fitting only records the incoming feature names. It lets the
    outcome transform sit in a Scikit-Learn pipeline while the plain functions
    remain the unit doing the work.
    """

    def __init__(self, column: str = "Sale_Price") -> None:
        """
        Args:
            column (str): Name of the outcome column to transform.
        """
        super().__init__()
        self.column = column

    def fit(
        self, X: pd.DataFrame, y: pd.Series | None = None
    ) -> "Log10OutcomeTransformer":
        """Check the outcome column up front and remember the input columns."""
        if not isinstance(X, pd.DataFrame):
            raise TypeError(
                f"Log10OutcomeTransformer received {type(X)} but expects pd.DataFrame."
            )
        _check_outcome_column(X, self.column)
        self.feature_names_in_ = np.asarray(X.columns, dtype=object)
        self.n_features_in_ = len(X.columns)
        return self

    def transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Apply the log10 transform to the configured column."""
        if not isinstance(X, pd.DataFrame):
            raise TypeError(
                f"Log10OutcomeTransformer received {type(X)} but expects pd.DataFrame."
            )
        return log10_outcome(X, self.column)

    def inverse_transform(self, X: pd.DataFrame) -> pd.DataFrame:
        """Recover the original scale of the configured column."""
        return restore_outcome(X, self.column)

    def get_feature_names_out(
        self, input_features: list[str] | None = None
    ) -> list[str]:
        """Return the feature names after transformation (unchanged)."""
        if input_features is not None:
            return list(input_features)

        feature_names = getattr(self, "feature_names_in_", None)
        if feature_names is not None:
            return list(feature_names)
        raise ValueError(
            f"{self.__class__.__name__} cannot determine output feature names. "
            "Ensure the transformer was fitted on a DataFrame."
        )

    def __sklearn_is_fitted__(self) -> bool:
        """Return True since this transformer requires no learning."""
        return True
