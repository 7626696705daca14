"""
Artifact naming utilities.

This module provides a single source of truth for turning the filename
templates from the configuration into concrete artifact names, so summaries
and figures for the raw and log-scale outcome never overwrite each other.
"""

import re


def get_artifact_filename(template: str, column: str, stage: str) -> str:
    """
    Fill a filename template with a column name and a pipeline stage.

    Args:
        template (str): Template that may contain '{column}' and '{stage}'.
        column (str): The column the artifact describes (e.g. 'Sale_Price').
        stage (str): The pipeline stage (e.g. 'raw', 'log10').

    Returns:
        str: The filename with both placeholders replaced, e.g.
            'raw_Sale_Price_histogram.png'.
    """
    safe_column = re.sub(r"[^a-zA-Z0-9_]", "_", column)
    safe_stage = re.sub(r"[^a-zA-Z0-9_]", "_", stage)
    return template.replace("{column}", safe_column).replace("{stage}", safe_stage)
