"""
Data schema definitions for the Ames Housing exploration pipeline.

This module leverages Pandera to enforce the dataset contract, ensuring
that the columns the analysis relies on carry the expected types, ranges
and categorical labels before any transformation is applied.
"""

import numpy as np
import pandera.pandas as pa
from pandera.typing import Series

NEIGHBORHOODS = [
    "North_Ames",
    "College_Creek",
    "Old_Town",
    "Edwards",
    "Somerset",
    "Northridge_Heights",
    "Gilbert",
    "Sawyer",
    "Northwest_Ames",
    "Sawyer_West",
    "Mitchell",
    "Brookside",
    "Crawford",
    "Iowa_DOT_and_Rail_Road",
    "Timberland",
    "Northridge",
    "Stone_Brook",
    "South_and_West_of_Iowa_State_University",
    "Clear_Creek",
    "Meadow_Village",
    "Briardale",
    "Bloomington_Heights",
    "Veenker",
    "Northpark_Villa",
    "Blueste",
    "Greens",
    "Green_Hills",
    "Landmark",
    "Hayden_Lake",
]

ZONING_CLASSES = [
    "Floating_Village_Residential",
    "Residential_High_Density",
    "Residential_Low_Density",
    "Residential_Medium_Density",
    "A_agr",
    "C_all",
    "I_all",
]

# =============================================================================
# AMES SCHEMA DEFINITION
# =============================================================================


class AmesSchema(pa.DataFrameModel):
    """
    Data validation contract for the Ames housing dataset.

    Only the columns used by the exploration are constrained; the remaining
    property descriptors of the dataset pass through untouched.
    """

    Sale_Price: Series[float] = pa.Field(
        gt=0, description="Sale price of the property in US dollars."
    )
    Lot_Area: Series[float] = pa.Field(gt=0, description="Lot size in square feet.")
    Neighborhood: Series[str] = pa.Field(
        isin=NEIGHBORHOODS, description="Physical location within Ames city limits."
    )
    MS_Zoning: Series[str] = pa.Field(
        isin=ZONING_CLASSES, description="General zoning classification of the sale."
    )
    Longitude: Series[float] = pa.Field(
        ge=-180, le=180, description="Longitude of the property."
    )
    Latitude: Series[float] = pa.Field(
        ge=-90, le=90, description="Latitude of the property."
    )

    @pa.check("Sale_Price", "Lot_Area", name="is_finite")
    def check_is_finite(cls, series: Series[float]) -> Series[bool]:
        """Reject infinite prices and areas, which pass a plain `gt=0` bound."""
        return np.isfinite(series)

    class Config:  # type: ignore
        """
        Validation engine settings.

        Extra columns are allowed so the full set of Ames descriptors can be
        loaded; coercion casts integer prices and areas to float.
        """

        strict = False
        ordered = False
        coerce = True
