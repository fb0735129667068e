"""
Forecasts for the dashboard and the CLI runner.

The per-entity forecasts live on Country and Earth; this module turns them
into DataFrames and combines them. In the combined projection the earth warms
under constant aggregate emissions and the country lives through each of
those years in turn, so climate damage grows as the projection runs.
"""

import logging
from typing import List, Optional

import numpy as np
import pandas as pd

from climate import Earth
from country import Country
from effect import TICKS_PER_YEAR
from rating import emissions_per_capita, rating_summary, wealth_per_capita

logger = logging.getLogger(__name__)

DEFAULT_HORIZON_YEARS = 50

PROJECTION_COLUMNS = [
    "Year", "Temperature", "Concentration", "Emissions_Per_Capita",
    "Wealth_Per_Capita", "Gini", "EDI", "Budget", "Country_Points",
]


def _country_row(year: int, country: Country) -> dict:
    return {
        "Year": year,
        "Emissions": country.yearly_emissions,
        "GDP": country.gdp,
        "Emissions_Per_Capita": emissions_per_capita(country),
        "Wealth_Per_Capita": wealth_per_capita(country),
        "Gini": country.gini_rating,
        "EDI": country.education_development_index,
        "Budget": country.budget_surplus,
        "Country_Points": country.country_points,
    }


def forecast_country_series(country: Country, earth: Earth, to_year: int) -> pd.DataFrame:
    """Yearly country states in a constant earth, one row per year"""
    series = country.forecast_series(to_year, earth)
    rows = [_country_row(year, c) for year, c in zip(range(earth.current_year, to_year), series)]
    return pd.DataFrame(rows)


def forecast_earth_series(earth: Earth, to_year: int, yearly_emissions: float) -> pd.DataFrame:
    """Yearly earth states under constant emissions, one row per year"""
    series = earth.forecast_series(to_year, yearly_emissions)
    return pd.DataFrame({
        "Year": [e.current_year for e in series],
        "Temperature": [e.current_temperature for e in series],
        "Temperature_Rise": [e.temperature_rise for e in series],
        "Concentration": [e.current_concentration for e in series],
    })


def project(country: Country, earth: Earth, to_year: Optional[int] = None,
            aggregate_emissions: Optional[float] = None) -> pd.DataFrame:
    """
    Combined projection of one country and the earth.

    Args:
        country: Country to project
        earth: Earth at the start of the projection
        to_year: First year not included (default: 50 years ahead)
        aggregate_emissions: Constant global emissions in GtC/year
            (default: the base year global emissions)

    Returns:
        DataFrame with PROJECTION_COLUMNS, one row per year
    """
    if to_year is None:
        to_year = earth.current_year + DEFAULT_HORIZON_YEARS
    if aggregate_emissions is None:
        aggregate_emissions = earth.params.base_global_emissions_gtc

    earths: List[Earth] = earth.forecast_series(to_year, aggregate_emissions)

    rows = []
    simulated = country
    for year_earth in earths:
        row = _country_row(year_earth.current_year, simulated)
        row["Temperature"] = year_earth.current_temperature
        row["Concentration"] = year_earth.current_concentration
        rows.append(row)
        for _ in range(TICKS_PER_YEAR):
            simulated = simulated.tick(year_earth)

    logger.debug(f"Projected {country.name} from {earth.current_year} to {to_year} "
                 f"at {aggregate_emissions:.2f} GtC/year")
    return pd.DataFrame(rows, columns=PROJECTION_COLUMNS)


def summarize_projection(df: pd.DataFrame) -> dict:
    """Start/end deltas of a projection (used by the CLI and dashboard)"""
    if df.empty:
        return {}
    first, last = df.iloc[0], df.iloc[-1]
    return {
        "years": int(last["Year"] - first["Year"]) + 1,
        "temperature_change": float(last["Temperature"] - first["Temperature"]),
        "wealth_change_pct": float(100 * (last["Wealth_Per_Capita"] / first["Wealth_Per_Capita"] - 1)),
        "gini_change": float(last["Gini"] - first["Gini"]),
        "peak_emissions_per_capita": float(np.max(df["Emissions_Per_Capita"].to_numpy())),
    }


def final_ratings(country: Country, earth: Earth, to_year: int) -> dict:
    """Rating letters of the country at ``to_year`` in a constant earth"""
    return rating_summary(country.forecast(to_year, earth))
