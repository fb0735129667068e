"""
Loads the starting countries from the seed data file.

The source data lists emissions of CO2 rather than C, so each country's
emissions are taken as its share of the total and scaled to the base year
global emissions. GDP is given in US$ and stored in thousands of US$.
"""

import json
import logging
import os
from typing import List

from climate import DEFAULT_PARAMS
from country import Country
from errors import DecodeFailure

logger = logging.getLogger(__name__)

DEFAULT_SEED_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), "data", "countries.json")


def countries_from_records(records: List[dict],
                           base_emission: float = DEFAULT_PARAMS.base_global_emissions_gtc) -> List[Country]:
    """Build countries from seed records (countryName, twoCharacterCode, emission, gdp, ...)"""
    try:
        total_emissions = sum(float(r["emission"]) for r in records)
        if total_emissions <= 0:
            raise ValueError(f"Total seed emissions must be positive, got {total_emissions}")

        return [
            Country(
                name=r["countryName"],
                country_code=r["twoCharacterCode"],
                base_yearly_emissions=float(r["emission"]) / total_emissions * base_emission,
                base_gdp=float(r["gdp"]) / 1000.0,
                population=int(r["population"]),
                budget_surplus=float(r["budget"]),
                gini_rating=float(r["gini"]),
                education_development_index=float(r["edi"]),
            )
            for r in records
        ]
    except (KeyError, TypeError) as e:
        raise DecodeFailure(f"Malformed seed record: {e!r}") from e


def load_countries(path: str = DEFAULT_SEED_PATH,
                   base_emission: float = DEFAULT_PARAMS.base_global_emissions_gtc) -> List[Country]:
    with open(path, "r", encoding="utf-8") as f:
        try:
            records = json.load(f)
        except ValueError as e:
            raise DecodeFailure(f"Seed file {path} is not valid JSON: {e}") from e

    countries = countries_from_records(records, base_emission)
    logger.info(f"Loaded {len(countries)} countries from {path}")
    return countries
