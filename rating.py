import logging
from enum import Enum, IntEnum
from typing import Dict, List, Tuple

import numpy as np

logger = logging.getLogger(__name__)


class Rating(IntEnum):
    """Quality grade for a country indicator. Ordered: UNDEFINED < F < ... < S"""
    UNDEFINED = 0
    F = 1
    E = 2
    D = 3
    C = 4
    B = 5
    A = 6
    S = 7

    @property
    def label(self) -> str:
        return "undefined" if self is Rating.UNDEFINED else self.name

    @classmethod
    def from_label(cls, label: str) -> "Rating":
        if label == "undefined":
            return cls.UNDEFINED
        return cls[label]


class RatingMetric(Enum):
    WEALTH = "wealth"                      # GDP per capita per day (US$)
    BUDGET = "budget"                      # budget surplus (% GDP)
    EQUALITY = "equality"                  # Gini index
    EDUCATION = "education"                # Education Development Index
    EMISSIONS_PER_CAPITA = "emissions"     # tonnes carbon per person per year


# ============================================================================
# RANGE TABLES
# Half-open [low, high) ranges, exhaustive over the metric's valid domain.
# ============================================================================

RATING_RANGES: Dict[RatingMetric, List[Tuple[float, float, Rating]]] = {
    RatingMetric.WEALTH: [
        (0.0, 3.2, Rating.F),
        (3.2, 5.5, Rating.E),
        (5.5, 15.0, Rating.D),
        (15.0, 40.0, Rating.C),
        (40.0, 120.0, Rating.B),
        (120.0, 200.0, Rating.A),
        (200.0, np.inf, Rating.S),
    ],
    # Any surplus rates at least A
    RatingMetric.BUDGET: [
        (-np.inf, -10.0, Rating.F),
        (-10.0, -7.5, Rating.E),
        (-7.5, -5.0, Rating.D),
        (-5.0, -2.5, Rating.C),
        (-2.5, 0.0, Rating.B),
        (0.0, 5.0, Rating.A),
        (5.0, np.inf, Rating.S),
    ],
    # Lower Gini means more equality; 37.5 is about average
    RatingMetric.EQUALITY: [
        (50.0, np.inf, Rating.F),
        (45.0, 50.0, Rating.E),
        (40.0, 45.0, Rating.D),
        (37.5, 40.0, Rating.C),
        (30.0, 37.5, Rating.B),
        (25.0, 30.0, Rating.A),
        (0.0, 25.0, Rating.S),
    ],
    # Average EDI is about 0.899
    RatingMetric.EDUCATION: [
        (0.0, 0.6, Rating.F),
        (0.6, 0.7, Rating.E),
        (0.7, 0.8, Rating.D),
        (0.8, 0.9, Rating.C),
        (0.9, 0.95, Rating.B),
        (0.95, 0.99, Rating.A),
        (0.99, np.inf, Rating.S),
    ],
    # Lower emissions rate better; net negative emitters rate A or S
    RatingMetric.EMISSIONS_PER_CAPITA: [
        (-np.inf, -4.0, Rating.S),
        (-4.0, 0.0, Rating.A),
        (0.0, 1.0, Rating.B),
        (1.0, 2.0, Rating.C),
        (2.0, 5.0, Rating.D),
        (5.0, 10.0, Rating.E),
        (10.0, np.inf, Rating.F),
    ],
}


def rating_for(metric: RatingMetric, value: float) -> Rating:
    """Bucket a metric value into a Rating.

    Values outside every range (negative wealth, negative Gini) should never
    occur with valid seed data; they are reported and rated UNDEFINED. NaN
    raises ValueError, since an UNDEFINED rating passes every "at most" gate.
    """
    if np.isnan(value):
        raise ValueError(f"{metric.value} value is NaN")

    for low, high, rating in RATING_RANGES[metric]:
        if low <= value < high:
            return rating

    logger.warning(f"No {metric.value} rating for value {value}, rating as undefined")
    return Rating.UNDEFINED


# ------------------------------------------------------------------ #
# Derived indicators
# ------------------------------------------------------------------ #
def _require_population(country) -> int:
    if country.population <= 0:
        raise ValueError(f"Country '{country.name}' has non-positive population {country.population}")
    return country.population


def wealth_per_capita(country) -> float:
    """GDP per person per day in US$ (GDP is stored in thousands of US$)"""
    return country.gdp * 1000.0 / _require_population(country) / 365.0


def emissions_per_capita(country) -> float:
    """Yearly emissions per person in tonnes carbon (emissions are stored in GtC)"""
    return country.yearly_emissions * 1_000_000_000 / _require_population(country)


def metric_value(metric: RatingMetric, country) -> float:
    if metric == RatingMetric.WEALTH:
        return wealth_per_capita(country)
    if metric == RatingMetric.BUDGET:
        return country.budget_surplus
    if metric == RatingMetric.EQUALITY:
        return country.gini_rating
    if metric == RatingMetric.EDUCATION:
        return country.education_development_index
    if metric == RatingMetric.EMISSIONS_PER_CAPITA:
        return emissions_per_capita(country)
    raise TypeError(f"Unknown rating metric: {metric!r}")


def rate(country, metric: RatingMetric) -> Rating:
    """Rating of a country for one metric"""
    return rating_for(metric, metric_value(metric, country))


def wealth_rating(country) -> Rating:
    return rate(country, RatingMetric.WEALTH)


def budget_surplus_rating(country) -> Rating:
    return rate(country, RatingMetric.BUDGET)


def equality_rating(country) -> Rating:
    return rate(country, RatingMetric.EQUALITY)


def edi_rating(country) -> Rating:
    return rate(country, RatingMetric.EDUCATION)


def emissions_per_capita_rating(country) -> Rating:
    return rate(country, RatingMetric.EMISSIONS_PER_CAPITA)


def rating_summary(country) -> Dict[str, str]:
    """All ratings of a country as labels, keyed by metric name"""
    return {metric.value: rate(country, metric).label for metric in RatingMetric}
