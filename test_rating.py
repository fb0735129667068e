"""
Test Ratings

Ratings are ordered, every metric table is exhaustive over its valid domain
and impossible values come back as undefined.
"""

import itertools
import math

import pytest

from conftest import make_netherlands
from rating import (Rating, RatingMetric, budget_surplus_rating, edi_rating, emissions_per_capita,
                    equality_rating, rating_for, rating_summary, wealth_per_capita, wealth_rating)


def test_total_order():
    expected = [Rating.UNDEFINED, Rating.F, Rating.E, Rating.D, Rating.C, Rating.B, Rating.A, Rating.S]
    assert sorted(Rating) == expected
    for lower, higher in itertools.combinations(expected, 2):
        assert lower < higher


def test_labels():
    assert Rating.UNDEFINED.label == "undefined"
    assert Rating.B.label == "B"
    for rating in Rating:
        assert Rating.from_label(rating.label) is rating


@pytest.mark.parametrize("metric, value, expected", [
    (RatingMetric.WEALTH, 3.19, Rating.F),
    (RatingMetric.WEALTH, 3.2, Rating.E),
    (RatingMetric.WEALTH, 250.0, Rating.S),
    (RatingMetric.BUDGET, -10.01, Rating.F),
    (RatingMetric.BUDGET, -10.0, Rating.E),
    (RatingMetric.BUDGET, 0.0, Rating.A),
    (RatingMetric.EQUALITY, 55.0, Rating.F),
    (RatingMetric.EQUALITY, 25.0, Rating.A),
    (RatingMetric.EQUALITY, 24.9, Rating.S),
    (RatingMetric.EDUCATION, 0.99, Rating.S),
    (RatingMetric.EDUCATION, 0.59, Rating.F),
    (RatingMetric.EMISSIONS_PER_CAPITA, -5.0, Rating.S),
    (RatingMetric.EMISSIONS_PER_CAPITA, -0.1, Rating.A),
    (RatingMetric.EMISSIONS_PER_CAPITA, 0.0, Rating.B),
    (RatingMetric.EMISSIONS_PER_CAPITA, 12.0, Rating.F),
])
def test_range_boundaries(metric, value, expected):
    assert rating_for(metric, value) == expected


def test_impossible_values_are_undefined():
    assert rating_for(RatingMetric.WEALTH, -1.0) == Rating.UNDEFINED
    assert rating_for(RatingMetric.EQUALITY, -3.0) == Rating.UNDEFINED


def test_nan_is_rejected():
    with pytest.raises(ValueError):
        rating_for(RatingMetric.BUDGET, math.nan)
    with pytest.raises(ValueError):
        wealth_rating(make_netherlands(gdp=math.nan))


def test_derived_indicators():
    nl = make_netherlands()
    assert wealth_per_capita(nl) == pytest.approx(90705 * 1000 / 16981295 / 365)
    assert emissions_per_capita(nl) == pytest.approx(0.46e9 / 16981295)


def test_zero_population_is_rejected():
    with pytest.raises(ValueError):
        wealth_per_capita(make_netherlands(population=0))


def test_netherlands_ratings():
    nl = make_netherlands()
    assert wealth_rating(nl) == Rating.F
    assert budget_surplus_rating(nl) == Rating.C
    assert equality_rating(nl) == Rating.A
    assert edi_rating(nl) == Rating.S
    assert rating_summary(nl) == {
        "wealth": "F", "budget": "C", "equality": "A", "education": "S", "emissions": "F",
    }
    print("✓ Netherlands rated F/C/A/S/F")
