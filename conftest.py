import pytest

from climate import Earth
from country import Country


def make_netherlands(**overrides) -> Country:
    values = dict(
        name="Netherlands",
        country_code="NL",
        base_yearly_emissions=0.46,
        base_gdp=90705,
        population=16981295,
        budget_surplus=-3.95,
        gini_rating=28,
        education_development_index=0.9918,
    )
    values.update(overrides)
    return Country(**values)


@pytest.fixture
def netherlands() -> Country:
    return make_netherlands()


@pytest.fixture
def warm_earth() -> Earth:
    """Earth after 85 years of 10 GtC/year, roughly +1.5°C"""
    return Earth().forecast(2100, 10.0)
