"""
Test Effects

Every kind except free points is a yearly rate spread over TICKS_PER_YEAR
ticks and scales linearly with level.
"""

import pytest

from conftest import make_netherlands
from effect import TICKS_PER_YEAR, Effect, describe_effects


def test_free_points_are_not_spread_over_the_year():
    nl = make_netherlands()
    assert Effect.free_points(2).apply(nl).country_points == nl.country_points + 2
    assert Effect.free_points(2).apply(nl, level=3).country_points == nl.country_points + 6


def test_yearly_rates():
    nl = make_netherlands()

    gdp = Effect.extra_gdp(1).apply(nl)
    assert gdp.gdp == pytest.approx(90705 + 90705 * 0.01 / TICKS_PER_YEAR)

    emissions = Effect.extra_emissions(-2).apply(nl, level=2)
    assert emissions.yearly_emissions == pytest.approx(0.46 - 0.46 * 0.01 * 4 / TICKS_PER_YEAR)

    gini = Effect.extra_gini(0.5).apply(nl)
    assert gini.gini_rating == pytest.approx(28 + 0.5 / TICKS_PER_YEAR)

    edi = Effect.extra_edi(1).apply(nl)
    assert edi.education_development_index == pytest.approx(0.9918 * (1 + 0.01 / TICKS_PER_YEAR))

    budget = Effect.extra_budget(-0.5).apply(nl)
    assert budget.budget_surplus == pytest.approx(-3.95 - 0.5 / TICKS_PER_YEAR)


def test_apply_leaves_original_untouched():
    nl = make_netherlands()
    Effect.extra_gdp(10).apply(nl)
    assert nl.gdp == 90705


def test_emissions_towards_target():
    effect = Effect.emissions_towards_target(percentage_reduction_per_year=1, target=10)
    nl = make_netherlands()

    reduced = effect.apply(nl)
    assert reduced.yearly_emissions == pytest.approx(0.46 - 0.46 * 0.01 / TICKS_PER_YEAR)

    # Already past the target (10% below base): nothing changes
    at_target = make_netherlands(yearly_emissions=0.40)
    assert effect.apply(at_target) is at_target

    # A higher level moves the target further down
    assert effect.apply(at_target, level=2).yearly_emissions < at_target.yearly_emissions


def test_emissions_stop_at_target():
    effect = Effect.emissions_towards_target(percentage_reduction_per_year=1, target=10)
    floor = 0.46 * (1.0 - 0.01 * 10)
    just_above = make_netherlands(yearly_emissions=floor + 1e-6)

    reduced = effect.apply(just_above)
    assert reduced.yearly_emissions == floor

    # Once there it stays there
    assert effect.apply(reduced) is reduced

    country = make_netherlands()
    for _ in range(20 * TICKS_PER_YEAR):
        country = effect.apply(country)
        assert country.yearly_emissions >= floor
    assert country.yearly_emissions == floor
    print("✓ Emission target is a floor")


def test_descriptions():
    assert Effect.extra_gdp(1).describe(2) == "Increases GDP at a rate of 2% of 2015 per year."
    assert Effect.free_points(3).describe() == "Extra Country Points: 3"
    assert Effect.extra_gini(-2).describe().startswith("Decreases inequality")
    assert describe_effects([]) == "No effect"
    assert describe_effects([Effect.free_points(1), Effect.extra_gdp(1)]).count("\n") == 1
