import pytest

from conftest import make_netherlands
from effect import TICKS_PER_YEAR, Effect
from policy import Policy, PolicyCategory, factorial


def test_factorial():
    assert factorial(0) == 1
    assert factorial(-3) == 1
    assert factorial(1) == 1
    assert factorial(5) == 120


def test_upgrade_cost_grows_with_level():
    policy = Policy("Schools", [Effect.extra_edi(1)], base_cost=5)
    assert policy.upgrade_cost == 5
    assert policy.with_level(2).upgrade_cost == 10
    assert policy.with_level(3).upgrade_cost == 30


def test_defaults():
    policy = Policy("Schools", [Effect.extra_edi(1)], base_cost=5)
    assert policy.description == "Schools"
    assert policy.level == 1
    assert policy.category == PolicyCategory.MISCELLANEOUS
    assert isinstance(policy.effects, tuple)


def test_level_must_be_positive():
    with pytest.raises(ValueError):
        Policy("Schools", [], base_cost=5, level=0)


def test_category_limits():
    assert PolicyCategory.MISCELLANEOUS.policy_limit is None
    assert PolicyCategory.CO2_STORAGE.policy_limit == 3
    for category in (PolicyCategory.EMISSION_TARGET, PolicyCategory.ECONOMIC, PolicyCategory.EDUCATION,
                     PolicyCategory.POLITICAL, PolicyCategory.EMISSION_TRADE):
        assert category.policy_limit == 1


def test_effects_scale_with_level():
    nl = make_netherlands()
    policy = Policy("Growth", [Effect.extra_gdp(1)], base_cost=1)
    once = policy.apply_effects(nl).gdp - nl.gdp
    twice = policy.with_level(2).apply_effects(nl).gdp - nl.gdp
    assert once == pytest.approx(90705 * 0.01 / TICKS_PER_YEAR)
    assert twice == pytest.approx(2 * once)


def test_effect_description_uses_level():
    policy = Policy("Growth", [Effect.extra_gdp(1)], base_cost=1, level=3)
    assert policy.effect_description() == "Increases GDP at a rate of 3% of 2015 per year."
