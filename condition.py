"""
Conditions - logical expressions about a Country.

A condition is one of a closed set of frozen variants. Leaves compare one of
the country's ratings against a threshold, or check for an active policy;
``And``, ``Or`` and ``Not`` compose other conditions. ``Empty`` always holds
and is the default gate for catalog entries.

Evaluation is a pure function of the country passed in, so the same condition
object can be evaluated for any number of countries.
"""

from dataclasses import dataclass, field
from typing import Tuple, Union

from rating import Rating, RatingMetric, rate


@dataclass(frozen=True)
class Empty:
    """Always true"""


@dataclass(frozen=True)
class And:
    """True when every child holds (true for no children)"""
    conditions: Tuple["Condition", ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "conditions", tuple(self.conditions))


@dataclass(frozen=True)
class Or:
    """True when at least one child holds (false for no children)"""
    conditions: Tuple["Condition", ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, "conditions", tuple(self.conditions))


@dataclass(frozen=True)
class Not:
    condition: "Condition"


@dataclass(frozen=True)
class RatingAtMost:
    metric: RatingMetric
    ranking: Rating


@dataclass(frozen=True)
class RatingAtLeast:
    metric: RatingMetric
    ranking: Rating


@dataclass(frozen=True)
class HasActivePolicy:
    policy_name: str


Condition = Union[Empty, And, Or, Not, RatingAtMost, RatingAtLeast, HasActivePolicy]

EMPTY = Empty()


def evaluate(condition: Condition, country) -> bool:
    """Evaluate a condition for a country"""
    if isinstance(condition, Empty):
        return True

    if isinstance(condition, And):
        for child in condition.conditions:
            if not evaluate(child, country):
                return False
        return True

    if isinstance(condition, Or):
        for child in condition.conditions:
            if evaluate(child, country):
                return True
        return False

    if isinstance(condition, Not):
        return not evaluate(condition.condition, country)

    if isinstance(condition, RatingAtMost):
        return rate(country, condition.metric) <= condition.ranking

    if isinstance(condition, RatingAtLeast):
        return rate(country, condition.metric) >= condition.ranking

    if isinstance(condition, HasActivePolicy):
        return any(policy.name == condition.policy_name for policy in country.active_policies)

    raise TypeError(f"Unknown condition variant: {condition!r}")


_METRIC_PHRASES = {
    RatingMetric.WEALTH: "wealth per capita",
    RatingMetric.BUDGET: "budget",
    RatingMetric.EQUALITY: "equality",
    RatingMetric.EDUCATION: "education development index",
    RatingMetric.EMISSIONS_PER_CAPITA: "emissions per capita",
}


def describe(condition: Condition) -> str:
    """Human readable description of a condition"""
    if isinstance(condition, Empty):
        return "No requirement."
    if isinstance(condition, And):
        return "The following are all valid:\n" + " & ".join(describe(c) for c in condition.conditions)
    if isinstance(condition, Or):
        return "At least one of the following is valid:\n\t" + " or ".join(describe(c) for c in condition.conditions)
    if isinstance(condition, Not):
        return f"The following condition is false:\n\t{describe(condition.condition)}"
    if isinstance(condition, RatingAtMost):
        return f"Your {_METRIC_PHRASES[condition.metric]} ranking is at most: {condition.ranking.label}"
    if isinstance(condition, RatingAtLeast):
        return f"Your {_METRIC_PHRASES[condition.metric]} ranking is at least: {condition.ranking.label}"
    if isinstance(condition, HasActivePolicy):
        return f"You have '{condition.policy_name}' enacted."
    raise TypeError(f"Unknown condition variant: {condition!r}")
