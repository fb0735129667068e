import math
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Tuple

from condition import EMPTY, Condition
from effect import Effect, describe_effects


class PolicyCategory(Enum):
    """Groups policies so a country can only run a limited number of each kind"""
    EMISSION_TARGET = "Emission Target"
    CO2_STORAGE = "CO2 storage"
    MISCELLANEOUS = "miscellaneous"
    ECONOMIC = "economic"
    EDUCATION = "education"
    POLITICAL = "political"
    EMISSION_TRADE = "Emission Trade"

    @property
    def policy_limit(self) -> Optional[int]:
        """Maximum number of active policies in this category (None = no maximum)"""
        return POLICY_LIMITS.get(self)


POLICY_LIMITS = {
    PolicyCategory.EMISSION_TARGET: 1,
    PolicyCategory.ECONOMIC: 1,
    PolicyCategory.EDUCATION: 1,
    PolicyCategory.POLITICAL: 1,
    PolicyCategory.EMISSION_TRADE: 1,
    PolicyCategory.CO2_STORAGE: 3,
}


def factorial(n: int) -> int:
    """n! with 0! = 1 (and 1 for all negative n)"""
    if n <= 0:
        return 1
    return math.factorial(n)


@dataclass(frozen=True)
class Policy:
    """A standing, levelled bundle of effects a country can enact.

    The name works as the primary key. A country enacting a policy keeps its
    own copy, so levelling up never touches the catalog template.
    """
    name: str
    effects: Tuple[Effect, ...]
    base_cost: int
    description: str = ""
    level: int = 1
    condition: Condition = EMPTY
    category: PolicyCategory = PolicyCategory.MISCELLANEOUS

    def __post_init__(self):
        object.__setattr__(self, "effects", tuple(self.effects))
        if not self.description:
            object.__setattr__(self, "description", self.name)
        if self.level < 1:
            raise ValueError(f"Policy '{self.name}' level must be at least 1, got {self.level}")

    @property
    def upgrade_cost(self) -> int:
        """Country points needed to go to the next level (grows with level!)"""
        return self.base_cost * factorial(self.level)

    def with_level(self, level: int) -> "Policy":
        return replace(self, level=level)

    def apply_effects(self, country):
        """Apply every effect in order at this policy's level"""
        for effect in self.effects:
            country = effect.apply(country, level=self.level)
        return country

    def effect_description(self) -> str:
        return describe_effects(self.effects, self.level)
