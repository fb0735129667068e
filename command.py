from dataclasses import dataclass, field
from typing import Optional, Tuple

from condition import EMPTY, Condition
from effect import Effect, describe_effects


@dataclass(frozen=True)
class CountryCommand:
    """A one-shot action a country can execute for a cost in country points"""
    name: str
    effects: Tuple[Effect, ...] = field(default_factory=tuple)
    cost: int = 0
    description: str = ""
    custom_apply_message: Optional[str] = None
    condition: Condition = EMPTY

    def __post_init__(self):
        object.__setattr__(self, "effects", tuple(self.effects))
        if not self.description:
            object.__setattr__(self, "description", self.name)

    def apply(self, country) -> tuple:
        """Apply the effects in order at level 1.

        Returns: (updated_country, result_message). Cost is handled by the country.
        """
        for effect in self.effects:
            country = effect.apply(country)
        return country, self.custom_apply_message or f"{self.name} successfully applied."

    @property
    def effect_description(self) -> str:
        return describe_effects(self.effects)
