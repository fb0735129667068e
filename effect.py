from dataclasses import dataclass, replace
from enum import Enum

# Countries are updated once an hour, so 24 updates make up one simulated year
TICKS_PER_YEAR = 24


class EffectKind(Enum):
    FREE_POINTS = "free_points"
    EXTRA_EMISSIONS = "extra_emissions"
    EXTRA_GDP = "extra_gdp"
    EXTRA_GINI = "extra_gini"
    EXTRA_EDI = "extra_edi"
    EXTRA_BUDGET = "extra_budget"
    EMISSIONS_TOWARDS_TARGET = "emissions_towards_target"


@dataclass(frozen=True)
class Effect:
    """An atomic change to a country's state.

    ``amount`` is a yearly rate for every kind except FREE_POINTS, which grants
    points per application. For EMISSIONS_TOWARDS_TARGET ``amount`` is the
    reduction (% of base emissions per year) and ``target`` the reduction
    (% below base emissions) at which it stops.
    """
    kind: EffectKind
    amount: float
    target: float = 0.0

    # ------------------------------------------------------------------ #
    # Constructors
    # ------------------------------------------------------------------ #
    @classmethod
    def free_points(cls, points: int) -> "Effect":
        return cls(EffectKind.FREE_POINTS, points)

    @classmethod
    def extra_emissions(cls, percentage: float) -> "Effect":
        return cls(EffectKind.EXTRA_EMISSIONS, percentage)

    @classmethod
    def extra_gdp(cls, percentage: float) -> "Effect":
        return cls(EffectKind.EXTRA_GDP, percentage)

    @classmethod
    def extra_gini(cls, points: float) -> "Effect":
        return cls(EffectKind.EXTRA_GINI, points)

    @classmethod
    def extra_edi(cls, percentage: float) -> "Effect":
        return cls(EffectKind.EXTRA_EDI, percentage)

    @classmethod
    def extra_budget(cls, points: float) -> "Effect":
        return cls(EffectKind.EXTRA_BUDGET, points)

    @classmethod
    def emissions_towards_target(cls, percentage_reduction_per_year: float, target: float) -> "Effect":
        return cls(EffectKind.EMISSIONS_TOWARDS_TARGET, percentage_reduction_per_year, target)

    # ------------------------------------------------------------------ #
    # Application
    # ------------------------------------------------------------------ #
    def apply(self, country, level: int = 1):
        """Return a copy of ``country`` with this effect applied ``level`` times"""
        scale = level / TICKS_PER_YEAR

        if self.kind == EffectKind.FREE_POINTS:
            return replace(country, country_points=country.country_points + int(self.amount) * level)

        if self.kind == EffectKind.EXTRA_EMISSIONS:
            delta = country.base_yearly_emissions * 0.01 * self.amount * scale
            return replace(country, yearly_emissions=country.yearly_emissions + delta)

        if self.kind == EffectKind.EXTRA_GDP:
            delta = country.base_gdp * 0.01 * self.amount * scale
            return replace(country, gdp=country.gdp + delta)

        if self.kind == EffectKind.EXTRA_GINI:
            return replace(country, gini_rating=country.gini_rating + self.amount * scale)

        if self.kind == EffectKind.EXTRA_EDI:
            edi = country.education_development_index
            return replace(country, education_development_index=edi + self.amount * 0.01 * edi * scale)

        if self.kind == EffectKind.EXTRA_BUDGET:
            return replace(country, budget_surplus=country.budget_surplus + self.amount * scale)

        if self.kind == EffectKind.EMISSIONS_TOWARDS_TARGET:
            target_emissions = country.base_yearly_emissions * (1.0 - 0.01 * self.target * level)
            if country.yearly_emissions <= target_emissions:
                return country
            # Yearly reduction spread over the ticks of a year, never overshooting the target
            delta = country.base_yearly_emissions * 0.01 * self.amount * scale
            return replace(country, yearly_emissions=max(target_emissions, country.yearly_emissions - delta))

        raise TypeError(f"Unknown effect kind: {self.kind!r}")

    def describe(self, level: int = 1) -> str:
        """Player facing description of the effect at ``level``"""
        value = self.amount * level
        direction = "Increases" if value > 0 else "Decreases"

        if self.kind == EffectKind.FREE_POINTS:
            return f"Extra Country Points: {int(self.amount) * level}"
        if self.kind == EffectKind.EXTRA_EMISSIONS:
            return f"{direction} emissions at a rate of {value}% of 2015 per year."
        if self.kind == EffectKind.EXTRA_GDP:
            return f"{direction} GDP at a rate of {value}% of 2015 per year."
        if self.kind == EffectKind.EXTRA_GINI:
            return f"{direction} inequality at a rate of {value} points per year."
        if self.kind == EffectKind.EXTRA_EDI:
            return f"{direction} education development index at a rate of {value}% per year."
        if self.kind == EffectKind.EXTRA_BUDGET:
            return f"{direction} budget surplus by {value} points per year."
        if self.kind == EffectKind.EMISSIONS_TOWARDS_TARGET:
            return (f"Lowers emissions towards {self.target * level}% less than 2015 value "
                    f"by {value}% per year.")
        raise TypeError(f"Unknown effect kind: {self.kind!r}")


def describe_effects(effects, level: int = 1) -> str:
    if not effects:
        return "No effect"
    return "\n".join(effect.describe(level) for effect in effects)
