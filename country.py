"""
Country - the per-nation state machine.

Countries impact the earth by emitting carbon and are the main object players
interact with: they spend country points on commands and policies to change
where their economy is heading. Every operation returns a new Country; a
failed action hands back the original country together with the reason.
"""

from dataclasses import dataclass, field, replace
from typing import List, NamedTuple, Tuple

from climate import Earth
from command import CountryCommand
from effect import TICKS_PER_YEAR
from policy import Policy


class ActionResult(NamedTuple):
    ok: bool
    country: "Country"
    message: str


@dataclass(frozen=True)
class Country:
    """A simulated national economy.

    Units: emissions in GtC per year, GDP in thousands of US$, budget surplus
    in % of GDP, Gini index in points, EDI in (0..1).
    """
    name: str
    country_code: str
    base_yearly_emissions: float
    base_gdp: float
    population: int
    budget_surplus: float
    gini_rating: float
    education_development_index: float
    yearly_emissions: float = None
    gdp: float = None
    country_points: int = 1
    active_policies: Tuple[Policy, ...] = field(default_factory=tuple)

    def __post_init__(self):
        # A new country starts at its base values
        if self.yearly_emissions is None:
            object.__setattr__(self, "yearly_emissions", self.base_yearly_emissions)
        if self.gdp is None:
            object.__setattr__(self, "gdp", self.base_gdp)
        object.__setattr__(self, "active_policies", tuple(self.active_policies))

    # ------------------------------------------------------------------ #
    # Update
    # ------------------------------------------------------------------ #
    def tick(self, earth: Earth) -> "Country":
        """Advance one tick (1/24 of a year).

        Climate damage is applied before policy effects; policies apply in the
        order they were enacted.
        """
        country = replace(self, country_points=self.country_points + 1)

        for effect in earth.current_effects_of_temperature_change:
            country = effect.apply(country)

        for policy in country.active_policies:
            country = policy.apply_effects(country)

        return country

    @property
    def country_points_per_tick(self) -> int:
        """Points gained in one tick, measured in a base year earth"""
        return self.tick(Earth()).country_points - self.country_points

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #
    def available_commands(self, catalog) -> List[CountryCommand]:
        return catalog.commands_for(self)

    def execute_command(self, command: CountryCommand, earth: Earth) -> ActionResult:
        """Execute a one-shot command. Effects are applied first, then the cost is paid.

        The caller must make sure ``command`` is one of ``available_commands``.
        """
        if self.country_points < command.cost:
            return ActionResult(False, self, f"Not enough points to execute command {command.name}.")

        updated, message = command.apply(self)
        updated = replace(updated, country_points=updated.country_points - command.cost)
        return ActionResult(True, updated, message)

    apply_command = execute_command

    # ------------------------------------------------------------------ #
    # Policies
    # ------------------------------------------------------------------ #
    def active_policy_named(self, name: str):
        for policy in self.active_policies:
            if policy.name == name:
                return policy
        return None

    def has_active_policy(self, name: str) -> bool:
        return self.active_policy_named(name) is not None

    def available_policies(self, catalog) -> List[Policy]:
        """Catalog policies whose condition currently holds, enacted or not"""
        return catalog.policies_for(self)

    def enactable_policies(self, catalog) -> List[Policy]:
        """Available policies minus the ones already enacted"""
        return [p for p in self.available_policies(catalog) if not self.has_active_policy(p.name)]

    def enact_policy(self, policy: Policy) -> ActionResult:
        if self.country_points < policy.base_cost:
            return ActionResult(False, self, f"Not enough country points to enact policy '{policy.name}'.")

        if self.has_active_policy(policy.name):
            return ActionResult(False, self, f"Policy '{policy.name}' is already enacted.")

        limit = policy.category.policy_limit
        in_category = sum(1 for p in self.active_policies if p.category == policy.category)
        if limit is not None and in_category >= limit:
            return ActionResult(
                False, self,
                f"You already have the maximum ({limit}) number of policies in the "
                f"{policy.category.value} category active."
            )

        updated = replace(
            self,
            country_points=self.country_points - policy.base_cost,
            active_policies=self.active_policies + (policy.with_level(1),),
        )
        return ActionResult(True, updated, f"Successfully enacted policy '{policy.name}'")

    def revoke_policy(self, policy: Policy) -> ActionResult:
        if not self.has_active_policy(policy.name):
            return ActionResult(False, self, f"Policy '{policy.name}' is not enacted.")

        remaining = tuple(p for p in self.active_policies if p.name != policy.name)
        return ActionResult(True, replace(self, active_policies=remaining),
                            f"Successfully revoked policy '{policy.name}'")

    def level_up_policy(self, policy: Policy) -> ActionResult:
        """Bring an enacted policy to the next level; higher levels have stronger effects"""
        active = self.active_policy_named(policy.name)
        if active is None:
            return ActionResult(False, self, f"Policy '{policy.name}' is not enacted.")

        cost = active.upgrade_cost
        if self.country_points < cost:
            return ActionResult(False, self, f"Not enough points to upgrade '{policy.name}'.")

        policies = tuple(p.with_level(p.level + 1) if p.name == policy.name else p
                         for p in self.active_policies)
        updated = replace(self, country_points=self.country_points - cost, active_policies=policies)
        return ActionResult(True, updated, f"Successfully upgraded policy '{policy.name}'")

    # ------------------------------------------------------------------ #
    # Forecasts
    # ------------------------------------------------------------------ #
    def forecast(self, to_year: int, earth: Earth) -> "Country":
        """The country in ``to_year``, simulated in a constant earth"""
        if to_year < earth.current_year:
            raise ValueError(f"Cannot forecast to {to_year}, earth is already in {earth.current_year}")

        simulated = self
        for _ in range((to_year - earth.current_year) * TICKS_PER_YEAR):
            simulated = simulated.tick(earth)
        return simulated

    def forecast_series(self, to_year: int, earth: Earth) -> List["Country"]:
        """One Country per year from ``earth.current_year`` up to (not including) ``to_year``.

        Each year is 24 ticks in the given earth, which is held constant.
        """
        if to_year < earth.current_year:
            raise ValueError(f"Cannot forecast to {to_year}, earth is already in {earth.current_year}")

        series = []
        simulated = self
        for _ in range(earth.current_year, to_year):
            series.append(simulated)
            for _ in range(TICKS_PER_YEAR):
                simulated = simulated.tick(earth)
        return series
