"""
Catalog of every policy and command known to the game.

The catalog is built once at start-up and handed to whatever needs it, so
tests and scenarios can swap in their own. What a country may pick from is
worked out on every read by evaluating each template's condition against the
country as it is now.
"""

from typing import Iterable, List, Tuple

from command import CountryCommand
from condition import And, HasActivePolicy, Not, RatingAtLeast, RatingAtMost, evaluate
from effect import Effect
from errors import CatalogLookupFailure
from policy import Policy, PolicyCategory
from rating import Rating, RatingMetric

WEALTH = RatingMetric.WEALTH
BUDGET = RatingMetric.BUDGET
EQUALITY = RatingMetric.EQUALITY
EDUCATION = RatingMetric.EDUCATION
EMISSIONS = RatingMetric.EMISSIONS_PER_CAPITA


class Catalog:
    """Name-unique collections of policy and command templates"""

    def __init__(self, policies: Iterable[Policy] = (), commands: Iterable[CountryCommand] = ()):
        self.policies: Tuple[Policy, ...] = tuple(policies)
        self.commands: Tuple[CountryCommand, ...] = tuple(commands)
        self._check_unique("policy", [p.name for p in self.policies])
        self._check_unique("command", [c.name for c in self.commands])

    @staticmethod
    def _check_unique(kind: str, names: List[str]):
        seen = set()
        for name in names:
            if name in seen:
                raise ValueError(f"Duplicate {kind} name in catalog: '{name}'")
            seen.add(name)

    def policies_for(self, country) -> List[Policy]:
        """Policies whose condition holds for the country right now"""
        return [p for p in self.policies if evaluate(p.condition, country)]

    def commands_for(self, country) -> List[CountryCommand]:
        """Commands whose condition holds for the country right now"""
        return [c for c in self.commands if evaluate(c.condition, country)]

    def policy_named(self, name: str) -> Policy:
        for policy in self.policies:
            if policy.name == name:
                return policy
        raise CatalogLookupFailure("policy", name)

    def command_named(self, name: str) -> CountryCommand:
        for command in self.commands:
            if command.name == name:
                return command
        raise CatalogLookupFailure("command", name)

    def is_available_command(self, country, command: CountryCommand) -> bool:
        """True when ``command`` is exactly (all fields equal) one of the country's available commands"""
        return command in self.commands_for(country)

    def is_available_policy(self, country, policy: Policy) -> bool:
        """True when ``policy`` is one of the policies the country may currently pick from"""
        return policy in self.policies_for(country)


def default_policies() -> List[Policy]:
    result = []

    # Reduction targets
    result.append(Policy(
        name="Set emission reduction target",
        description="Sets an emission target (very modest at first). You can make it more stringent by levelling it up.",
        effects=[Effect.emissions_towards_target(percentage_reduction_per_year=1, target=10)],
        base_cost=1,
        condition=Not(HasActivePolicy("Set emission reduction target")),
        category=PolicyCategory.EMISSION_TARGET))

    # Increase wealth
    result.append(Policy(
        name="Subsidise fossil fuels",
        effects=[Effect.extra_emissions(1), Effect.extra_gdp(1)],
        base_cost=1,
        condition=RatingAtMost(WEALTH, Rating.C),
        category=PolicyCategory.ECONOMIC))

    result.append(Policy(
        name="Promote eco-tourism",
        effects=[Effect.extra_emissions(0.1), Effect.extra_gdp(1)],
        base_cost=5,
        condition=RatingAtLeast(EDUCATION, Rating.C),
        category=PolicyCategory.ECONOMIC))

    result.append(Policy(
        name="Promote high tech industry",
        effects=[Effect.extra_gdp(1)],
        base_cost=5,
        condition=RatingAtLeast(EDUCATION, Rating.A),
        category=PolicyCategory.ECONOMIC))

    result.append(Policy(
        name="Accept foreign aid",
        effects=[Effect.extra_gdp(1), Effect.extra_gini(0.01)],
        base_cost=5,
        condition=RatingAtMost(WEALTH, Rating.E),
        category=PolicyCategory.ECONOMIC))

    result.append(Policy(
        name="Increase base interest",
        description="Have your central bank increase the base interest rate. This tends to decrease income, "
                    "but also increase equality as it harms those with assets more than others.",
        effects=[Effect.extra_gdp(-1), Effect.extra_gini(-2)],
        base_cost=8,
        condition=RatingAtLeast(WEALTH, Rating.E),
        category=PolicyCategory.ECONOMIC))

    result.append(Policy(
        name="Decrease base interest",
        description="Have your central bank decrease the base interest rate. This tends to increase income, "
                    "but also increase inequality as it favours those who have assets.",
        effects=[Effect.extra_gdp(1), Effect.extra_gini(2)],
        base_cost=2,
        category=PolicyCategory.ECONOMIC))

    # Education
    result.append(Policy(
        name="Free schools",
        effects=[Effect.extra_gdp(-2), Effect.extra_edi(1)],
        base_cost=5,
        condition=RatingAtLeast(BUDGET, Rating.A),
        category=PolicyCategory.EDUCATION))

    result.append(Policy(
        name="Private schools",
        effects=[Effect.extra_edi(2), Effect.extra_gini(1)],
        base_cost=10,
        condition=And([RatingAtLeast(EDUCATION, Rating.D), RatingAtMost(EQUALITY, Rating.E)]),
        category=PolicyCategory.EDUCATION))

    result.append(Policy(
        name="Ivy League Schools",
        effects=[Effect.extra_edi(5), Effect.extra_gini(3)],
        base_cost=25,
        condition=And([RatingAtLeast(EDUCATION, Rating.C), RatingAtMost(EQUALITY, Rating.D)]),
        category=PolicyCategory.EDUCATION))

    # Increase equality
    result.append(Policy(
        name="Progressive tax system",
        description="The strongest shoulders bear the heaviest burden.",
        effects=[Effect.extra_gini(-0.1)],
        base_cost=25,
        condition=RatingAtMost(EQUALITY, Rating.D),
        category=PolicyCategory.ECONOMIC))

    result.append(Policy(
        name="Universal Base Income",
        effects=[Effect.extra_gini(-0.5)],
        base_cost=10,
        condition=RatingAtLeast(BUDGET, Rating.C),
        category=PolicyCategory.ECONOMIC))

    # Political points
    result.append(Policy(
        name="Tax cuts",
        effects=[Effect.free_points(1), Effect.extra_gdp(-2)],
        base_cost=1,
        condition=RatingAtLeast(BUDGET, Rating.B),
        category=PolicyCategory.POLITICAL))

    result.append(Policy(
        name="Enact police state",
        effects=[Effect.free_points(2), Effect.extra_gdp(-2), Effect.extra_gini(0.2)],
        base_cost=1,
        condition=RatingAtMost(BUDGET, Rating.D),
        category=PolicyCategory.POLITICAL))

    result.append(Policy(
        name="Propaganda",
        effects=[Effect.free_points(1), Effect.extra_edi(-1.5)],
        base_cost=5,
        condition=RatingAtMost(EDUCATION, Rating.C),
        category=PolicyCategory.POLITICAL))

    # Emission trade
    result.append(Policy(
        name="Sell emission rights",
        description="This leads to a net increase in emissions that are tallied with your country.",
        effects=[Effect.extra_budget(0.5), Effect.extra_gdp(2), Effect.extra_emissions(3)],
        base_cost=3,
        condition=RatingAtLeast(EMISSIONS, Rating.C),
        category=PolicyCategory.EMISSION_TRADE))

    result.append(Policy(
        name="Buy emission rights",
        description="This leads to a net decrease in emissions that are tallied with your country.",
        effects=[Effect.extra_budget(-0.5), Effect.extra_gdp(-2), Effect.extra_emissions(-3)],
        base_cost=3,
        condition=And([RatingAtLeast(BUDGET, Rating.C), RatingAtLeast(WEALTH, Rating.C)]),
        category=PolicyCategory.EMISSION_TRADE))

    # CO2 storage
    result.append(Policy(
        name="Build CO2 storage facility",
        effects=[Effect.extra_emissions(-1)],
        base_cost=10,
        condition=And([RatingAtLeast(EDUCATION, Rating.A), RatingAtLeast(EMISSIONS, Rating.A)]),
        category=PolicyCategory.CO2_STORAGE))

    return result


def default_commands() -> List[CountryCommand]:
    return [
        CountryCommand(name="Example command", description="It does nothing!", effects=[], cost=0),
        CountryCommand(name="Free points", description="Free lunch!", effects=[Effect.free_points(10)], cost=0),
        CountryCommand(name="Climate conference", description="Better luck next time", effects=[], cost=100),
    ]


def default_catalog() -> Catalog:
    """The stock catalog"""
    return Catalog(default_policies(), default_commands())
