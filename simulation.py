"""
WorldSimulation - one earth and the countries living on it.

Coordinates the two update schedules and handles player actions:

- ``tick_earth`` runs once per simulated year. It sums the yearly emissions
  of all countries first, then advances the earth.
- ``tick_countries`` runs TICKS_PER_YEAR times per year and advances every
  country in the current earth.
- player actions (commands, enacting, revoking and levelling up policies)
  are looked up by name in the injected catalog. Commands and newly enacted
  policies must be in the country's current availability list. Successful
  actions are written to the earth log.

With a StateStore attached, the earth, countries and log are persisted after
every change.
"""

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd

from catalog import Catalog, default_catalog
from climate import Earth
from command import CountryCommand
from country import ActionResult, Country
from effect import TICKS_PER_YEAR
from errors import CatalogLookupFailure, CommandNotAvailable
from rating import emissions_per_capita, wealth_per_capita

logger = logging.getLogger(__name__)


class WorldSimulation:
    """Main simulation coordinating the earth and all countries"""

    def __init__(self, earth: Optional[Earth] = None, countries: Iterable[Country] = (),
                 catalog: Optional[Catalog] = None, store=None, earth_id: str = "earth"):
        self.earth = earth if earth is not None else Earth()
        self.countries: Dict[str, Country] = {}
        for country in countries:
            if country.country_code in self.countries:
                raise ValueError(f"Duplicate country code '{country.country_code}'")
            self.countries[country.country_code] = country
        self.catalog = catalog if catalog is not None else default_catalog()
        self.store = store
        self.earth_id = earth_id

        # Log kept in memory when no store is attached
        self.log: List[str] = []

        if self.store is not None:
            self.store.save_earth(self.earth_id, self.earth)
            self.store.save_countries(self.earth_id, list(self.countries.values()))

    @classmethod
    def from_store(cls, store, earth_id: str = "earth", catalog: Optional[Catalog] = None) -> "WorldSimulation":
        """Resume a simulation saved in ``store``"""
        earth = store.load_earth(earth_id)
        if earth is None:
            raise KeyError(f"No earth '{earth_id}' in store")
        return cls(earth, store.load_countries(earth_id), catalog, store, earth_id)

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def country(self, country_code: str) -> Country:
        if country_code not in self.countries:
            raise KeyError(f"No country with code '{country_code}'")
        return self.countries[country_code]

    @property
    def aggregate_emissions(self) -> float:
        """Sum of all countries' yearly emissions (GtC)"""
        return float(sum(c.yearly_emissions for c in self.countries.values()))

    def log_message(self, message: str):
        if self.store is not None:
            self.store.log_message(self.earth_id, message)
        else:
            self.log.append(message)

    def last_log_messages(self, max_entries: int = 20) -> List[str]:
        """Newest first"""
        if self.store is not None:
            return self.store.last_log_messages(self.earth_id, max_entries)
        return list(reversed(self.log))[:max_entries]

    # ------------------------------------------------------------------ #
    # Scheduling
    # ------------------------------------------------------------------ #
    def tick_earth(self) -> Earth:
        """Advance the earth one year using the emissions of all countries"""
        total = self.aggregate_emissions
        logger.debug(f"Earth {self.earth_id} vitals before: {self.earth.debug_vitals}")
        self.earth = self.earth.tick(total)
        logger.debug(f"Earth {self.earth_id} vitals after: {self.earth.debug_vitals}")

        if self.store is not None:
            self.store.save_earth(self.earth_id, self.earth)
        self.log_message(f"Welcome to {self.earth.current_year}!")
        return self.earth

    def tick_countries(self):
        """Advance every country one tick in the current earth"""
        self.countries = {code: c.tick(self.earth) for code, c in self.countries.items()}
        if self.store is not None:
            self.store.save_countries(self.earth_id, list(self.countries.values()))

    def run(self, years: int) -> pd.DataFrame:
        """
        Run the world for a number of years.

        Each year the earth advances once, then the countries tick
        TICKS_PER_YEAR times in the new earth.

        Returns:
            DataFrame with one row per simulated year
        """
        results = [self._year_row()]
        for _ in range(years):
            self.tick_earth()
            for _ in range(TICKS_PER_YEAR):
                self.tick_countries()
            results.append(self._year_row())
            logger.info(f"Year {self.earth.current_year}: T={self.earth.current_temperature:.2f}°C, "
                        f"CO2={self.earth.current_concentration:.1f} ppm, "
                        f"emissions={self.aggregate_emissions:.2f} GtC")

        return pd.DataFrame(results)

    def _year_row(self) -> dict:
        countries = list(self.countries.values())
        wealth = np.array([wealth_per_capita(c) for c in countries]) if countries else np.zeros(1)
        per_capita = np.array([emissions_per_capita(c) for c in countries]) if countries else np.zeros(1)
        return {
            "Year": self.earth.current_year,
            "Temperature": self.earth.current_temperature,
            "Temperature_Rise": self.earth.temperature_rise,
            "Concentration": self.earth.current_concentration,
            "Global_Emissions": self.aggregate_emissions,
            "Mean_Wealth_Per_Capita": float(np.mean(wealth)),
            "Mean_Emissions_Per_Capita": float(np.mean(per_capita)),
            "Total_Active_Policies": sum(len(c.active_policies) for c in countries),
        }

    def country_frame(self) -> pd.DataFrame:
        """Current state of every country, one row per country"""
        return pd.DataFrame([{
            "Country": c.name,
            "Code": c.country_code,
            "Emissions": c.yearly_emissions,
            "GDP": c.gdp,
            "Population": c.population,
            "Budget": c.budget_surplus,
            "Gini": c.gini_rating,
            "EDI": c.education_development_index,
            "Country_Points": c.country_points,
            "Active_Policies": ", ".join(p.name for p in c.active_policies),
        } for c in self.countries.values()])

    # ------------------------------------------------------------------ #
    # Player actions
    # ------------------------------------------------------------------ #
    def _commit(self, result: ActionResult, log_line: str) -> ActionResult:
        if result.ok:
            self.countries[result.country.country_code] = result.country
            if self.store is not None:
                self.store.save_country(self.earth_id, result.country)
            self.log_message(log_line)
        return result

    def available_commands(self, country_code: str) -> List[CountryCommand]:
        return self.country(country_code).available_commands(self.catalog)

    def execute_command(self, country_code: str, command: CountryCommand) -> ActionResult:
        """Execute a command submitted for a country.

        Raises:
            CommandNotAvailable: ``command`` is not exactly one of the
                country's available commands (e.g. a tampered cost)
        """
        country = self.country(country_code)
        if not self.catalog.is_available_command(country, command):
            logger.warning(f"Rejected command '{command.name}' for {country.name}: not an available command")
            raise CommandNotAvailable(f"Command '{command.name}' is not available to {country.name}")

        result = country.execute_command(command, self.earth)
        return self._commit(result, f"{country.name} executed command '{command.name}'.")

    def execute_command_named(self, country_code: str, name: str) -> ActionResult:
        return self.execute_command(country_code, self.catalog.command_named(name))

    def enact_policy(self, country_code: str, policy_name: str) -> ActionResult:
        country = self.country(country_code)
        policy = self.catalog.policy_named(policy_name)
        if not self.catalog.is_available_policy(country, policy):
            logger.warning(f"Rejected policy '{policy.name}' for {country.name}: condition not met")
            return ActionResult(False, country, f"Policy '{policy.name}' is not available to {country.name}.")

        result = country.enact_policy(policy)
        return self._commit(result, f"{country.name} enacted policy '{policy.name}'.")

    def _policy_for_action(self, country: Country, policy_name: str):
        active = country.active_policy_named(policy_name)
        if active is not None:
            return active
        try:
            return self.catalog.policy_named(policy_name)
        except CatalogLookupFailure:
            logger.warning(f"{country.name} referenced unknown policy '{policy_name}'")
            raise

    def revoke_policy(self, country_code: str, policy_name: str) -> ActionResult:
        country = self.country(country_code)
        policy = self._policy_for_action(country, policy_name)
        result = country.revoke_policy(policy)
        return self._commit(result, f"{country.name} revoked policy '{policy.name}'.")

    def level_up_policy(self, country_code: str, policy_name: str) -> ActionResult:
        country = self.country(country_code)
        policy = self._policy_for_action(country, policy_name)
        result = country.level_up_policy(policy)
        return self._commit(result, f"{country.name} levelled up policy '{policy.name}'.")
