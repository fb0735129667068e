import math
from dataclasses import dataclass, field, replace
from typing import List, Tuple

import numpy as np

from effect import Effect, describe_effects


@dataclass(frozen=True)
class ClimateParams:
    """Constants for the single-box climate model (based on the Very Simple Climate Model)."""

    base_year: int = 2015
    base_concentration_ppm: float = 399.4
    base_temperature: float = 14.65  # Global average °C
    base_global_emissions_gtc: float = 10.34

    # Linearised concentration response, averaged over 5 years
    concentration_slope: float = 1.1612
    concentration_offset: float = 1.99999
    concentration_averaging_years: float = 5.0

    # °C per doubling of concentration
    climate_sensitivity: float = 3.0


DEFAULT_PARAMS = ClimateParams()


# ============================================================================
# DAMAGE BANDS
# (low, high, GDP %/year, Gini points/year, budget points/year) for a
# temperature rise (°C above base) in [low, high). Rises above the last band
# scale with the rise itself, see Earth.current_effects_of_temperature_change.
# ============================================================================

DAMAGE_BANDS: List[Tuple[float, float, float, float, float]] = [
    (0.0, 0.2, -0.1, 0.0, 0.0),
    (0.2, 0.4, -0.5, 0.0, 0.0),
    (0.4, 1.0, -1.0, 0.0, 0.0),
    (1.0, 1.5, -1.5, 0.02, 0.0),
    (1.5, 1.75, -2.0, 0.02, -0.01),
    (1.75, 2.0, -2.5, 0.05, -0.02),
    (2.0, 3.0, -5.0, 0.1, -0.02),
    (3.0, 5.0, -10.0, 0.15, -0.04),
]
EXTREME_WARMING_THRESHOLD = 5.0


@dataclass(frozen=True)
class Earth:
    """Shared climate state: year, temperature and carbon concentration.

    The state is a pure function of the yearly global emissions fed to
    ``tick`` since the base year. All operations return a new Earth.
    """
    current_year: int = DEFAULT_PARAMS.base_year
    current_temperature: float = DEFAULT_PARAMS.base_temperature
    current_concentration: float = DEFAULT_PARAMS.base_concentration_ppm
    params: ClimateParams = field(default=DEFAULT_PARAMS, compare=False, repr=False)

    @classmethod
    def from_params(cls, params: ClimateParams) -> "Earth":
        return cls(params.base_year, params.base_temperature, params.base_concentration_ppm, params)

    # ------------------------------------------------------------------ #
    # Core physics
    # ------------------------------------------------------------------ #
    def concentration_increase(self, yearly_emission_gtc: float) -> float:
        """ppm change caused by a year of global emissions (GtC)"""
        p = self.params
        return (p.concentration_slope * yearly_emission_gtc - p.concentration_offset) / p.concentration_averaging_years

    def temperature_increase(self, new_concentration: float, old_concentration: float) -> float:
        """°C change for a change in concentration (doubling adds climate_sensitivity °C)"""
        if new_concentration <= 0 or old_concentration <= 0:
            raise ValueError(
                f"Concentration must stay positive (old={old_concentration}, new={new_concentration})"
            )
        return math.log2(new_concentration / old_concentration) * self.params.climate_sensitivity

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #
    @property
    def temperature_rise(self) -> float:
        """°C above the base year temperature"""
        return self.current_temperature - self.params.base_temperature

    def tick(self, yearly_emission: float) -> "Earth":
        """Advance one year given the aggregate yearly emissions (GtC) of all countries"""
        new_concentration = self.current_concentration + self.concentration_increase(yearly_emission)
        delta_temperature = self.temperature_increase(new_concentration, self.current_concentration)
        return replace(
            self,
            current_year=self.current_year + 1,
            current_concentration=new_concentration,
            current_temperature=self.current_temperature + delta_temperature,
        )

    def forecast(self, to_year: int, yearly_emissions: float) -> "Earth":
        """Earth in ``to_year`` assuming constant yearly emissions"""
        if to_year < self.current_year:
            raise ValueError(f"Cannot forecast to {to_year}, earth is already in {self.current_year}")

        simulated = self
        for _ in range(self.current_year, to_year):
            simulated = simulated.tick(yearly_emissions)
        return simulated

    def forecast_temperature(self, to_year: int, yearly_emissions: float) -> float:
        return self.forecast(to_year, yearly_emissions).current_temperature

    def forecast_series(self, to_year: int, yearly_emissions: float) -> List["Earth"]:
        """One Earth per year from the current year up to (not including) ``to_year``"""
        if to_year < self.current_year:
            raise ValueError(f"Cannot forecast to {to_year}, earth is already in {self.current_year}")

        series = []
        simulated = self
        for _ in range(self.current_year, to_year):
            series.append(simulated)
            simulated = simulated.tick(yearly_emissions)
        return series

    @property
    def current_effects_of_temperature_change(self) -> List[Effect]:
        """Adverse effects of warming; more severe as the temperature rises.

        A temperature below the base year temperature has no effect.
        """
        rise = self.temperature_rise

        if rise >= EXTREME_WARMING_THRESHOLD:
            return [Effect.extra_gdp(-rise * 0.25),
                    Effect.extra_gini(rise * 0.075),
                    Effect.extra_budget(-rise * 0.01)]

        for low, high, gdp, gini, budget in DAMAGE_BANDS:
            if low <= rise < high:
                effects = [Effect.extra_gdp(gdp)]
                if gini:
                    effects.append(Effect.extra_gini(gini))
                if budget:
                    effects.append(Effect.extra_budget(budget))
                return effects

        return []

    @property
    def effect_description(self) -> str:
        return describe_effects(self.current_effects_of_temperature_change)

    @property
    def debug_vitals(self) -> str:
        return (f"currentYear: {self.current_year}, currentConcentration: {self.current_concentration}, "
                f"currentTemperature: {self.current_temperature}")


def damage_table() -> np.ndarray:
    """Damage bands as an array (columns: low, high, gdp, gini, budget)"""
    return np.array(DAMAGE_BANDS)
