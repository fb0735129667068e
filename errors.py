"""
Error kinds raised by the simulation.

Ordinary rule violations (not enough points, category full, policy not
enacted) are not errors: they come back as an ``ActionResult`` with
``ok=False``. The exceptions below are faults that the caller cannot fix by
trying again with the same input.
"""


class SimulationError(Exception):
    """Base class for faults raised by the simulation"""


class CatalogLookupFailure(SimulationError, KeyError):
    """A policy or command name does not exist in the catalog"""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"No {kind} named '{name}' in catalog")

    def __str__(self) -> str:
        return self.args[0]


class DecodeFailure(SimulationError, ValueError):
    """Stored or submitted state could not be decoded"""


class CommandNotAvailable(SimulationError):
    """A submitted command is not one of the country's available commands"""
