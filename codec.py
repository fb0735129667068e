"""
Serialization of simulation values to and from JSON.

Every value encodes to plain dicts/lists so it can be stored in the state
store or sent to a client. Decoding is lenient about optional fields so that
stored data survives model changes without reseeding:

- a Policy without ``condition`` decodes with the empty condition and one
  without ``category`` decodes as miscellaneous
- a command without ``description`` uses its name, without ``cost`` is free
- unknown fields are ignored

Top-level documents written with ``dumps`` carry a ``schema_version``.
"""

import json
from typing import Any, Callable, Dict

from climate import Earth
from command import CountryCommand
from condition import (And, Empty, EMPTY, HasActivePolicy, Not, Or, RatingAtLeast,
                       RatingAtMost)
from country import Country
from effect import Effect, EffectKind
from errors import DecodeFailure
from policy import Policy, PolicyCategory
from rating import Rating, RatingMetric

SCHEMA_VERSION = 1

# Category values written before the spelling was fixed
_LEGACY_CATEGORIES = {"miscelaneous": PolicyCategory.MISCELLANEOUS}


# ============================================================================
# ENCODING
# ============================================================================

def encode_rating(rating: Rating) -> str:
    return rating.label


def encode_condition(condition) -> Dict[str, Any]:
    if isinstance(condition, Empty):
        return {"kind": "empty"}
    if isinstance(condition, And):
        return {"kind": "and", "conditions": [encode_condition(c) for c in condition.conditions]}
    if isinstance(condition, Or):
        return {"kind": "or", "conditions": [encode_condition(c) for c in condition.conditions]}
    if isinstance(condition, Not):
        return {"kind": "not", "condition": encode_condition(condition.condition)}
    if isinstance(condition, RatingAtMost):
        return {"kind": "at_most", "metric": condition.metric.value, "ranking": encode_rating(condition.ranking)}
    if isinstance(condition, RatingAtLeast):
        return {"kind": "at_least", "metric": condition.metric.value, "ranking": encode_rating(condition.ranking)}
    if isinstance(condition, HasActivePolicy):
        return {"kind": "has_active_policy", "policy_name": condition.policy_name}
    raise TypeError(f"Cannot encode condition {condition!r}")


def encode_effect(effect: Effect) -> Dict[str, Any]:
    data = {"kind": effect.kind.value, "amount": effect.amount}
    if effect.kind == EffectKind.EMISSIONS_TOWARDS_TARGET:
        data["target"] = effect.target
    return data


def encode_policy(policy: Policy) -> Dict[str, Any]:
    return {
        "name": policy.name,
        "description": policy.description,
        "level": policy.level,
        "effects": [encode_effect(e) for e in policy.effects],
        "base_cost": policy.base_cost,
        "condition": encode_condition(policy.condition),
        "category": policy.category.value,
    }


def encode_command(command: CountryCommand) -> Dict[str, Any]:
    return {
        "name": command.name,
        "description": command.description,
        "effects": [encode_effect(e) for e in command.effects],
        "custom_apply_message": command.custom_apply_message,
        "cost": command.cost,
        "condition": encode_condition(command.condition),
    }


def encode_country(country: Country) -> Dict[str, Any]:
    return {
        "name": country.name,
        "country_code": country.country_code,
        "base_yearly_emissions": country.base_yearly_emissions,
        "yearly_emissions": country.yearly_emissions,
        "base_gdp": country.base_gdp,
        "gdp": country.gdp,
        "population": country.population,
        "active_policies": [encode_policy(p) for p in country.active_policies],
        "country_points": country.country_points,
        "budget_surplus": country.budget_surplus,
        "gini_rating": country.gini_rating,
        "education_development_index": country.education_development_index,
    }


def encode_earth(earth: Earth) -> Dict[str, Any]:
    return {
        "current_year": earth.current_year,
        "current_temperature": earth.current_temperature,
        "current_concentration": earth.current_concentration,
    }


# ============================================================================
# DECODING
# ============================================================================

def _decode_rating(value: str) -> Rating:
    try:
        return Rating.from_label(value)
    except KeyError:
        raise DecodeFailure(f"Unknown rating '{value}'")


def _decode_condition(data: Dict[str, Any]):
    kind = data["kind"]
    if kind == "empty":
        return EMPTY
    if kind == "and":
        return And([_decode_condition(c) for c in data.get("conditions", [])])
    if kind == "or":
        return Or([_decode_condition(c) for c in data.get("conditions", [])])
    if kind == "not":
        return Not(_decode_condition(data["condition"]))
    if kind == "at_most":
        return RatingAtMost(RatingMetric(data["metric"]), _decode_rating(data["ranking"]))
    if kind == "at_least":
        return RatingAtLeast(RatingMetric(data["metric"]), _decode_rating(data["ranking"]))
    if kind == "has_active_policy":
        return HasActivePolicy(data["policy_name"])
    raise DecodeFailure(f"Unknown condition kind '{kind}'")


def _decode_effect(data: Dict[str, Any]) -> Effect:
    return Effect(EffectKind(data["kind"]), data["amount"], data.get("target", 0.0))


def _decode_category(value) -> PolicyCategory:
    if value is None:
        return PolicyCategory.MISCELLANEOUS
    if value in _LEGACY_CATEGORIES:
        return _LEGACY_CATEGORIES[value]
    return PolicyCategory(value)


def _decode_policy(data: Dict[str, Any]) -> Policy:
    condition = data.get("condition")
    return Policy(
        name=data["name"],
        description=data.get("description") or data["name"],
        level=int(data.get("level", 1)),
        effects=[_decode_effect(e) for e in data["effects"]],
        base_cost=int(data["base_cost"]),
        condition=EMPTY if condition is None else _decode_condition(condition),
        category=_decode_category(data.get("category")),
    )


def _decode_command(data: Dict[str, Any]) -> CountryCommand:
    condition = data.get("condition")
    return CountryCommand(
        name=data["name"],
        description=data.get("description") or data["name"],
        effects=[_decode_effect(e) for e in data["effects"]],
        custom_apply_message=data.get("custom_apply_message"),
        cost=int(data.get("cost", 0)),
        condition=EMPTY if condition is None else _decode_condition(condition),
    )


def _decode_country(data: Dict[str, Any]) -> Country:
    return Country(
        name=data["name"],
        country_code=data["country_code"],
        base_yearly_emissions=float(data["base_yearly_emissions"]),
        yearly_emissions=float(data.get("yearly_emissions", data["base_yearly_emissions"])),
        base_gdp=float(data["base_gdp"]),
        gdp=float(data.get("gdp", data["base_gdp"])),
        population=int(data["population"]),
        active_policies=[_decode_policy(p) for p in data.get("active_policies", [])],
        country_points=int(data.get("country_points", 1)),
        budget_surplus=float(data["budget_surplus"]),
        gini_rating=float(data["gini_rating"]),
        education_development_index=float(data["education_development_index"]),
    )


def _decode_earth(data: Dict[str, Any]) -> Earth:
    return Earth(
        current_year=int(data["current_year"]),
        current_temperature=float(data["current_temperature"]),
        current_concentration=float(data["current_concentration"]),
    )


def _guarded(kind: str, decoder: Callable, data):
    try:
        return decoder(data)
    except DecodeFailure:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        raise DecodeFailure(f"Could not decode {kind}: {e!r}") from e


def decode_rating(value: str) -> Rating:
    return _guarded("rating", _decode_rating, value)


def decode_condition(data: Dict[str, Any]):
    return _guarded("condition", _decode_condition, data)


def decode_effect(data: Dict[str, Any]) -> Effect:
    return _guarded("effect", _decode_effect, data)


def decode_policy(data: Dict[str, Any]) -> Policy:
    return _guarded("policy", _decode_policy, data)


def decode_command(data: Dict[str, Any]) -> CountryCommand:
    return _guarded("command", _decode_command, data)


def decode_country(data: Dict[str, Any]) -> Country:
    return _guarded("country", _decode_country, data)


def decode_earth(data: Dict[str, Any]) -> Earth:
    return _guarded("earth", _decode_earth, data)


# ============================================================================
# DOCUMENTS
# ============================================================================

_ENCODERS = {
    "condition": encode_condition,
    "effect": encode_effect,
    "policy": encode_policy,
    "command": encode_command,
    "country": encode_country,
    "earth": encode_earth,
}

_DECODERS = {
    "condition": decode_condition,
    "effect": decode_effect,
    "policy": decode_policy,
    "command": decode_command,
    "country": decode_country,
    "earth": decode_earth,
}


def dumps(kind: str, value) -> str:
    """Encode a value as a versioned JSON document"""
    document = {"schema_version": SCHEMA_VERSION, "type": kind, "data": _ENCODERS[kind](value)}
    return json.dumps(document, sort_keys=True)


def loads(kind: str, text: str):
    """Decode a JSON document written by ``dumps``.

    Documents without an envelope (bare encoded values) are accepted as
    version 1.
    """
    try:
        document = json.loads(text)
    except (TypeError, ValueError) as e:
        raise DecodeFailure(f"Invalid JSON for {kind}: {e}") from e

    if not isinstance(document, dict):
        raise DecodeFailure(f"Expected a JSON object for {kind}")

    if "schema_version" not in document:
        return _DECODERS[kind](document)

    version = document["schema_version"]
    if not isinstance(version, int) or version > SCHEMA_VERSION:
        raise DecodeFailure(f"Unsupported schema version {version!r} for {kind}")
    if document.get("type", kind) != kind:
        raise DecodeFailure(f"Expected a {kind} document, got {document.get('type')!r}")
    return _DECODERS[kind](document.get("data"))
