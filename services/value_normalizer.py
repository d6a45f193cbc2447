"""
Value normalizer - maps legacy free-text recipe values to canonical vocabulary.

Every function follows the same priority order:
exact match -> alias table (case-sensitive, then case-insensitive) ->
keyword/number heuristic where the domain has one -> domain fallback.

None of these functions raise. "No mapping" is expressed by the return value:
None, or the trimmed original text for domains that allow custom values.
"""

import math
import re
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional, Union

from domain.enums import MigrationDomain
from domain.vocabulary import (
    ALL_COFFEE_ORIGINS,
    ALL_FILTERING_TOOLS,
    ALL_GRINDER_MODELS,
    ALL_GRINDER_SETTINGS,
    ALL_PROCESSING_METHODS,
    BOILING_RANGE_MAX,
    COLD_BREW_MAX,
    DEFAULT_GRINDER_SETTING,
    FILTERING_TOOL_KEYWORDS,
    GRINDER_MODEL_ALIASES,
    GRINDER_SETTING_ALIASES,
    IMPLAUSIBLE_TEMPERATURE,
    MAX_GRINDER_SETTING,
    MAX_WATER_TEMPERATURE,
    MIN_GRINDER_SETTING,
    MIN_WATER_TEMPERATURE,
    NEAR_RANGE_MIN,
    ORIGIN_ALIASES,
    PROCESSING_METHOD_ALIASES,
    PROCESSING_METHOD_KEYWORDS,
)

_INTEGER_PATTERN = re.compile(r"-?\d+")
_NUMBER_PATTERN = re.compile(r"-?\d+(?:[.,]\d+)?")

NormalizedValue = Union[str, int, None]


# =============================================================================
# Helpers
# =============================================================================


def _clean(raw: Any) -> Optional[str]:
    """Return the stripped text of a raw value, or None when blank"""
    if raw is None:
        return None
    text = str(raw).strip()
    return text or None


def _lookup_alias(table: Mapping[str, Any], value: str) -> Optional[str]:
    """Exact key lookup first, then a case-insensitive scan of the same table"""
    mapped = table.get(value)
    if mapped is None:
        folded = value.casefold()
        for key, candidate in table.items():
            if key.casefold() == folded:
                mapped = candidate
                break
    if mapped is None:
        return None
    return getattr(mapped, "value", mapped)


def _match_keywords(keyword_table, value: str) -> Optional[str]:
    """First category whose keyword list has a substring of the lower-cased value"""
    lowered = value.lower()
    for category, keywords in keyword_table:
        if any(keyword in lowered for keyword in keywords):
            return category.value
    return None


def _round_half_up(number: float) -> int:
    return int(math.floor(number + 0.5))


def _to_number(raw: Any) -> Optional[float]:
    """Best-effort numeric reading of a raw temperature value"""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, (int, float, Decimal)):
        number = float(raw)
        return None if math.isnan(number) else number
    match = _NUMBER_PATTERN.search(str(raw))
    if not match:
        return None
    try:
        return float(Decimal(match.group(0).replace(",", ".")))
    except (InvalidOperation, ValueError):
        return None


# =============================================================================
# Domain normalizers
# =============================================================================


def normalize_origin(raw: Any) -> Optional[str]:
    """
    Map an origin string to a CoffeeOrigin value.

    Returns None when the origin is blank or matches no canonical country or
    alias; those recipes need manual review.
    """
    value = _clean(raw)
    if value is None:
        return None
    if value in ALL_COFFEE_ORIGINS:
        return value
    return _lookup_alias(ORIGIN_ALIASES, value)


def normalize_processing_method(raw: Any) -> Optional[str]:
    """
    Map a processing method string to a ProcessingMethod value.

    Falls back to keyword containment ("Anaerobic Natural 72h" -> Anaerobic)
    and finally to the trimmed original text, so custom descriptions survive.
    Blank input returns None.
    """
    value = _clean(raw)
    if value is None:
        return None
    if value in ALL_PROCESSING_METHODS:
        return value
    mapped = _lookup_alias(PROCESSING_METHOD_ALIASES, value)
    if mapped:
        return mapped
    return _match_keywords(PROCESSING_METHOD_KEYWORDS, value) or value


def normalize_grinder_model(raw: Any) -> Optional[str]:
    """Map a grinder name to a GrinderModel value; unknown names pass through as custom grinders"""
    value = _clean(raw)
    if value is None:
        return None
    if value in ALL_GRINDER_MODELS:
        return value
    return _lookup_alias(GRINDER_MODEL_ALIASES, value) or value


def clamp_grinder_setting(setting: int) -> str:
    return str(min(max(setting, MIN_GRINDER_SETTING), MAX_GRINDER_SETTING))


def normalize_grinder_setting(raw: Any) -> str:
    """
    Map a grinder setting to a "1".."40" string.

    Descriptive settings ("medium-fine", "french press") go through the alias
    table; otherwise the first embedded integer is used ("Setting 20",
    "20 clicks") and clamped into range. Blank or unreadable input gets the
    medium default "20".
    """
    value = _clean(raw)
    if value is None:
        return DEFAULT_GRINDER_SETTING
    if value in ALL_GRINDER_SETTINGS:
        return value
    mapped = _lookup_alias(GRINDER_SETTING_ALIASES, value)
    if mapped:
        return mapped
    match = _INTEGER_PATTERN.search(value)
    if match:
        return clamp_grinder_setting(int(match.group(0)))
    return DEFAULT_GRINDER_SETTING


def normalize_filtering_tool(raw: Any) -> Optional[str]:
    """
    Map a filter description to a FilteringTool value.

    Keyword lists are checked paper, metal, cloth; the first hit wins.
    Unrecognised descriptions are returned trimmed; blank input returns None.
    """
    value = _clean(raw)
    if value is None:
        return None
    if value in ALL_FILTERING_TOOLS:
        return value
    return _match_keywords(FILTERING_TOOL_KEYWORDS, value) or value


def normalize_water_temperature(raw: Any) -> Optional[int]:
    """
    Map a water temperature (number or text like "93°C") to an integer in 80..100.

    Cold brew readings (<= 30), implausible readings (> 120 or < 0) and
    unreadable values return None and need manual review.
    """
    temperature = _to_number(raw)
    if temperature is None:
        return None
    if MIN_WATER_TEMPERATURE <= temperature <= MAX_WATER_TEMPERATURE:
        return _round_half_up(temperature)
    if MAX_WATER_TEMPERATURE < temperature <= BOILING_RANGE_MAX:
        return MAX_WATER_TEMPERATURE
    if NEAR_RANGE_MIN <= temperature < MIN_WATER_TEMPERATURE:
        return MIN_WATER_TEMPERATURE
    if temperature <= COLD_BREW_MAX:
        return None
    if temperature > IMPLAUSIBLE_TEMPERATURE or temperature < 0:
        return None
    return min(max(_round_half_up(temperature), MIN_WATER_TEMPERATURE), MAX_WATER_TEMPERATURE)


# =============================================================================
# Dispatch
# =============================================================================

_NORMALIZERS = {
    MigrationDomain.ORIGIN: normalize_origin,
    MigrationDomain.PROCESSING_METHOD: normalize_processing_method,
    MigrationDomain.GRINDER_MODEL: normalize_grinder_model,
    MigrationDomain.GRINDER_SETTING: normalize_grinder_setting,
    MigrationDomain.FILTERING_TOOL: normalize_filtering_tool,
    MigrationDomain.WATER_TEMPERATURE: normalize_water_temperature,
}

_CANONICAL_VALUES = {
    MigrationDomain.ORIGIN: frozenset(ALL_COFFEE_ORIGINS),
    MigrationDomain.PROCESSING_METHOD: frozenset(ALL_PROCESSING_METHODS),
    MigrationDomain.GRINDER_MODEL: frozenset(ALL_GRINDER_MODELS),
    MigrationDomain.GRINDER_SETTING: frozenset(ALL_GRINDER_SETTINGS),
    MigrationDomain.FILTERING_TOOL: frozenset(ALL_FILTERING_TOOLS),
}

# Blank values in these fields are optional data, not migration failures
SKIP_BLANK_DOMAINS = frozenset(
    {
        MigrationDomain.GRINDER_MODEL,
        MigrationDomain.FILTERING_TOOL,
        MigrationDomain.WATER_TEMPERATURE,
    }
)


def normalize(domain: MigrationDomain, raw: Any) -> NormalizedValue:
    """Normalize a raw value for the given migration domain"""
    return _NORMALIZERS[MigrationDomain(domain)](raw)


def is_canonical(domain: MigrationDomain, value: Any) -> bool:
    """True when value is a member of the domain's canonical value set"""
    domain = MigrationDomain(domain)
    if value is None:
        return False
    if domain is MigrationDomain.WATER_TEMPERATURE:
        if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
            return False
        return (
            value == int(value)
            and MIN_WATER_TEMPERATURE <= value <= MAX_WATER_TEMPERATURE
        )
    return isinstance(value, str) and value in _CANONICAL_VALUES[domain]


def is_blank(raw: Any) -> bool:
    return _clean(raw) is None
