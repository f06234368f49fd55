"""
Scoring presets
Named weight bundles and the merge that applies them to a preference vector.
"""

from datetime import datetime, timezone
from typing import Optional, Union

from propscore.errors import InvalidConfigurationError
from propscore.schemas.preferences import (
    PresetName,
    PresetOverride,
    ScoringPreferences,
)
from .factors import DEFAULT_SCORING_FACTORS


def _override(factor_id: str, weight: float, enabled: bool) -> PresetOverride:
    return PresetOverride(id=factor_id, weight=weight, enabled=enabled)


SCORING_PRESETS: dict[str, list[PresetOverride]] = {
    PresetName.FAMILY.value: [
        _override("school_rating", 10, True),
        _override("crime_score", 10, True),
        _override("bedrooms", 9, True),
        _override("pool", 7, True),
        _override("lot_size", 6, True),
    ],
    PresetName.INVESTOR.value: [
        _override("price_vs_budget", 10, True),
        _override("rental_estimate", 10, True),
        _override("appreciation", 9, True),
        _override("hoa_fee", 8, True),
        _override("school_rating", 3, False),
    ],
    PresetName.RETIREE.value: [
        _override("walk_score", 9, True),
        _override("transit_score", 8, True),
        _override("crime_score", 10, True),
        _override("bedrooms", 4, True),
        _override("school_rating", 1, False),
    ],
    PresetName.FIRST_TIME.value: [
        _override("price_vs_budget", 10, True),
        _override("commute_time", 8, True),
        _override("hoa_fee", 7, True),
        _override("year_built", 6, True),
    ],
    PresetName.LUXURY.value: [
        _override("sqft", 9, True),
        _override("lot_size", 8, True),
        _override("pool", 9, True),
        _override("price_vs_budget", 3, True),
    ],
}


def default_preferences(user_id: str = "anonymous") -> ScoringPreferences:
    """Fresh preference vector holding the default factor set"""
    return ScoringPreferences(
        id=f"pref_{user_id}",
        user_id=user_id,
        factors=[f.model_copy() for f in DEFAULT_SCORING_FACTORS],
        preset=PresetName.CUSTOM,
    )


def apply_preset(
    preferences: ScoringPreferences,
    overrides: list[PresetOverride],
    preset: Optional[Union[PresetName, str]] = None,
) -> ScoringPreferences:
    """
    Merges preset overrides into a preference vector.

    Left join by factor id: only factors present in both the vector and
    the overrides are updated (weight and/or enabled). Factors are never
    added or removed and their order is preserved.

    Args:
        preferences: Current vector (not modified)
        overrides: Partial factor updates
        preset: Tag recorded on the result (default "custom")

    Returns:
        ScoringPreferences: Merged copy
    """
    by_id = {o.id: o for o in overrides}

    factors = []
    for factor in preferences.factors:
        override = by_id.get(factor.id)
        if override is None:
            factors.append(factor.model_copy())
            continue

        update = {}
        if override.weight is not None:
            update["weight"] = override.weight
        if override.enabled is not None:
            update["enabled"] = override.enabled
        factors.append(factor.model_copy(update=update))

    return preferences.model_copy(update={
        "factors": factors,
        "preset": PresetName(preset or PresetName.CUSTOM).value,
        "updated_at": datetime.now(timezone.utc),
    })


def apply_named_preset(
    preferences: ScoringPreferences, name: Union[PresetName, str]
) -> ScoringPreferences:
    """
    Applies one of the built-in presets.

    Raises:
        InvalidConfigurationError: Unknown preset name
    """
    key = PresetName(name).value if isinstance(name, PresetName) else name
    overrides = SCORING_PRESETS.get(key)
    if overrides is None:
        raise InvalidConfigurationError(
            f"Unknown preset '{name}' (available: {', '.join(SCORING_PRESETS)})"
        )
    return apply_preset(preferences, overrides, preset=key)
