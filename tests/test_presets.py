"""
propscore tests - Presets
"""

import pytest
import sys
sys.path.insert(0, ".")

from propscore.domain.factors import DEFAULT_SCORING_FACTORS
from propscore.domain.presets import (
    SCORING_PRESETS,
    apply_named_preset,
    apply_preset,
    default_preferences,
)
from propscore.errors import InvalidConfigurationError
from propscore.schemas.preferences import PresetOverride, ScoringFactor, ScoringPreferences


class TestApplyPreset:
    """Left-join merge"""

    def setup_method(self):
        self.preferences = ScoringPreferences(
            user_id="u1",
            factors=[
                ScoringFactor(id="pool", name="Pool", weight=0.5, enabled=True),
                ScoringFactor(id="sqft", name="Square Footage", weight=1, enabled=True),
            ],
        )

    def test_only_matching_factor_updated(self):
        result = apply_preset(self.preferences, [PresetOverride(id="pool", weight=2)])

        assert [(f.id, f.weight, f.enabled) for f in result.factors] == [
            ("pool", 2, True),
            ("sqft", 1, True),
        ]

    def test_unknown_override_ids_are_ignored(self):
        result = apply_preset(
            self.preferences,
            [PresetOverride(id="lot_size", weight=9, enabled=True)],
        )

        assert [f.id for f in result.factors] == ["pool", "sqft"]
        assert [f.weight for f in result.factors] == [0.5, 1]

    def test_enabled_only_override(self):
        result = apply_preset(self.preferences, [PresetOverride(id="sqft", enabled=False)])

        sqft = result.factors[1]
        assert sqft.enabled is False
        assert sqft.weight == 1

    def test_input_not_modified(self):
        apply_preset(self.preferences, [PresetOverride(id="pool", weight=2)])

        assert self.preferences.factors[0].weight == 0.5

    def test_preset_tag(self):
        assert apply_preset(self.preferences, []).preset == "custom"
        assert apply_preset(self.preferences, [], preset="luxury").preset == "luxury"

    def test_updated_at_refreshed(self):
        result = apply_preset(self.preferences, [])

        assert result.updated_at >= self.preferences.updated_at
        assert result.created_at == self.preferences.created_at


class TestNamedPresets:
    """Built-in presets"""

    def test_all_presets_available(self):
        assert set(SCORING_PRESETS) == {"family", "investor", "retiree", "first-time", "luxury"}

    def test_family_preset(self):
        result = apply_named_preset(default_preferences("u1"), "family")
        factors = {f.id: f for f in result.factors}

        assert result.preset == "family"
        assert len(result.factors) == len(DEFAULT_SCORING_FACTORS)
        assert factors["school_rating"].weight == 10
        assert factors["lot_size"].enabled is True
        # untouched by the preset
        assert factors["commute_time"].weight == 5

    def test_investor_disables_schools(self):
        result = apply_named_preset(default_preferences(), "investor")
        factors = {f.id: f for f in result.factors}

        assert factors["school_rating"].enabled is False
        assert factors["rental_estimate"].enabled is True

    def test_unknown_preset(self):
        with pytest.raises(InvalidConfigurationError):
            apply_named_preset(default_preferences(), "astronaut")


class TestDefaultPreferences:
    """Default preference vector"""

    def test_defaults(self):
        preferences = default_preferences("buyer_7")

        assert preferences.user_id == "buyer_7"
        assert preferences.preset == "custom"
        assert [f.id for f in preferences.factors] == [f.id for f in DEFAULT_SCORING_FACTORS]

    def test_independent_copies(self):
        preferences = default_preferences()
        preferences.factors[0].weight = 1

        assert DEFAULT_SCORING_FACTORS[0].weight == 5
