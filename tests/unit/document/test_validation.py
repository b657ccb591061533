"""Tests for document validation."""

from __future__ import annotations

import pytest

from sparklr.core.document.models import EditorConfig, ParticleConfig, PointEmitter, Vec2
from sparklr.core.document.validation import ValidationResult, validate_config
from sparklr.core.formats.swizzle.transform import from_text


def _doc(*emitters: dict, max_particles=1000) -> dict:
    return {"system": {"maxParticles": max_particles}, "emitters": list(emitters)}


class TestSystemValidation:
    """Tests for system-level checks."""

    def test_valid_document(self, sample_config: EditorConfig) -> None:
        """A complete document has no errors."""
        result = validate_config(sample_config)
        assert result == ValidationResult(valid=True, errors=[])

    def test_empty_emitters_is_valid(self) -> None:
        """A document without emitters is valid."""
        assert validate_config(_doc()).valid is True

    @pytest.mark.parametrize("value", [0, -5, 10001, "many", True, None])
    def test_max_particles_out_of_range(self, value) -> None:
        """maxParticles outside 1..10000 is reported."""
        result = validate_config(_doc(max_particles=value))
        assert result.valid is False
        assert result.errors == ["maxParticles must be between 1 and 10000"]

    @pytest.mark.parametrize("value", [1, 10000, 2500.5])
    def test_max_particles_bounds_inclusive(self, value) -> None:
        """Both range bounds are accepted."""
        assert validate_config(_doc(max_particles=value)).valid is True

    def test_missing_system(self) -> None:
        """A document without system settings is reported."""
        result = validate_config({"emitters": []})
        assert result.errors == ["Missing system configuration"]

    def test_empty_system_is_present(self) -> None:
        """An empty system mapping is checked for maxParticles, not reported missing."""
        result = validate_config({"system": {}, "emitters": []})
        assert result.errors == ["maxParticles must be between 1 and 10000"]

    def test_emitters_not_a_list(self) -> None:
        """A non-list emitters value is reported."""
        result = validate_config({"system": {"maxParticles": 10}, "emitters": {"a": 1}})
        assert result.errors == ["Emitters must be an array"]


class TestEmitterValidation:
    """Tests for per-emitter checks."""

    def test_missing_particle(self, raw_emitter: dict) -> None:
        """An emitter without particle configuration is reported."""
        del raw_emitter["particle"]
        result = validate_config(_doc(raw_emitter))
        assert result.valid is False
        assert "Emitter 0: Missing particle configuration" in result.errors

    def test_empty_particle_is_present(self, raw_emitter: dict) -> None:
        """An empty particle mapping reports its missing fields, not a missing particle."""
        raw_emitter["particle"] = {}
        result = validate_config(_doc(raw_emitter))
        assert result.errors == [
            "Emitter 0: Missing particle type",
            "Emitter 0: Missing particle lifetime",
        ]

    def test_boolean_burst_count_from_import(self) -> None:
        """A YAML boolean burstCount survives import and fails validation."""
        text = (
            "emitters:\n"
            "  - type: burst\n"
            "    position: {x: 0, y: 0}\n"
            "    burstCount: true\n"
            "    particle: {type: sprite, lifetime: 1}\n"
        )
        result = validate_config(from_text(text))
        assert result.errors == ["Emitter 0: burstCount must be a number >= 1"]

    def test_mistyped_field_from_import_is_reported(self) -> None:
        """Records kept despite a mistyped rate-independent field are still checked."""
        text = (
            "emitters:\n"
            "  - type: point\n"
            "    name: 42\n"
            "    position: {x: 0, y: 0}\n"
            "    emissionRate: 5\n"
            "    particle: {type: sprite, lifetime: 0}\n"
        )
        result = validate_config(from_text(text))
        assert result.errors == ["Emitter 0: Missing particle lifetime"]

    def test_missing_particle_type_and_lifetime(self, raw_emitter: dict) -> None:
        """Particle type and lifetime are both required."""
        raw_emitter["particle"] = {"texture": "spark"}
        result = validate_config(_doc(raw_emitter))
        assert result.errors == [
            "Emitter 0: Missing particle type",
            "Emitter 0: Missing particle lifetime",
        ]

    def test_zero_lifetime_counts_as_missing(self, raw_emitter: dict) -> None:
        """A lifetime of 0 is reported as missing."""
        raw_emitter["particle"]["lifetime"] = 0
        result = validate_config(_doc(raw_emitter))
        assert result.errors == ["Emitter 0: Missing particle lifetime"]

    def test_lifetime_range_is_accepted(self, raw_emitter: dict) -> None:
        """A min/max lifetime range satisfies the lifetime check."""
        raw_emitter["particle"]["lifetime"] = {"min": 1, "max": 2}
        assert validate_config(_doc(raw_emitter)).valid is True

    def test_burst_without_burst_count(self) -> None:
        """Burst emitters need burstCount >= 1."""
        burst = {
            "type": "burst",
            "position": {"x": 0, "y": 0},
            "particle": {"type": "sprite", "lifetime": 1},
        }
        result = validate_config(_doc(burst))
        assert result.errors == ["Emitter 0: burstCount must be a number >= 1"]

        result = validate_config(_doc({**burst, "burstCount": 0}))
        assert result.errors == ["Emitter 0: burstCount must be a number >= 1"]

    def test_burst_with_burst_count_needs_no_rate(self) -> None:
        """A burst emitter with burstCount is valid without emissionRate."""
        burst = {
            "type": "burst",
            "position": {"x": 0, "y": 0},
            "burstCount": 20,
            "particle": {"type": "sprite", "lifetime": 1},
        }
        assert validate_config(_doc(burst)).valid is True

    def test_triggered_needs_no_rate(self) -> None:
        """Triggered emitters are exempt from the emissionRate check."""
        triggered = {
            "type": "triggered",
            "position": {"x": 0, "y": 0},
            "particle": {"type": "sprite", "lifetime": 1},
        }
        assert validate_config(_doc(triggered)).valid is True

    @pytest.mark.parametrize("rate", [-1, "fast", None])
    def test_invalid_emission_rate(self, raw_emitter: dict, rate) -> None:
        """Rate-driven emitters need a non-negative numeric emissionRate."""
        raw_emitter["emissionRate"] = rate
        result = validate_config(_doc(raw_emitter))
        assert result.errors == ["Emitter 0: Invalid emissionRate"]

    def test_zero_emission_rate_is_valid(self, raw_emitter: dict) -> None:
        """A rate of 0 pauses an emitter and is allowed."""
        raw_emitter["emissionRate"] = 0
        assert validate_config(_doc(raw_emitter)).valid is True

    def test_invalid_position(self, raw_emitter: dict) -> None:
        """Positions need numeric x and y."""
        raw_emitter["position"] = {"x": 10}
        result = validate_config(_doc(raw_emitter))
        assert result.errors == ["Emitter 0: Invalid position"]

    def test_collects_every_error(self, raw_emitter: dict) -> None:
        """All defects across the document are reported in one pass."""
        broken = {"particle": {"type": "sprite", "lifetime": 1}}
        result = validate_config(_doc(raw_emitter, broken, max_particles=0))

        assert result.valid is False
        assert result.errors[0] == "maxParticles must be between 1 and 10000"
        assert "Emitter 1: Missing type" in result.errors
        assert "Emitter 1: Invalid position" in result.errors
        assert not any(e.startswith("Emitter 0") for e in result.errors)

    def test_non_mapping_emitter(self) -> None:
        """Scalars in the emitter list are reported."""
        result = validate_config(_doc("point"))
        assert result.errors == ["Emitter 0: Not a mapping"]

    def test_model_with_missing_lifetime(self) -> None:
        """Documents built in code are validated through their wire form."""
        emitter = PointEmitter(
            position=Vec2(x=0, y=0),
            emission_rate=10,
            particle=ParticleConfig(type="sprite"),
        )
        result = validate_config(EditorConfig(emitters=[emitter]))
        assert result.errors == ["Emitter 0: Missing particle lifetime"]
