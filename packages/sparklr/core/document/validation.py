"""Structural validation for editor documents.

The validator walks the whole document and collects every defect instead of
stopping at the first one, so a single pass surfaces all problems. It never
raises: results are returned as data and callers decide whether to block
(e.g. refuse to hand the config to the runtime) or merely warn.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sparklr.core.document.models import (
    MAX_PARTICLES_RANGE,
    RATELESS_EMITTER_TYPES,
    EditorConfig,
)

logger = logging.getLogger(__name__)


class ValidationResult(BaseModel):
    """Result of validating a document."""

    model_config = ConfigDict(extra="forbid")

    valid: bool
    errors: list[str] = Field(default_factory=list)


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _missing(value: Any) -> bool:
    # Any mapping, even an empty one, counts as present
    return value is None or (not isinstance(value, Mapping) and not value)


def _validate_system(system: Any, errors: list[str]) -> None:
    if _missing(system):
        errors.append("Missing system configuration")
        return

    max_particles = system.get("maxParticles") if isinstance(system, Mapping) else None
    low, high = MAX_PARTICLES_RANGE
    if not _is_number(max_particles) or not low <= max_particles <= high:
        errors.append(f"maxParticles must be between {low} and {high}")


def _validate_emitter(index: int, emitter: Any, errors: list[str]) -> None:
    prefix = f"Emitter {index}"
    if not isinstance(emitter, Mapping):
        errors.append(f"{prefix}: Not a mapping")
        return

    emitter_type = emitter.get("type")
    if not emitter_type:
        errors.append(f"{prefix}: Missing type")

    position = emitter.get("position")
    if (
        not isinstance(position, Mapping)
        or not _is_number(position.get("x"))
        or not _is_number(position.get("y"))
    ):
        errors.append(f"{prefix}: Invalid position")

    rate_required = not (isinstance(emitter_type, str) and emitter_type in RATELESS_EMITTER_TYPES)
    if rate_required:
        rate = emitter.get("emissionRate")
        if not _is_number(rate) or rate < 0:
            errors.append(f"{prefix}: Invalid emissionRate")

    if emitter_type == "burst":
        burst_count = emitter.get("burstCount")
        if not _is_number(burst_count) or burst_count < 1:
            errors.append(f"{prefix}: burstCount must be a number >= 1")

    particle = emitter.get("particle")
    if _missing(particle):
        errors.append(f"{prefix}: Missing particle configuration")
        return

    if not isinstance(particle, Mapping) or not particle.get("type"):
        errors.append(f"{prefix}: Missing particle type")
    # Falsy check: a lifetime of 0 counts as missing
    if not isinstance(particle, Mapping) or not particle.get("lifetime"):
        errors.append(f"{prefix}: Missing particle lifetime")


def validate_config(config: EditorConfig | Mapping[str, Any]) -> ValidationResult:
    """Validate an editor document.

    Accepts either an ``EditorConfig`` or a raw mapping in wire format
    (camelCase keys), such as a freshly parsed YAML document.

    Args:
        config: Document to validate

    Returns:
        ValidationResult listing every error found (empty when valid)

    Example:
        >>> result = validate_config({"system": {"maxParticles": 0}, "emitters": []})
        >>> result.valid
        False
        >>> result.errors
        ['maxParticles must be between 1 and 10000']
    """
    data: Mapping[str, Any]
    if isinstance(config, BaseModel):
        data = config.model_dump(by_alias=True)
    elif isinstance(config, Mapping):
        data = config
    else:
        data = {}

    errors: list[str] = []
    _validate_system(data.get("system"), errors)

    emitters = data.get("emitters")
    if not isinstance(emitters, list):
        errors.append("Emitters must be an array")
    else:
        # An empty emitter list is valid; it simply renders nothing
        for index, emitter in enumerate(emitters):
            _validate_emitter(index, emitter, errors)

    if errors:
        logger.debug(f"Validation found {len(errors)} error(s)")

    return ValidationResult(valid=not errors, errors=errors)
