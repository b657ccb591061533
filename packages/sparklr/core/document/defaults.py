"""Default documents, particle/velocity presets and the behavior registry."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from pydantic import TypeAdapter

from sparklr.core.document.models import (
    BehaviorConfig,
    EditorConfig,
    ParticleConfig,
    Range,
    VelocityBehavior,
)

# Canvas size examples and imported files are authored against
AUTHORING_CANVAS: tuple[int, int] = (800, 600)

# Priority used when a behavior does not set one
DEFAULT_BEHAVIOR_PRIORITY = 50

FULL_TURN = 6.283185

# Emitter types whose particles move and therefore get a velocity behavior
VELOCITY_EMITTER_TYPES: frozenset[str] = frozenset(
    {"point", "circle", "area", "line", "polygon", "path", "burst", "timed"}
)


def default_editor_config() -> EditorConfig:
    """Return a fresh, empty document with default system settings."""
    return EditorConfig()


def default_particle_config(emitter_type: str | None = None) -> ParticleConfig:
    """Return the default particle config for an emitter type.

    Moving emitter types receive a ``velocity`` behavior so the emitter's
    velocity settings take effect.

    Args:
        emitter_type: Emitter type tag, or None for a bare particle

    Returns:
        New ParticleConfig instance
    """
    behaviors = (
        [VelocityBehavior(priority=5)]
        if emitter_type is not None and emitter_type in VELOCITY_EMITTER_TYPES
        else []
    )
    return ParticleConfig(
        type="sprite",
        texture="default",
        lifetime=Range(min=1.0, max=2.0),
        behaviors=behaviors,
    )


def default_velocity_config(emitter_type: str) -> dict[str, Any]:
    """Return the default radial velocity settings for an emitter type."""
    if emitter_type == "circle":
        angle, speed = (0, FULL_TURN), (100, 200)
    elif emitter_type == "point":
        angle, speed = (0, FULL_TURN), (150, 250)
    elif emitter_type == "area":
        # Upward cone, -45 to 45 degrees
        angle, speed = (-0.785398, 0.785398), (100, 200)
    elif emitter_type == "line":
        angle, speed = (-1.570796, -1.570796), (100, 200)
    elif emitter_type == "burst":
        angle, speed = (0, FULL_TURN), (150, 300)
    else:
        angle, speed = (0, FULL_TURN), (100, 200)

    return {
        "mode": "radial",
        "angle": {"min": angle[0], "max": angle[1]},
        "speed": {"min": speed[0], "max": speed[1]},
    }


@dataclass(frozen=True)
class BehaviorRegistryEntry:
    """Catalog entry describing a behavior type."""

    value: str
    label: str
    category: Literal["Physics", "Visual", "Advanced"]
    default_config: dict[str, Any]


BEHAVIOR_REGISTRY: tuple[BehaviorRegistryEntry, ...] = (
    # Physics
    BehaviorRegistryEntry("velocity", "Velocity", "Physics", {"type": "velocity", "priority": 5}),
    BehaviorRegistryEntry(
        "gravity",
        "Gravity",
        "Physics",
        {"type": "gravity", "force": {"x": 0, "y": 100}, "priority": 6},
    ),
    BehaviorRegistryEntry(
        "drag", "Drag", "Physics", {"type": "drag", "coefficient": 0.95, "priority": 7}
    ),
    BehaviorRegistryEntry(
        "bounds",
        "Bounds",
        "Physics",
        {
            "type": "bounds",
            "mode": "bounce",
            "minX": 0,
            "maxX": 800,
            "minY": 0,
            "maxY": 600,
            "bounceDamping": 0.8,
            "priority": 8,
        },
    ),
    BehaviorRegistryEntry(
        "velocityAcceleration",
        "Velocity Acceleration",
        "Physics",
        {"type": "velocityAcceleration", "strength": 50, "priority": 6},
    ),
    # Visual
    BehaviorRegistryEntry(
        "fade",
        "Fade",
        "Visual",
        {"type": "fade", "startAlpha": 1.0, "endAlpha": 0.0, "easing": "linear", "priority": 15},
    ),
    BehaviorRegistryEntry(
        "scale",
        "Scale",
        "Visual",
        {"type": "scale", "startScale": 1.0, "endScale": 0.5, "easing": "linear", "priority": 16},
    ),
    BehaviorRegistryEntry(
        "rotation",
        "Rotation",
        "Visual",
        {"type": "rotation", "angularVelocity": 1.0, "priority": 17},
    ),
    BehaviorRegistryEntry(
        "color",
        "Color",
        "Visual",
        {
            "type": "color",
            "startColor": 0xFFFFFF,
            "endColor": 0x000000,
            "easing": "linear",
            "priority": 18,
        },
    ),
    BehaviorRegistryEntry(
        "velocityAlign",
        "Velocity Align",
        "Visual",
        {"type": "velocityAlign", "offset": 0, "minSpeed": 0, "priority": 17},
    ),
    BehaviorRegistryEntry(
        "velocityStretch",
        "Velocity Stretch",
        "Visual",
        {
            "type": "velocityStretch",
            "minStretch": 1.0,
            "maxStretch": 3.0,
            "speedRange": {"min": 0, "max": 500},
            "axis": "x",
            "priority": 14,
        },
    ),
    # Advanced
    BehaviorRegistryEntry(
        "keyframe",
        "Keyframe",
        "Advanced",
        {
            "type": "keyframe",
            "property": "alpha",
            "keyframes": [
                {"time": 0, "value": 1, "easing": "linear"},
                {"time": 1, "value": 0, "easing": "linear"},
            ],
            "priority": 20,
        },
    ),
    BehaviorRegistryEntry(
        "proximityLink",
        "Proximity Link",
        "Advanced",
        {
            "type": "proximityLink",
            "maxDistance": 100,
            "lineColor": 0xFFFFFF,
            "lineAlpha": 0.5,
            "priority": 25,
        },
    ),
)

_behavior_adapter: TypeAdapter[BehaviorConfig] = TypeAdapter(BehaviorConfig)


def get_registry_entry(behavior_type: str) -> BehaviorRegistryEntry:
    """Look up a behavior registry entry.

    Raises:
        KeyError: If the behavior type is unknown
    """
    for entry in BEHAVIOR_REGISTRY:
        if entry.value == behavior_type:
            return entry
    raise KeyError(f"Unknown behavior type: {behavior_type}")


def default_behavior(behavior_type: str) -> BehaviorConfig:
    """Build a new behavior model from its registry defaults.

    Example:
        >>> default_behavior("drag").coefficient
        0.95
    """
    entry = get_registry_entry(behavior_type)
    return _behavior_adapter.validate_python(entry.default_config)
