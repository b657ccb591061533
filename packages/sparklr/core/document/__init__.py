"""Editor document model, validation, defaults and pure document operations."""

from sparklr.core.document.defaults import (
    AUTHORING_CANVAS,
    BEHAVIOR_REGISTRY,
    DEFAULT_BEHAVIOR_PRIORITY,
    default_behavior,
    default_editor_config,
    default_particle_config,
    default_velocity_config,
)
from sparklr.core.document.models import (
    BehaviorConfig,
    EditorConfig,
    EmitterConfig,
    ParticleConfig,
    Range,
    SystemConfig,
    Vec2,
)
from sparklr.core.document.validation import ValidationResult, validate_config
from sparklr.core.document.viewport import (
    ABSOLUTE_COORDINATE_FIELDS,
    fit_to_viewport,
    recentre_emitters,
)

__all__ = [
    # Models
    "EditorConfig",
    "SystemConfig",
    "EmitterConfig",
    "BehaviorConfig",
    "ParticleConfig",
    "Range",
    "Vec2",
    # Defaults
    "AUTHORING_CANVAS",
    "BEHAVIOR_REGISTRY",
    "DEFAULT_BEHAVIOR_PRIORITY",
    "default_behavior",
    "default_editor_config",
    "default_particle_config",
    "default_velocity_config",
    # Validation
    "ValidationResult",
    "validate_config",
    # Viewport
    "ABSOLUTE_COORDINATE_FIELDS",
    "fit_to_viewport",
    "recentre_emitters",
]
