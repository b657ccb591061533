"""Editor document model for Swizzle particle configurations.

The document mirrors the YAML file consumed by the Swizzle runtime:

- EditorConfig: root document (system settings + ordered emitters)
- EmitterConfig: discriminated union of the 9 emitter variants
- BehaviorConfig: discriminated union of the 13 behavior variants

All models accept unknown keys (``extra="allow"``) so runtime fields the
editor does not model (``texture``, ``velocity``, ``color``, ...) survive an
import/export cycle unchanged. Attribute names are snake_case; the wire names
are camelCase.

Numbers and booleans are strict, so YAML ``true`` never becomes 1. Emitter
fields outside the minimal import shape (type, position, particle type,
emissionRate) are ``Lenient``: a value that does not fit the declared type is
kept as-is, so the record still loads and the validator can report it. A
behavior that does not match its declared type is kept as its raw mapping.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StrictBool,
    StrictFloat,
    StrictInt,
    TypeAdapter,
    ValidationError,
)
from pydantic.alias_generators import to_camel

Number = StrictInt | StrictFloat

EMITTER_TYPES: tuple[str, ...] = (
    "point",
    "area",
    "circle",
    "line",
    "polygon",
    "path",
    "burst",
    "timed",
    "triggered",
)

# Emitters driven by burst counts or triggers instead of a continuous rate
RATELESS_EMITTER_TYPES: frozenset[str] = frozenset({"burst", "triggered"})

DEFAULT_MAX_PARTICLES = 1000
DEFAULT_AUTO_START = True
MAX_PARTICLES_RANGE: tuple[int, int] = (1, 10000)


class SwizzleModel(BaseModel):
    """Base model: camelCase wire names, unknown keys preserved."""

    model_config = ConfigDict(
        extra="allow",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class Lenient:
    """``Lenient[T]``: validate as ``T``, or keep the raw value when it does not fit.

    Example:
        >>> class Shape(SwizzleModel):
        ...     radius: Lenient[Number | None] = None
        >>> Shape(radius="big").radius
        'big'
        >>> Shape(radius=4).radius
        4
    """

    def __class_getitem__(cls, tp: Any) -> Any:
        adapter: TypeAdapter[Any] = TypeAdapter(tp)

        def _validate(value: Any) -> Any:
            try:
                return adapter.validate_python(value)
            except ValidationError:
                return value

        return Annotated[Any, BeforeValidator(_validate)]


class Vec2(SwizzleModel):
    """2D point or vector."""

    x: Number
    y: Number

    def shifted(self, dx: Number, dy: Number) -> Vec2:
        """Return a new point translated by (dx, dy)."""
        return self.model_copy(update={"x": self.x + dx, "y": self.y + dy})


class Range(SwizzleModel):
    """Inclusive numeric range used for randomized values."""

    min: Number
    max: Number


class SystemConfig(SwizzleModel):
    """Particle system settings.

    ``max_particles`` is not clamped here: out-of-range values are reported by
    the validator rather than rejected at construction.
    """

    max_particles: Number = Field(default=DEFAULT_MAX_PARTICLES, description="Global particle cap")
    auto_start: StrictBool = Field(default=DEFAULT_AUTO_START, description="Start emitting on load")


# ============================================================================
# Behaviors
# ============================================================================


class BehaviorBase(SwizzleModel):
    """Fields shared by every behavior.

    ``priority`` is optional; lower runs first. The default is applied at
    point of use (see ``operations.execution_order``), never persisted.
    """

    priority: Number | None = None


class VelocityBehavior(BehaviorBase):
    type: Literal["velocity"] = "velocity"


class GravityBehavior(BehaviorBase):
    type: Literal["gravity"] = "gravity"
    force: Vec2


class DragBehavior(BehaviorBase):
    type: Literal["drag"] = "drag"
    coefficient: Number


class BoundsBehavior(BehaviorBase):
    type: Literal["bounds"] = "bounds"
    mode: Literal["wrap", "bounce", "die", "clamp"]
    min_x: Number | None = None
    max_x: Number | None = None
    min_y: Number | None = None
    max_y: Number | None = None
    bounce_damping: Number | None = None


class VelocityAccelerationBehavior(BehaviorBase):
    type: Literal["velocityAcceleration"] = "velocityAcceleration"
    strength: Number
    max_speed: Number | None = None


class FadeBehavior(BehaviorBase):
    type: Literal["fade"] = "fade"
    start_alpha: Number
    end_alpha: Number
    easing: str | None = None


class ScaleBehavior(BehaviorBase):
    type: Literal["scale"] = "scale"
    start_scale: Number
    end_scale: Number
    easing: str | None = None


class RotationBehavior(BehaviorBase):
    type: Literal["rotation"] = "rotation"
    angular_velocity: Number
    start_rotation: Number | None = None


class ColorBehavior(BehaviorBase):
    type: Literal["color"] = "color"
    start_color: StrictInt
    end_color: StrictInt
    easing: str | None = None


class VelocityAlignBehavior(BehaviorBase):
    type: Literal["velocityAlign"] = "velocityAlign"
    offset: Number | None = None
    min_speed: Number | None = None


class VelocityStretchBehavior(BehaviorBase):
    type: Literal["velocityStretch"] = "velocityStretch"
    min_stretch: Number
    max_stretch: Number
    speed_range: Range
    thickness: Number | None = None
    axis: Literal["x", "y"] | None = None


class Keyframe(SwizzleModel):
    """Single keyframe: normalized time, target value, optional easing."""

    time: Number
    value: Number
    easing: str | None = None


class KeyframeBehavior(BehaviorBase):
    type: Literal["keyframe"] = "keyframe"
    property: Literal["alpha", "scale", "rotation"]
    keyframes: list[Keyframe] = Field(..., min_length=2)


class ProximityLinkBehavior(BehaviorBase):
    type: Literal["proximityLink"] = "proximityLink"
    max_distance: Number
    line_color: StrictInt | None = None
    line_alpha: Number | None = None


BehaviorConfig = Annotated[
    VelocityBehavior
    | GravityBehavior
    | DragBehavior
    | BoundsBehavior
    | VelocityAccelerationBehavior
    | FadeBehavior
    | ScaleBehavior
    | RotationBehavior
    | ColorBehavior
    | VelocityAlignBehavior
    | VelocityStretchBehavior
    | KeyframeBehavior
    | ProximityLinkBehavior,
    Field(discriminator="type"),
]

# Known behavior, or the raw record when it does not match its declared type
BehaviorEntry = Lenient[BehaviorConfig]


class ParticleConfig(SwizzleModel):
    """Per-particle configuration.

    ``behaviors`` is stored in authoring order; execution order is by
    ascending priority. ``lifetime`` is optional here so that imports stay
    lenient; the validator reports it when missing.
    """

    type: str = Field(..., description="Particle kind, e.g. 'sprite' or 'animated'")
    lifetime: Lenient[Number | Range | None] = None
    behaviors: Lenient[list[BehaviorEntry]] = Field(default_factory=list)


# ============================================================================
# Emitters
# ============================================================================


class EmitterBase(SwizzleModel):
    """Fields shared by every emitter.

    ``position`` is in absolute canvas coordinates.
    """

    position: Vec2
    particle: ParticleConfig
    name: Lenient[str | None] = None
    max_particles: Lenient[Number | None] = None


class RateEmitterBase(EmitterBase):
    """Emitter producing particles at a continuous rate."""

    emission_rate: Number = Field(..., description="Particles per second")


class PointEmitter(RateEmitterBase):
    type: Literal["point"] = "point"


class AreaEmitter(RateEmitterBase):
    """Rectangle centred on ``position``; width/height are dimensions."""

    type: Literal["area"] = "area"
    width: Lenient[Number | None] = None
    height: Lenient[Number | None] = None


class CircleEmitter(RateEmitterBase):
    type: Literal["circle"] = "circle"
    radius: Lenient[Number | None] = None
    inner_radius: Lenient[Number | None] = None
    edge_emit: Lenient[StrictBool | None] = None


class LineEmitter(RateEmitterBase):
    """Segment emitter; ``start``/``end`` are absolute canvas coordinates."""

    type: Literal["line"] = "line"
    start: Lenient[Vec2 | None] = None
    end: Lenient[Vec2 | None] = None
    distribution: Lenient[Literal["uniform", "start", "end", "center"] | None] = None


class PolygonEmitter(RateEmitterBase):
    """Polygon emitter; ``vertices`` are relative to ``position``."""

    type: Literal["polygon"] = "polygon"
    vertices: Lenient[list[Vec2] | None] = None
    edge_emit: Lenient[StrictBool | None] = None


class PathEmitter(RateEmitterBase):
    """Emitter moving along waypoints given in absolute canvas coordinates."""

    type: Literal["path"] = "path"
    path: Lenient[list[Vec2] | None] = None
    points: Lenient[list[Vec2] | None] = None
    path_type: Lenient[Literal["linear", "catmullRom", "bezier"] | None] = None
    auto_start: Lenient[StrictBool | None] = None
    loop: Lenient[StrictBool | None] = None
    speed: Lenient[Number | None] = None
    duration: Lenient[Number | None] = None


class BurstEmitter(EmitterBase):
    type: Literal["burst"] = "burst"
    burst_count: Lenient[Number | None] = None
    burst_interval: Lenient[Number | None] = None
    burst_limit: Lenient[Number | None] = None
    initial_delay: Lenient[Number | None] = None


class TimedEmitter(RateEmitterBase):
    type: Literal["timed"] = "timed"
    emitter_lifetime: Lenient[Number | None] = None
    fade_out: Lenient[StrictBool | None] = None


class TriggeredEmitter(EmitterBase):
    type: Literal["triggered"] = "triggered"
    particles_per_trigger: Lenient[Number | None] = None


EmitterConfig = Annotated[
    PointEmitter
    | AreaEmitter
    | CircleEmitter
    | LineEmitter
    | PolygonEmitter
    | PathEmitter
    | BurstEmitter
    | TimedEmitter
    | TriggeredEmitter,
    Field(discriminator="type"),
]


class EditorConfig(SwizzleModel):
    """Root editor document.

    Emitter order is layer order (first emitter renders first).

    Example:
        >>> config = EditorConfig()
        >>> config.system.max_particles
        1000
        >>> config.emitters
        []
    """

    system: SystemConfig = Field(default_factory=SystemConfig)
    emitters: list[EmitterConfig] = Field(default_factory=list)
