"""Canvas-resize recentring of emitter coordinates.

When the viewport changes size, every emitter is translated by the movement
of the canvas centre so the authored layout stays centred. Only fields in
absolute canvas space move; shapes stored relative to ``position``
(polygon vertices) and magnitudes (radius, width, height) are left alone.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence

from sparklr.core.document.defaults import AUTHORING_CANVAS
from sparklr.core.document.models import EditorConfig, EmitterConfig, Number, Vec2

logger = logging.getLogger(__name__)

# Emitter type -> fields holding absolute canvas coordinates (besides position).
# A field may hold a single Vec2 or a list of Vec2.
ABSOLUTE_COORDINATE_FIELDS: Mapping[str, tuple[str, ...]] = {
    "line": ("start", "end"),
    "path": ("path", "points"),
}


def _shift_field(value: object, dx: Number, dy: Number) -> object | None:
    """Return a shifted copy of a coordinate field, or None if not a coordinate."""
    if isinstance(value, Vec2):
        return value.shifted(dx, dy)
    if isinstance(value, list) and all(isinstance(p, Vec2) for p in value):
        return [p.shifted(dx, dy) for p in value]
    return None


def recentre_emitters(
    emitters: Sequence[EmitterConfig],
    old_width: Number,
    old_height: Number,
    new_width: Number,
    new_height: Number,
) -> Sequence[EmitterConfig]:
    """Shift emitters so they stay centred after a canvas resize.

    Returns the same sequence object when nothing moves (unchanged canvas
    centre or no emitters); callers compare by identity to skip updates.
    Otherwise returns a new list of new emitter objects; inputs are never
    mutated.

    Args:
        emitters: Emitters in canvas coordinates for the old size
        old_width: Previous canvas width
        old_height: Previous canvas height
        new_width: New canvas width
        new_height: New canvas height

    Returns:
        Emitters in canvas coordinates for the new size

    Example:
        >>> moved = recentre_emitters(emitters, 800, 600, 1000, 800)
        >>> moved[0].position  # (400, 300) -> (500, 400)
    """
    dx = new_width / 2 - old_width / 2
    dy = new_height / 2 - old_height / 2

    if dx == 0 and dy == 0:
        return emitters
    if len(emitters) == 0:
        return emitters

    logger.debug(f"Recentring {len(emitters)} emitters by ({dx}, {dy})")

    recentred: list[EmitterConfig] = []
    for emitter in emitters:
        updates: dict[str, object] = {"position": emitter.position.shifted(dx, dy)}
        for field_name in ABSOLUTE_COORDINATE_FIELDS.get(emitter.type, ()):
            shifted = _shift_field(getattr(emitter, field_name, None), dx, dy)
            if shifted is not None:
                updates[field_name] = shifted
        recentred.append(emitter.model_copy(update=updates))

    return recentred


def fit_to_viewport(
    config: EditorConfig,
    width: Number,
    height: Number,
    authored: tuple[Number, Number] = AUTHORING_CANVAS,
) -> EditorConfig:
    """Recentre a freshly loaded document from its authoring canvas.

    Returns ``config`` itself when no emitter moves.
    """
    emitters = recentre_emitters(config.emitters, authored[0], authored[1], width, height)
    if emitters is config.emitters:
        return config
    return config.model_copy(update={"emitters": emitters})
