"""Whole-snapshot document operations.

Every function takes an ``EditorConfig`` and returns a new one; inputs are
never mutated. An out-of-range index returns the input snapshot itself, so
callers can detect a no-op by identity.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import TypeAdapter

from sparklr.core.document.defaults import DEFAULT_BEHAVIOR_PRIORITY
from sparklr.core.document.models import (
    BehaviorConfig,
    BehaviorEntry,
    EditorConfig,
    EmitterConfig,
    Number,
)


_emitter_adapter: TypeAdapter[EmitterConfig] = TypeAdapter(EmitterConfig)


def _in_range(items: Sequence[Any], index: int) -> bool:
    return 0 <= index < len(items)


def _with_emitters(config: EditorConfig, emitters: list[EmitterConfig]) -> EditorConfig:
    return config.model_copy(update={"emitters": emitters})


def _behaviors(emitter: EmitterConfig) -> list[BehaviorEntry]:
    # A malformed behaviors value kept from import counts as empty
    behaviors = emitter.particle.behaviors
    return list(behaviors) if isinstance(behaviors, list) else []


def _with_behaviors(emitter: EmitterConfig, behaviors: list[BehaviorEntry]) -> EmitterConfig:
    particle = emitter.particle.model_copy(update={"behaviors": behaviors})
    return emitter.model_copy(update={"particle": particle})


# ============================================================================
# System
# ============================================================================


def set_max_particles(config: EditorConfig, max_particles: Number) -> EditorConfig:
    system = config.system.model_copy(update={"max_particles": max_particles})
    return config.model_copy(update={"system": system})


def set_auto_start(config: EditorConfig, auto_start: bool) -> EditorConfig:
    system = config.system.model_copy(update={"auto_start": auto_start})
    return config.model_copy(update={"system": system})


# ============================================================================
# Emitters
# ============================================================================


def add_emitter(config: EditorConfig, emitter: EmitterConfig) -> EditorConfig:
    """Append an emitter as the top-most layer."""
    return _with_emitters(config, [*config.emitters, emitter])


def update_emitter(
    config: EditorConfig, index: int, updates: Mapping[str, Any]
) -> EditorConfig:
    """Merge wire-format field updates into an emitter.

    The merged record is re-validated, so updates may also change the
    emitter ``type``.

    Args:
        config: Current document
        index: Emitter index
        updates: Fields to overwrite, keyed by wire name (e.g. ``emissionRate``)

    Returns:
        New document

    Raises:
        ValidationError: If the merged emitter is not a valid emitter
    """
    if not _in_range(config.emitters, index):
        return config

    merged = {
        **config.emitters[index].model_dump(by_alias=True, exclude_none=True),
        **updates,
    }
    emitters = list(config.emitters)
    emitters[index] = _emitter_adapter.validate_python(merged)
    return _with_emitters(config, emitters)


def remove_emitter(config: EditorConfig, index: int) -> EditorConfig:
    if not _in_range(config.emitters, index):
        return config
    return _with_emitters(config, [e for i, e in enumerate(config.emitters) if i != index])


def duplicate_emitter(config: EditorConfig, index: int) -> EditorConfig:
    """Insert a deep copy of an emitter directly after it."""
    if not _in_range(config.emitters, index):
        return config

    emitters = list(config.emitters)
    emitters.insert(index + 1, emitters[index].model_copy(deep=True))
    return _with_emitters(config, emitters)


def reorder_emitters(config: EditorConfig, start_index: int, end_index: int) -> EditorConfig:
    """Move the emitter at ``start_index`` so it ends up at ``end_index``."""
    if not _in_range(config.emitters, start_index) or not _in_range(
        config.emitters, end_index
    ):
        return config

    emitters = list(config.emitters)
    moved = emitters.pop(start_index)
    emitters.insert(end_index, moved)
    return _with_emitters(config, emitters)


def rename_emitter(config: EditorConfig, index: int, name: str) -> EditorConfig:
    if not _in_range(config.emitters, index):
        return config

    emitters = list(config.emitters)
    emitters[index] = emitters[index].model_copy(update={"name": name})
    return _with_emitters(config, emitters)


# ============================================================================
# Behaviors
# ============================================================================


def add_behavior(
    config: EditorConfig, emitter_index: int, behavior: BehaviorConfig
) -> EditorConfig:
    if not _in_range(config.emitters, emitter_index):
        return config

    emitters = list(config.emitters)
    emitter = emitters[emitter_index]
    emitters[emitter_index] = _with_behaviors(emitter, [*_behaviors(emitter), behavior])
    return _with_emitters(config, emitters)


def update_behavior(
    config: EditorConfig,
    emitter_index: int,
    behavior_index: int,
    behavior: BehaviorConfig,
) -> EditorConfig:
    """Replace a behavior on an emitter's particle."""
    if not _in_range(config.emitters, emitter_index):
        return config
    emitter = config.emitters[emitter_index]
    behaviors = _behaviors(emitter)
    if not _in_range(behaviors, behavior_index):
        return config

    behaviors[behavior_index] = behavior
    emitters = list(config.emitters)
    emitters[emitter_index] = _with_behaviors(emitter, behaviors)
    return _with_emitters(config, emitters)


def remove_behavior(config: EditorConfig, emitter_index: int, behavior_index: int) -> EditorConfig:
    if not _in_range(config.emitters, emitter_index):
        return config
    emitter = config.emitters[emitter_index]
    behaviors = _behaviors(emitter)
    if not _in_range(behaviors, behavior_index):
        return config

    del behaviors[behavior_index]
    emitters = list(config.emitters)
    emitters[emitter_index] = _with_behaviors(emitter, behaviors)
    return _with_emitters(config, emitters)


def _priority(behavior: Any) -> Number:
    if isinstance(behavior, Mapping):
        priority = behavior.get("priority")
    else:
        priority = getattr(behavior, "priority", None)
    if isinstance(priority, int | float) and not isinstance(priority, bool):
        return priority
    return DEFAULT_BEHAVIOR_PRIORITY


def execution_order(behaviors: Sequence[BehaviorEntry]) -> list[BehaviorEntry]:
    """Return behaviors in the order the runtime executes them.

    Sorted by ascending priority (lower runs first); behaviors without a
    numeric priority use ``DEFAULT_BEHAVIOR_PRIORITY``, including raw records
    kept from import. Ties keep authoring order.
    """
    return sorted(behaviors, key=_priority)
