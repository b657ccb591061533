"""Shared pytest fixtures for sparklr tests."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

import pytest

from sparklr.core.assets.models import FileEntry
from sparklr.core.document.models import (
    CircleEmitter,
    EditorConfig,
    FadeBehavior,
    LineEmitter,
    ParticleConfig,
    PointEmitter,
    Range,
    SystemConfig,
    Vec2,
)

# ============================================================================
# Document Fixtures
# ============================================================================


@pytest.fixture
def sprite_particle() -> ParticleConfig:
    """Sprite particle with a lifetime range and no behaviors."""
    return ParticleConfig(type="sprite", texture="spark", lifetime=Range(min=1, max=2))


@pytest.fixture
def point_emitter(sprite_particle: ParticleConfig) -> PointEmitter:
    """Point emitter at the centre of the 800x600 authoring canvas."""
    return PointEmitter(position=Vec2(x=400, y=300), emission_rate=50, particle=sprite_particle)


@pytest.fixture
def circle_emitter(sprite_particle: ParticleConfig) -> CircleEmitter:
    """Circle emitter with radius 80 and a fade behavior."""
    particle = sprite_particle.model_copy(
        update={"behaviors": [FadeBehavior(start_alpha=1, end_alpha=0, priority=15)]}
    )
    return CircleEmitter(
        position=Vec2(x=500, y=300),
        emission_rate=30,
        radius=80,
        particle=particle,
    )


@pytest.fixture
def line_emitter(sprite_particle: ParticleConfig) -> LineEmitter:
    """Line emitter with absolute start/end points."""
    return LineEmitter(
        position=Vec2(x=400, y=500),
        emission_rate=20,
        start=Vec2(x=100, y=500),
        end=Vec2(x=700, y=500),
        particle=sprite_particle,
    )


@pytest.fixture
def sample_config(point_emitter: PointEmitter, circle_emitter: CircleEmitter) -> EditorConfig:
    """Document with two emitters and default system settings."""
    return EditorConfig(
        system=SystemConfig(max_particles=1000, auto_start=True),
        emitters=[point_emitter, circle_emitter],
    )


@pytest.fixture
def raw_emitter() -> dict:
    """Minimal valid point emitter in wire format."""
    return {
        "type": "point",
        "position": {"x": 400, "y": 300},
        "emissionRate": 50,
        "particle": {"type": "sprite", "lifetime": 1.5},
    }


# ============================================================================
# Asset Fixtures
# ============================================================================


@pytest.fixture
def make_files() -> Callable[..., list[FileEntry]]:
    """Factory building upload entries from file names."""

    def _make(*names: str) -> list[FileEntry]:
        return [FileEntry(name=name, size=1024) for name in names]

    return _make


# ============================================================================
# Logging Fixtures
# ============================================================================


@pytest.fixture
def restore_root_logger() -> Iterator[None]:
    """Remove handlers installed by configure_logging and restore the root level."""
    root = logging.getLogger()
    level = root.level
    yield
    for handler in root.handlers[:]:
        if type(handler) in (logging.StreamHandler, logging.FileHandler):
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
