"""Swizzle YAML transform - convert editor documents to and from YAML text.

Export is a straight structural dump of the document with two top-level
keys, ``system`` and ``emitters``. Import is deliberately asymmetric:

- A YAML syntax error is fatal (ConfigParseError); nothing is applied.
- Missing or mistyped system settings fall back to defaults.
- Individual emitter records that fail the shape check are dropped, so a
  hand-edited or partially corrupt file still loads what it can. The shape
  check is the only reason a record is dropped; other mistyped fields are
  kept verbatim and left to the validator.

``from_text`` keeps the silent contract; ``from_text_with_report`` also
returns the rejected records and why they were rejected.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml
from pydantic import TypeAdapter

from sparklr.core.document.models import (
    DEFAULT_AUTO_START,
    DEFAULT_MAX_PARTICLES,
    EMITTER_TYPES,
    RATELESS_EMITTER_TYPES,
    EditorConfig,
    EmitterConfig,
    SystemConfig,
)
from sparklr.core.utils.logging import get_logger

logger = get_logger(__name__)

_emitter_adapter: TypeAdapter[EmitterConfig] = TypeAdapter(EmitterConfig)


class ConfigParseError(ValueError):
    """Raised when document text is not valid YAML.

    Attributes:
        detail: Diagnostic message from the YAML parser
    """

    def __init__(self, detail: str) -> None:
        super().__init__(f"Failed to parse YAML: {detail}")
        self.detail = detail


@dataclass(frozen=True)
class RejectedEmitter:
    """Raw emitter record dropped during import."""

    index: int
    record: Any
    reason: str


@dataclass(frozen=True)
class ImportReport:
    """Imported document plus the emitter records that were dropped."""

    config: EditorConfig
    rejected: list[RejectedEmitter] = field(default_factory=list)


class _NoAliasDumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors or aliases."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


# ============================================================================
# Export
# ============================================================================


def _type_first(record: dict[str, Any]) -> dict[str, Any]:
    if "type" not in record:
        return record
    return {"type": record["type"], **{k: v for k, v in record.items() if k != "type"}}


def _emitter_record(emitter: EmitterConfig) -> dict[str, Any]:
    """Dump an emitter with ``type`` leading the emitter and each behavior."""
    record = emitter.model_dump(by_alias=True, exclude_none=True)
    particle = record["particle"]
    if isinstance(particle.get("behaviors"), list):
        particle["behaviors"] = [
            _type_first(b) if isinstance(b, dict) else b for b in particle["behaviors"]
        ]
    return _type_first(record)



def to_text(config: EditorConfig, indent: int = 2) -> str:
    """Serialize an editor document to Swizzle YAML.

    Emitter order and every set field are preserved. Output uses block
    style, no anchors, and never wraps long lines.

    Args:
        config: Document to export
        indent: Indentation width

    Returns:
        YAML text

    Example:
        >>> text = to_text(EditorConfig())
        >>> print(text)
        system:
          maxParticles: 1000
          autoStart: true
        emitters: []
    """
    data = {
        "system": config.system.model_dump(by_alias=True, exclude_none=True),
        "emitters": [_emitter_record(emitter) for emitter in config.emitters],
    }
    return yaml.dump(
        data,
        Dumper=_NoAliasDumper,
        indent=indent,
        width=float("inf"),
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True,
    )


# ============================================================================
# Import
# ============================================================================


def _is_number(value: Any) -> bool:
    return isinstance(value, int | float) and not isinstance(value, bool)


def _strip_nulls(value: Any) -> Any:
    """Drop null-valued mapping entries recursively (null means absent)."""
    if isinstance(value, Mapping):
        return {k: _strip_nulls(v) for k, v in value.items() if v is not None}
    if isinstance(value, list):
        return [_strip_nulls(v) for v in value]
    return value


def _shape_problem(record: Any) -> str | None:
    """Return why a raw emitter fails the minimal shape check, or None."""
    if not isinstance(record, Mapping):
        return "not a mapping"

    emitter_type = record.get("type")
    if not isinstance(emitter_type, str):
        return "type is not a string"
    if emitter_type not in EMITTER_TYPES:
        return f"unknown emitter type '{emitter_type}'"
    if emitter_type not in RATELESS_EMITTER_TYPES and not _is_number(record.get("emissionRate")):
        return "emissionRate is not a number"

    position = record.get("position")
    if not isinstance(position, Mapping):
        return "position is missing"
    if not _is_number(position.get("x")) or not _is_number(position.get("y")):
        return "position x/y are not numbers"

    particle = record.get("particle")
    if not isinstance(particle, Mapping) or not isinstance(particle.get("type"), str):
        return "particle type is missing"

    return None


def _parse_system(raw: Any) -> SystemConfig:
    system = raw if isinstance(raw, Mapping) else {}
    max_particles = system.get("maxParticles")
    auto_start = system.get("autoStart")
    return SystemConfig(
        max_particles=max_particles if _is_number(max_particles) else DEFAULT_MAX_PARTICLES,
        auto_start=auto_start if isinstance(auto_start, bool) else DEFAULT_AUTO_START,
    )


def _parse_emitter(index: int, record: Any) -> EmitterConfig | RejectedEmitter:
    problem = _shape_problem(record)
    if problem is not None:
        return RejectedEmitter(index=index, record=record, reason=problem)

    return _emitter_adapter.validate_python(_strip_nulls(record))


def build_document(raw: Any) -> ImportReport:
    """Build a document from an already-parsed YAML/JSON value.

    Args:
        raw: Parsed value (normally a mapping with ``system``/``emitters``)

    Returns:
        ImportReport with the accepted document and rejected records
    """
    data = raw if isinstance(raw, Mapping) else {}
    system = _parse_system(data.get("system"))

    raw_emitters = data.get("emitters")
    candidates = raw_emitters if isinstance(raw_emitters, list) else []

    emitters: list[EmitterConfig] = []
    rejected: list[RejectedEmitter] = []
    for index, record in enumerate(candidates):
        parsed = _parse_emitter(index, record)
        if isinstance(parsed, RejectedEmitter):
            logger.warning(f"Dropping emitter {index}: {parsed.reason}")
            rejected.append(parsed)
        else:
            emitters.append(parsed)

    logger.debug(f"Imported {len(emitters)} emitter(s), dropped {len(rejected)}")
    return ImportReport(config=EditorConfig(system=system, emitters=emitters), rejected=rejected)


def from_text_with_report(text: str) -> ImportReport:
    """Parse Swizzle YAML and report rejected emitter records.

    Raises:
        ConfigParseError: If the text is not valid YAML
    """
    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigParseError(str(e)) from e

    return build_document(raw)


def from_text(text: str) -> EditorConfig:
    """Parse Swizzle YAML into an editor document.

    Malformed emitter records are dropped silently; use
    ``from_text_with_report`` to see which ones.

    Args:
        text: YAML text

    Returns:
        Imported EditorConfig

    Raises:
        ConfigParseError: If the text is not valid YAML

    Example:
        >>> config = from_text("emitters: []")
        >>> config.system.max_particles, config.system.auto_start
        (1000, True)
    """
    return from_text_with_report(text).config


# ============================================================================
# Files
# ============================================================================


def load_document(path: str | Path) -> ImportReport:
    """Load a Swizzle YAML document from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        ConfigParseError: If the file is not valid YAML
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Document does not exist: {path}")

    return from_text_with_report(path.read_text(encoding="utf-8"))


def save_document(config: EditorConfig, path: str | Path, indent: int = 2) -> Path:
    """Write a document as Swizzle YAML, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_text(config, indent=indent), encoding="utf-8")
    logger.debug(f"Saved document with {len(config.emitters)} emitter(s) to {path}")
    return path
