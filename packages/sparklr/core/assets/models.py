"""Asset upload and frame-sequence models."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol


class NamedFile(Protocol):
    """Uploaded file handle; only the name and size are ever inspected."""

    @property
    def name(self) -> str: ...

    @property
    def size(self) -> int: ...


@dataclass(frozen=True)
class FileEntry:
    """File on disk or in an upload batch."""

    name: str
    size: int = 0


@dataclass(frozen=True)
class FrameInfo:
    """Frame number parsed from a file name like ``coin_007.png``."""

    base: str
    number: int
    padding: int
    extension: str


@dataclass(frozen=True)
class SequenceInfo:
    """Detected numbered animation sequence.

    Attributes:
        base_name: Base name without the trailing underscore ("coin")
        pattern: Display pattern, e.g. "coin_{000-002}.png"
        start_frame: Lowest frame number
        end_frame: Highest frame number
        padding: Most common digit count among the frames
        gaps: Frame numbers missing between start and end
        files: Files ordered by frame number
    """

    base_name: str
    pattern: str
    start_frame: int
    end_frame: int
    padding: int
    gaps: list[int] = field(default_factory=list)
    files: list[NamedFile] = field(default_factory=list)

    @property
    def expected_frames(self) -> int:
        return self.end_frame - self.start_frame + 1


@dataclass(frozen=True)
class SequenceDetection:
    """Split of an upload batch into sequences and standalone files."""

    sequences: list[SequenceInfo] = field(default_factory=list)
    individual_files: list[NamedFile] = field(default_factory=list)


@dataclass(frozen=True)
class SequenceValidation:
    """Sequence integrity check result; warnings never block an upload."""

    valid: bool
    warnings: list[str] = field(default_factory=list)
