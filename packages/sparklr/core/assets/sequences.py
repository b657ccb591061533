"""Numbered animation-frame sequence detection.

Groups a flat batch of uploaded files into a frame sequence such as
``coin_000.png .. coin_023.png``. Only file names are inspected; contents are
never read.

Known limitation: at most one sequence is detected per batch. When a batch
holds two numbered sequences, the larger one wins and the files of the other
are returned as individual files.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from collections.abc import Iterable, Sequence
from pathlib import Path

from sparklr.core.assets.models import (
    FileEntry,
    FrameInfo,
    NamedFile,
    SequenceDetection,
    SequenceInfo,
    SequenceValidation,
)

logger = logging.getLogger(__name__)

# name_000.png, name00.png, name_7.webp ...
_FRAME_PATTERN = re.compile(r"^(?P<base>.+?)(?P<sep>_?)(?P<digits>[0-9]+)\.(?P<ext>[^.]+)$")

MIN_SEQUENCE_FRAMES = 2


def extract_frame_info(filename: str) -> FrameInfo | None:
    """Parse the frame number out of a file name.

    The underscore separating base and digits is kept on ``base`` so the
    display pattern can be rebuilt.

    Example:
        >>> extract_frame_info("coin_007.png")
        FrameInfo(base='coin_', number=7, padding=3, extension='png')
        >>> extract_frame_info("sprite10.png")
        FrameInfo(base='sprite', number=10, padding=2, extension='png')
        >>> extract_frame_info("background.png") is None
        True
    """
    match = _FRAME_PATTERN.match(filename)
    if match is None:
        return None

    digits = match.group("digits")
    return FrameInfo(
        base=match.group("base") + match.group("sep"),
        number=int(digits),
        padding=len(digits),
        extension=match.group("ext"),
    )


def detect_sequence(files: Iterable[NamedFile]) -> SequenceInfo | None:
    """Detect the largest numbered sequence in a batch of files.

    Files are grouped by (base, extension); the largest group wins, and
    equally sized groups are resolved in favour of the one encountered first.

    Args:
        files: Uploaded file handles (anything with ``name`` and ``size``)

    Returns:
        SequenceInfo, or None when no group has at least two frames
    """
    groups: dict[tuple[str, str], list[tuple[NamedFile, FrameInfo]]] = {}
    for file in files:
        info = extract_frame_info(file.name)
        if info is not None:
            groups.setdefault((info.base, info.extension), []).append((file, info))

    largest: list[tuple[NamedFile, FrameInfo]] = []
    for group in groups.values():
        if len(group) > len(largest):
            largest = group

    if len(largest) < MIN_SEQUENCE_FRAMES:
        return None

    frames = sorted(largest, key=lambda item: item[1].number)
    first = frames[0][1]
    last = frames[-1][1]

    present = {info.number for _, info in frames}
    gaps = [n for n in range(first.number + 1, last.number) if n not in present]

    # Most common digit count; Counter keeps first-encountered order on ties
    padding = Counter(info.padding for _, info in frames).most_common(1)[0][0]

    start = str(first.number).zfill(padding)
    end = str(last.number).zfill(padding)
    pattern = f"{first.base}{{{start}-{end}}}.{first.extension}"

    logger.debug(f"Detected sequence {pattern} ({len(frames)} frames, {len(gaps)} gaps)")

    return SequenceInfo(
        base_name=first.base.removesuffix("_"),
        pattern=pattern,
        start_frame=first.number,
        end_frame=last.number,
        padding=padding,
        gaps=gaps,
        files=[file for file, _ in frames],
    )


def auto_detect_sequences(files: Sequence[NamedFile]) -> SequenceDetection:
    """Split an upload batch into a detected sequence and individual files.

    Everything not consumed by the detected sequence, including the files of
    any smaller competing sequence, is returned as an individual file.
    """
    sequence = detect_sequence(files)
    if sequence is None:
        return SequenceDetection(sequences=[], individual_files=list(files))

    consumed = {id(file) for file in sequence.files}
    return SequenceDetection(
        sequences=[sequence],
        individual_files=[file for file in files if id(file) not in consumed],
    )


def validate_sequence(sequence: SequenceInfo) -> SequenceValidation:
    """Check a sequence for missing or miscounted frames.

    Gaps only produce a warning; a sequence is invalid when it has fewer
    files than its frame range implies and the reported gaps do not account
    for the difference.
    """
    warnings: list[str] = []
    valid = True

    if sequence.gaps:
        missing = ", ".join(str(n) for n in sequence.gaps)
        warnings.append(f"Missing frames: {missing} ({len(sequence.gaps)} gaps)")

    expected = sequence.expected_frames
    actual = len(sequence.files)
    if actual < expected:
        warnings.append(f"Expected {expected} frames, found {actual}")
        if actual + len(sequence.gaps) < expected:
            valid = False

    if actual < MIN_SEQUENCE_FRAMES:
        warnings.append(f"Sequence has less than {MIN_SEQUENCE_FRAMES} frames")

    return SequenceValidation(valid=valid, warnings=warnings)


def scan_directory(directory: str | Path) -> list[FileEntry]:
    """List the regular files of a directory as name/size entries.

    Raises:
        NotADirectoryError: If the path is not a directory
    """
    directory = Path(directory)
    if not directory.is_dir():
        raise NotADirectoryError(f"Not a directory: {directory}")

    return [
        FileEntry(name=path.name, size=path.stat().st_size)
        for path in sorted(directory.iterdir())
        if path.is_file()
    ]
