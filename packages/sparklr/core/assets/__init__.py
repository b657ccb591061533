"""Uploaded asset handling: frame-sequence detection."""

from sparklr.core.assets.models import (
    FileEntry,
    NamedFile,
    SequenceDetection,
    SequenceInfo,
    SequenceValidation,
)
from sparklr.core.assets.sequences import (
    auto_detect_sequences,
    detect_sequence,
    scan_directory,
    validate_sequence,
)

__all__ = [
    "FileEntry",
    "NamedFile",
    "SequenceDetection",
    "SequenceInfo",
    "SequenceValidation",
    "auto_detect_sequences",
    "detect_sequence",
    "scan_directory",
    "validate_sequence",
]
