"""Swizzle YAML format - editor document import/export."""

from sparklr.core.formats.swizzle.transform import (
    ConfigParseError,
    ImportReport,
    RejectedEmitter,
    from_text,
    from_text_with_report,
    load_document,
    save_document,
    to_text,
)

__all__ = [
    "ConfigParseError",
    "ImportReport",
    "RejectedEmitter",
    "from_text",
    "from_text_with_report",
    "load_document",
    "save_document",
    "to_text",
]
