"""Textual host for the engine; the runnable app lives in ``.app``."""

from .controller import (
    EditorWidget,
    TextualBufferHost,
    location_to_offset,
    offset_to_location,
)

__all__ = [
    "EditorWidget",
    "TextualBufferHost",
    "location_to_offset",
    "offset_to_location",
]
