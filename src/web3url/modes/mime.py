"""File extension to MIME type helpers shared by the mode parsers."""

import mimetypes


def split_extension(segment: str) -> tuple[str, str | None]:
    """Split ``name.ext`` into ``("name", ".ext")``; no dot means no extension."""

    stem, dot, ext = segment.rpartition(".")
    if not dot or not stem or not ext:
        return segment, None
    return stem, f".{ext}"


def guess_mime_type(segment: str) -> str | None:
    _, ext = split_extension(segment)
    if ext is None:
        return None
    return mimetypes.types_map.get(ext.lower())
