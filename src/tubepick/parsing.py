"""
Parsing helpers for descriptive metadata.
"""

from __future__ import annotations

_AUTO_GENERATED_PREFIX = "Provided to YouTube by"
_RELEASED_PREFIX = "Released on:"


def clean_author(author: str | None) -> str | None:
    """Strip the " - Topic" suffix of auto-generated artist channels."""
    if author is None:
        return None
    return author.replace("- Topic", "").strip()


def parse_release_info(description: str | None) -> dict[str, str]:
    """Extract album, copyright and release date from a music description.

    Auto-generated music uploads use a fixed layout of blank-line separated
    blocks: provider, "track · artist", album, copyright, "Released on: ...".

    Returns:
        Dict with any of "album", "copyright", "release_date"; empty for
        ordinary descriptions.
    """
    if not description or not description.startswith(_AUTO_GENERATED_PREFIX):
        return {}

    blocks = description.split("\n\n", 4)
    if len(blocks) != 5:
        return {}

    info = {"album": blocks[2].strip(), "copyright": blocks[3].strip()}
    if blocks[4].startswith(_RELEASED_PREFIX):
        release = blocks[4].removeprefix(_RELEASED_PREFIX).strip()
        info["release_date"] = release.split("\n", 1)[0].strip()
    return info
