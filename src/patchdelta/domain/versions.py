"""Provider version strings and the names derived from them."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

_VERSION = re.compile(r"^(?P<season>\d+)\.(?P<patch>\d+)(?:\.\d+)*$")
SEASON_OFFSET = 10


def parse_version(version: str) -> tuple[int, int]:
    """Split ``"14.23.1"`` into ``(14, 23)``."""

    match = _VERSION.match(version.strip())
    if match is None:
        raise ValueError(f"Unrecognized version: {version!r}")
    return int(match.group("season")), int(match.group("patch"))


def display_version(version: str) -> str:
    """Public-facing patch name: provider ``16.1.1`` is released as ``26.1``."""

    season, patch = parse_version(version)
    return f"{season + SEASON_OFFSET}.{patch}"


def patch_note_slugs(version: str) -> list[str]:
    """Release-note URL slugs to try, most likely first, without duplicates."""

    season, patch = parse_version(version)
    candidates = (
        f"{season}-{patch}",
        f"{season + SEASON_OFFSET}-{patch}",
        f"20{season + SEASON_OFFSET}-{patch}",
    )
    return list(dict.fromkeys(candidates))


def previous_version(versions: Sequence[str], version: str | None = None) -> tuple[str, str]:
    """Return ``(previous, current)`` from a newest-first version list.

    ``version`` defaults to the newest entry.
    """

    if not versions:
        raise ValueError("No versions available")
    current = versions[0] if version is None else version
    try:
        index = list(versions).index(current)
    except ValueError:
        raise ValueError(f"Version {current!r} is not published") from None
    if index + 1 >= len(versions):
        raise ValueError(f"Version {current!r} has no predecessor")
    return versions[index + 1], current
