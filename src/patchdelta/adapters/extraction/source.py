"""File-backed changelog source for extraction JSON."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from patchdelta.domain.ports import ChangelogUnavailableError

from .schema import ExtractionDocument
from .translator import translate_document

if TYPE_CHECKING:
    from pathlib import Path

    from patchdelta.domain.model import ChangelogBlock

log = getLogger(__name__)


def parse_extraction(text: str) -> list[ChangelogBlock]:
    """Blocks for one extraction JSON document."""

    return translate_document(ExtractionDocument.model_validate_json(text))


class ExtractionFileSource:
    """Serve the same extraction document for whichever version is asked.

    Implements the ``ChangelogSource`` port.
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    def __call__(self, version: str) -> list[ChangelogBlock]:
        try:
            text = self._path.read_text(encoding="utf-8")
            blocks = parse_extraction(text)
        except (OSError, ValidationError) as exc:
            raise ChangelogUnavailableError(
                f"Extraction file {self._path} unusable for {version}: {exc}"
            ) from exc
        log.info("Loaded %s extraction entries from %s", len(blocks), self._path)
        return blocks
