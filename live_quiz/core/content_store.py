"""YAML-backed store for the quiz content document.

The document holds the question bank, anecdotes, UI strings and settings
(including the admin password). It is always read and written whole; a
replace goes through a temporary file in the same directory and
``os.replace`` so readers never see a half-written document.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
import tempfile

import yaml

from live_quiz.core.errors import StorageError

logger = logging.getLogger(__name__)


class ContentStore:
    """Reads and atomically rewrites one YAML content file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def read(self) -> dict:
        try:
            text = self._path.read_text(encoding="utf-8")
            document = yaml.safe_load(text)
        except (OSError, yaml.YAMLError) as exc:
            raise StorageError(f"Unable to read content from {self._path}: {exc}") from exc
        if not isinstance(document, dict):
            raise StorageError(f"Content file {self._path} does not contain a mapping.")
        return document

    def replace(self, document: dict) -> None:
        directory = self._path.resolve().parent
        temp_name: str | None = None
        try:
            serialized = yaml.safe_dump(document, allow_unicode=True, sort_keys=False)
            directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "w",
                encoding="utf-8",
                dir=directory,
                prefix=f".{self._path.name}.",
                suffix=".tmp",
                delete=False,
            ) as handle:
                temp_name = handle.name
                handle.write(serialized)
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(temp_name, self._path)
            temp_name = None
        except (OSError, yaml.YAMLError) as exc:
            raise StorageError(f"Unable to write content to {self._path}: {exc}") from exc
        finally:
            if temp_name is not None:
                try:
                    os.unlink(temp_name)
                except OSError:
                    logger.warning("Could not remove temporary file %s", temp_name)
        logger.info("Content document written to %s", self._path)
