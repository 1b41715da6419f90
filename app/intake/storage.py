from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from app.intake.csv_codec import CsvDocument, decode_document, encode_row
from app.intake.models import SUBMISSION_HEADERS, Submission

logger = logging.getLogger(__name__)


class StoreError(RuntimeError):
    pass


@dataclass(frozen=True)
class SubmissionStore:
    """Append-only CSV file of submissions. The header is written when the file is first created."""

    path: Path
    headers: Sequence[str] = SUBMISSION_HEADERS

    def exists(self) -> bool:
        return self.path.exists()

    def ensure_initialized(self) -> None:
        if self.path.exists():
            return
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StoreError(f"Cannot create data directory {self.path.parent}: {e}") from e
        try:
            # exclusive create: never write a second header
            with self.path.open("x", encoding="utf-8", newline="") as f:
                f.write(",".join(self.headers) + "\n")
        except FileExistsError:
            return
        except OSError as e:
            raise StoreError(f"Cannot initialize submissions file {self.path}: {e}") from e
        logger.info("Created submissions file %s", self.path)

    def append(self, submission: Submission) -> None:
        self.ensure_initialized()
        line = encode_row(submission.as_row())
        try:
            # one write() per record
            with self.path.open("a", encoding="utf-8", newline="") as f:
                f.write(line)
        except OSError as e:
            raise StoreError(f"Failed to append submission to {self.path}: {e}") from e

    def read_raw(self) -> str | None:
        try:
            return self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StoreError(f"Failed to read {self.path}: {e}") from e

    def read_all(self) -> CsvDocument:
        text = self.read_raw()
        if text is None:
            return CsvDocument(headers=list(self.headers), records=[])
        doc = decode_document(text)
        if not doc.headers:
            return CsvDocument(headers=list(self.headers), records=[])
        return doc


def store_from_config(config: dict) -> SubmissionStore:
    data_dir = (config.get("DATA_DIR") or "").strip() or os.path.join(os.getcwd(), "data")
    filename = (config.get("SUBMISSIONS_FILENAME") or "submissions.csv").strip()
    return SubmissionStore(path=Path(data_dir) / filename)
