"""Append-only session history log (one JSON object per line)."""

import logging
from pathlib import Path
from typing import Iterator, List

from pydantic import ValidationError

from core.models import SessionRecord
from utils.config import AppSettings

log = logging.getLogger("gti.history")


class HistoryWriteError(RuntimeError):
    """Appending a record to the history log failed."""


class SessionRecorder:
    """Writes and reads completed sessions.

    When history is disabled in the settings both operations are no-ops and
    reads return an empty list.
    """

    def __init__(self, settings: AppSettings):
        """Initialize recorder.

        Args:
            settings: Application settings; only the history section is used
        """
        self.enabled = settings.history.enabled
        self.path: Path = settings.history.path

    def record(self, record: SessionRecord) -> None:
        """Append one record to the log.

        Args:
            record: Completed session

        Raises:
            HistoryWriteError: If the file cannot be created or written
        """
        if not self.enabled:
            return

        line = record.model_dump_json(exclude_none=True) + "\n"
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(line)
        except OSError as e:
            log.error(f"Failed to append session to {self.path}: {e}")
            raise HistoryWriteError(f"Cannot write history file {self.path}: {e}") from e

        log.debug(f"Recorded {record.mode} session ({record.wpm:.1f} WPM)")

    def iter_records(self) -> Iterator[SessionRecord]:
        """Yield records in file order, skipping lines that fail to parse.

        A crash during an append can leave a partial last line; it is skipped
        like any other corrupt line.

        Raises:
            OSError: If the log exists but cannot be read
        """
        if not self.enabled or not self.path.exists():
            return

        with open(self.path, encoding="utf-8", errors="replace") as f:
            for line_number, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    yield SessionRecord.model_validate_json(line)
                except ValidationError as e:
                    log.debug(
                        f"Skipping unparsable history line {line_number}: "
                        f"{e.error_count()} error(s)"
                    )

    def load(self) -> List[SessionRecord]:
        """Read the whole log, newest record first.

        Returns:
            List of records ordered by timestamp descending
        """
        records = list(self.iter_records())
        records.sort(key=lambda r: r.timestamp, reverse=True)
        return records
