"""Loading event records from newline-delimited JSON exports."""

import json
from pathlib import Path
from typing import Iterator

from indexer.schemas.events import EventRecord


def read_event_file(path: str | Path) -> Iterator[EventRecord]:
    """Yield validated records from a JSONL file, one decoded log per line.

    Blank lines and lines starting with '#' are ignored. A malformed line
    raises with its line number so the export can be fixed and re-run.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as f:
        for lineno, line in enumerate(f, start=1):
            text = line.strip()
            if not text or text.startswith("#"):
                continue
            try:
                yield EventRecord.model_validate(json.loads(text))
            except ValueError as e:
                raise ValueError(f"{path}:{lineno}: {e}") from e
