"""
Shared output destination: one JSON array per document, one per line.

Lifecycle is reset once per batch, append once per document, never read back.
"""

import json
import logging
from pathlib import Path

from toc_sectioner.state import SectionRecord

logger = logging.getLogger(__name__)


class JsonLinesSink:
    def __init__(self, path: Path | str):
        self.path = Path(path)

    def reset(self) -> None:
        """Remove any output left over from a previous run."""
        self.path.unlink(missing_ok=True)

    def append(self, records: list[SectionRecord]) -> None:
        if not records:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as fh:
            fh.write(json.dumps(records, ensure_ascii=False))
            fh.write("\n")
        logger.debug("Appended %d records to %s", len(records), self.path)
