"""
Batch driver: runs the pipeline over files and directories into one sink.

A document that fails is logged and skipped; the batch carries on.
"""

import logging
from pathlib import Path
from typing import Iterable, Iterator

from toc_sectioner.config import Settings
from toc_sectioner.pipeline.assembler import assemble
from toc_sectioner.pipeline.loader import load_document
from toc_sectioner.pipeline.outline import build_worklist
from toc_sectioner.pipeline.sectioner import discover_sections
from toc_sectioner.sink import JsonLinesSink

logger = logging.getLogger(__name__)

PDF_SUFFIX = ".pdf"


def run_pipeline(pdf_path: str, language: str, settings: Settings) -> dict:
    """Run the full sectioning pipeline for one document, return final state."""
    state: dict = {"pdf_path": pdf_path, "language": language, "settings": settings}

    state.update(load_document(state))
    state.update(build_worklist(state))
    if state["outline_titles"]:
        state.update(discover_sections(state))
    state.update(assemble(state))

    return state


def iter_documents(paths: Iterable[str | Path]) -> Iterator[Path]:
    """Yield files to convert: explicit files as given, PDFs found under directories."""
    for raw in paths:
        path = Path(raw)
        if path.is_dir():
            for child in sorted(path.rglob("*")):
                if child.is_file() and child.suffix.lower() == PDF_SUFFIX:
                    yield child
        elif path.is_file():
            yield path
        else:
            logger.error("Path not found: %s", path)


def convert_batch(
    paths: Iterable[str | Path],
    language: str,
    settings: Settings,
    sink: JsonLinesSink | None = None,
) -> dict[str, int]:
    """Convert every discovered document; return converted/failed/record counts."""
    sink = sink or JsonLinesSink(settings.output_path)
    sink.reset()

    summary = {"converted": 0, "failed": 0, "records": 0}
    for pdf_path in iter_documents(paths):
        try:
            state = run_pipeline(str(pdf_path), language, settings)
        except Exception:
            logger.exception("Conversion failed for %s", pdf_path)
            summary["failed"] += 1
            continue

        records = state["records"]
        sink.append(records)
        summary["converted"] += 1
        summary["records"] += len(records)

    logger.info(
        "Batch done: %d converted, %d failed, %d records -> %s",
        summary["converted"], summary["failed"], summary["records"], sink.path,
    )
    return summary
