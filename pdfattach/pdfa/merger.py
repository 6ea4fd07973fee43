"""Copy source pages into the target PDF/A document."""

from __future__ import annotations

from ..core.utils import get_logger
from .document import SourceDocument, TargetDocument
from .exceptions import PageCopyError

LOGGER = get_logger("pdfattach.pdfa.merger")


def merge_pages(source: SourceDocument, target: TargetDocument) -> int:
    """Append every page of *source* to *target*, first to last.

    Returns the number of pages copied.

    Raises:
        PageCopyError: If the source has no pages or a page cannot be copied.
    """

    try:
        total = source.page_count
    except Exception as exc:
        raise PageCopyError(f"Unable to read pages of {source.name}") from exc

    if total == 0:
        LOGGER.error("PDF %s contains no pages", source.name)
        raise PageCopyError(f"Source PDF contains no pages: {source.name}")

    for page_number in range(1, total + 1):
        LOGGER.debug("Adding page %s from %s", page_number, source.name)
        try:
            target.writer.add_page(source.reader.pages[page_number - 1])
        except Exception as exc:
            raise PageCopyError(
                f"Unable to copy page {page_number} of {total} from {source.name}"
            ) from exc

    LOGGER.debug("Copied %d page(s) from %s", total, source.name)
    return total


__all__ = ["merge_pages"]
