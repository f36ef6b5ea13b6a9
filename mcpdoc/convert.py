"""HTML to markdown conversion."""

from markdownify import ATX, markdownify

from mcpdoc.log import get_logger

logger = get_logger("convert")


def to_markdown(html: str) -> str:
    """Convert HTML to markdown with ``#`` headings and fenced code blocks.

    Plain text and markdown (e.g. an ``llms.txt`` file) pass through mostly
    unchanged. Never raises: if the converter fails the input is returned as is.
    """
    try:
        return markdownify(html, heading_style=ATX)
    except Exception:
        logger.warning("Markdown conversion failed, returning raw content", exc_info=True)
        return html
