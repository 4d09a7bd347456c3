"""Tag-delimited micro-format parsing for model output.

Format:
    Prompts ask the model to wrap structured parts of its answer in angle-bracket
    tags such as `<reasoning>...</reasoning>`. Any tag the code extracts must
    appear literally in the prompt's requested output format.

Scanning rules:
    - Tag names match case-insensitively (ASCII case folding only, so offsets in
      the folded copy stay valid for the original text).
    - The first `<tag>` wins; the first `</tag>` after it terminates the match.
      Nested same-name tags are not special-cased.
    - Content may span lines and is returned trimmed.
    - A missing pair yields `""`. Absence is never an error here; callers pick
      their own fallback.

Implementation:
    Plain substring scanning (`str.find`), no regular expressions, so malformed
    input cannot trigger backtracking.
"""

import logging
import string
from typing import Iterator

from llm_workflows.core.types import SubTask


logger = logging.getLogger(__name__)

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def _fold(text: str) -> str:
    """Lowercase ASCII letters only; length-preserving."""
    return text.translate(_ASCII_LOWER)


def _find_pair(folded: str, tag: str, start: int = 0) -> tuple[int, int, int] | None:
    """Locate the next `<tag>...</tag>` pair in already-folded text.

    Returns:
        `(content_start, content_end, pair_end)` offsets, or `None`.
    """
    open_tag = f"<{tag}>"
    close_tag = f"</{tag}>"

    open_at = folded.find(open_tag, start)
    if open_at < 0:
        return None

    content_start = open_at + len(open_tag)
    close_at = folded.find(close_tag, content_start)
    if close_at < 0:
        return None

    return content_start, close_at, close_at + len(close_tag)


def extract_tag(text: str, tag: str) -> str:
    """Return the trimmed content of the first `<tag>...</tag>` pair in `text`.

    Examples:
        >>> extract_tag("<Selection> billing </SELECTION>", "selection")
        'billing'
        >>> extract_tag("no tags here", "selection")
        ''
    """
    if not text or not tag or not tag.strip():
        return ""

    name = _fold(tag.strip())
    pair = _find_pair(_fold(text), name)
    if pair is None:
        return ""

    content_start, content_end, _ = pair
    return text[content_start:content_end].strip()


def iter_tag_blocks(text: str, tag: str) -> Iterator[str]:
    """Yield raw content of each successive `<tag>...</tag>` pair, in order.

    Pairs never overlap: scanning resumes after each closing delimiter. An opening
    delimiter with no closing delimiter ends the scan.
    """
    if not text or not tag or not tag.strip():
        return

    name = _fold(tag.strip())
    folded = _fold(text)
    position = 0

    while True:
        pair = _find_pair(folded, name, position)
        if pair is None:
            return

        content_start, content_end, position = pair
        yield text[content_start:content_end]


def parse_subtasks(tasks_block: str) -> list[SubTask]:
    """Parse declared subtasks out of an orchestrator `<tasks>` block.

    Each `<task>` group must carry non-empty `<type>` and `<description>` parts;
    groups missing either are skipped without aborting the parse.

    Returns:
        SubTasks in first-appearance order (possibly empty).
    """
    subtasks: list[SubTask] = []

    for index, block in enumerate(iter_tag_blocks(tasks_block, "task")):
        task_type = extract_tag(block, "type")
        description = extract_tag(block, "description")

        if not task_type or not description:
            logger.debug("Skipping malformed <task> block #%d", index + 1)
            continue

        subtasks.append(SubTask(type=task_type, description=description))

    return subtasks
