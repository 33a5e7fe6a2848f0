"""Diff shaping: cap line width and keep only the head and tail of long diffs.

Contains:
- shape_diff: Shape a single file diff for inclusion in the prompt
- effective_truncate_lines: The line count actually kept at each end
- TRUNCATION_MARKER, ELLIPSIS, MIN_TRUNCATE_LINES
"""

from commitsmith.logging import get_logger

logger = get_logger("llm.shaper")

TRUNCATION_MARKER = "...[truncated]..."
ELLIPSIS = "..."

# Fewer context lines than this at each end make a diff unreadable
MIN_TRUNCATE_LINES = 3


def effective_truncate_lines(max_lines_each_end: int) -> int:
    """Get the number of lines kept at each end of a long diff.

    Args:
        max_lines_each_end: The requested count. 0 or less disables truncation.

    Returns:
        0 if truncation is disabled, otherwise at least MIN_TRUNCATE_LINES.
    """
    if max_lines_each_end <= 0:
        return 0
    return max(max_lines_each_end, MIN_TRUNCATE_LINES)


def _cap_line(line: str, max_line_width: int) -> str:
    """Cut a line to max_line_width and mark it with an ellipsis."""
    if max_line_width <= 0 or len(line) <= max_line_width:
        return line
    return line[:max_line_width] + ELLIPSIS


def shape_diff(diff: str, max_lines_each_end: int, max_line_width: int) -> str:
    """Shape a diff to a bounded number of lines and line width.

    Every line longer than max_line_width is cut and suffixed with "...".
    If the diff has more than 2 * n + 1 lines (n = lines kept at each end),
    only the first n and last n lines are kept, separated by a single
    "...[truncated]..." line. A trailing newline is preserved.

    Args:
        diff: Raw unified diff text.
        max_lines_each_end: Lines kept at each end. 0 keeps everything;
            1 and 2 are raised to 3 with a logged warning.
        max_line_width: Maximum characters per line. 0 or less disables capping.

    Returns:
        The shaped diff. Identical to the input when nothing needed shaping.
    """
    if not diff:
        return diff

    n = effective_truncate_lines(max_lines_each_end)
    if 0 < max_lines_each_end < MIN_TRUNCATE_LINES:
        logger.warning(
            "truncate_lines=%d is too small to keep a readable diff; using %d",
            max_lines_each_end,
            n,
        )

    has_trailing_newline = diff.endswith("\n")
    lines = diff.split("\n")
    if has_trailing_newline:
        lines = lines[:-1]

    lines = [_cap_line(line, max_line_width) for line in lines]

    if n and len(lines) > 2 * n + 1:
        lines = lines[:n] + [TRUNCATION_MARKER] + lines[-n:]

    shaped = "\n".join(lines)
    if has_trailing_newline:
        shaped += "\n"
    return shaped
