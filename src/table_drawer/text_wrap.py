"""Greedy word wrapping against measured string widths."""

from typing import List

from .font_metrics import FontMetrics


def wrap_text(
    text: str,
    font_name: str,
    font_size: float,
    max_width: float,
    metrics: FontMetrics,
) -> List[str]:
    """
    Break text into lines no wider than max_width where possible.

    Words are packed onto the current line while the measured width of the
    line stays within max_width; the word that would overflow starts the next
    line. A word wider than max_width on its own gets a line to itself and
    overflows. Explicit newlines always end a line.

    Returns:
        List of lines; at least one (possibly empty) line.
    """
    lines: List[str] = []

    for paragraph in text.split("\n"):
        words = paragraph.split()
        if not words:
            lines.append("")
            continue

        current = words[0]
        for word in words[1:]:
            candidate = f"{current} {word}"
            if metrics.string_width(candidate, font_name, font_size) <= max_width:
                current = candidate
            else:
                lines.append(current)
                current = word
        lines.append(current)

    return lines
