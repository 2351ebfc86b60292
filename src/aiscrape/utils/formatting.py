from __future__ import annotations


def wrap_text(text: str, width: int = 80) -> str:
    # Hard wrap: lines are cut at exactly `width` characters, words included.
    if isinstance(width, bool) or not isinstance(width, int) or width <= 0:
        raise ValueError(f"width must be a positive integer, got {width!r}")

    lines = []
    while len(text) > width:
        lines.append(text[:width] + "\n")
        text = text[width:]
    if text:
        lines.append(text + "\n")

    return "".join(lines)
