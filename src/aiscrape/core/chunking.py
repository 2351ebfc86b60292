from __future__ import annotations


def split_text(text: str, max_length: int = 6000) -> list[str]:
    """
    Fixed-size chunker: slice the text every max_length characters.
    Offsets are str indices (code points), so multi-byte characters stay whole.
    """
    if isinstance(max_length, bool) or not isinstance(max_length, int) or max_length <= 0:
        raise ValueError(f"max_length must be a positive integer, got {max_length!r}")

    return [text[i:i + max_length] for i in range(0, len(text), max_length)]


def select_batch(chunks: list[str], max_chunks: int = 16) -> list[str]:
    """Keep the earliest max_chunks chunks; anything after is dropped."""
    if isinstance(max_chunks, bool) or not isinstance(max_chunks, int) or max_chunks < 0:
        raise ValueError(f"max_chunks must be a non-negative integer, got {max_chunks!r}")

    return list(chunks[:max_chunks])
