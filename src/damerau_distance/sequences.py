from __future__ import annotations

from typing import Any, Literal, Optional, Sequence

Unit = Literal["char", "byte", "word"]

UNITS: tuple[str, ...] = ("char", "byte", "word")


def to_sequence(text: Optional[str | bytes], unit: Unit = "char", encoding: str = "utf-8") -> Sequence[Any]:
    """
    Turn raw input into the element sequence the engine compares.

    - `char`: code points (no normalization, no grapheme clustering).
    - `byte`: encoded bytes, like a byte-string column.
    - `word`: whitespace-separated tokens.

    `None` is the empty sequence.
    """
    if text is None:
        return ""
    if unit == "char":
        return text.decode(encoding) if isinstance(text, bytes) else text
    if unit == "byte":
        return text if isinstance(text, bytes) else text.encode(encoding)
    if unit == "word":
        if isinstance(text, bytes):
            text = text.decode(encoding)
        return text.split()
    raise ValueError(f"Unknown unit: {unit}")


def render_element(el: Any, unit: Unit = "char") -> str:
    if el is None:
        return ""
    if isinstance(el, int):
        return f"0x{el:02x}"
    if isinstance(el, tuple):
        # Swapped pairs: "ab" for characters, "0x61 0x62" / "b c" otherwise.
        sep = "" if unit == "char" else " "
        return sep.join(render_element(x, unit) for x in el)
    return str(el)
