from __future__ import annotations

import os
import shutil
from typing import Sequence

_CODES = {"bold": "1", "dim": "2", "red": "31", "green": "32", "yellow": "33"}


def color_enabled() -> bool:
    return os.environ.get("NO_COLOR") is None and os.environ.get("TERM") not in (None, "", "dumb")


def style(s: str, *names: str) -> str:
    if not names or not color_enabled():
        return s
    codes = ";".join(_CODES[n] for n in names)
    return f"\x1b[{codes}m{s}\x1b[0m"


def term_width(default: int = 100) -> int:
    return shutil.get_terminal_size(fallback=(default, 24)).columns


def hr(char: str = "─", width: int | None = None) -> str:
    return char * max(10, width or term_width())


def fmt_ppg(p: float) -> str:
    # pad before colouring so escape codes don't break alignment
    txt = f"{p:5.3f}"
    if p >= 0.75:
        return style(txt, "green")
    if p >= 0.5:
        return style(txt, "yellow")
    return style(txt, "red")


def fmt_row(values: Sequence[str], widths: Sequence[int]) -> str:
    # agent name (second column) left-aligned, the rest right-aligned
    out = []
    for i, (v, w) in enumerate(zip(values, widths)):
        out.append(v.ljust(w) if i == 1 else v.rjust(w))
    return "  ".join(out)
