"""LaTeX clean-up shared by the typesetting backends.

Placed results carry MathJax-style LaTeX (`\\(\\LARGE{...}\\)`); mathtext
and the plain renderer both need it without delimiters or sizing commands.
"""
from __future__ import annotations

_SIZE_COMMANDS = (r"\tiny", r"\small", r"\normalsize", r"\large", r"\Large",
                  r"\LARGE", r"\huge", r"\Huge", r"\displaystyle", r"\textstyle")


def sanitize_latex(s: str) -> str:
    """Strip math delimiters, sizing commands and \\left/\\right."""
    s = s.strip()
    for opening, closing in ((r"\(", r"\)"), (r"\[", r"\]"), ("$", "$")):
        if s.startswith(opening) and s.endswith(closing) and len(s) >= len(opening) + len(closing):
            s = s[len(opening):len(s) - len(closing)].strip()
    for cmd in sorted(_SIZE_COMMANDS, key=len, reverse=True):
        # \LARGE{x = 5} -> x = 5
        if s.startswith(cmd + "{") and s.endswith("}"):
            s = s[len(cmd) + 1:-1].strip()
        s = s.replace(cmd, "")
    s = s.replace(r"\left", "").replace(r"\right", "")
    return " ".join(s.split())
