"""Turns raw summarizer output into clean bullet lines."""

import re

from promoposter.generation.models import Summary

_MAX_LINES = 30
_BULLET_PREFIX = re.compile(r"^\s*(?:[-*•·▪►✔✓]+|\d{1,2}[.)](?=\s))\s*")
_DECORATION = re.compile(r"[*#★☆✨🔥🎉📅📍📞✅]+")
_WHITESPACE = re.compile(r"\s+")


def parse_summary(text: str) -> Summary:
    """Split ``text`` into bullet lines.

    Bullet markers, numbering and decorative symbols are dropped, inner runs of
    whitespace collapse to one space, blank lines are skipped. At most
    ``_MAX_LINES`` lines are kept.
    """
    lines: list[str] = []
    for raw in text.splitlines():
        line = _normalize_line(raw)
        if line:
            lines.append(line)
        if len(lines) >= _MAX_LINES:
            break
    return Summary(lines=tuple(lines))


def _normalize_line(raw: str) -> str:
    line = _BULLET_PREFIX.sub("", raw)
    line = _DECORATION.sub("", line)
    return _WHITESPACE.sub(" ", line).strip()
