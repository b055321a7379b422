# worker/app/services/escapes.py
from __future__ import annotations

import re
from typing import List, Tuple

_UNICODE_ESC_RE = re.compile(r"\\u([0-9a-fA-F]{4})")
_BYTE_ESC_RE = re.compile(r"\\x([0-9a-fA-F]{2})")


def _to_char(m: re.Match) -> str:
    return chr(int(m.group(1), 16))


def decode_escapes(text: str, enabled: bool = True) -> str:
    """
    Replace textual ``\\uXXXX`` and ``\\xXX`` escapes in raw input with the
    characters they encode.

    Runs two passes over the text: ``\\u`` escapes first, then ``\\x`` escapes
    over the result of the first pass. Malformed escapes (too few digits,
    non-hex characters) are left as they are.

    Each ``\\uXXXX`` is decoded on its own, so a UTF-16 surrogate pair written
    as two escapes yields two surrogate code points, not one character.
    """
    if not enabled or not text:
        return text
    text = _UNICODE_ESC_RE.sub(_to_char, text)
    return _BYTE_ESC_RE.sub(_to_char, text)


def _sub_tracked(pattern: re.Pattern, text: str, offsets: List[int]) -> Tuple[str, List[int]]:
    out: List[str] = []
    offs: List[int] = []
    last = 0
    for m in pattern.finditer(text):
        out.append(text[last : m.start()])
        offs.extend(offsets[last : m.start()])
        out.append(_to_char(m))
        offs.append(offsets[m.start()])
        last = m.end()
    out.append(text[last:])
    offs.extend(offsets[last:])
    return "".join(out), offs


def raw_offset(raw: str, pos: int) -> int:
    """
    Map an offset in ``decode_escapes(raw)`` back to an offset in ``raw``.

    A decoded character maps to the start of the escape it came from; the
    end of the decoded text maps to ``len(raw)``.
    """
    # one extra slot so the end-of-text offset maps too
    offsets = list(range(len(raw) + 1))
    text, offsets = _sub_tracked(_UNICODE_ESC_RE, raw, offsets)
    text, offsets = _sub_tracked(_BYTE_ESC_RE, text, offsets)
    return offsets[max(0, min(pos, len(text)))]
