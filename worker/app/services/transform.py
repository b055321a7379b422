# worker/app/services/transform.py
"""Core transform: raw text -> (decode) -> parse -> sample -> pretty JSON.

Everything here is a pure function of its arguments. Surfaces (HTTP router,
CLI) call ``ensure_not_blank`` first, then ``sample_text``, and map the
errors below to user notices. Line/column for a ``ParseError`` is derived
by the caller with ``position_to_line_col``.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any, Tuple

from worker.app.models import SamplingConfig
from worker.app.services.escapes import decode_escapes, raw_offset
from worker.app.services.sampler import sample_value

log = logging.getLogger(__name__)

# Strings are matched first so constants inside them are skipped.
_CONSTANT_RE = re.compile(r'"(?:[^"\\]|\\.)*"|(-?Infinity|NaN)')
_SURROGATE_RE = re.compile("[\ud800-\udfff]")


class SamplerError(Exception):
    """Base class for errors surfaced to sampler callers."""


class ValidationError(SamplerError):
    """Input rejected before parsing (empty or whitespace only)."""


class ParseError(SamplerError):
    """Input is not valid JSON. ``pos`` is a character offset into ``doc``."""

    def __init__(self, msg: str, doc: str, pos: int):
        super().__init__(f"{msg} (position {pos})")
        self.msg = msg
        self.doc = doc
        self.pos = pos


class _NonStandardConstant(Exception):
    pass


def _reject_constant(name: str) -> Any:
    raise _NonStandardConstant(name)


def _constant_pos(doc: str) -> int:
    for m in _CONSTANT_RE.finditer(doc):
        if m.group(1):
            return m.start(1)
    return 0


def _parse_float(s: str) -> Any:
    # Out-of-range literals serialize as null, like JSON.stringify does.
    f = float(s)
    return f if math.isfinite(f) else None


def _parse_int(s: str) -> Any:
    try:
        return int(s)
    except ValueError:
        # longer than sys.get_int_max_str_digits()
        return _parse_float(s)


def ensure_not_blank(raw: str | None) -> str:
    if raw is None or not raw.strip():
        raise ValidationError("input is empty; paste a JSON document")
    return raw


def parse_json(text: str) -> Any:
    """
    Strict RFC 8259 parse: NaN/Infinity literals are rejected. Numbers too
    large for a finite float become None.
    """
    try:
        return json.loads(
            text,
            parse_constant=_reject_constant,
            parse_float=_parse_float,
            parse_int=_parse_int,
        )
    except json.JSONDecodeError as e:
        raise ParseError(e.msg, text, e.pos) from e
    except _NonStandardConstant as e:
        raise ParseError(f"Invalid literal {e}", text, _constant_pos(text)) from None
    except RecursionError as e:
        raise ParseError("Document nested too deeply", text, 0) from e


def _well_formed(text: str) -> str:
    # Join adjacent surrogate halves, escape the ones left unpaired.
    if not _SURROGATE_RE.search(text):
        return text
    text = text.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
    return _SURROGATE_RE.sub(lambda m: "\\u%04x" % ord(m.group()), text)


def dump_pretty(value: Any) -> str:
    return _well_formed(json.dumps(value, indent=2, ensure_ascii=False, allow_nan=False))


def sample_text(raw: str, config: SamplingConfig) -> str:
    text = decode_escapes(raw, config.decode_escapes)
    try:
        data = parse_json(text)
    except ParseError as e:
        if not config.decode_escapes:
            raise
        # report the position in the text the user supplied
        raise ParseError(e.msg, raw, raw_offset(raw, e.pos)) from e
    sampled = sample_value(data, config.max_array_length, config.apply_limit)
    out = dump_pretty(sampled)
    log.debug(
        f"[sample] in_chars={len(raw)} out_chars={len(out)} "
        f"n={config.max_array_length} limit={config.apply_limit} "
        f"decode={config.decode_escapes}"
    )
    return out


def position_to_line_col(text: str, pos: int) -> Tuple[int, int]:
    """1-based (line, column) of character offset ``pos`` in ``text``."""
    pos = max(0, min(pos, len(text)))
    lines = text[:pos].split("\n")
    return len(lines), len(lines[-1]) + 1
