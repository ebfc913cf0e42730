"""Canonicalize free-text cabinet labels into short catalog codes.

Labels arrive from a vision/LLM extraction step or from a person typing them,
so the same cabinet shows up as ``B30``, ``Base Cabinet 30" Wide``,
``B30 BUTT.1`` or ``30 B``. :func:`normalize` runs an ordered list of small
rules over the label; each rule is a :class:`NormalizationRule` that can be
exercised on its own.

Rule order:
    1. uppercase   - uppercase, quote/inch markers and noise words removed
    2. type_words  - verbose type phrases to prefixes, most specific first
    3. depth       - depth annotations removed, ``30 X 30`` joined
    4. options     - option tokens removed (never the leading token)
    5. suffixes    - ``.1`` / ``-2`` tags and separated ``L``/``R`` removed
    6. reversed    - ``30 B`` swapped to ``B 30``
    7. collapse    - everything outside ``[A-Z0-9]`` removed
"""

from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Callable, Optional, Sequence, Tuple


@dataclass(frozen=True)
class NormalizationRule:
    name: str
    apply: Callable[[str], str]


NOISE_WORDS: Sequence[str] = ("CABINETS", "CABINET", "CAB", "WIDE", "HIGH", "UNIT")

# Most specific phrase first so "SINK BASE" is consumed before "BASE".
TYPE_WORDS: Sequence[Tuple[str, str]] = (
    ("VANITY SINK BASE", "VSB"),
    ("BLIND BASE CORNER", "BBC"),
    ("BASE BLIND CORNER", "BBC"),
    ("BLIND CORNER BASE", "BBC"),
    ("WALL DIAGONAL CORNER", "WDC"),
    ("WALL BLIND CORNER", "WBC"),
    ("REFRIGERATOR END PANEL", "REP"),
    ("DISHWASHER RETURN", "DWR"),
    ("DISHWASHER PANEL", "DWP"),
    ("SINK BASE", "SB"),
    ("DRAWER BASE", "DB"),
    ("LAZY SUSAN", "LS"),
    ("WALL CORNER", "WC"),
    ("BASE FILLER", "BF"),
    ("WALL FILLER", "WF"),
    ("TOE KICK", "TK"),
    ("CROWN MOLDING", "CM"),
    ("CROWN MOULDING", "CM"),
    ("VANITY", "V"),
    ("PANTRY", "U"),
    ("UTILITY", "U"),
    ("TALL", "U"),
    ("SINK", "SB"),
    ("DRAWER", "DB"),
    ("FILLER", "BF"),
    ("WALL", "W"),
    ("BASE", "B"),
)

OPTION_TOKENS: Sequence[str] = (
    "BUTT",
    "ET",
    "AO",
    "1TD",
    "2TD",
    "3TD",
    "ROT",
    "VAL",
    "TK",
    "CM",
    "DEP",
    "WF",
    "HINGE",
    "LEFT",
    "RIGHT",
    "STD",
    "L",
    "R",
)

_QUOTE_MARKS = re.compile("[\"“”″]|''")
_INCH_AFTER_NUMBER = re.compile(r"(?<=\d)\s*(?:INCHES|INCH|IN)\b")
_INCH_WORDS = re.compile(r"\b(?:INCHES|INCH|IN)\b")
_NOISE = re.compile(r"\b(?:" + "|".join(NOISE_WORDS) + r")\b")
_WHITESPACE = re.compile(r"\s+")

# The prefix absorbs the whitespace before a size so "BASE 30" becomes "B30".
_TYPE_PATTERNS = tuple(
    (re.compile(r"\b" + r"\s+".join(phrase.split()) + r"\b(?:\s+(?=\d))?"), prefix)
    for phrase, prefix in TYPE_WORDS
)

_DEPTH_PATTERNS = (
    re.compile(r"\s*\bX\s*\d{1,2}(?:\.\d+)?\s*(?:DP|DEPTH|DEEP)\b"),
    re.compile(r"\s*\b\d{1,2}(?:\.\d+)?\s*(?:DP|DEPTH|DEEP)\b"),
)
_DIMENSION_PAIR = re.compile(r"(?<=\d)\s*X\s*(?=\d)")

# A preceding separator is required, so the leading token (the base code) is kept.
_OPTIONS = re.compile(r"(?<=[^A-Z0-9])(?:" + "|".join(OPTION_TOKENS) + r")(?![A-Z0-9])")

_TRAILING_SEPARATORS = " .-_/"
_DOT_TAG = re.compile(r"\.\d+$")
_DASH_TAG = re.compile(r"(?<=\d)-\d$")
_ORIENTATION = re.compile(r"[\s.\-_/]+[LR]$")

_REVERSED = re.compile(r"^(\d+)[\s\-]+([A-Z]{1,4})$")
_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def _uppercase(text: str) -> str:
    text = text.upper()
    text = _QUOTE_MARKS.sub(" ", text)
    text = _INCH_AFTER_NUMBER.sub(" ", text)
    text = _INCH_WORDS.sub(" ", text)
    text = _NOISE.sub(" ", text)
    return _WHITESPACE.sub(" ", text).strip()


def _type_words(text: str) -> str:
    for pattern, prefix in _TYPE_PATTERNS:
        text = pattern.sub(prefix, text)
    return text


def _depth(text: str) -> str:
    for pattern in _DEPTH_PATTERNS:
        text = pattern.sub("", text)
    return _DIMENSION_PAIR.sub("", text)


def _options(text: str) -> str:
    return _OPTIONS.sub("", text)


def _suffixes(text: str) -> str:
    while True:
        before = text
        text = text.rstrip(_TRAILING_SEPARATORS)
        text = _DOT_TAG.sub("", text)
        text = _DASH_TAG.sub("", text)
        text = _ORIENTATION.sub("", text)
        if text == before:
            return text


def _reversed(text: str) -> str:
    return _REVERSED.sub(r"\2 \1", text.strip())


def _collapse(text: str) -> str:
    return _NON_ALNUM.sub("", text)


RULES: Sequence[NormalizationRule] = (
    NormalizationRule("uppercase", _uppercase),
    NormalizationRule("type_words", _type_words),
    NormalizationRule("depth", _depth),
    NormalizationRule("options", _options),
    NormalizationRule("suffixes", _suffixes),
    NormalizationRule("reversed", _reversed),
    NormalizationRule("collapse", _collapse),
)


def apply_rules(text: str, rules: Sequence[NormalizationRule] = RULES) -> str:
    """Run one pass of ``rules`` over ``text``."""
    for rule in rules:
        text = rule.apply(text)
    return text


def normalize(raw: Optional[str]) -> str:
    """Return the canonical code for a raw label.

    The rule pass is repeated until the output stops changing, which keeps
    ``normalize(normalize(x)) == normalize(x)`` true even when collapsing
    separators spells a noise word (``"C ABINET"``). After the first pass the
    text is ``[A-Z0-9]*`` and every rule either leaves it alone or shortens
    it, so the loop terminates.

    Never raises; empty or ``None`` input gives ``""``.
    """
    if not raw:
        return ""
    current = apply_rules(str(raw))
    while True:
        again = apply_rules(current)
        if again == current:
            return current
        current = again
