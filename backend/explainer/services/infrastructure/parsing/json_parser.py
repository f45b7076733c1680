"""
JSON recovery for language-model output.

Responses are supposed to be a raw JSON object but arrive wrapped in code
fences, surrounded by prose, with bare-word enum values or with invalid
backslash escapes. Each repair is a separate function; `parse_llm_json` runs
them in a fixed order and reports which stage produced the value.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

# Keys whose values are always strings. Models sometimes emit `"color": BLUE`.
KNOWN_STRING_KEYS = (
    "narration",
    "manimCode",
    "code",
    "action",
    "type",
    "content",
    "latex",
    "formula",
    "label",
    "color",
    "animation",
    "style",
)

_BARE_VALUE_RE = re.compile(
    r'("(?:' + "|".join(KNOWN_STRING_KEYS) + r')"\s*:\s*)'
    r'(?!(?:true|false|null)\b)'
    r'([A-Za-z_][A-Za-z0-9_\-]*)'
    r'(?=\s*(?:[,}\]]|$))'
)

_LEADING_FENCE_RE = re.compile(r"^```[\w-]*[ \t]*\r?\n?")
_TRAILING_FENCE_RE = re.compile(r"\r?\n?[ \t]*```\s*$")
_GREEDY_OBJECT_RE = re.compile(r"\{[\s\S]*\}")
# Valid escapes are consumed whole so `\\p` is not mistaken for `\` + `\p`
_ESCAPE_RE = re.compile(r'\\(\\|["/bfnrt]|u[0-9a-fA-F]{4})|\\')


class JSONRecoveryError(ValueError):
    """No parse attempt produced JSON."""

    def __init__(self, message: str, attempts: List[Tuple[str, str]]):
        self.attempts = attempts
        super().__init__(message)


@dataclass(frozen=True)
class ParsedJSON:
    value: Any
    stage: str  # "direct", "extracted" or "escaped"


def strip_code_fences(text: str) -> str:
    """Remove a leading ```lang marker and a trailing ``` marker."""
    text = text.strip()
    text = _LEADING_FENCE_RE.sub("", text, count=1)
    text = _TRAILING_FENCE_RE.sub("", text, count=1)
    return text.strip()


def quote_bare_values(text: str) -> str:
    """Quote unquoted identifier values of known string keys.

    `{"color": BLUE}` becomes `{"color": "BLUE"}`. Literals true/false/null and
    already-quoted values are left alone, so applying this twice is the same as
    applying it once.
    """
    return _BARE_VALUE_RE.sub(r'\1"\2"', text)


def extract_first_json_object(text: str) -> Optional[str]:
    """Return the first balanced `{...}` span in `text`.

    Double-quoted strings are respected once inside an object, so braces in
    narration or code do not end the scan early. When no object closes, the
    greedy span from the first `{` to the last `}` is returned instead.
    """
    if not text:
        return None

    depth = 0
    start: Optional[int] = None
    in_string = False
    escape = False

    for i, ch in enumerate(text):
        if depth and in_string:
            if escape:
                escape = False
            elif ch == "\\":
                escape = True
            elif ch == '"':
                in_string = False
            continue

        if ch == "{":
            if depth == 0:
                start = i
            depth += 1
        elif ch == "}" and depth:
            depth -= 1
            if depth == 0 and start is not None:
                return text[start:i + 1]
        elif ch == '"' and depth:
            in_string = True

    match = _GREEDY_OBJECT_RE.search(text)
    return match.group(0) if match else None


def fix_json_escapes(text: str) -> str:
    """Double any backslash that does not start a valid JSON escape.

    LaTeX in generated code (`\\frac`, `\\pi`) is the usual culprit.
    """
    return _ESCAPE_RE.sub(lambda m: m.group(0) if m.group(1) else "\\\\", text)


def parse_llm_json(text: str) -> ParsedJSON:
    """Recover a JSON value from model output.

    Order: strip fences, quote bare values, parse; then extract the first
    object, quote again, parse; finally fix invalid escapes and parse.

    Raises:
        JSONRecoveryError: every attempt failed
    """
    attempts: List[Tuple[str, str]] = []
    cleaned = strip_code_fences(text or "")

    try:
        return ParsedJSON(json.loads(quote_bare_values(cleaned)), "direct")
    except json.JSONDecodeError as e:
        attempts.append(("direct", str(e)))

    extracted = extract_first_json_object(cleaned)
    if extracted is None:
        raise JSONRecoveryError("no JSON object found in response", attempts)

    repaired = quote_bare_values(extracted)
    try:
        return ParsedJSON(json.loads(repaired), "extracted")
    except json.JSONDecodeError as e:
        attempts.append(("extracted", str(e)))

    try:
        return ParsedJSON(json.loads(fix_json_escapes(repaired)), "escaped")
    except json.JSONDecodeError as e:
        attempts.append(("escaped", str(e)))

    raise JSONRecoveryError(attempts[-1][1], attempts)
