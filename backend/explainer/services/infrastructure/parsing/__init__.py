"""Parsing utilities for language-model output."""

from .json_parser import (
    KNOWN_STRING_KEYS,
    JSONRecoveryError,
    ParsedJSON,
    strip_code_fences,
    quote_bare_values,
    extract_first_json_object,
    fix_json_escapes,
    parse_llm_json,
)

__all__ = [
    "KNOWN_STRING_KEYS",
    "JSONRecoveryError",
    "ParsedJSON",
    "strip_code_fences",
    "quote_bare_values",
    "extract_first_json_object",
    "fix_json_escapes",
    "parse_llm_json",
]
