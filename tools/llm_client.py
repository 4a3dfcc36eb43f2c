"""Recovering the JSON object from a structured-intent reply.

Plan, draft and integrity replies are asked for as a single JSON object.
The object may still come back inside a code fence, after a sentence of
preamble, or with raw newlines inside a long markdown ``content`` string.
"""

import json
import re
from typing import Iterator

from config.exceptions import LLMResponseParseError

_FENCE_RE = re.compile(r"```[a-zA-Z]*\s*\n(.*?)```", re.DOTALL)

# strict=False accepts control characters inside strings
_DECODER = json.JSONDecoder(strict=False)


def _candidates(text: str) -> Iterator[str]:
    """Fenced blocks first, then the reply itself."""
    for match in _FENCE_RE.finditer(text):
        yield match.group(1).strip()
    yield text


def _first_object(candidate: str):
    """Decode the first JSON object found in ``candidate``, or None.

    A top-level array counts when it holds an object: its first object is
    taken.
    """
    for idx, char in enumerate(candidate):
        if char not in "{[":
            continue
        try:
            value, _ = _DECODER.raw_decode(candidate, idx)
        except json.JSONDecodeError:
            continue
        if isinstance(value, dict):
            return value
        if isinstance(value, list):
            for item in value:
                if isinstance(item, dict):
                    return item
    return None


def parse_json_response(text: str) -> dict:
    """Return the JSON object carried by a model reply.

    Raises:
        LLMResponseParseError: If the reply holds no JSON object.
    """
    text = (text or "").strip()
    for candidate in _candidates(text):
        payload = _first_object(candidate)
        if payload is not None:
            return payload
    raise LLMResponseParseError("No JSON object in model reply", raw_response=text)
