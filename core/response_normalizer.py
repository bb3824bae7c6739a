# core/response_normalizer.py
import json
import re
from typing import Any, Iterator, Optional
import logging
from core.entities import ParseEmpty, ParseOk, ParseResult

logger = logging.getLogger(__name__)

EMPTY_ARRAY = "[]"
EMPTY_OBJECT = "{}"

_FENCE = re.compile(r"```[a-zA-Z]*")
_PREAMBLES = (
    re.compile(r"^Here (?:is|are)\b[^\[{:]*:?\s*", re.IGNORECASE),
    re.compile(r"^The extracted claims? (?:is|are):?\s*", re.IGNORECASE),
    re.compile(r"^JSON:?\s*", re.IGNORECASE),
    re.compile(r"^Output:?\s*", re.IGNORECASE),
    re.compile(r"^Result:?\s*", re.IGNORECASE),
    re.compile(r"^Claims?:?\s*", re.IGNORECASE),
)
_ARRAY_START = re.compile(r"\[\s*\{")
_OBJECT_START = re.compile(r"\{")

_decoder = json.JSONDecoder()


def _clean(raw: str) -> str:
    cleaned = _FENCE.sub("", raw.strip()).strip()
    for phrase in _PREAMBLES:
        cleaned = phrase.sub("", cleaned, count=1)
    return cleaned.strip()


def _drop_prose_prefix(cleaned: str) -> str:
    # "Here is my evaluation in JSON format: {...}"
    colon = cleaned.find(":")
    if 0 < colon < 100:
        after = cleaned[colon + 1 :].strip()
        if after.startswith("{"):
            return after
    return cleaned


def _decode_at(text: str, pos: int) -> Optional[Any]:
    try:
        value, _ = _decoder.raw_decode(text, pos)
    except ValueError:
        return None
    return value


def _objects_with(text: str, key: str) -> Iterator[dict]:
    for m in _OBJECT_START.finditer(text):
        value = _decode_at(text, m.start())
        if isinstance(value, dict) and key in value:
            yield value


def _find_array(raw: Any) -> Optional[list]:
    if not raw or not isinstance(raw, str):
        return None
    cleaned = _clean(raw)

    for m in _ARRAY_START.finditer(cleaned):
        value = _decode_at(cleaned, m.start())
        if isinstance(value, list):
            return value

    obj = next(_objects_with(cleaned, "claim"), None)
    if obj is not None:
        return [obj]

    value = _decode_at(cleaned, 0) if cleaned else None
    if isinstance(value, list):
        return value
    if isinstance(value, dict) and "claim" in value:
        return [value]
    return None


def _find_object(raw: Any, required_key: str) -> Optional[dict]:
    if not raw or not isinstance(raw, str):
        return None
    cleaned = _drop_prose_prefix(_clean(raw))

    obj = next(_objects_with(cleaned, required_key), None)
    if obj is not None:
        return obj

    value = _decode_at(cleaned, 0) if cleaned else None
    if isinstance(value, dict) and value.get(required_key):
        return value
    return None


def extract_array(raw: str) -> str:
    """
    Return a JSON array string recovered from `raw`, or "[]".

    Output is canonical JSON, so feeding it back in yields the same string.
    """
    found = _find_array(raw)
    return json.dumps(found, ensure_ascii=False) if found is not None else EMPTY_ARRAY


def extract_object(raw: str, required_key: str = "assessment") -> str:
    """Return a JSON object string holding `required_key`, or "{}"."""
    found = _find_object(raw, required_key)
    return json.dumps(found, ensure_ascii=False) if found is not None else EMPTY_OBJECT


def parse_array(raw: str) -> ParseResult:
    data = json.loads(extract_array(raw))
    if not data:
        logger.debug("normalize.array.empty size=%d", len(raw or ""))
        return ParseEmpty(reason="no array payload")
    return ParseOk(value=data)


def parse_object(raw: str, required_key: str = "assessment") -> ParseResult:
    data = json.loads(extract_object(raw, required_key))
    if not data:
        logger.debug("normalize.object.empty size=%d", len(raw or ""))
        return ParseEmpty(reason=f"no object with {required_key!r}")
    return ParseOk(value=data)
