# util/functions.py
import hashlib
import re

_WS = re.compile(r"\s+")


def clip_words(text: str, max_words: int = 100) -> str:
    """
    - Trim 'text' to at most `max_words` tokens separated by whitespace.
    - Adds an ellipsis when trimming occurs.
    """
    words = text.split()
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + " …"


def clip_chars(text: str, max_chars: int) -> str:
    """Cut to `max_chars`, replacing the tail with '...' when trimming occurs."""
    if len(text) <= max_chars:
        return text
    return text[: max_chars - 3] + "..."


def collapse_ws(text: str) -> str:
    return _WS.sub(" ", text).strip()


def text_hash(text: str) -> str:
    """Stable content key for cache lookups."""
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
