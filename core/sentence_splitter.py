# core/sentence_splitter.py
import re
from typing import Dict, Final, List

# Placeholders must not contain sentence-terminal punctuation.
ABBREVIATIONS: Final[Dict[str, str]] = {
    "Mr.": "Mr<DOT>",
    "Mrs.": "Mrs<DOT>",
    "Ms.": "Ms<DOT>",
    "Dr.": "Dr<DOT>",
    "Prof.": "Prof<DOT>",
    "Sr.": "Sr<DOT>",
    "Jr.": "Jr<DOT>",
    "St.": "St<DOT>",
    "Co.": "Co<DOT>",
    "Inc.": "Inc<DOT>",
    "Ltd.": "Ltd<DOT>",
    "Corp.": "Corp<DOT>",
    "vs.": "vs<DOT>",
    "e.g.": "eg<DOT>",
    "i.e.": "ie<DOT>",
    "etc.": "etc<DOT>",
    "U.S.": "US<DOT>",
    "U.K.": "UK<DOT>",
}

# Whole tokens only: "devs." must not be read as "vs."
_ABBREVIATION = re.compile(
    r"(?<!\w)(?:"
    + "|".join(re.escape(a) for a in sorted(ABBREVIATIONS, key=len, reverse=True))
    + ")"
)
_SENTENCE = re.compile(r"[^.!?]+(?:[.!?]+|$)")
_DECIMAL = re.compile(r"(?<=\d)\.(?=\d)")
_DECIMAL_MARK = "<DEC>"


def _protect(text: str) -> str:
    text = _ABBREVIATION.sub(lambda m: ABBREVIATIONS[m.group(0)], text)
    return _DECIMAL.sub(_DECIMAL_MARK, text)


def _restore(segment: str) -> str:
    for abbrev, placeholder in ABBREVIATIONS.items():
        segment = segment.replace(placeholder, abbrev)
    return segment.replace(_DECIMAL_MARK, ".")


def split(text: str) -> List[str]:
    """
    Split `text` into sentences, keeping terminal punctuation and not breaking
    on the known abbreviations above. Trailing text without a terminator is
    returned as the last sentence.
    """
    if not text:
        return []
    protected = _protect(text)
    out: List[str] = []
    for m in _SENTENCE.finditer(protected):
        sentence = _restore(m.group(0)).strip()
        if sentence:
            out.append(sentence)
    return out
