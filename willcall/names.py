import re
from typing import Optional

# ASCII word characters only; apostrophes and hyphens do not start a new word
_WORD_RE = re.compile(r"\w\S*", re.ASCII)


def _capitalize(match: re.Match) -> str:
    word = match.group(0)
    return word[0].upper() + word[1:].lower()


def to_proper_name_case(raw: Optional[str]) -> str:
    """Title-case a raw name: "o'CONNOR" -> "O'connor", "mary jane" -> "Mary Jane"."""
    if not raw:
        return ""
    return _WORD_RE.sub(_capitalize, raw)
