import re
from typing import Any, List, Sequence

_NON_WORD = re.compile(r"[^\w\s]")
_WHITESPACE = re.compile(r"\s+")
_UNDERSCORES = re.compile(r"_{2,}")


def is_blank(value: Any) -> bool:
    """True for None, NaN and strings that are empty after trimming."""
    if value is None:
        return True
    if isinstance(value, float) and value != value:
        return True
    return isinstance(value, str) and value.strip() == ""


def normalize_column_name(raw: Any, position: int = 1) -> str:
    """
    Turn a raw header cell into a stable identifier.

    Blank cells get the positional fallback `column_{position}` (1-based).
    Lowercasing happens before substitution so that a second pass is a no-op.
    """
    if is_blank(raw):
        raw = f"Column_{position}"
    name = str(raw).strip().lower()
    name = _NON_WORD.sub("_", name)
    name = _WHITESPACE.sub("_", name)
    name = _UNDERSCORES.sub("_", name)
    return name


def build_headers(header_row: Sequence[Any]) -> List[str]:
    """Normalize a header row and disambiguate repeated names with `_2`, `_3`, ..."""
    headers: List[str] = []
    seen = set()
    for index, cell in enumerate(header_row):
        base = normalize_column_name(cell, index + 1)
        name = base
        suffix = 2
        while name in seen:
            name = f"{base}_{suffix}"
            suffix += 1
        seen.add(name)
        headers.append(name)
    return headers
