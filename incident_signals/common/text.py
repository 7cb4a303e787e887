from typing import Any


def as_text(value: Any) -> str:
    """Coerce detector input to a string; None becomes empty."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def contains_any(lowered: str, keywords) -> list:
    """Keywords that occur as substrings of an already-lowercased text, in list order."""
    return [kw for kw in keywords if kw in lowered]
