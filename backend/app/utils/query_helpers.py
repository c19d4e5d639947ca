import re
from typing import Callable, Iterable, NamedTuple, Union

LIST_SEPARATORS = re.compile(r"[|,]")
LIKE_SPECIALS = re.compile(r"([\\%_])")


def normalise_slice(values: Iterable[str]) -> list[str]:
    """
    Clean a list of raw string values:
    - Strip surrounding whitespace
    - Drop empty members
    - Drop repeats, keeping first-seen order
    """
    result = []
    for value in values:
        value = value.strip()
        if value and value not in result:
            result.append(value)
    return result


def split_multi_value(raw: str) -> list[str]:
    """Split a pipe- or comma-delimited query value into clean members."""
    return normalise_slice(LIST_SEPARATORS.split(raw or ""))


def normalise_scalar(raw: str) -> str:
    return (raw or "").strip()


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so user text matches literally."""
    return LIKE_SPECIALS.sub(r"\\\1", term)


def param_name(position: int) -> str:
    return f"p{position}"


def placeholder(position: int) -> str:
    """Named bind for a 1-based parameter position (`:p1`, `:p2`, ...)."""
    return ":" + param_name(position)


class Allowlist(NamedTuple):
    allowed: frozenset
    normalise: Callable[[str], Union[str, list[str]]]


def apply_allowlist(field: str, raw, allowlist: Allowlist):
    """
    Normalise `raw` and check every member against the allowlist.
    Raises ValueError naming the first rejected member.
    """
    if raw is None:
        raw = ""
    if not isinstance(raw, str):
        raise ValueError(f"{field} must be a string")

    value = allowlist.normalise(raw)
    members = value if isinstance(value, list) else [value]
    for member in members:
        if member not in allowlist.allowed:
            raise ValueError(f"unsupported {field} value: {member!r}")
    return value
