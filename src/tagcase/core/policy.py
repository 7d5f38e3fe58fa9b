from enum import Enum

# Python counts the ASCII separators FS, GS, RS and US as whitespace; Go does not.
_NOT_GO_SPACE = frozenset("\x1c\x1d\x1e\x1f")


class Verdict(str, Enum):
    OK = "ok"
    CONTAINS_WHITESPACE = "contains whitespace"
    NOT_CAMEL_CASE = "is not camelcase"


def _contains_whitespace(value: str) -> bool:
    return any(ch.isspace() and ch not in _NOT_GO_SPACE for ch in value)


def check_key(value: str) -> Verdict:
    """Check a serialization key against the camelCase policy.

    Rules apply in order and the first hit wins: whitespace, then
    underscores, then an uppercase first character. Empty keys pass, as do
    keys starting with a digit or symbol.
    """
    if _contains_whitespace(value):
        return Verdict.CONTAINS_WHITESPACE
    if "_" in value:
        return Verdict.NOT_CAMEL_CASE
    if value and value[0].lower() != value[0]:
        return Verdict.NOT_CAMEL_CASE
    return Verdict.OK


def describe(verdict: Verdict) -> str:
    if verdict is Verdict.OK:
        raise ValueError("OK verdicts have no description")
    return verdict.value
