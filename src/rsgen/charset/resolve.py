"""Charset policy resolution into concrete alphabets."""

import logging
import string
from collections.abc import Iterator
from dataclasses import dataclass

from rsgen.charset.models import (
    CharsetPolicy,
    LatinAlphabet,
    LatinAlphabetAndNumeric,
    Numeric,
    PrintableAsciiWithoutSpace,
    PrintableAsciiWithSpace,
)
from rsgen.core.errors import EmptyAlphabetError

_LOGGER = logging.getLogger(__name__)

_PRINTABLE_FIRST = 0x21
_PRINTABLE_LAST = 0x7E
_SPACE = 0x20


@dataclass(frozen=True)
class Alphabet:
    """Ordered, immutable sequence of distinct candidate characters."""

    chars: str

    def __post_init__(self) -> None:
        if not self.chars:
            raise EmptyAlphabetError(
                "alphabet must contain at least one character"
            )
        if len(set(self.chars)) != len(self.chars):
            raise ValueError("alphabet characters must be distinct")

    def __len__(self) -> int:
        return len(self.chars)

    def __getitem__(self, index: int) -> str:
        return self.chars[index]

    def __contains__(self, char: object) -> bool:
        return isinstance(char, str) and len(char) == 1 and char in self.chars

    def __iter__(self) -> Iterator[str]:
        return iter(self.chars)


def _latin_letters(use_upper_case: bool, use_lower_case: bool) -> str:
    letters = ""
    if use_upper_case:
        letters += string.ascii_uppercase
    if use_lower_case:
        letters += string.ascii_lowercase
    return letters


def _ascii_range(first: int, last: int) -> str:
    return "".join(chr(code) for code in range(first, last + 1))


def _policy_chars(policy: CharsetPolicy) -> str:
    match policy:
        case LatinAlphabetAndNumeric():
            return (
                _latin_letters(policy.use_upper_case, policy.use_lower_case)
                + string.digits
            )
        case LatinAlphabet():
            return _latin_letters(policy.use_upper_case, policy.use_lower_case)
        case Numeric():
            return string.digits
        case PrintableAsciiWithoutSpace():
            return _ascii_range(_PRINTABLE_FIRST, _PRINTABLE_LAST)
        case PrintableAsciiWithSpace():
            return _ascii_range(_SPACE, _PRINTABLE_LAST)
        case _:
            raise TypeError(f"Unsupported charset policy: {policy!r}")


def resolve_alphabet(policy: CharsetPolicy) -> Alphabet:
    """Resolve a charset policy into its alphabet.

    The result depends only on the policy, so resolving the same policy twice
    gives the same characters in the same order.

    Raises EmptyAlphabetError when the policy selects no characters, e.g.
    ``LatinAlphabet`` with both case flags disabled.
    """
    chars = _policy_chars(policy)
    if not chars:
        raise EmptyAlphabetError(
            f"charset policy '{policy.kind}' resolves to an empty alphabet "
            "(enable upper or lower case letters)"
        )
    _LOGGER.debug("Resolved %s to %d characters", policy.kind, len(chars))
    return Alphabet(chars)
