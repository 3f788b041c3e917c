"""charset: character-set policies and their resolved alphabets."""

from rsgen.charset.models import (
    CharsetName,
    CharsetPolicy,
    LatinAlphabet,
    LatinAlphabetAndNumeric,
    Numeric,
    PrintableAsciiWithoutSpace,
    PrintableAsciiWithSpace,
    default_policy,
    only_latin_alphabet,
    only_lower_case,
    only_upper_case,
    parse_policy,
    policy_from_name,
)
from rsgen.charset.resolve import Alphabet, resolve_alphabet

__all__ = [
    "Alphabet",
    "CharsetName",
    "CharsetPolicy",
    "LatinAlphabet",
    "LatinAlphabetAndNumeric",
    "Numeric",
    "PrintableAsciiWithSpace",
    "PrintableAsciiWithoutSpace",
    "default_policy",
    "only_latin_alphabet",
    "only_lower_case",
    "only_upper_case",
    "parse_policy",
    "policy_from_name",
    "resolve_alphabet",
]
