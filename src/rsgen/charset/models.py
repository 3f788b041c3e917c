from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class LatinAlphabetAndNumeric(BaseModel):
    """Digits plus latin letters of the selected cases."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["latin_alphabet_and_numeric"] = "latin_alphabet_and_numeric"
    use_upper_case: bool = True
    use_lower_case: bool = True


class LatinAlphabet(BaseModel):
    """Latin letters of the selected cases, no digits."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["latin_alphabet"] = "latin_alphabet"
    use_upper_case: bool = True
    use_lower_case: bool = True


class Numeric(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["numeric"] = "numeric"


class PrintableAsciiWithoutSpace(BaseModel):
    """Printable ASCII without SPACE (0x21-0x7E)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["printable_ascii_without_space"] = (
        "printable_ascii_without_space"
    )


class PrintableAsciiWithSpace(BaseModel):
    """Printable ASCII with SPACE (0x20-0x7E)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["printable_ascii_with_space"] = "printable_ascii_with_space"


CharsetPolicy = Annotated[
    LatinAlphabetAndNumeric
    | LatinAlphabet
    | Numeric
    | PrintableAsciiWithoutSpace
    | PrintableAsciiWithSpace,
    Field(discriminator="kind"),
]

_charset_policy_adapter: TypeAdapter[Any] = TypeAdapter(CharsetPolicy)


class CharsetName(str, Enum):
    ALPHANUMERIC = "alphanumeric"
    NUMERIC = "numeric"
    PRINTABLE_ASCII = "printable_ascii"
    PRINTABLE_ASCII_WITH_SPACE = "printable_ascii_with_space"
    UPPER = "upper"
    LOWER = "lower"
    LATIN = "latin"


def default_policy() -> LatinAlphabetAndNumeric:
    return LatinAlphabetAndNumeric(use_upper_case=True, use_lower_case=True)


def only_upper_case() -> LatinAlphabet:
    return LatinAlphabet(use_upper_case=True, use_lower_case=False)


def only_lower_case() -> LatinAlphabet:
    return LatinAlphabet(use_upper_case=False, use_lower_case=True)


def only_latin_alphabet() -> LatinAlphabet:
    return LatinAlphabet(use_upper_case=True, use_lower_case=True)


def policy_from_name(name: CharsetName | str) -> CharsetPolicy:
    """Return the policy registered under a short charset name.

    Raises ValueError for unknown names.
    """
    try:
        charset_name = CharsetName(name)
    except ValueError as err:
        valid = ", ".join(member.value for member in CharsetName)
        raise ValueError(
            f"Unknown charset '{name}'. Expected one of: {valid}"
        ) from err

    match charset_name:
        case CharsetName.ALPHANUMERIC:
            return default_policy()
        case CharsetName.NUMERIC:
            return Numeric()
        case CharsetName.PRINTABLE_ASCII:
            return PrintableAsciiWithoutSpace()
        case CharsetName.PRINTABLE_ASCII_WITH_SPACE:
            return PrintableAsciiWithSpace()
        case CharsetName.UPPER:
            return only_upper_case()
        case CharsetName.LOWER:
            return only_lower_case()
        case CharsetName.LATIN:
            return only_latin_alphabet()


def parse_policy(data: Any) -> CharsetPolicy:
    """Validate a policy from a mapping, e.g. ``{"kind": "numeric"}``."""
    return _charset_policy_adapter.validate_python(data)
