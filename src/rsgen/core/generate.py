"""Random string generation over a resolved alphabet."""

import logging
from collections.abc import Iterator

from rsgen.charset.models import CharsetPolicy, default_policy
from rsgen.charset.resolve import Alphabet, resolve_alphabet
from rsgen.core.errors import EmptyAlphabetError, InvalidLengthError
from rsgen.core.models import GenerationRequest
from rsgen.core.random_source import RandomSource, make_random_source

_LOGGER = logging.getLogger(__name__)


def _validate_length(length: int) -> None:
    if isinstance(length, bool) or not isinstance(length, int):
        raise InvalidLengthError(
            f"length must be an int, got {type(length).__name__}"
        )
    if length < 0:
        raise InvalidLengthError(f"length must be >= 0, got {length}")


def generate(length: int, alphabet: Alphabet, source: RandomSource) -> str:
    """Draw ``length`` characters from ``alphabet`` with replacement.

    Every position is an independent uniform draw, so characters may repeat.
    A length of zero returns the empty string.
    """
    _validate_length(length)
    bound = len(alphabet)
    if bound == 0:
        raise EmptyAlphabetError(
            "alphabet must contain at least one character"
        )
    return "".join(alphabet[source.next_bounded(bound)] for _ in range(length))


def gen_random_string_with_source(
    source: RandomSource,
    length: int,
    policy: CharsetPolicy | None = None,
) -> str:
    """Generate one string using a caller-owned random source."""
    _validate_length(length)
    if policy is None:
        policy = default_policy()
    alphabet = resolve_alphabet(policy)
    return generate(length, alphabet, source)


def gen_random_string(
    length: int,
    policy: CharsetPolicy | None = None,
    *,
    fast: bool = False,
    seed: int | None = None,
) -> str:
    """Generate one random string.

    Uses the secure random source unless ``fast`` is set. ``seed`` is only
    accepted together with ``fast``.

    Example:
        >>> from rsgen.charset import Numeric
        >>> len(gen_random_string(12, Numeric()))
        12
    """
    _validate_length(length)
    if policy is None:
        policy = default_policy()
    alphabet = resolve_alphabet(policy)
    source = make_random_source(fast=fast, seed=seed)
    return generate(length, alphabet, source)


def iter_random_strings(request: GenerationRequest) -> Iterator[str]:
    """Yield ``request.lines`` strings sharing one alphabet and one source."""
    alphabet = resolve_alphabet(request.charset)
    source = make_random_source(fast=request.fast, seed=request.seed)
    _LOGGER.debug(
        "Generating %d string(s) of length %d from %d characters",
        request.lines,
        request.length,
        len(alphabet),
    )
    for _ in range(request.lines):
        yield generate(request.length, alphabet, source)
