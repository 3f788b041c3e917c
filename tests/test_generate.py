import re
from collections import Counter

import pytest
from helpers import ScriptedSource

from rsgen.charset import (
    Alphabet,
    LatinAlphabet,
    Numeric,
    PrintableAsciiWithSpace,
    default_policy,
    only_upper_case,
    resolve_alphabet,
)
from rsgen.core.errors import EmptyAlphabetError, InvalidLengthError
from rsgen.core.generate import (
    gen_random_string,
    gen_random_string_with_source,
    generate,
    iter_random_strings,
)
from rsgen.core.models import GenerationRequest
from rsgen.core.random_source import XorShiftRandomSource


class TestGenerate:
    def test_maps_draws_to_alphabet_positions(self) -> None:
        source = ScriptedSource([2, 0, 1, 1])
        assert generate(4, Alphabet("abc"), source) == "cabb"
        assert source.bounds == [3, 3, 3, 3]

    def test_zero_length_is_empty_string(self) -> None:
        source = ScriptedSource([])
        assert generate(0, Alphabet("abc"), source) == ""
        assert source.bounds == []

    @pytest.mark.parametrize("length", [0, 3])
    def test_rejects_empty_plain_alphabet(self, length) -> None:
        source = XorShiftRandomSource(seed=1)
        with pytest.raises(EmptyAlphabetError, match="at least one character"):
            generate(length, "", source)  # type: ignore[arg-type]

    def test_single_character_alphabet(self) -> None:
        source = XorShiftRandomSource(seed=5)
        assert generate(6, Alphabet("z"), source) == "zzzzzz"

    @pytest.mark.parametrize("length", [-1, -100])
    def test_rejects_negative_length(self, length) -> None:
        with pytest.raises(InvalidLengthError, match="length must be >= 0"):
            generate(length, Alphabet("abc"), ScriptedSource([]))

    @pytest.mark.parametrize("length", [True, 2.0, "3"])
    def test_rejects_non_int_length(self, length) -> None:
        with pytest.raises(InvalidLengthError, match="length must be an int"):
            generate(length, Alphabet("abc"), ScriptedSource([]))

    @pytest.mark.parametrize("length", [0, 1, 8, 33, 256])
    def test_exact_length_and_membership(self, length) -> None:
        alphabet = resolve_alphabet(PrintableAsciiWithSpace())
        value = generate(length, alphabet, XorShiftRandomSource(seed=length))
        assert len(value) == length
        assert all(ch in alphabet for ch in value)

    def test_reused_source_advances_state(self) -> None:
        source = XorShiftRandomSource(seed=11)
        alphabet = resolve_alphabet(default_policy())
        first = generate(32, alphabet, source)
        second = generate(32, alphabet, source)
        assert first != second


class TestGenRandomString:
    def test_numeric_length_twelve(self) -> None:
        assert re.fullmatch(r"[0-9]{12}", gen_random_string(12, Numeric()))

    def test_only_upper_case_length_five(self) -> None:
        value = gen_random_string(5, only_upper_case())
        assert re.fullmatch(r"[A-Z]{5}", value)

    def test_default_policy_length_eight(self) -> None:
        assert re.fullmatch(r"[A-Za-z0-9]{8}", gen_random_string(8))

    @pytest.mark.parametrize("fast", [False, True])
    def test_fast_and_secure_both_valid(self, fast) -> None:
        value = gen_random_string(16, default_policy(), fast=fast)
        assert re.fullmatch(r"[A-Za-z0-9]{16}", value)

    def test_seeded_fast_is_reproducible(self) -> None:
        first = gen_random_string(20, fast=True, seed=123)
        second = gen_random_string(20, fast=True, seed=123)
        assert first == second

    def test_seed_without_fast_fails(self) -> None:
        with pytest.raises(ValueError, match="seed requires the fast"):
            gen_random_string(8, seed=123)

    def test_zero_length(self) -> None:
        assert gen_random_string(0, Numeric()) == ""

    def test_negative_length_fails(self) -> None:
        with pytest.raises(InvalidLengthError):
            gen_random_string(-1)

    def test_empty_alphabet_fails_loudly(self) -> None:
        policy = LatinAlphabet(use_upper_case=False, use_lower_case=False)
        with pytest.raises(EmptyAlphabetError):
            gen_random_string(4, policy)

    def test_with_source_uses_caller_source(self) -> None:
        source = ScriptedSource([0, 9, 5])
        assert gen_random_string_with_source(source, 3, Numeric()) == "095"
        assert source.bounds == [10, 10, 10]

    def test_with_source_defaults_to_alphanumeric(self) -> None:
        source = ScriptedSource([0, 61])
        value = gen_random_string_with_source(source, 2)
        assert value == "A9"
        assert source.bounds == [62, 62]


class TestIterRandomStrings:
    def test_yields_requested_lines(self) -> None:
        request = GenerationRequest(length=6, lines=4, charset=Numeric())
        values = list(iter_random_strings(request))
        assert len(values) == 4
        assert all(re.fullmatch(r"[0-9]{6}", v) for v in values)

    def test_seeded_request_is_reproducible(self) -> None:
        request = GenerationRequest(length=10, lines=3, fast=True, seed=77)
        assert list(iter_random_strings(request)) == list(
            iter_random_strings(request)
        )

    def test_lines_share_one_source(self) -> None:
        request = GenerationRequest(length=16, lines=5, fast=True, seed=77)
        values = list(iter_random_strings(request))
        assert len(set(values)) == 5

    def test_empty_alphabet_raised_on_first_draw(self) -> None:
        request = GenerationRequest(
            charset=LatinAlphabet(use_upper_case=False, use_lower_case=False)
        )
        with pytest.raises(EmptyAlphabetError):
            next(iter_random_strings(request))


@pytest.mark.slow
@pytest.mark.parametrize("fast", [False, True], ids=["secure", "xorshift"])
def test_characters_are_uniform_across_draws(fast) -> None:
    value = gen_random_string(40_000, only_upper_case(), fast=fast, seed=None)
    counts = Counter(value)
    assert set(counts) == set("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
    for count in counts.values():
        assert abs(count / len(value) - 1 / 26) < 0.01


@pytest.mark.slow
def test_no_positional_correlation_across_repetitions() -> None:
    request = GenerationRequest(
        length=8, lines=3000, fast=True, seed=31337, charset=Numeric()
    )
    values = list(iter_random_strings(request))
    for position in range(request.length):
        column = [v[position] for v in values]
        same_as_previous = sum(
            1 for a, b in zip(column, column[1:], strict=False) if a == b
        )
        rate = same_as_previous / (len(column) - 1)
        assert abs(rate - 0.1) < 0.03
        assert abs(column.count("0") / len(column) - 0.1) < 0.03
