import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from importlib.metadata import PackageNotFoundError, version
from typing import Annotated

import typer
from pydantic import ValidationError

from rsgen.charset.models import (
    CharsetPolicy,
    LatinAlphabet,
    Numeric,
    PrintableAsciiWithoutSpace,
    PrintableAsciiWithSpace,
    default_policy,
)
from rsgen.core.errors import RsgenError
from rsgen.core.generate import iter_random_strings
from rsgen.core.models import DEFAULT_LENGTH, DEFAULT_LINES, GenerationRequest

_LOGGER = logging.getLogger(__name__)
_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

app = typer.Typer(help="Generate random character strings.")


def _package_version() -> str:
    try:
        return version("rsgen")
    except PackageNotFoundError:
        return "unknown"


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"rsgen {_package_version()}")
        raise typer.Exit()


@contextmanager
def _cli_logging(verbose: bool) -> Iterator[None]:
    """Send rsgen log records to the current stderr for one invocation."""
    package_logger = logging.getLogger("rsgen")
    previous_level = package_logger.level
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    try:
        yield
    finally:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)


def _select_policy(
    *,
    numeric: bool,
    printable_ascii: bool,
    printable_ascii_with_space: bool,
    only_upper_case: bool,
    only_lower_case: bool,
    only_latin_alphabet: bool,
) -> tuple[CharsetPolicy, list[str]]:
    """Pick the effective policy from the alphabet flags.

    Precedence: --numeric, then --printable-ascii, then
    --printable-ascii-with-space, then the letter flags. The letter flags
    compose with each other. Returns the policy and the flags it overrides.
    """
    exclusive: list[tuple[str, bool, CharsetPolicy]] = [
        ("--numeric", numeric, Numeric()),
        ("--printable-ascii", printable_ascii, PrintableAsciiWithoutSpace()),
        (
            "--printable-ascii-with-space",
            printable_ascii_with_space,
            PrintableAsciiWithSpace(),
        ),
    ]
    letter_flags = [
        name
        for name, given in (
            ("--only-upper-case", only_upper_case),
            ("--only-lower-case", only_lower_case),
            ("--only-latin-alphabet", only_latin_alphabet),
        )
        if given
    ]

    given_exclusive = [(name, policy) for name, on, policy in exclusive if on]
    if given_exclusive:
        _, policy = given_exclusive[0]
        ignored = [name for name, _ in given_exclusive[1:]] + letter_flags
        return policy, ignored

    if not letter_flags:
        return default_policy(), []

    letters = LatinAlphabet(
        use_upper_case=only_upper_case or not only_lower_case,
        use_lower_case=only_lower_case or not only_upper_case,
    )
    return letters, []


def _render_validation_error(err: ValidationError) -> str:
    first_error = err.errors(include_url=False)[0]
    loc = ".".join(str(item) for item in first_error["loc"])
    message = first_error["msg"]
    if loc:
        return f"Error: invalid option '{loc}': {message}"
    return f"Error: {message}"


@app.command()
def generate(
    count: Annotated[
        int,
        typer.Option(
            "--count",
            "-c",
            help="The number of characters to output.",
            metavar="NUMBER_OF_CHARACTERS",
        ),
    ] = DEFAULT_LENGTH,
    loop: Annotated[
        int,
        typer.Option(
            "--loop",
            "--lines",
            "-l",
            help="The number of lines to output.",
            metavar="NUMBER_OF_LINES",
        ),
    ] = DEFAULT_LINES,
    fast: Annotated[
        bool,
        typer.Option(
            "--fast",
            "-f",
            help="Uses fast but NOT secure random number generation.",
        ),
    ] = False,
    seed: Annotated[
        int | None,
        typer.Option(
            "--seed", "-s", help="Seed for the fast generator (needs --fast)."
        ),
    ] = None,
    numeric: Annotated[
        bool,
        typer.Option(
            "--numeric", "-n", help="Restricts the output to be numeric."
        ),
    ] = False,
    printable_ascii: Annotated[
        bool,
        typer.Option(
            "--printable-ascii",
            "-p",
            help="Uses the printable ASCII characters without SPACE. "
            "(0x21-0x7E)",
        ),
    ] = False,
    printable_ascii_with_space: Annotated[
        bool,
        typer.Option(
            "--printable-ascii-with-space",
            "-P",
            help="Uses the printable ASCII characters WITH SPACE. (0x20-0x7E)",
        ),
    ] = False,
    only_upper_case: Annotated[
        bool,
        typer.Option("--only-upper-case", help="Uses upper case letters only."),
    ] = False,
    only_lower_case: Annotated[
        bool,
        typer.Option("--only-lower-case", help="Uses lower case letters only."),
    ] = False,
    only_latin_alphabet: Annotated[
        bool,
        typer.Option(
            "--only-latin-alphabet", help="Uses latin letters without digits."
        ),
    ] = False,
    verbose: Annotated[
        bool, typer.Option("--verbose", "-v", help="Enable debug logging.")
    ] = False,
    show_version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=_version_callback,
            is_eager=True,
            help="Show the version and exit.",
        ),
    ] = None,
) -> None:
    """Generate random character string(s)."""
    with _cli_logging(verbose):
        _run(
            count=count,
            loop=loop,
            fast=fast,
            seed=seed,
            numeric=numeric,
            printable_ascii=printable_ascii,
            printable_ascii_with_space=printable_ascii_with_space,
            only_upper_case=only_upper_case,
            only_lower_case=only_lower_case,
            only_latin_alphabet=only_latin_alphabet,
        )


def _run(
    *,
    count: int,
    loop: int,
    fast: bool,
    seed: int | None,
    numeric: bool,
    printable_ascii: bool,
    printable_ascii_with_space: bool,
    only_upper_case: bool,
    only_lower_case: bool,
    only_latin_alphabet: bool,
) -> None:
    if count < 0:
        typer.echo("Error: --count must be >= 0", err=True)
        raise typer.Exit(1)
    if loop < 1:
        typer.echo("Error: --loop must be >= 1", err=True)
        raise typer.Exit(1)
    if seed is not None and not fast:
        typer.echo("Error: --seed requires --fast", err=True)
        raise typer.Exit(1)

    policy, ignored = _select_policy(
        numeric=numeric,
        printable_ascii=printable_ascii,
        printable_ascii_with_space=printable_ascii_with_space,
        only_upper_case=only_upper_case,
        only_lower_case=only_lower_case,
        only_latin_alphabet=only_latin_alphabet,
    )
    if ignored:
        _LOGGER.warning(
            "Using %s charset; ignoring %s", policy.kind, ", ".join(ignored)
        )

    try:
        request = GenerationRequest(
            length=count, lines=loop, fast=fast, seed=seed, charset=policy
        )
    except ValidationError as err:
        typer.echo(_render_validation_error(err), err=True)
        raise typer.Exit(1) from err

    # No trailing newline after the last line when stdout is piped.
    is_tty = sys.stdout.isatty()
    try:
        for index, value in enumerate(iter_random_strings(request)):
            is_last = index == request.lines - 1
            typer.echo(value, nl=is_tty or not is_last)
    except RsgenError as err:
        typer.echo(f"Error: {err}", err=True)
        raise typer.Exit(1) from err
