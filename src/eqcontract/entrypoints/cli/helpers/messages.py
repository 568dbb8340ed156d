"""User-facing status lines for the eqcontract CLI.

Lines go to stderr so that stdout stays free for machine-readable output.
Emoji markers fall back to ASCII on terminals that cannot encode them.
"""

import click

CAUTION = ("⚠️", "[!]")  # pragma: no mutate
SUCCESS = ("✅", "[OK]")  # pragma: no mutate
ERROR = ("❌", "[X]")  # pragma: no mutate


def _supports_character(character: str) -> bool:
    """Return True if ``character`` can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    try:
        character.encode(getattr(stream, "encoding", None) or "ascii")
    except UnicodeEncodeError:
        return False
    return True


def glyph(marker: tuple[str, str]) -> str:
    """Return the emoji of an ``(emoji, fallback)`` marker, or its fallback."""
    emoji, fallback = marker
    return emoji if _supports_character(emoji) else fallback


def _emit(marker: tuple[str, str], msg: str, color: str) -> None:
    first, _, rest = msg.partition("\n")
    click.secho(f"{glyph(marker)}  {first}", fg=color, bold=True, err=True)
    if rest:
        click.echo(rest, err=True)


def warn(msg: str) -> None:
    """Yellow warning line; continuation lines are printed unstyled."""
    _emit(CAUTION, msg, "yellow")


def success(msg: str) -> None:
    """Green success line; continuation lines are printed unstyled."""
    _emit(SUCCESS, msg, "green")


def error(msg: str) -> None:
    """Red error line; continuation lines are printed unstyled.

    Example:
        ``❌  Money: Hash consistency: ...``
    """
    _emit(ERROR, msg, "red")
