"""Terminal message helpers for the enrolflow CLI.

Status lines go to stderr so stdout stays machine-readable (``ingest`` writes
JSON lines there). Emoji markers fall back to ASCII on streams that cannot
encode them.
"""

import click

GLYPHS = {
    "warn": ("⚠️", "[!]"),
    "success": ("✅", "[OK]"),
    "error": ("❌", "[X]"),
}  # pragma: no mutate

COLORS = {"warn": "yellow", "success": "green", "error": "red"}


def _supports_character(character: str) -> bool:
    """Return True if *character* can be encoded on stderr."""
    stream = click.get_text_stream("stderr")  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def glyph(kind: str) -> str:
    """The marker for a message kind: its emoji when supported, else ASCII.

    Args:
        kind: One of ``"warn"``, ``"success"`` or ``"error"``.
    """
    emoji, fallback = GLYPHS[kind]
    return emoji if _supports_character(emoji) else fallback


def _emit(kind: str, msg: str) -> None:
    click.secho(f"{glyph(kind)}  {msg}", fg=COLORS[kind], bold=True, err=True)


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr**.

    Example:
        ``⚠️  2 envelope(s) could not be parsed.``
    """
    _emit("warn", msg)


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr**.

    Example:
        ``✅  Ingested 3 envelope(s): 3 accepted.``
    """
    _emit("success", msg)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr**."""
    _emit("error", msg)
