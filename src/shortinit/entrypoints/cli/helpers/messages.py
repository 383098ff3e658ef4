"""Terminal message helpers for the SHORTINIT CLI.

Small helpers for rendering user-visible lines with emoji→ASCII fallbacks.
Messages write to stderr by default so stdout only carries request output.
"""

import click


def _supports_character(character: str, stream_name: str = "stderr") -> bool:
    """Return True if *character* can be encoded on the named text stream.

    Args:
        character: A Unicode character to probe (e.g., "⚠️", "🥾").
        stream_name: ``"stdout"`` or ``"stderr"``.
    """
    stream = click.get_text_stream(stream_name)  # pragma: no mutate
    encoding = getattr(stream, "encoding", None) or "ascii"
    try:
        character.encode(encoding)
    except UnicodeEncodeError:
        return False
    return True


def _glyph(emoji: str, fallback: str, stream_name: str = "stderr") -> str:
    return emoji if _supports_character(emoji, stream_name) else fallback


def boot_glyph(emoji: str = "\U0001f97e") -> str:
    """Request output marker for stdout: the boot, or ``[BOOT]``."""
    return _glyph(emoji, "[BOOT]", "stdout")


def warn(msg: str) -> None:
    """Emit a yellow, bold warning line to **stderr** with a caution glyph."""
    click.secho(f"{_glyph('⚠️', '[!]')}  {msg}", fg="yellow", bold=True, err=True)


def success(msg: str) -> None:
    """Emit a green, bold success line to **stderr** with a success glyph."""
    click.secho(f"{_glyph('✅', '[OK]')}  {msg}", fg="green", bold=True, err=True)


def error(msg: str) -> None:
    """Emit a red, bold error line to **stderr** with an error glyph.

    Example:
        ``❌  Hook 'init' fired undefined callback 'kses_init'``
    """
    click.secho(f"{_glyph('❌', '[X]')}  {msg}", fg="red", bold=True, err=True)
