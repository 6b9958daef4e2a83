"""Typer-based command line interface for textseq."""
from __future__ import annotations

import json
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import structlog
import typer

from ..config import load_config
from ..errors import TextSeqError
from ..logging import configure_logging
from ..models import Found
from ..recipes import is_palindrome, reverse as reverse_sequence
from ..sequence import TextSequence

app = typer.Typer(help="Inspect and manipulate UTF-8 text by byte position")
logger = structlog.get_logger(__name__)


@app.callback()
def main(ctx: typer.Context, config: Optional[Path] = typer.Option(None, "--config", metavar="PATH")) -> None:
    try:
        ctx.obj = load_config(config)
    except ValueError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc
    configure_logging(ctx.obj.logging.normalized_level())


@contextmanager
def _reporting_errors(command: str) -> Iterator[None]:
    logger.debug("cli.command", command=command)
    try:
        yield
    except TextSeqError as exc:
        logger.debug("cli.command_failed", command=command, error=str(exc))
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(code=2) from exc


def _load(text: Optional[str], file: Optional[Path]) -> TextSequence:
    if file is not None and text is not None:
        raise typer.BadParameter("Provide either TEXT or --file, not both")
    if file is not None:
        return TextSequence.from_bytes(file.read_bytes())
    if text is None:
        raise typer.BadParameter("Provide TEXT or --file")
    return TextSequence.from_text(text)


@app.command()
def inspect(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Text to inspect"),
    file: Optional[Path] = typer.Option(None, "--file", exists=True, readable=True, help="Read UTF-8 bytes from a file"),
) -> None:
    """List every character with its byte position and width."""
    display = ctx.obj.display
    with _reporting_errors("inspect"):
        seq = _load(text, file)
        characters = []
        for step in seq.traverse():
            if len(characters) >= display.max_chars:
                break
            characters.append(
                {
                    "position": step.position.offset,
                    "char": step.char,
                    "width": step.width,
                    "codepoint": f"U+{ord(step.char):04X}",
                }
            )
        payload: dict[str, object] = {
            "length": seq.length(),
            "byte_size": seq.byte_size(),
            "characters": characters,
            "truncated": len(characters) < seq.length(),
        }
        if display.show_bytes:
            payload["bytes"] = seq.to_bytes().hex(" ")
    typer.echo(json.dumps(payload, ensure_ascii=False, indent=2))


@app.command()
def find(
    needle: str = typer.Argument(..., help="Text to look for"),
    text: str = typer.Argument(..., help="Text to search"),
    from_position: Optional[int] = typer.Option(None, "--from", help="Byte position to start from"),
) -> None:
    """Print the byte position of the first match, or null."""
    with _reporting_errors("find"):
        result = TextSequence.from_text(text).find(needle, from_position)
    typer.echo(json.dumps(result.position.offset if isinstance(result, Found) else None))


@app.command("slice")
def slice_(
    text: str = typer.Argument(..., help="Text to slice"),
    start: Optional[int] = typer.Option(None, "--start", help="Start byte position"),
    end: Optional[int] = typer.Option(None, "--end", help="End byte position"),
    step: int = typer.Option(1, "--step", help="Characters to move per step"),
) -> None:
    """Print the characters between two byte positions."""
    with _reporting_errors("slice"):
        if step == 0:
            raise typer.BadParameter("--step cannot be zero")
        result = TextSequence.from_text(text).slice(start, end, step)
    typer.echo(str(result))


@app.command()
def reverse(text: str = typer.Argument(..., help="Text to reverse")) -> None:
    with _reporting_errors("reverse"):
        result = reverse_sequence(TextSequence.from_text(text))
    typer.echo(str(result))


@app.command()
def compare(left: str = typer.Argument(...), right: str = typer.Argument(...)) -> None:
    """Print -1, 0 or 1 comparing code points (uppercase sorts first)."""
    with _reporting_errors("compare"):
        result = TextSequence.from_text(left).compare(TextSequence.from_text(right))
    typer.echo(str(result))


@app.command()
def palindrome(text: str = typer.Argument(...)) -> None:
    with _reporting_errors("palindrome"):
        result = is_palindrome(text)
    typer.echo(json.dumps(result))


@app.command()
def validate(
    file: Path = typer.Option(..., "--file", exists=True, readable=True, help="File to check"),
) -> None:
    """Check that a file holds valid UTF-8."""
    with _reporting_errors("validate"):
        seq = TextSequence.from_bytes(file.read_bytes())
    typer.echo(f"ok: {seq.length()} characters, {seq.byte_size()} bytes")


@app.command()
def version() -> None:
    from ..version import __version__

    typer.echo(__version__)


if __name__ == "__main__":  # pragma: no cover
    app()
