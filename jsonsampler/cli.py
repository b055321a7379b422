from pathlib import Path
from typing import Optional

import typer

from worker.app.config import settings
from worker.app.models import SamplingConfig
from worker.app.services.escapes import decode_escapes as decode_text
from worker.app.services.display import count_lines
from worker.app.services.sampler import max_array_length
from worker.app.services.transform import (
    ParseError,
    ValidationError,
    ensure_not_blank,
    parse_json,
    position_to_line_col,
    sample_text,
)

app = typer.Typer(help="jsonsampler: cap every JSON array to its first N items")

EXIT_VALIDATION = 2
EXIT_PARSE = 3
EXIT_MISSING = 4


def _read_input(path: Optional[str]) -> str:
    if path in (None, "-"):
        data = typer.get_binary_stream("stdin").read()
    else:
        p = Path(path)
        if not p.is_file():
            typer.echo(f"[path-missing] {p}", err=True)
            raise typer.Exit(code=EXIT_MISSING)
        data = p.read_bytes()
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError as e:
        # the prefix before e.start is valid UTF-8
        prefix = data[: e.start].decode("utf-8")
        line, column = position_to_line_col(prefix, len(prefix))
        typer.echo(f"[json-parse-error] {line}:{column} {e.reason} (byte {e.start})", err=True)
        raise typer.Exit(code=EXIT_PARSE)


@app.command()
def sample(
    path: Optional[str] = typer.Argument(None, help="JSON file, or '-' for stdin"),
    length: int = typer.Option(
        settings.DEFAULT_LIST_LENGTH, "--length", "-n", min=1, help="Max items kept per array"
    ),
    no_limit: bool = typer.Option(False, "--no-limit", help="Keep arrays at full length"),
    decode_escapes: bool = typer.Option(
        False, "--decode-escapes", "-u", help="Decode \\uXXXX and \\xXX escapes before parsing"
    ),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write result here"),
    stats: bool = typer.Option(False, "--stats", help="Report longest array before/after"),
):
    """Sample a JSON document and print it pretty-printed."""
    raw = _read_input(path)
    config = SamplingConfig(
        max_array_length=length,
        apply_limit=not no_limit,
        decode_escapes=decode_escapes,
    )
    try:
        result = sample_text(ensure_not_blank(raw), config)
    except ValidationError as e:
        typer.echo(f"[validation-error] {e}", err=True)
        raise typer.Exit(code=EXIT_VALIDATION)
    except ParseError as e:
        line, column = position_to_line_col(e.doc, e.pos)
        typer.echo(f"[json-parse-error] {line}:{column} {e.msg}", err=True)
        raise typer.Exit(code=EXIT_PARSE)

    if output is not None:
        output.write_text(result + "\n", encoding="utf-8")
    else:
        typer.echo(result)

    if stats:
        before = max_array_length(parse_json(decode_text(raw, decode_escapes)))
        after = max_array_length(parse_json(result))
        typer.echo(
            f"[stats] longest_array_before={before} longest_array_after={after} "
            f"lines={count_lines(result)}",
            err=True,
        )


@app.command()
def version():
    """Show version."""
    import importlib.metadata as md

    print(md.version("jsonsampler"))


if __name__ == "__main__":
    app()
