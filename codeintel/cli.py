from pathlib import Path

import typer
import yaml

from codeintel.config import AdjusterSettings, build_diff_source, load_settings
from codeintel.errors import AdjustmentError
from codeintel.logging import setup_logging
from codeintel.position.adjuster import PositionAdjuster, read_hunks
from codeintel.position.models import Position, Range

app = typer.Typer(no_args_is_help = True)

EXIT_NOT_TRANSLATABLE = 1
EXIT_ERROR = 2


def _settings(config: Path | None, gitserver_url: str | None, timeout: float | None) -> AdjusterSettings:
    update = {}
    if gitserver_url:
        update["gitserver_url"] = gitserver_url
    if timeout is not None:
        update["diff_timeout_sec"] = timeout

    # pydantic ValidationError and bad log level names are ValueErrors
    try:
        settings = load_settings(config)
        if update:
            settings = AdjusterSettings.model_validate({**settings.model_dump(), **update})
        setup_logging(settings.log_level)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        typer.echo(f"Error (invalid settings): {exc}", err=True)
        raise typer.Exit(code=EXIT_ERROR)

    return settings


def _adjuster(repo: str, source: str, settings: AdjusterSettings) -> PositionAdjuster:
    return PositionAdjuster(
        repo=repo,
        commit=source,
        diff_source=build_diff_source(settings),
        timeout_sec=settings.diff_timeout_sec,
    )


def _fail(exc: AdjustmentError) -> typer.Exit:
    typer.echo(f"Error ({exc.error_type}): {exc}", err=True)
    return typer.Exit(code=EXIT_ERROR)


@app.command("adjust-position")
def adjust_position_cmd(
    repo: str = typer.Argument(..., help="Repository directory or name"),
    path: str = typer.Argument(..., help="Path of the file in the source commit"),
    line: int = typer.Argument(..., min=0, help="Zero-indexed line"),
    character: int = typer.Argument(..., min=0, help="Zero-indexed character"),
    source: str = typer.Option(..., "--from", help="Commit the position refers to"),
    target: str = typer.Option(..., "--to", help="Commit to translate into"),
    reverse: bool = typer.Option(False, "--reverse", help="Translate from --to back into --from"),
    config: Path | None = typer.Option(None, "--config", help="Settings YAML file"),
    gitserver_url: str | None = typer.Option(None, "--http", help="Git server base URL"),
    timeout: float | None = typer.Option(None, "--timeout", help="Diff timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    settings = _settings(config, gitserver_url, timeout)
    adjuster = _adjuster(repo, source, settings)

    try:
        result = adjuster.adjust_position(
            target,
            path,
            Position(line=line, character=character),
            reverse=reverse,
        )
    except AdjustmentError as exc:
        raise _fail(exc)

    if as_json:
        typer.echo(result.model_dump_json())
    elif result.ok:
        typer.echo(f"{result.path}:{result.position}")
    else:
        typer.echo(f"{result.path}: position {line}:{character} is not translatable")

    if not result.ok:
        raise typer.Exit(code=EXIT_NOT_TRANSLATABLE)


@app.command("adjust-range")
def adjust_range_cmd(
    repo: str = typer.Argument(..., help="Repository directory or name"),
    path: str = typer.Argument(..., help="Path of the file in the source commit"),
    start_line: int = typer.Argument(..., min=0),
    start_character: int = typer.Argument(..., min=0),
    end_line: int = typer.Argument(..., min=0),
    end_character: int = typer.Argument(..., min=0),
    source: str = typer.Option(..., "--from", help="Commit the range refers to"),
    target: str = typer.Option(..., "--to", help="Commit to translate into"),
    reverse: bool = typer.Option(False, "--reverse", help="Translate from --to back into --from"),
    config: Path | None = typer.Option(None, "--config", help="Settings YAML file"),
    gitserver_url: str | None = typer.Option(None, "--http", help="Git server base URL"),
    timeout: float | None = typer.Option(None, "--timeout", help="Diff timeout in seconds"),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
):
    settings = _settings(config, gitserver_url, timeout)
    adjuster = _adjuster(repo, source, settings)
    range_ = Range(
        start=Position(line=start_line, character=start_character),
        end=Position(line=end_line, character=end_character),
    )

    try:
        result = adjuster.adjust_range(target, path, range_, reverse=reverse)
    except AdjustmentError as exc:
        raise _fail(exc)

    if as_json:
        typer.echo(result.model_dump_json())
    elif result.ok:
        typer.echo(f"{result.path}:{result.range}")
    else:
        typer.echo(f"{result.path}: range {range_} is not translatable")

    if not result.ok:
        raise typer.Exit(code=EXIT_NOT_TRANSLATABLE)


@app.command("hunks")
def hunks_cmd(
    repo: str = typer.Argument(..., help="Repository directory or name"),
    path: str = typer.Argument(..., help="Path of the file"),
    source: str = typer.Option(..., "--from"),
    target: str = typer.Option(..., "--to"),
    config: Path | None = typer.Option(None, "--config", help="Settings YAML file"),
    gitserver_url: str | None = typer.Option(None, "--http", help="Git server base URL"),
    timeout: float | None = typer.Option(None, "--timeout", help="Diff timeout in seconds"),
):
    settings = _settings(config, gitserver_url, timeout)

    try:
        hunks = read_hunks(
            build_diff_source(settings),
            repo,
            path,
            source,
            target,
            timeout_sec=settings.diff_timeout_sec,
        )
    except AdjustmentError as exc:
        raise _fail(exc)

    for hunk in hunks:
        typer.echo(f"{hunk.header} delta={hunk.line_delta:+d}")
    typer.echo(f"Total hunks: {len(hunks)}")


@app.callback()
def main():
    """
    Cross-commit position adjustment
    """
    pass
