import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from qmldoc import __version__
from qmldoc.config import load_extract_config
from qmldoc.database import DocDatabase
from qmldoc.extract import extract_file
from qmldoc.models import Entity

app = typer.Typer(
    help="qmldoc - API documentation extraction for QML components",
    no_args_is_help=True,
)

console = Console()


@app.command()
def extract(path: str):
    """Extract documentation entities from a QML file as JSON.

    Args:
        path: Path to the QML file

    Examples:
        qmldoc extract src/controls/Button.qml
    """
    config = load_extract_config(Path.cwd())
    database = DocDatabase()
    try:
        result = extract_file(path, database=database, config=config)
    except (FileNotFoundError, ValueError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    except Exception as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=2)

    for diagnostic in result.diagnostics:
        typer.echo(str(diagnostic), err=True)

    entities = result.visible_entities(include_internal=config.include_internal)
    typer.echo(json.dumps([_entity_dict(entity, database) for entity in entities], indent=2))

    if result.has_error:
        typer.echo(f"Error: {path} is nested too deeply, output is incomplete", err=True)
        raise typer.Exit(code=3)


def _entity_dict(entity: Entity, database: DocDatabase) -> dict:
    """Serialise an entity with its module and group membership."""
    data = entity.to_dict()
    modules = database.modules_of(entity)
    if modules:
        data["modules"] = modules
    groups = database.groups_of(entity)
    if groups:
        data["groups"] = groups
    return data


@app.command()
def check(paths: list[str]):
    """Report documentation warnings for one or more QML files.

    Exits with code 1 if any warning was produced, and with code 2 if a
    file could not be processed for an unexpected reason.
    """
    config = load_extract_config(Path.cwd())
    database = DocDatabase()
    warnings = 0
    failed = False
    crashed = False

    for path in paths:
        try:
            result = extract_file(path, database=database, config=config)
        except (FileNotFoundError, ValueError) as e:
            typer.echo(f"Error: {e}", err=True)
            failed = True
            continue
        except Exception as e:
            typer.echo(f"Error: {path}: {e}", err=True)
            crashed = True
            continue

        for diagnostic in result.diagnostics:
            typer.echo(str(diagnostic))
        warnings += len(result.diagnostics)
        if result.has_error:
            typer.echo(f"Error: {path} is nested too deeply, output is incomplete", err=True)
            failed = True

    if crashed:
        raise typer.Exit(code=2)
    if failed or warnings:
        raise typer.Exit(code=1)
    typer.echo(f"✓ {len(paths)} file(s) checked, no warnings")


def _version_callback(value: bool):
    """Show version and exit."""
    if value:
        console.print(f"qmldoc version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Log debug messages"),
):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.ERROR)
