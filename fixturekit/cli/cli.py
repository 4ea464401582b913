"""fixturekit CLI: inspect how builders would fill a constructor.

Usage:
    fixturekit plan myapp.services:OrderService --deep
    fixturekit plan myapp.services:OrderService -o myapp.repos:Repository
    fixturekit backends
"""

from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Annotated, Any

import typer
from tabulate import tabulate

from fixturekit.core.errors import FixtureError, type_name
from fixturekit.domain.plan import describe_plan
from fixturekit.infra.backends import BackendRegistry
from fixturekit.infra.io.config_loader import load_config
from fixturekit.infra.io.log_output import configure_logging
from fixturekit.infra.tools.env import load_env

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="fixturekit",
    help="Inspect how fixturekit builds test subjects",
    add_completion=False,
)

RepoPathOption = Annotated[
    Path,
    typer.Option(
        "--repo-path",
        "-r",
        help="Directory holding fixturekit.yaml and .env (default: current directory)",
    ),
]


def import_object(path: str) -> Any:
    """Import ``package.module:Name`` (or ``package.module.Name``).

    Raises:
        ValueError: If the path has no attribute part.
        ImportError: If the module cannot be imported.
        AttributeError: If the attribute does not exist.
    """
    if ":" in path:
        module_name, _, attribute = path.partition(":")
    else:
        module_name, _, attribute = path.rpartition(".")
    if not module_name or not attribute:
        raise ValueError(f"expected 'module:Name', got {path!r}")
    obj: Any = importlib.import_module(module_name)
    for part in attribute.split("."):
        obj = getattr(obj, part)
    return obj


def _fail(message: str) -> typer.Exit:
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(1)


@app.callback()
def main(
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log resolution details to stderr"),
    ] = False,
) -> None:
    configure_logging(verbose)


@app.command()
def plan(
    target: Annotated[
        str,
        typer.Argument(help="Class to inspect, as module:Class"),
    ],
    deep: Annotated[
        bool | None,
        typer.Option(
            "--deep/--shallow",
            help="Expand nested concrete types with their richest constructor "
            "(default: from config)",
        ),
    ] = None,
    override: Annotated[
        list[str] | None,
        typer.Option(
            "--override",
            "-o",
            help="Type registered as an override, as module:Class (repeatable)",
        ),
    ] = None,
    repo_path: RepoPathOption = Path("."),
) -> None:
    """Show how each constructor parameter of TARGET would be filled."""
    load_env(repo_path)
    try:
        config = load_config(repo_path)
        cls = import_object(target)
        overrides = [import_object(o) for o in override or []]
    except (FixtureError, ImportError, AttributeError, ValueError) as e:
        raise _fail(str(e)) from e
    if not isinstance(cls, type):
        raise _fail(f"{target} is not a class")

    effective_deep = config.deep if deep is None else deep
    try:
        steps = describe_plan(cls, deep=effective_deep, overrides=overrides)
    except FixtureError as e:
        raise _fail(str(e)) from e
    logger.debug("planned %d parameters for %s", len(steps), type_name(cls))

    typer.echo(f"{type_name(cls)} (deep={effective_deep}, backend={config.backend})")
    if not steps:
        typer.echo("No constructor parameters.")
        return
    headers = ["#", "parameter", "type", "kind", "filled by"]
    rows = [
        [
            step.position,
            step.name,
            type_name(step.annotation),
            step.kind.value if step.kind is not None else "-",
            step.source,
        ]
        for step in steps
    ]
    typer.echo(tabulate(rows, headers=headers, tablefmt="simple"))


@app.command()
def backends(repo_path: RepoPathOption = Path(".")) -> None:
    """List the available fake backends."""
    load_env(repo_path)
    try:
        config = load_config(repo_path)
    except FixtureError as e:
        raise _fail(str(e)) from e
    rows = [
        [name, "*" if name == config.backend else ""]
        for name in BackendRegistry().list_backends()
    ]
    typer.echo(tabulate(rows, headers=["backend", "active"], tablefmt="simple"))
