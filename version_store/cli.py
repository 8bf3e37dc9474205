"""CLI: bump-major, bump-minor, bump-patch, bump-rc, release, set and show."""

import logging
from pathlib import Path

import typer
from model_lib.serialize import dump
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from typer import Typer
from zero_3rdparty.enum_utils import StrEnum

from version_store.errors import StoreInitError, StorePersistError
from version_store.settings import ENV_PREFIX, VersionStoreSettings
from version_store.store import VersionStore
from version_store.version import BumpType, Version

logger = logging.getLogger(__name__)
app = Typer(name="version-store", help="Bump the version stored in a version file")

EXIT_CODE_INIT_ERROR = 2
EXIT_CODE_PERSIST_ERROR = 3
_bump_labels: dict[BumpType, str] = {
    BumpType.MAJOR: "MAJOR",
    BumpType.MINOR: "MINOR",
    BumpType.PATCH: "PATCH",
    BumpType.RC: "RC",
}


class OutputFormat(StrEnum):
    TEXT = "text"
    JSON = "json"
    YAML = "yaml"


def configure_logging(log_level: str) -> logging.Handler:
    handler = RichHandler(
        rich_tracebacks=False, level=log_level, console=Console(stderr=True)
    )
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
    )
    return handler


def log_transition(bump_type: BumpType | None, old: Version, new: Version) -> None:
    if bump_type is None:
        logger.info(f"Version set: {old} -> {new}")
    elif bump_type == BumpType.RELEASE:
        logger.info(f"Version released: {old} -> {new}")
    else:
        logger.info(f"Version bumped ({_bump_labels[bump_type]}): {old} -> {new}")


def open_store(ctx: typer.Context) -> VersionStore:
    settings: VersionStoreSettings = ctx.obj
    try:
        store = settings.open_store()
    except StoreInitError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_CODE_INIT_ERROR) from e
    store.add_observer(log_transition)
    return store


def run_bump(ctx: typer.Context, bump_type: BumpType) -> None:
    store = open_store(ctx)
    try:
        new_version = store.bump(bump_type)
    except StorePersistError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_CODE_PERSIST_ERROR) from e
    typer.echo(str(new_version))


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    file: Path | None = typer.Option(
        None,
        "-f",
        "--file",
        envvar=f"{ENV_PREFIX}FILE",
        help="Version file, created with 0.0.0 if it doesn't exist",
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        envvar=f"{ENV_PREFIX}LOG_LEVEL",
    ),
):
    """version-store: bump major/minor/patch/rc and release"""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()
    overrides: dict = {}
    if file is not None:
        overrides["file"] = file
    if log_level is not None:
        overrides["log_level"] = log_level
    try:
        settings = VersionStoreSettings.from_env(**overrides)
    except ValidationError as e:
        reason = "; ".join(error["msg"] for error in e.errors())
        raise typer.BadParameter(reason) from e
    configure_logging(settings.log_level)
    ctx.obj = settings


@app.command()
def bump_major(ctx: typer.Context):
    """Increments MAJOR and resets MINOR, PATCH and RC values."""
    run_bump(ctx, BumpType.MAJOR)


@app.command()
def bump_minor(ctx: typer.Context):
    """Increments MINOR and resets PATCH and RC values."""
    run_bump(ctx, BumpType.MINOR)


@app.command()
def bump_patch(ctx: typer.Context):
    """Increments PATCH and resets RC value."""
    run_bump(ctx, BumpType.PATCH)


@app.command()
def bump_rc(ctx: typer.Context):
    """Increments Release Candidate number (RC)."""
    run_bump(ctx, BumpType.RC)


@app.command()
def release(ctx: typer.Context):
    """Finalize release by resetting the Release Candidate (RC) to 0."""
    run_bump(ctx, BumpType.RELEASE)


def parse_version_arg(raw: str) -> Version:
    try:
        return Version.parse(raw)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e


@app.command(name="set")
def set_version(
    ctx: typer.Context,
    version: str = typer.Argument(..., help="X.Y.Z or X.Y.Z-RCn"),
):
    """Overwrite the stored version."""
    new_version = parse_version_arg(version)
    store = open_store(ctx)
    try:
        store.set(new_version)
    except StorePersistError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(EXIT_CODE_PERSIST_ERROR) from e
    typer.echo(str(new_version))


@app.command()
def show(
    ctx: typer.Context,
    output_format: OutputFormat = typer.Option(
        OutputFormat.TEXT, "--format", help="text prints only the version name"
    ),
):
    """Print the current version."""
    store = open_store(ctx)
    if output_format == OutputFormat.TEXT:
        typer.echo(store.name)
        return
    payload = {"name": store.name, **store.current().as_dict()}
    typer.echo(dump(payload, output_format.value).rstrip("\n"))


def main():
    app()
