"""Main entry point for the cmsclient command line tool.

Sets up the Typer CLI application, performs dependency injection (Composition Root),
defines CLI commands, and delegates execution to the CommandHandler.
"""

import logging
from typing import Any, Dict, List, Optional

import typer
from typing_extensions import Annotated

from cmsclient.core.command_handler import CommandHandler
from cmsclient.infrastructure.cli.display import ConsoleDisplay
from cmsclient.infrastructure.config.settings import load_configuration
from cmsclient.infrastructure.monitoring.logger_setup import configure_logging

logger = logging.getLogger(__name__)

# --- Dependency Injection Container (Manual) ---

_options: Dict[str, Any] = {"verbose": False}


def create_dependencies() -> Dict[str, Any]:
    """Creates and wires up all dependencies for the application.

    This acts as the Composition Root. API clients are created on first use
    by the CommandHandler, so missing tokens only fail the commands that need them.
    """
    load_configuration()
    configure_logging(verbose=_options["verbose"])
    logger.debug("Configuration and logging initialized.")

    dependencies: Dict[str, Any] = {}
    dependencies['ui'] = ConsoleDisplay()
    dependencies['command_handler'] = CommandHandler(ui=dependencies['ui'])
    return dependencies


_dependencies: Optional[Dict[str, Any]] = None


def get_dependencies() -> Dict[str, Any]:
    global _dependencies
    if _dependencies is None:
        _dependencies = create_dependencies()
    return _dependencies


def _handler() -> CommandHandler:
    return get_dependencies()['command_handler']


def _finish(succeeded: bool) -> None:
    if not succeeded:
        raise typer.Exit(code=1)


def parse_params(values: Optional[List[str]]) -> Dict[str, str]:
    """Turns repeated `--param key=value` options into a query mapping."""
    params: Dict[str, str] = {}
    for value in values or []:
        key, sep, param_value = value.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected key=value, got '{value}'", param_hint="--param")
        params[key] = param_value
    return params


# --- Typer App Definition ---
app = typer.Typer(
    name="cmsclient",
    help="cmsclient: browse and manage content through the delivery and management APIs.",
    add_completion=False,
)

# --- Shared options ---

SpaceArgument = Annotated[str, typer.Argument(help="Space identifier.")]
LimitOption = Annotated[int, typer.Option("--limit", "-l", help="Page size (clamped to the API maximum).")]
SkipOption = Annotated[int, typer.Option("--skip", "-s", help="Number of items to skip.")]
DeliveryOption = Annotated[
    bool,
    typer.Option("--delivery", "-d", help="Read published content through the delivery API."),
]

# --- CLI Commands ---

@app.callback()
def main_options(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Log requests and responses at DEBUG level.")] = False,
):
    _options["verbose"] = verbose


@app.command()
def spaces(limit: LimitOption = 100, skip: SkipOption = 0):
    """List the spaces visible to the management token."""
    _finish(_handler().handle_spaces(limit, skip))


@app.command()
def space(space_id: SpaceArgument, delivery: DeliveryOption = False):
    """Show a single space."""
    _finish(_handler().handle_space(space_id, delivery=delivery))


@app.command(name="content-types")
def content_types(
    space_id: SpaceArgument,
    limit: LimitOption = 100,
    skip: SkipOption = 0,
    delivery: DeliveryOption = False,
):
    """List the content types of a space."""
    _finish(_handler().handle_content_types(space_id, limit, skip, delivery=delivery))


@app.command()
def entries(
    space_id: SpaceArgument,
    param: Annotated[
        Optional[List[str]],
        typer.Option("--param", "-p", help="Query filter as key=value (repeatable), e.g. content_type=post."),
    ] = None,
    limit: LimitOption = 100,
    skip: SkipOption = 0,
    delivery: DeliveryOption = False,
):
    """Query the entries of a space."""
    params = parse_params(param)
    _finish(_handler().handle_entries(space_id, params, limit=limit, skip=skip, delivery=delivery))


@app.command()
def entry(
    space_id: SpaceArgument,
    entry_id: Annotated[str, typer.Argument(help="Entry identifier.")],
    delivery: DeliveryOption = False,
):
    """Show a single entry."""
    _finish(_handler().handle_entry(space_id, entry_id, delivery=delivery))


@app.command(name="publish-entry")
def publish_entry(
    space_id: SpaceArgument,
    entry_id: Annotated[str, typer.Argument(help="Entry identifier.")],
):
    """Publish the current version of an entry."""
    _finish(_handler().handle_publish_entry(space_id, entry_id))


@app.command(name="unpublish-entry")
def unpublish_entry(
    space_id: SpaceArgument,
    entry_id: Annotated[str, typer.Argument(help="Entry identifier.")],
):
    """Take an entry off the delivery API."""
    _finish(_handler().handle_unpublish_entry(space_id, entry_id))


@app.command()
def assets(
    space_id: SpaceArgument,
    limit: LimitOption = 100,
    skip: SkipOption = 0,
    delivery: DeliveryOption = False,
):
    """List the assets of a space."""
    _finish(_handler().handle_assets(space_id, limit, skip, delivery=delivery))


@app.command()
def asset(
    space_id: SpaceArgument,
    asset_id: Annotated[str, typer.Argument(help="Asset identifier.")],
    delivery: DeliveryOption = False,
):
    """Show a single asset."""
    _finish(_handler().handle_asset(space_id, asset_id, delivery=delivery))


@app.command(name="process-asset")
def process_asset(
    space_id: SpaceArgument,
    asset_id: Annotated[str, typer.Argument(help="Asset identifier.")],
    locale: Annotated[str, typer.Option("--locale", help="Locale whose file should be processed.")] = "en-US",
):
    """Ask the server to process an uploaded asset file."""
    _finish(_handler().handle_process_asset(space_id, asset_id, locale))


@app.command()
def locales(space_id: SpaceArgument):
    """List the locales of a space."""
    _finish(_handler().handle_locales(space_id))


@app.command(name="api-keys")
def api_keys(space_id: SpaceArgument, limit: LimitOption = 100, skip: SkipOption = 0):
    """List the delivery API keys of a space."""
    _finish(_handler().handle_api_keys(space_id, limit, skip))


@app.command(name="create-api-key")
def create_api_key(
    space_id: SpaceArgument,
    name: Annotated[str, typer.Argument(help="Name of the new key.")],
    description: Annotated[Optional[str], typer.Option("--description", help="Optional description.")] = None,
):
    """Create a delivery API key."""
    _finish(_handler().handle_create_api_key(space_id, name, description))


# --- Main Execution Guard ---

def cli_entry_point():
    """Function to be called by the script entry point in pyproject.toml."""
    try:
        app()
    finally:
        if _dependencies is not None:
            _dependencies['command_handler'].close()


if __name__ == "__main__":
    cli_entry_point()
