"""Click command line for emitting entries and inspecting the package.

Contents
--------
* :func:`cli` – root group with ``--use-dotenv/--no-use-dotenv``.
* ``info`` / ``levels`` / ``log`` subcommands.
* :func:`main` – test-friendly runner returning an exit code.
"""

from __future__ import annotations

import os
from typing import Sequence

import click

from . import __init__conf__, config
from .adapters import RichConsoleHandler, StreamHandler
from .application import Handler, Logger
from .domain.errors import InvalidArgumentError
from .domain.levels import Level, coerce_level

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(prog)s version %(version)s")
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env before reading settings (default: ${config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None) -> None:
    """Channel logger with a bubbling handler chain."""

    if use_dotenv is None:
        use_dotenv = config.is_truthy(os.getenv(config.DOTENV_ENV_VAR))
    if use_dotenv:
        config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the package metadata banner."""

    click.echo(__init__conf__.summary_info(), nl=False)


@cli.command("levels", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_levels() -> None:
    """List the severities with their PSR-3 names."""

    for level in Level:
        click.echo(f"{int(level)} {level.psr3:<9} {level.label}")


@cli.command("log", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("level")
@click.argument("message")
@click.option("--channel", "-c", default=None, help="Channel name (default: $LOG_CHANNEL).")
@click.option("--stream", "-s", "stream", default=None, help="Destination path or URI (default: sys://stderr for 0-3, sys://stdout for 4-7).")
@click.option("--entry-format", default=None, help="Entry template, e.g. '%time% %level_name% %message%'.")
@click.option("--time-format", default=None, help="strftime pattern for %time%.")
@click.option("--rich", "use_rich", is_flag=True, help="Render through the Rich console handler.")
def cli_log(
    level: str,
    message: str,
    channel: str | None,
    stream: str | None,
    entry_format: str | None,
    time_format: str | None,
    use_rich: bool,
) -> None:
    """Log MESSAGE at LEVEL (PSR-3 name or 0-7)."""

    try:
        name = level.strip()
        resolved = coerce_level(int(name) if name.isdigit() else name.lower())
    except InvalidArgumentError as exc:
        raise click.BadParameter(str(exc), param_hint="LEVEL") from exc

    settings = config.load_settings()
    options: dict[str, object] = settings.handler_options()
    if entry_format is not None:
        options["entry_format"] = entry_format
    if time_format is not None:
        options["time_format"] = time_format

    handlers: list[Handler] = []
    if use_rich:
        handlers.append(RichConsoleHandler(options=options, stderr=resolved <= Level.ERROR))
    elif stream is not None:
        handlers.append(StreamHandler(stream, options=options, memory_limit=settings.memory_limit))
    else:
        handlers.append(StreamHandler("sys://stderr", levels=(0, 1, 2, 3), options=options, memory_limit=settings.memory_limit))
        handlers.append(StreamHandler("sys://stdout", levels=(4, 5, 6, 7), options=options, memory_limit=settings.memory_limit))

    with Logger(channel or settings.channel, *handlers) as logger:
        logger.warn_on_invalid_context_exceptions = settings.warn_on_invalid_context
        logger.log(resolved, message)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group in a test-friendly manner.

    Parameters
    ----------
    argv:
        Optional sequence of argument strings (defaults to ``sys.argv[1:]``).

    Returns
    -------
    int
        Zero on success, the Click exit code otherwise.

    Examples
    --------
    >>> main(["levels"])  # doctest: +ELLIPSIS
    0 emergency EMERGENCY
    ...
    0
    """

    args = list(argv) if argv is not None else None
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.exceptions.Exit as exit_:
        return exit_.exit_code
    except click.ClickException as error:
        error.show()
        return error.exit_code
    return 0


__all__ = ["cli", "main"]
