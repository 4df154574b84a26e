"""aspell-pipe command line.

Commands:
    check: Spell-check files or stdin
    ident: Show the Aspell identification banner
    config: Show or change persistent defaults
"""

import json
import logging
import sys
from dataclasses import asdict

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from aspell_pipe import __version__
from aspell_pipe.config_manager import AspellPipeConfig, ConfigError, ConfigManager
from aspell_pipe.exceptions import AspellError
from aspell_pipe.models import AspellOption, AspellResponse, UseDictionary
from aspell_pipe.session import start_aspell

logger = logging.getLogger(__name__)

EXIT_MISTAKES = 1
EXIT_ERROR = 2

CONFIG_KEYS = ["executable", "default_dictionary", "read_timeout"]


def _build_options(dictionary: str | None) -> list[AspellOption]:
    return [UseDictionary(dictionary)] if dictionary else []


def _load_config(config_path: str | None) -> AspellPipeConfig:
    try:
        return ConfigManager.load_config(config_path)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


class SourceReadError(Exception):
    """Raised when an input file or stdin cannot be read as UTF-8 text."""

    pass


def _read_source(source: str) -> str:
    try:
        with click.open_file(source, encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError as e:
        name = "stdin" if source == "-" else source
        raise SourceReadError(f"{name} is not valid UTF-8 text: {e}") from e
    except OSError as e:
        raise SourceReadError(f"Failed to read {source}: {e}") from e


def _render_table(results: list[tuple[str, list[AspellResponse]]]) -> Table:
    table = Table(title="Spelling mistakes")
    table.add_column("File", style="cyan")
    table.add_column("Line", justify="right")
    table.add_column("Column", justify="right")
    table.add_column("Word", style="red")
    table.add_column("Suggestions", style="green")

    for source, responses in results:
        for line_number, response in enumerate(responses, start=1):
            for mistake in response.mistakes:
                table.add_row(
                    escape(source),
                    str(line_number),
                    str(mistake.offset + 1),
                    escape(mistake.word),
                    escape(", ".join(mistake.alternatives)) or "-",
                )
    return table


def _render_json(results: list[tuple[str, list[AspellResponse]]]) -> str:
    entries = []
    for source, responses in results:
        for line_number, response in enumerate(responses, start=1):
            for mistake in response.mistakes:
                entries.append({"file": source, "line": line_number, **asdict(mistake)})
    return json.dumps(entries, indent=2)


@click.group(invoke_without_command=True)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.version_option(version=__version__)
@click.pass_context
def main(ctx: click.Context, verbose: bool) -> None:
    """aspell-pipe - spell-check text through Aspell's pipe protocol.

    \b
    Examples:
        aspell-pipe check README.txt
        cat notes.txt | aspell-pipe check -d en_GB
        aspell-pipe ident

    \b
    CONFIGURATION:
        Config file: ~/.aspell-pipe/config.toml
        Set defaults: executable, default_dictionary, read_timeout
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING, format="%(message)s"
    )

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)


@main.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("--dictionary", "-d", help="Aspell dictionary (see aspell -d)", type=str)
@click.option("--timeout", help="Seconds to wait for each Aspell response", type=float)
@click.option("--json", "as_json", is_flag=True, help="Print mistakes as JSON")
@click.option("--config", help="Config file path", type=click.Path())
def check(
    files: tuple[str, ...],
    dictionary: str | None,
    timeout: float | None,
    as_json: bool,
    config: str | None,
):
    """Spell-check FILES, or stdin when no file is given.

    Exits with status 1 when any mistake is found.

    \b
    Examples:
        aspell-pipe check README.txt CHANGES.txt
        aspell-pipe check --json -d de_DE brief.txt
    """
    settings = _load_config(config)
    dictionary = dictionary or settings.default_dictionary
    read_timeout = timeout if timeout is not None else settings.read_timeout

    if files:
        sources = list(files)
    else:
        sources = ["-"]

    results: list[tuple[str, list[AspellResponse]]] = []
    try:
        with start_aspell(
            _build_options(dictionary),
            executable=settings.executable,
            read_timeout=read_timeout,
        ) as aspell:
            for source in sources:
                text = _read_source(source)
                logger.debug(f"Checking {source}")
                results.append(("<stdin>" if source == "-" else source, aspell.check(text)))
    except (AspellError, SourceReadError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    has_mistakes = any(not r.is_correct for _, responses in results for r in responses)

    if as_json:
        click.echo(_render_json(results))
    elif has_mistakes:
        Console().print(_render_table(results))
    else:
        click.echo("No spelling mistakes found.")

    if has_mistakes:
        sys.exit(EXIT_MISTAKES)


@main.command()
@click.option("--dictionary", "-d", help="Aspell dictionary (see aspell -d)", type=str)
@click.option("--config", help="Config file path", type=click.Path())
def ident(dictionary: str | None, config: str | None):
    """Show the identification banner Aspell prints at startup."""
    settings = _load_config(config)
    dictionary = dictionary or settings.default_dictionary

    try:
        with start_aspell(
            _build_options(dictionary),
            executable=settings.executable,
            read_timeout=settings.read_timeout,
        ) as aspell:
            click.echo(aspell.identification)
    except AspellError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)


@main.group(name="config")
def config_group():
    """Show or change persistent defaults."""


@config_group.command(name="show")
@click.option("--config", help="Config file path", type=click.Path())
def config_show(config: str | None):
    """Show the effective configuration."""
    settings = _load_config(config)
    for key in CONFIG_KEYS:
        value = getattr(settings, key)
        click.echo(f"{key} = {value if value is not None else '(not set)'}")


@config_group.command(name="set")
@click.argument("key", type=click.Choice(CONFIG_KEYS))
@click.argument("value", type=str)
@click.option("--config", help="Config file path", type=click.Path())
def config_set(key: str, value: str, config: str | None):
    """Set a configuration value.

    \b
    Examples:
        aspell-pipe config set default_dictionary en_GB
        aspell-pipe config set read_timeout 10
    """
    parsed: str | float = value
    if key == "read_timeout":
        try:
            parsed = float(value)
        except ValueError:
            click.echo(f"Error: read_timeout must be a number, got {value!r}", err=True)
            sys.exit(EXIT_ERROR)

    try:
        ConfigManager.update_config(config, **{key: parsed})
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)

    click.echo(f"Set {key} = {parsed}")


if __name__ == "__main__":
    main()
