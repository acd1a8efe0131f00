"""goscript command-line interface."""

import click

from goscript import __version__
from goscript.commands import commands_cmd, complete, help_cmd, modules, plugins
from goscript.commands._utils import fail
from goscript.config import GoScriptConfig
from goscript.dispatcher import Dispatcher
from goscript.exceptions import ConfigurationError
from goscript.logging import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="goscript")
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Config file (default: .go-script.yaml)",
)
@click.pass_context
def cli(ctx: click.Context, config_path: str | None) -> None:
    """goscript - command-dispatch framework for project scripts.

    Finds command scripts and library modules in the core framework,
    installed plugins and the project's scripts directory.
    """
    ctx.ensure_object(dict)

    try:
        config = GoScriptConfig.load(config_path)
    except ConfigurationError as e:
        fail(e)

    setup_logging(
        level=config.logging.level,
        log_dir=config.logging.directory,
        json_output=config.logging.json_output,
    )

    ctx.obj["config"] = config
    ctx.obj["dispatcher"] = Dispatcher.from_config(config, builtins=sorted(cli.commands))


cli.add_command(commands_cmd)
cli.add_command(complete)
cli.add_command(help_cmd)
cli.add_command(modules)
cli.add_command(plugins)


if __name__ == "__main__":
    cli()
