"""goscript CLI commands."""

from goscript.commands.commands_cmd import commands_cmd
from goscript.commands.complete import complete
from goscript.commands.help_cmd import help_cmd
from goscript.commands.modules import modules
from goscript.commands.plugins import plugins

__all__ = [
    "commands_cmd",
    "complete",
    "help_cmd",
    "modules",
    "plugins",
]
