"""goscript constants and enumerations."""

from enum import Enum


class Origin(Enum):
    """Which class of search root a script or module comes from."""

    CORE = "core"
    PLUGIN = "plugin"
    PROJECT = "project"


class ListFormat(Enum):
    """Listing views offered by the module, command and plugin listings."""

    NAMES = "names"
    PATHS = "paths"
    SUMMARIES = "summaries"


# Fallback text when a script carries no usable header comment
NO_DESCRIPTION = "No description available"

# Terminal width used when COLUMNS is unset and stdout is not a terminal
DEFAULT_COLUMNS = 80

# Default locations (relative to the project root unless absolute)
DEFAULT_CONFIG_FILE = ".go-script.yaml"
DEFAULT_SCRIPTS_DIR = "scripts"
DEFAULT_PLUGINS_SUBDIR = "plugins"
DEFAULT_GO_CMD = "goscript"

# Tree layout inside every root
MODULES_SUBDIR = "lib"
CORE_COMMANDS_SUBDIR = "libexec"
PLUGIN_COMMANDS_SUBDIR = "bin"
SUBCOMMAND_DIR_SUFFIX = ".d"

# Environment overrides
ENV_ROOTDIR = "_GO_ROOTDIR"
ENV_SCRIPTS_DIR = "_GO_SCRIPTS_DIR"
ENV_CORE_DIR = "_GO_CORE_DIR"
ENV_PLUGINS_DIR = "_GO_PLUGINS_DIR"
ENV_GO_CMD = "_GO_CMD"
ENV_IMPORTED_MODULES = "_GO_IMPORTED_MODULES"
ENV_COLUMNS = "COLUMNS"

# Glob metacharacters that switch a spec from exact lookup to search
GLOB_CHARS = "*?["

# Flags understood by the modules listing
HELP_FLAGS = ("-h", "-help", "--help")
FORMAT_FLAGS = ("--paths", "--summaries")
IMPORTED_FLAG = "--imported"
MODULES_COMPLETION_FLAGS = ("--help", "--paths", "--summaries", "--imported")

# Labels for listings grouped by origin
CLASS_LABELS = {
    Origin.CORE: "From the core framework library:",
    Origin.PLUGIN: "From the installed plugin libraries:",
    Origin.PROJECT: "From the project library:",
}
