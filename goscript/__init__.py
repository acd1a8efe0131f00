"""goscript - command-dispatch framework for project script trees.

Resolves command scripts and library modules across the core framework,
installed plugins and the project's own scripts directory.
"""

__version__ = "0.3.0"
__author__ = "goscript Team"

from goscript.constants import Origin
from goscript.exceptions import GoScriptError

__all__ = [
    "__version__",
    "GoScriptError",
    "Origin",
]
