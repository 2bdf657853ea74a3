"""
termplot: realtime plotting of numeric streams in the terminal.

We keep this __init__ lightweight on purpose so that
`import termplot` and `termplot --help` work without touching curses.
"""

import logging
from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("termplot")
except PackageNotFoundError:  # during editable installs
    __version__ = "0.0.0"

# No console output while curses owns the screen; the CLI attaches a file handler.
logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = ["__version__"]
