"""A Python package for computing depth and distance fields of label volumes."""

import logging
from importlib.metadata import PackageNotFoundError, version

from rich.logging import RichHandler

logging.basicConfig(
    level="NOTSET",
    format="%(message)s",
    datefmt="[%X]",
    handlers=[RichHandler(rich_tracebacks=True)],
)

numba_logger = logging.getLogger("numba")
numba_logger.setLevel(logging.WARNING)

try:
    __version__ = version("depthfield")
except PackageNotFoundError:
    __version__ = "uninstalled"
