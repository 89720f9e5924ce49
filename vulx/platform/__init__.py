"""Platform abstraction layer."""

from .files import replace_file, replace_tree
from .ports import PortError, find_free_port, port_in_use
from .process import ProcessError, run_chain, run_silent

__all__ = [
    # files
    "replace_file",
    "replace_tree",
    # ports
    "PortError",
    "find_free_port",
    "port_in_use",
    # process
    "ProcessError",
    "run_chain",
    "run_silent",
]
