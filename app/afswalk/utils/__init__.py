"""Utility modules for afswalk.

This module exports commonly used utility functions.
"""

from afswalk.utils.formatting import err_console, print_error, print_warning
from afswalk.utils.shell import CommandResult, command_exists, run_command

__all__ = [
    "CommandResult",
    "command_exists",
    "err_console",
    "print_error",
    "print_warning",
    "run_command",
]
