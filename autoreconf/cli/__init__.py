"""
Command-line interface for web.xml auto-reconfiguration.
"""

from .modify_cli import main, modify_command
from .validate_cli import validate_command
from .inspect_cli import inspect_command
from .examples_cli import examples_command

__all__ = [
    "main",
    "modify_command",
    "validate_command",
    "inspect_command",
    "examples_command",
]
