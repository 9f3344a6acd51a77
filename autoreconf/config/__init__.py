"""
Configuration system for web.xml reconfiguration profiles.
"""

from .config_parser import ConfigParser
from .validation import ConfigValidator
from .modifier_config import ModifierConfiguration

__all__ = [
    "ConfigParser",
    "ConfigValidator",
    "ModifierConfiguration",
]
