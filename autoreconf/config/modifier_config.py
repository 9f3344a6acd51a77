"""
Configuration data structures for descriptor modification.
"""

from dataclasses import dataclass, fields
from typing import Dict, Any, List
import yaml
import logging

from ..core import constants

logger = logging.getLogger(__name__)


@dataclass
class ModifierConfiguration:
    """Reconfiguration profile applied to a web.xml."""
    # Markers used to locate scopes
    context_loader_listener: str = constants.CONTEXT_LOADER_LISTENER
    dispatcher_servlet: str = constants.DISPATCHER_SERVLET
    
    # Parameter names
    context_class: str = constants.CONTEXT_CLASS
    context_config_location: str = constants.CONTEXT_CONFIG_LOCATION
    context_initializer_classes: str = constants.CONTEXT_INITIALIZER_CLASSES
    
    # Context style detection
    context_class_annotation: str = constants.CONTEXT_CLASS_ANNOTATION
    
    # Default locations for created parameters
    context_location_default: str = constants.CONTEXT_LOCATION_DEFAULT
    servlet_context_location: str = constants.SERVLET_CONTEXT_LOCATION_TEMPLATE
    
    # Appended tokens
    context_location_additional_annotation: str = constants.CONTEXT_LOCATION_ADDITIONAL_ANNOTATION
    context_location_additional_xml: str = constants.CONTEXT_LOCATION_ADDITIONAL_XML
    context_initializer_additional: str = constants.CONTEXT_INITIALIZER_ADDITIONAL
    
    # Behaviour
    parameter_name_matching: str = "contains"
    augment_root: bool = True
    augment_servlets: bool = True
    encoding: str = "utf-8"
    
    def __post_init__(self):
        """Post-initialization validation."""
        if self.parameter_name_matching not in ('contains', 'exact'):
            raise ValueError(
                f"Unsupported parameter_name_matching: {self.parameter_name_matching}. "
                f"Supported values: ['contains', 'exact']"
            )
    
    @classmethod
    def field_names(cls) -> List[str]:
        return [f.name for f in fields(cls)]
    
    @classmethod
    def from_yaml(cls, yaml_path: str) -> 'ModifierConfiguration':
        """Load configuration from YAML file."""
        with open(yaml_path, 'r', encoding='utf-8') as f:
            config_dict = yaml.safe_load(f)
        
        return cls.from_dict(config_dict or {})
    
    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'ModifierConfiguration':
        """Create configuration from dictionary, ignoring unknown keys."""
        known = set(cls.field_names())
        unknown = set(config_dict) - known
        if unknown:
            logger.warning(f"Ignoring unknown configuration keys: {sorted(unknown)}")
        
        return cls(**{key: value for key, value in config_dict.items() if key in known})
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {name: getattr(self, name) for name in self.field_names()}
    
    def to_yaml(self, yaml_path: str):
        """Save configuration to YAML file."""
        with open(yaml_path, 'w', encoding='utf-8') as f:
            yaml.dump(self.to_dict(), f, default_flow_style=False, indent=2, sort_keys=False)
    
    def overridden_literals(self) -> Dict[str, str]:
        """Literals that differ from the values the runtime agent expects."""
        defaults = ModifierConfiguration()
        overridden = {}
        for name in self.field_names():
            value = getattr(self, name)
            if isinstance(value, str) and name not in ('parameter_name_matching', 'encoding'):
                if value != getattr(defaults, name):
                    overridden[name] = value
        return overridden
    
    def default_servlet_location(self, servlet_name: str) -> str:
        return self.servlet_context_location.format(name=servlet_name)
