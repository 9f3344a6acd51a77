"""
Configuration validation for reconfiguration profiles.
"""

import re
import codecs
from typing import Dict, Any, List
import logging

logger = logging.getLogger(__name__)

_TOKEN_DELIMITERS = re.compile(r"[,;\s]")


class ConfigValidator:
    """
    Validator for reconfiguration profiles.
    """
    
    SUPPORTED_MATCHING = ['contains', 'exact']
    
    LITERAL_FIELDS = [
        'context_loader_listener',
        'dispatcher_servlet',
        'context_class',
        'context_config_location',
        'context_initializer_classes',
        'context_class_annotation',
        'context_location_default',
        'servlet_context_location',
        'context_location_additional_annotation',
        'context_location_additional_xml',
        'context_initializer_additional',
    ]
    
    # Values written into a token list; a delimiter would split them
    TOKEN_FIELDS = [
        'context_location_default',
        'servlet_context_location',
        'context_location_additional_annotation',
        'context_location_additional_xml',
        'context_initializer_additional',
    ]
    
    BOOLEAN_FIELDS = ['augment_root', 'augment_servlets']
    
    def __init__(self):
        self.known_fields = set(self.LITERAL_FIELDS + self.BOOLEAN_FIELDS)
        self.known_fields.update(['parameter_name_matching', 'encoding'])
    
    def validate_config_dict(self, config_dict: Dict[str, Any]):
        """
        Validate configuration dictionary.
        
        Args:
            config_dict: Configuration dictionary from YAML
        """
        if config_dict is None:
            return
        
        if not isinstance(config_dict, dict):
            raise ValueError("Configuration must be a mapping of option names to values")
        
        unknown = set(config_dict) - self.known_fields
        if unknown:
            raise ValueError(
                f"Unknown configuration keys: {sorted(unknown)}. "
                f"Supported keys: {sorted(self.known_fields)}"
            )
        
        for name in self.LITERAL_FIELDS:
            if name in config_dict:
                self._validate_literal(name, config_dict[name])
        
        for name in self.BOOLEAN_FIELDS:
            if name in config_dict and not isinstance(config_dict[name], bool):
                raise ValueError(f"'{name}' must be a boolean")
        
        if 'parameter_name_matching' in config_dict:
            matching = config_dict['parameter_name_matching']
            if matching not in self.SUPPORTED_MATCHING:
                raise ValueError(
                    f"Unsupported parameter_name_matching: {matching}. "
                    f"Supported values: {self.SUPPORTED_MATCHING}"
                )
        
        if 'encoding' in config_dict:
            self._validate_encoding(config_dict['encoding'])
    
    def _validate_literal(self, name: str, value: Any):
        """Validate one literal option."""
        if not isinstance(value, str):
            raise ValueError(f"'{name}' must be a string")
        
        if not value.strip():
            raise ValueError(f"'{name}' cannot be empty or whitespace")
        
        if name in self.TOKEN_FIELDS and _TOKEN_DELIMITERS.search(value):
            raise ValueError(
                f"'{name}' cannot contain commas, semicolons or whitespace: {value!r}"
            )
        
        if name == 'servlet_context_location':
            if '{name}' not in value:
                raise ValueError("'servlet_context_location' must contain the '{name}' placeholder")
            try:
                value.format(name='servlet')
            except (KeyError, IndexError, ValueError) as e:
                raise ValueError(f"Invalid 'servlet_context_location' template: {e}")
    
    def _validate_encoding(self, encoding: Any):
        if not isinstance(encoding, str):
            raise ValueError("'encoding' must be a string")
        try:
            codecs.lookup(encoding)
        except LookupError:
            raise ValueError(f"Unknown encoding: {encoding}")
    
    def validate_configuration(self, config):
        """
        Validate a ModifierConfiguration object.
        
        Args:
            config: ModifierConfiguration instance
        """
        self.validate_config_dict(config.to_dict())
        
        if not config.augment_root and not config.augment_servlets:
            logger.warning("Both augment_root and augment_servlets are disabled")
        
        logger.info("Configuration validation passed")
    
    def get_validation_warnings(self, config) -> List[str]:
        """
        Get non-critical validation warnings.
        
        Args:
            config: ModifierConfiguration instance
            
        Returns:
            List of warning messages
        """
        warnings = []
        
        if not config.augment_root and not config.augment_servlets:
            warnings.append("Both augment_root and augment_servlets are disabled - nothing will be modified")
        
        for name, value in config.overridden_literals().items():
            warnings.append(
                f"'{name}' is overridden ({value}) - the runtime agent may not recognise it"
            )

        if config.encoding.lower().replace('_', '-') not in ('utf-8', 'utf8'):
            warnings.append(
                f"Descriptors without an encoding declaration will be read and written as '{config.encoding}'"
            )

        return warnings
