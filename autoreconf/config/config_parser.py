"""
Configuration parser for YAML reconfiguration profiles.
"""

import yaml
import os
import logging

from .modifier_config import ModifierConfiguration
from .validation import ConfigValidator

logger = logging.getLogger(__name__)

SAMPLE_XML_WEB_XML = """<?xml version="1.0" encoding="UTF-8"?>
<web-app xmlns="http://java.sun.com/xml/ns/javaee" version="3.0">

  <context-param>
    <param-name>contextConfigLocation</param-name>
    <param-value>/WEB-INF/spring/root-context.xml</param-value>
  </context-param>

  <listener>
    <listener-class>org.springframework.web.context.ContextLoaderListener</listener-class>
  </listener>

  <servlet>
    <servlet-name>appServlet</servlet-name>
    <servlet-class>org.springframework.web.servlet.DispatcherServlet</servlet-class>
    <load-on-startup>1</load-on-startup>
  </servlet>

  <servlet-mapping>
    <servlet-name>appServlet</servlet-name>
    <url-pattern>/</url-pattern>
  </servlet-mapping>

</web-app>
"""

SAMPLE_ANNOTATION_WEB_XML = """<?xml version="1.0" encoding="UTF-8"?>
<web-app xmlns="http://java.sun.com/xml/ns/javaee" version="3.0">

  <context-param>
    <param-name>contextClass</param-name>
    <param-value>org.springframework.web.context.support.AnnotationConfigWebApplicationContext</param-value>
  </context-param>

  <context-param>
    <param-name>contextConfigLocation</param-name>
    <param-value>com.example.config.RootConfig</param-value>
  </context-param>

  <listener>
    <listener-class>org.springframework.web.context.ContextLoaderListener</listener-class>
  </listener>

  <servlet>
    <servlet-name>dispatcher</servlet-name>
    <servlet-class>org.springframework.web.servlet.DispatcherServlet</servlet-class>
    <init-param>
      <param-name>contextClass</param-name>
      <param-value>org.springframework.web.context.support.AnnotationConfigWebApplicationContext</param-value>
    </init-param>
    <init-param>
      <param-name>contextConfigLocation</param-name>
      <param-value>com.example.config.WebConfig</param-value>
    </init-param>
  </servlet>

</web-app>
"""


class ConfigParser:
    """
    Parser for reconfiguration profile files.
    """
    
    def __init__(self):
        self.validator = ConfigValidator()
    
    def parse_config(self, config_path: str) -> ModifierConfiguration:
        """
        Parse configuration from YAML file.
        
        Args:
            config_path: Path to YAML configuration file
            
        Returns:
            Parsed reconfiguration profile
        """
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Configuration file not found: {config_path}")
        
        logger.info(f"Parsing configuration from {config_path}")
        
        # Load YAML
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                config_dict = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format: {e}")
        except OSError as e:
            raise ValueError(f"Error reading configuration file: {e}")
        
        config = self._build(config_dict)
        
        logger.info(f"Successfully parsed configuration from {config_path}")
        return config
    
    def parse_config_string(self, config_string: str) -> ModifierConfiguration:
        """
        Parse configuration from YAML string.
        
        Args:
            config_string: YAML configuration as string
            
        Returns:
            Parsed reconfiguration profile
        """
        try:
            config_dict = yaml.safe_load(config_string)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML format: {e}")
        
        return self._build(config_dict)
    
    def _build(self, config_dict) -> ModifierConfiguration:
        # An empty file is the default profile
        self.validator.validate_config_dict(config_dict)
        config = ModifierConfiguration.from_dict(config_dict or {})
        self.validator.validate_configuration(config)
        return config
    
    def create_example_configs(self, output_dir: str = "./examples"):
        """Create example profiles and sample descriptors."""
        os.makedirs(output_dir, exist_ok=True)
        
        # Standard profile, every option at its default
        ModifierConfiguration().to_yaml(os.path.join(output_dir, 'default_profile.yml'))
        
        # Exact parameter name matching
        exact_config = {
            'parameter_name_matching': 'exact',
        }
        with open(os.path.join(output_dir, 'exact_matching_profile.yml'), 'w') as f:
            yaml.dump(exact_config, f, default_flow_style=False, indent=2)
        
        # Servlet contexts only
        servlets_only_config = {
            'augment_root': False,
            'augment_servlets': True,
        }
        with open(os.path.join(output_dir, 'servlets_only_profile.yml'), 'w') as f:
            yaml.dump(servlets_only_config, f, default_flow_style=False, indent=2)
        
        # Sample descriptors to run the profiles against
        with open(os.path.join(output_dir, 'xml_web.xml'), 'w', encoding='utf-8') as f:
            f.write(SAMPLE_XML_WEB_XML)
        with open(os.path.join(output_dir, 'annotation_web.xml'), 'w', encoding='utf-8') as f:
            f.write(SAMPLE_ANNOTATION_WEB_XML)
        
        logger.info(f"Created example configurations in {output_dir}")
    
    def validate_file_syntax(self, config_path: str) -> bool:
        """
        Validate YAML syntax without full parsing.
        
        Args:
            config_path: Path to configuration file
            
        Returns:
            True if syntax is valid
        """
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                yaml.safe_load(f)
            return True
        except yaml.YAMLError as e:
            logger.error(f"YAML syntax error: {e}")
            return False
        except OSError as e:
            logger.error(f"File error: {e}")
            return False
    
    def get_config_summary(self, config: ModifierConfiguration) -> str:
        """
        Get a summary of the configuration.
        
        Args:
            config: Reconfiguration profile
            
        Returns:
            Human-readable summary
        """
        summary = []
        summary.append(f"Augment root context: {config.augment_root}")
        summary.append(f"Augment servlet contexts: {config.augment_servlets}")
        summary.append(f"Parameter name matching: {config.parameter_name_matching}")
        summary.append(f"Encoding: {config.encoding}")
        
        overridden = config.overridden_literals()
        if overridden:
            summary.append(f"Overridden literals ({len(overridden)}):")
            for key, value in overridden.items():
                summary.append(f"  {key}: {value}")
        else:
            summary.append("Literals: defaults")
        
        return "\n".join(summary)
