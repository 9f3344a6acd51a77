"""
Modification of a web.xml for Spring auto-reconfiguration.

Two changes are made to the descriptor:

1. ``contextConfigLocation`` is augmented. If the parameter does not exist it
   is created with ``/WEB-INF/applicationContext.xml`` (root context) or
   ``/WEB-INF/<servlet-name>-servlet.xml`` (servlet context) as its value. An
   additional location is then appended: the auto-reconfiguration XML context
   for XML-based application contexts, or the auto-reconfiguration
   configuration class for annotation-based ones.

2. ``contextInitializerClasses`` is augmented. If the parameter does not exist
   it is created empty, then the cloud application context initializer is
   appended.

The root context is only modified when a ``ContextLoaderListener`` is
declared; servlet contexts are modified for every ``DispatcherServlet``.
"""

import os
import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from functools import partial
from typing import List, Optional, Union

from .config import ModifierConfiguration
from .core.augmenter import (
    NAME_MATCHERS,
    augment_context_config_locations,
    augment_context_initializer_classes,
)
from .core.classifier import context_style
from .core.constants import ContextStyle, ParamType
from .core.document import Document, parse
from .core.scopes import component_scopes, declared_name, has_bootstrap_listener, servlet_name
from .core.serializer import serialize

logger = logging.getLogger(__name__)


@dataclass
class ServletSummary:
    """Augmentation-relevant facts about one dispatcher servlet."""
    name: Optional[str]
    style: ContextStyle


@dataclass
class DescriptorSummary:
    """What the modifier would touch in a descriptor."""
    has_context_loader_listener: bool
    root_style: ContextStyle
    servlets: List[ServletSummary] = field(default_factory=list)
    
    def __str__(self) -> str:
        lines = []
        if self.has_context_loader_listener:
            lines.append(f"Root context: {self.root_style.value}-based (will be augmented)")
        else:
            lines.append("Root context: no ContextLoaderListener (left unchanged)")
        
        lines.append(f"Dispatcher servlets ({len(self.servlets)}):")
        for i, servlet in enumerate(self.servlets):
            name = servlet.name or "<missing servlet-name>"
            lines.append(f"  {i+1}. {name} ({servlet.style.value}-based)")
        
        return "\n".join(lines)


class WebXmlModifier:
    """
    Applies the auto-reconfiguration changes to one descriptor.

    The modifier is not idempotent: each augment call appends its tokens again,
    so it should run once per descriptor per build.
    """
    
    def __init__(
        self,
        source: Union[str, bytes, Document],
        config: Optional[ModifierConfiguration] = None
    ):
        """
        Args:
            source: Content of the web.xml, or an already parsed document
            config: Reconfiguration profile (defaults to the standard literals)
        """
        self.config = config or ModifierConfiguration()
        if isinstance(source, Document):
            self.document = source
        else:
            self.document = parse(source, encoding=self.config.encoding)
        self.name_matches = NAME_MATCHERS[self.config.parameter_name_matching]

    def apply(self) -> 'WebXmlModifier':
        """Run the augmentations the profile enables."""
        if self.config.augment_root:
            self.augment_root_context()
        if self.config.augment_servlets:
            self.augment_servlet_contexts()
        return self

    def augment_root_context(self):
        """Make modifications to the root context."""
        if not self.has_context_loader_listener():
            logger.info("No ContextLoaderListener declared, root context left unchanged")
            return
        
        root = self.document.root
        self._augment_context_config_locations(
            root, ParamType.CONTEXT_PARAM, self.config.context_location_default
        )
        self._augment_context_initializer_classes(root, ParamType.CONTEXT_PARAM)
        logger.info("Augmented root context")
    
    def augment_servlet_contexts(self):
        """Make modifications to the dispatcher servlet contexts."""
        for servlet in self.servlets():
            default_location = partial(self._default_servlet_context_location, servlet)
            self._augment_context_config_locations(
                servlet, ParamType.INIT_PARAM, default_location
            )
            self._augment_context_initializer_classes(servlet, ParamType.INIT_PARAM)
            logger.info(f"Augmented servlet context '{declared_name(self.document, servlet)}'")
    
    def has_context_loader_listener(self) -> bool:
        return has_bootstrap_listener(self.document, self.config.context_loader_listener)
    
    def servlets(self) -> List[ET.Element]:
        return component_scopes(self.document, self.config.dispatcher_servlet)
    
    def summary(self) -> DescriptorSummary:
        """Describe the scopes without modifying them."""
        servlets = [
            ServletSummary(
                name=declared_name(self.document, servlet),
                style=self._style(servlet, ParamType.INIT_PARAM)
            )
            for servlet in self.servlets()
        ]
        return DescriptorSummary(
            has_context_loader_listener=self.has_context_loader_listener(),
            root_style=self._style(self.document.root, ParamType.CONTEXT_PARAM),
            servlets=servlets
        )
    
    def to_string(self) -> str:
        """Returns the text of the (modified) web.xml."""
        return serialize(self.document)

    def to_bytes(self) -> bytes:
        """Returns the web.xml encoded as its declaration says, else with the profile encoding."""
        return self.to_string().encode(self.output_encoding)

    @property
    def output_encoding(self) -> str:
        return self.document.encoding or self.config.encoding

    def __str__(self) -> str:
        return self.to_string()
    
    def _style(self, scope: ET.Element, param_type: ParamType) -> ContextStyle:
        return context_style(
            self.document, scope, param_type,
            self.config.context_class, self.config.context_class_annotation
        )
    
    def _augment_context_config_locations(self, scope, param_type, default_location):
        return augment_context_config_locations(
            self.document, scope, param_type, default_location,
            config_location_key=self.config.context_config_location,
            context_class=self.config.context_class,
            annotation_class=self.config.context_class_annotation,
            annotation_location=self.config.context_location_additional_annotation,
            xml_location=self.config.context_location_additional_xml,
            name_matches=self.name_matches
        )
    
    def _augment_context_initializer_classes(self, scope, param_type):
        return augment_context_initializer_classes(
            self.document, scope, param_type,
            initializer_classes_key=self.config.context_initializer_classes,
            initializer_class=self.config.context_initializer_additional,
            name_matches=self.name_matches
        )
    
    def _default_servlet_context_location(self, servlet: ET.Element) -> str:
        return self.config.default_servlet_location(servlet_name(self.document, servlet))


def modify_web_xml(
    source: Union[str, bytes],
    config: Optional[ModifierConfiguration] = None
) -> str:
    """
    Apply all auto-reconfiguration changes to a web.xml.
    
    Args:
        source: Content of the web.xml
        config: Reconfiguration profile
        
    Returns:
        Content of the modified web.xml
    """
    return WebXmlModifier(source, config).apply().to_string()


def modify_web_xml_file(
    path: str,
    output_path: Optional[str] = None,
    config: Optional[ModifierConfiguration] = None
) -> str:
    """
    Modify a web.xml file, in place unless ``output_path`` is given.
    
    Args:
        path: Path to the web.xml
        output_path: Where to write the result
        config: Reconfiguration profile
        
    Returns:
        Content of the modified web.xml
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"Deployment descriptor not found: {path}")
    
    config = config or ModifierConfiguration()
    logger.info(f"Modifying deployment descriptor {path}")
    
    with open(path, 'rb') as f:
        modifier = WebXmlModifier(f.read(), config).apply()

    target = output_path or path
    target_dir = os.path.dirname(target)
    if target_dir:
        os.makedirs(target_dir, exist_ok=True)
    with open(target, 'wb') as f:
        f.write(modifier.to_bytes())

    logger.info(f"Wrote modified deployment descriptor to {target} ({modifier.output_encoding})")
    return modifier.to_string()
