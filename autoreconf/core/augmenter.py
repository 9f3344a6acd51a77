"""
Augmentation of delimiter-separated parameter values.

A parameter is looked up in a scope by name, created with a default value
when missing, and has one token appended to its value. Tokens are split on
runs of commas, semicolons and whitespace and re-joined with single spaces.

Augmenting the same parameter twice appends the token twice.
"""

import re
import logging
import xml.etree.ElementTree as ET
from typing import Callable, Dict, List, Optional, Union

from .classifier import additional_location, context_style
from .constants import (
    CONTEXT_CLASS,
    CONTEXT_CLASS_ANNOTATION,
    CONTEXT_CONFIG_LOCATION,
    CONTEXT_INITIALIZER_ADDITIONAL,
    CONTEXT_INITIALIZER_CLASSES,
    CONTEXT_LOCATION_ADDITIONAL_ANNOTATION,
    CONTEXT_LOCATION_ADDITIONAL_XML,
    ParamType,
)
from .document import Document

logger = logging.getLogger(__name__)

_DELIMITERS = re.compile(r"[,;\s]+")

NameMatcher = Callable[[str, str], bool]
DefaultValue = Union[str, Callable[[], str]]


def contains(candidate: str, target: str) -> bool:
    """Substring match. Also accepts names that merely contain the target."""
    return target in candidate


def exact(candidate: str, target: str) -> bool:
    return candidate.strip() == target


NAME_MATCHERS: Dict[str, NameMatcher] = {
    'contains': contains,
    'exact': exact,
}


def split_tokens(value: str) -> List[str]:
    return [token for token in _DELIMITERS.split(value.strip()) if token]


def join_tokens(tokens: List[str]) -> str:
    return ' '.join(tokens)


def find_parameter(
    document: Document,
    scope: ET.Element,
    param_type: ParamType,
    name: str,
    name_matches: NameMatcher = contains
) -> Optional[ET.Element]:
    """First parameter of ``param_type`` under ``scope`` whose name matches."""
    for param in document.query(scope, param_type.value):
        names = document.query(param, 'param-name/text()')
        if names and name_matches(names[0].value, name):
            return param
    return None


def create_parameter(
    document: Document,
    scope: ET.Element,
    param_type: ParamType,
    name: str,
    value: str
) -> ET.Element:
    """Append ``<param_type><param-name/><param-value/></param_type>`` to a scope."""
    param = document.create_element(scope, param_type.value)
    document.create_text(document.create_element(param, 'param-name'), name)
    document.create_text(document.create_element(param, 'param-value'), value)
    return param


def augment_parameter(
    document: Document,
    scope: ET.Element,
    param_type: ParamType,
    name: str,
    default: DefaultValue,
    token: str,
    name_matches: NameMatcher = contains
) -> str:
    """
    Append a token to a parameter value, creating the parameter if needed.

    Args:
        document: Parsed descriptor
        scope: Element holding the parameters
        param_type: Kind of parameter element to look up or create
        name: Parameter name
        default: Value for a newly created parameter, or a callable
            producing it (only called when the parameter is missing)
        token: Token appended to the value
        name_matches: Predicate comparing a declared name to ``name``

    Returns:
        The new parameter value
    """
    param = find_parameter(document, scope, param_type, name, name_matches)
    if param is None:
        value = default() if callable(default) else default
        logger.debug(f"Creating <{param_type.value}> '{name}' with default '{value}'")
        param = create_parameter(document, scope, param_type, name, value)

    value_element = document.find(param, 'param-value')
    if value_element is None:
        value_element = document.create_element(param, 'param-value')

    tokens = split_tokens(document.text(value_element))
    tokens.append(token)

    value = join_tokens(tokens)
    document.create_text(value_element, value)
    logger.debug(f"Set <{param_type.value}> '{name}' to '{value}'")
    return value


def augment_context_config_locations(
    document: Document,
    scope: ET.Element,
    param_type: ParamType,
    default_location: DefaultValue,
    config_location_key: str = CONTEXT_CONFIG_LOCATION,
    context_class: str = CONTEXT_CLASS,
    annotation_class: str = CONTEXT_CLASS_ANNOTATION,
    annotation_location: str = CONTEXT_LOCATION_ADDITIONAL_ANNOTATION,
    xml_location: str = CONTEXT_LOCATION_ADDITIONAL_XML,
    name_matches: NameMatcher = contains
) -> str:
    """
    Add the auto-reconfiguration context to a scope's config locations.

    The appended location depends on whether the scope configures an
    annotation-based or an XML-based application context.
    """
    style = context_style(document, scope, param_type, context_class, annotation_class)
    token = additional_location(style, annotation_location, xml_location)
    return augment_parameter(
        document, scope, param_type, config_location_key, default_location, token, name_matches
    )


def augment_context_initializer_classes(
    document: Document,
    scope: ET.Element,
    param_type: ParamType,
    initializer_classes_key: str = CONTEXT_INITIALIZER_CLASSES,
    initializer_class: str = CONTEXT_INITIALIZER_ADDITIONAL,
    name_matches: NameMatcher = contains
) -> str:
    """Add the cloud application context initializer to a scope."""
    return augment_parameter(
        document, scope, param_type, initializer_classes_key, '', initializer_class, name_matches
    )
