"""
Classification of a scope's application context style.
"""

import xml.etree.ElementTree as ET

from .constants import (
    CONTEXT_CLASS,
    CONTEXT_CLASS_ANNOTATION,
    CONTEXT_LOCATION_ADDITIONAL_ANNOTATION,
    CONTEXT_LOCATION_ADDITIONAL_XML,
    ContextStyle,
    ParamType,
)
from .document import Document


def is_annotation_style(
    document: Document,
    scope: ET.Element,
    param_type: ParamType,
    context_class: str = CONTEXT_CLASS,
    annotation_class: str = CONTEXT_CLASS_ANNOTATION
) -> bool:
    """
    Check whether a scope declares an annotation-based application context.

    Args:
        document: Parsed descriptor
        scope: Root element or a servlet element
        param_type: Kind of parameter element the scope holds
        context_class: Name of the context class parameter
        annotation_class: Context class marking annotation configuration

    Returns:
        True if a parameter named ``context_class`` has the annotation class
        as its value
    """
    for param in document.query(scope, param_type.value):
        names = document.query(param, 'param-name/text()')
        values = document.query(param, 'param-value/text()')
        if not names or not values:
            continue
        if names[0].value.strip() == context_class and values[0].value.strip() == annotation_class:
            return True
    return False


def context_style(
    document: Document,
    scope: ET.Element,
    param_type: ParamType,
    context_class: str = CONTEXT_CLASS,
    annotation_class: str = CONTEXT_CLASS_ANNOTATION
) -> ContextStyle:
    if is_annotation_style(document, scope, param_type, context_class, annotation_class):
        return ContextStyle.ANNOTATION
    return ContextStyle.XML


def additional_location(
    style: ContextStyle,
    annotation_location: str = CONTEXT_LOCATION_ADDITIONAL_ANNOTATION,
    xml_location: str = CONTEXT_LOCATION_ADDITIONAL_XML
) -> str:
    """Context config location token to append for a context style."""
    if style is ContextStyle.ANNOTATION:
        return annotation_location
    return xml_location
