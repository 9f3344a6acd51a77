"""Core descriptor model and augmentation components."""

from .document import Document, TextNode, parse
from .serializer import serialize
from .scopes import has_bootstrap_listener, component_scopes, servlet_name
from .classifier import is_annotation_style, context_style
from .augmenter import augment_parameter, augment_context_config_locations, augment_context_initializer_classes
from .errors import WebXmlError, ParseError, StructuralError

__all__ = [
    "Document",
    "TextNode",
    "parse",
    "serialize",
    "has_bootstrap_listener",
    "component_scopes",
    "servlet_name",
    "is_annotation_style",
    "context_style",
    "augment_parameter",
    "augment_context_config_locations",
    "augment_context_initializer_classes",
    "WebXmlError",
    "ParseError",
    "StructuralError",
]
