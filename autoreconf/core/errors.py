"""
Exceptions raised while modifying a deployment descriptor.
"""


class WebXmlError(Exception):
    """Base class for descriptor modification failures."""


class ParseError(WebXmlError):
    """The descriptor text is not well-formed XML."""


class StructuralError(WebXmlError):
    """A node required by the modification is missing from the descriptor."""

    def __init__(self, message: str, node: str = None):
        super().__init__(message)
        self.node = node
