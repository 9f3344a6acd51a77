"""
Location of the descriptor scopes that need augmentation.
"""

import logging
import xml.etree.ElementTree as ET
from typing import List, Optional

from .constants import CONTEXT_LOADER_LISTENER, DISPATCHER_SERVLET, contains_marker
from .document import Document
from .errors import StructuralError

logger = logging.getLogger(__name__)


def has_bootstrap_listener(document: Document, marker: str = CONTEXT_LOADER_LISTENER) -> bool:
    """Check for a ``listener-class`` anywhere under the root naming the marker."""
    for node in document.query(document.root, './/listener-class/text()'):
        if contains_marker(node.value, marker):
            return True
    return False


def component_scopes(document: Document, marker: str = DISPATCHER_SERVLET) -> List[ET.Element]:
    """
    Servlets backed by a dispatcher implementation class.

    Args:
        document: Parsed descriptor
        marker: Substring of ``servlet-class`` identifying a dispatcher

    Returns:
        Matching ``servlet`` elements in document order
    """
    scopes = []
    for servlet in document.query(document.root, 'servlet'):
        classes = document.query(servlet, 'servlet-class/text()')
        if any(contains_marker(node.value, marker) for node in classes):
            scopes.append(servlet)

    logger.debug(f"Found {len(scopes)} servlet(s) with class matching '{marker}'")
    return scopes


def declared_name(document: Document, scope: ET.Element) -> Optional[str]:
    """Stripped ``servlet-name`` of a scope, or None when it has none."""
    names = document.query(scope, 'servlet-name/text()')
    if not names:
        return None
    return names[0].value.strip() or None


def servlet_name(document: Document, scope: ET.Element) -> str:
    """
    Name of a servlet scope.

    Raises:
        StructuralError: If the servlet has no ``servlet-name`` text
    """
    name = declared_name(document, scope)
    if name is None:
        raise StructuralError(
            "Servlet declaration is missing a <servlet-name>, "
            "cannot derive its default context location",
            node='servlet-name'
        )
    return name
