"""
Rendering of a Document back to descriptor text.
"""

import threading
import xml.etree.ElementTree as ET
from contextlib import contextmanager

from .document import Document

# ElementTree keeps its prefix registry in module state
_registry_lock = threading.Lock()


@contextmanager
def _default_prefix(namespace):
    """Map ``namespace`` to the empty prefix while rendering."""
    if not namespace:
        yield
        return
    with _registry_lock:
        saved = dict(ET._namespace_map)
        ET.register_namespace('', namespace)
        try:
            yield
        finally:
            ET._namespace_map.clear()
            ET._namespace_map.update(saved)


def serialize(document: Document) -> str:
    """
    Render the full document.

    The prolog and epilog are written back as they were read and the default
    namespace is emitted as a plain ``xmlns`` declaration. Unprefixed
    attributes such as ``version`` stay unprefixed.

    Args:
        document: Document to render

    Returns:
        Descriptor text
    """
    with _default_prefix(document.namespace):
        body = ET.tostring(document.root, encoding='unicode')
    return f"{document.prolog}{body}{document.epilog}"
