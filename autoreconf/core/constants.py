"""
Fixed literals shared with the runtime auto-reconfiguration agent.

These values are read back by the agent at application start-up and must be
reproduced exactly.
"""

from enum import Enum


CONTEXT_CLASS = 'contextClass'

CONTEXT_CLASS_ANNOTATION = 'org.springframework.web.context.support.AnnotationConfigWebApplicationContext'

CONTEXT_CONFIG_LOCATION = 'contextConfigLocation'

CONTEXT_INITIALIZER_ADDITIONAL = 'org.cloudfoundry.reconfiguration.spring.CloudApplicationContextInitializer'

CONTEXT_INITIALIZER_CLASSES = 'contextInitializerClasses'

CONTEXT_LOADER_LISTENER = 'ContextLoaderListener'

CONTEXT_LOCATION_ADDITIONAL_ANNOTATION = 'org.cloudfoundry.reconfiguration.spring.web.CloudAppAnnotationConfigAutoReconfig'

CONTEXT_LOCATION_ADDITIONAL_XML = 'classpath:META-INF/cloud/cloudfoundry-auto-reconfiguration-context.xml'

CONTEXT_LOCATION_DEFAULT = '/WEB-INF/applicationContext.xml'

DISPATCHER_SERVLET = 'DispatcherServlet'

SERVLET_CONTEXT_LOCATION_TEMPLATE = '/WEB-INF/{name}-servlet.xml'


class ParamType(Enum):
    """Parameter element names for the two kinds of scope."""
    CONTEXT_PARAM = 'context-param'
    INIT_PARAM = 'init-param'


class ContextStyle(Enum):
    """How a scope builds its Spring application context."""
    ANNOTATION = 'annotation'
    XML = 'xml'


def contains_marker(text, marker: str) -> bool:
    """Check whether node text carries a marker string."""
    return text is not None and marker in text
