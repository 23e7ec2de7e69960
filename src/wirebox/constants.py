"""Constants used throughout the wirebox container.

This module defines the internal attribute names stamped onto decorated
classes and functions, the framework logger, and the built-in role names.
"""

import logging

LOGGER_NAME: str = "wirebox"
"""Default logger name for the wirebox container."""

LOGGER: logging.Logger = logging.getLogger(LOGGER_NAME)
"""Pre-configured logger instance for wirebox internal diagnostics."""

WIREBOX_ROLE: str = "_wirebox_role"
"""Attribute name storing the role tag of a decorated class."""

WIREBOX_BEAN: str = "_wirebox_bean"
"""Attribute name marking a function as a factory method."""

WIREBOX_NAME: str = "_wirebox_name"
"""Attribute name storing the explicit bean name of a factory method."""

WIREBOX_CONSTRUCTOR: str = "_wirebox_constructor"
"""Attribute name marking a classmethod as an alternate constructor."""

ROLE_COMPONENT: str = "component"
ROLE_SERVICE: str = "service"
ROLE_REPOSITORY: str = "repository"
ROLE_CONFIGURATION: str = "configuration"

ROLES: tuple = (ROLE_REPOSITORY, ROLE_SERVICE, ROLE_COMPONENT, ROLE_CONFIGURATION)
"""Every role tag, in the order discovery feeds them to the container."""

ORIGIN_CLASS: str = "class"
ORIGIN_FACTORY: str = "factory"
ORIGIN_EXTERNAL: str = "external"

COLLISION_SKIP: str = "skip"
COLLISION_ERROR: str = "error"
