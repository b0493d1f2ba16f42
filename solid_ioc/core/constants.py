"""
Constants module for the container.

This module centralizes the magic strings used across the container into
named constants with clear meanings.
"""

# =============================================================================
# LOGGING CONSTANTS
# =============================================================================

DEFAULT_LOGGER_NAME = "solid-ioc"

LOG_FORMAT = "%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s: %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Environment variable toggling debug output for every container logger
DEBUG_LOGS_ENV_VAR = "IOC_DEBUG_LOGS_ENABLED"

# Prefix applied to all settings read from the environment
SETTINGS_ENV_PREFIX = "IOC_"


# =============================================================================
# CONSTRUCTOR DISCOVERY CONSTANTS
# =============================================================================

# Attribute set by the @constructor decorator on marked callables
CONSTRUCTOR_MARKER = "__ioc_constructor__"

# Name under which the instance initializer is reported in descriptors
INIT_CONSTRUCTOR_NAME = "__init__"

# Allocator used in place of __init__ when a class only defines __new__
NEW_CONSTRUCTOR_NAME = "__new__"

# Separator used when rendering a resolution chain (A -> B -> A)
CHAIN_SEPARATOR = " -> "


# =============================================================================
# ERROR CODES
# =============================================================================

ERROR_TYPE_NOT_REGISTERED = "TYPE_NOT_REGISTERED"
ERROR_AMBIGUOUS_CONSTRUCTOR = "AMBIGUOUS_CONSTRUCTOR"
ERROR_CYCLIC_DEPENDENCY = "CYCLIC_DEPENDENCY"
ERROR_INVALID_REGISTRATION = "INVALID_REGISTRATION"
ERROR_DUPLICATE_REGISTRATION = "DUPLICATE_REGISTRATION"
ERROR_CONSTRUCTION_FAILED = "CONSTRUCTION_FAILED"
