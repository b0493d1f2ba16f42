"""
Dependency Injection module
Single Responsibility: register bindings and build object graphs from them
"""

from .constructor_inspector import (
    constructor,
    discover_constructors,
    select_constructor,
)
from .di_container import DIContainer
from .injector_bridge import ContainerModule

__all__ = [
    "DIContainer",
    "ContainerModule",
    "constructor",
    "discover_constructors",
    "select_constructor",
]
