"""
solid-ioc: a minimal dependency-injection container.

    from solid_ioc import DIContainer, Lifetime

    container = DIContainer()
    container.register(ILogger, ConsoleLogger, Lifetime.SINGLETON)
    container.register(IUserRepository, SqlUserRepository)
    service = container.resolve(IUserRepository)
"""

from solid_ioc.dependency_injection import (
    ContainerModule,
    DIContainer,
    constructor,
    discover_constructors,
    select_constructor,
)
from solid_ioc.domain.exceptions import (
    AmbiguousConstructorError,
    ConstructionError,
    ContainerError,
    CyclicDependencyError,
    DuplicateRegistrationError,
    RegistrationError,
    UnregisteredTypeError,
)
from solid_ioc.domain.value_objects import (
    Binding,
    ConstructorDescriptor,
    FactoryBinding,
    InstanceBinding,
    ParameterDescriptor,
    TypeBinding,
)
from solid_ioc.enums import Lifetime
from solid_ioc.interfaces.container_interface import IContainer
from solid_ioc.settings import ContainerSettings, get_settings, reload_settings

__version__ = "0.1.0"

__all__ = [
    "DIContainer",
    "IContainer",
    "ContainerModule",
    "Lifetime",
    "constructor",
    "discover_constructors",
    "select_constructor",
    "Binding",
    "TypeBinding",
    "FactoryBinding",
    "InstanceBinding",
    "ConstructorDescriptor",
    "ParameterDescriptor",
    "ContainerError",
    "UnregisteredTypeError",
    "AmbiguousConstructorError",
    "CyclicDependencyError",
    "ConstructionError",
    "RegistrationError",
    "DuplicateRegistrationError",
    "ContainerSettings",
    "get_settings",
    "reload_settings",
]
