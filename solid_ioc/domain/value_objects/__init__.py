"""
Domain Value Objects

Bindings held by the registry and the constructor metadata used to satisfy them.
"""

from .binding import Binding, FactoryBinding, InstanceBinding, TypeBinding
from .constructor_descriptor import ConstructorDescriptor, ParameterDescriptor

__all__ = [
    "Binding",
    "TypeBinding",
    "FactoryBinding",
    "InstanceBinding",
    "ConstructorDescriptor",
    "ParameterDescriptor",
]
