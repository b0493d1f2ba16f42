"""
Binding value objects.

A binding associates a requested type with the way to produce it. It is a
tagged variant: a concrete type to construct, a factory closure over resolved
dependencies, or an already-built instance.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Tuple, Union

from solid_ioc.domain.exceptions import type_name
from solid_ioc.enums import Lifetime


@dataclass(frozen=True)
class TypeBinding:
    """Construct `concrete`, satisfying its constructor from the registry."""

    requested: Any
    concrete: type
    lifetime: Lifetime = Lifetime.TRANSIENT

    def describe(self) -> str:
        return f"{type_name(self.concrete)} ({self.lifetime.value})"


@dataclass(frozen=True)
class FactoryBinding:
    """
    Call `factory` on resolution.

    The declared `dependencies` are resolved first, in order, and passed
    positionally. A factory with no dependencies is called with no arguments.
    """

    requested: Any
    factory: Callable[..., Any]
    dependencies: Tuple[Any, ...] = ()
    lifetime: Lifetime = Lifetime.TRANSIENT

    def describe(self) -> str:
        name = getattr(self.factory, "__qualname__", repr(self.factory))
        return f"factory {name} ({self.lifetime.value})"


@dataclass(frozen=True)
class InstanceBinding:
    """Return the same pre-built `instance` on every resolution."""

    requested: Any
    instance: Any = field(compare=False)

    @property
    def lifetime(self) -> Lifetime:
        return Lifetime.SINGLETON

    def describe(self) -> str:
        return f"instance of {type_name(type(self.instance))}"


Binding = Union[TypeBinding, FactoryBinding, InstanceBinding]
