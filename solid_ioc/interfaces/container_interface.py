"""
Interface for a dependency-injection container.

Call sites only need two capabilities from a container: registering a binding
for a requested type and resolving an instance of that type. Depending on this
interface lets a composition root hand the container itself to consumers.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Type, TypeVar, Union

from solid_ioc.enums import Lifetime

T = TypeVar("T")


class IContainer(ABC):
    """Abstract interface for a dependency-injection container."""

    @abstractmethod
    def register(
        self,
        requested: Union[str, Type[T]],
        concrete: Any = None,
        lifetime: Optional[Lifetime] = None,
    ) -> None:
        """
        Registers a binding for a requested type, replacing any existing one.

        Args:
            requested: The abstract type (or string key) callers will ask for.
            concrete: A concrete class to construct, or a pre-built instance.
                When omitted, `requested` is bound to itself.
            lifetime: Transient or singleton.
        """
        pass

    @abstractmethod
    def resolve(self, requested: Union[str, Type[T]]) -> T:
        """
        Resolves a fully constructed instance of the requested type.

        Raises:
            UnregisteredTypeError: if the type, or any type it depends on, has
                no binding.
        """
        pass

    @abstractmethod
    def is_registered(self, requested: Union[str, Type[T]]) -> bool:
        """Checks whether a binding exists for the requested type."""
        pass
