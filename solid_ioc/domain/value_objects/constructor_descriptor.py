"""
ConstructorDescriptor - Single Responsibility: describe how to build a concrete type

A descriptor is read-only metadata derived from a concrete class: which
constructor to call and the ordered types of the parameters it needs. It is
computed on demand during resolution and never stored in the registry.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Sequence, Tuple

from solid_ioc.core.constants import INIT_CONSTRUCTOR_NAME, NEW_CONSTRUCTOR_NAME


@dataclass(frozen=True)
class ParameterDescriptor:
    """A single constructor parameter and the type that satisfies it."""

    name: str
    annotation: Any
    has_default: bool = False
    default: Any = None
    keyword_only: bool = False


@dataclass(frozen=True)
class ConstructorDescriptor:
    """
    A constructor candidate of a concrete type.

    `name` is "__init__" for the regular initializer, "__new__" for classes
    built only through their allocator, or the name of a classmethod acting as
    an alternative constructor. Both of the first two are invoked by calling
    the class. `declaration_index` is the
    position of the candidate in declaration order and breaks arity ties.
    """

    owner: type
    name: str = INIT_CONSTRUCTOR_NAME
    parameters: Tuple[ParameterDescriptor, ...] = ()
    declaration_index: int = 0

    @property
    def arity(self) -> int:
        return len(self.parameters)

    @property
    def parameter_types(self) -> Tuple[Any, ...]:
        return tuple(parameter.annotation for parameter in self.parameters)

    @property
    def is_initializer(self) -> bool:
        return self.name in (INIT_CONSTRUCTOR_NAME, NEW_CONSTRUCTOR_NAME)

    def build(self, arguments: Sequence[Any]) -> Any:
        """Invoke the constructor with one argument per parameter, in order."""
        if len(arguments) != self.arity:
            raise ValueError(
                f"{self} expects {self.arity} arguments, got {len(arguments)}"
            )

        positional: List[Any] = []
        keywords: Dict[str, Any] = {}
        for parameter, value in zip(self.parameters, arguments):
            if parameter.keyword_only:
                keywords[parameter.name] = value
            else:
                positional.append(value)

        if self.is_initializer:
            return self.owner(*positional, **keywords)
        return getattr(self.owner, self.name)(*positional, **keywords)

    def __str__(self) -> str:
        params = ", ".join(
            f"{p.name}: {getattr(p.annotation, '__name__', p.annotation)}"
            for p in self.parameters
        )
        return f"{self.owner.__name__}.{self.name}({params})"
