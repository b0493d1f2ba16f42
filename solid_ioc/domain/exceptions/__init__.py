"""
Exception hierarchy for the dependency-injection container.

Every error raised by the container derives from ContainerError, which carries
an error code and a context dictionary describing the failing type. All of them
signal composition-time mistakes and are never retried internally.
"""

from typing import Any, Dict, Iterable, Optional

from solid_ioc.core.constants import (
    CHAIN_SEPARATOR,
    ERROR_AMBIGUOUS_CONSTRUCTOR,
    ERROR_CONSTRUCTION_FAILED,
    ERROR_CYCLIC_DEPENDENCY,
    ERROR_DUPLICATE_REGISTRATION,
    ERROR_INVALID_REGISTRATION,
    ERROR_TYPE_NOT_REGISTERED,
)


def type_name(key: Any) -> str:
    """Render a registry key: qualified name for classes, repr otherwise."""
    if isinstance(key, type):
        module = getattr(key, "__module__", None)
        qualname = getattr(key, "__qualname__", key.__name__)
        if module and module != "builtins":
            return f"{module}.{qualname}"
        return qualname
    if isinstance(key, str):
        return key
    return repr(key)


class ContainerError(Exception):
    """
    Base exception for all container errors.

    Provides a standardized interface with error codes and context.
    """

    def __init__(
        self,
        message: str,
        error_code: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.original_exception = original_exception

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "original_exception": (
                str(self.original_exception) if self.original_exception else None
            ),
        }


# Resolution errors
class UnregisteredTypeError(ContainerError, KeyError):
    """Raised when a requested (or transitively required) type has no binding."""

    def __init__(self, requested: Any, required_by: Optional[Any] = None, **kwargs):
        message = f"Service not registered: {type_name(requested)}"
        if required_by is not None:
            message += f" (required by {type_name(required_by)})"
        super().__init__(
            message=message,
            error_code=ERROR_TYPE_NOT_REGISTERED,
            context={
                "requested": type_name(requested),
                "required_by": (
                    type_name(required_by) if required_by is not None else None
                ),
            },
            **kwargs,
        )
        self.requested = requested
        self.required_by = required_by


class AmbiguousConstructorError(ContainerError):
    """Raised when the constructor to use for a concrete type cannot be determined."""

    def __init__(self, concrete: Any, reason: str, **kwargs):
        super().__init__(
            message=f"Cannot determine constructor for {type_name(concrete)}: {reason}",
            error_code=ERROR_AMBIGUOUS_CONSTRUCTOR,
            context={"concrete": type_name(concrete), "reason": reason},
            **kwargs,
        )
        self.concrete = concrete
        self.reason = reason


class CyclicDependencyError(ContainerError):
    """Raised when resolving a type requires resolving that same type again."""

    def __init__(self, chain: Iterable[Any], **kwargs):
        chain = tuple(chain)
        rendered = CHAIN_SEPARATOR.join(type_name(key) for key in chain)
        super().__init__(
            message=f"Cyclic dependency detected: {rendered}",
            error_code=ERROR_CYCLIC_DEPENDENCY,
            context={"chain": [type_name(key) for key in chain]},
            **kwargs,
        )
        self.chain = chain

    @property
    def requested(self) -> Any:
        """The type that closed the cycle."""
        return self.chain[-1] if self.chain else None


class ConstructionError(ContainerError):
    """Raised when a constructor or factory fails while building an instance."""

    def __init__(self, requested: Any, target: Any, original: Exception, **kwargs):
        super().__init__(
            message=(
                f"Failed to construct {type_name(target)} for "
                f"{type_name(requested)}: {original}"
            ),
            error_code=ERROR_CONSTRUCTION_FAILED,
            context={"requested": type_name(requested), "target": type_name(target)},
            original_exception=original,
            **kwargs,
        )
        self.requested = requested
        self.target = target


# Registration errors
class RegistrationError(ContainerError):
    """Raised when a registration request is malformed."""

    def __init__(self, requested: Any, reason: str, **kwargs):
        super().__init__(
            message=f"Invalid registration for {type_name(requested)}: {reason}",
            error_code=ERROR_INVALID_REGISTRATION,
            context={"requested": type_name(requested), "reason": reason},
            **kwargs,
        )
        self.requested = requested


class DuplicateRegistrationError(ContainerError):
    """Raised on re-registration when overrides are disabled."""

    def __init__(self, requested: Any, **kwargs):
        super().__init__(
            message=(
                f"{type_name(requested)} is already registered and overrides "
                "are disabled"
            ),
            error_code=ERROR_DUPLICATE_REGISTRATION,
            context={"requested": type_name(requested)},
            **kwargs,
        )
        self.requested = requested


def is_composition_error(exception: Exception) -> bool:
    """
    Check if an exception points at a mistake in the container's registrations.

    Args:
        exception: Exception to check

    Returns:
        bool: True for missing registrations, ambiguous constructors and cycles
    """
    return isinstance(
        exception,
        (UnregisteredTypeError, AmbiguousConstructorError, CyclicDependencyError),
    )


__all__ = [
    # Base exception
    "ContainerError",
    # Resolution errors
    "UnregisteredTypeError",
    "AmbiguousConstructorError",
    "CyclicDependencyError",
    "ConstructionError",
    # Registration errors
    "RegistrationError",
    "DuplicateRegistrationError",
    # Utility functions
    "type_name",
    "is_composition_error",
]
