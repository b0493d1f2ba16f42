"""
Constructor Inspector
Single Responsibility: find the constructor of a concrete type and describe it

Candidates are the class initializer plus any classmethod marked with
@constructor. A class with no __init__ below object but a Python-level __new__
(a typing.NamedTuple, for instance) is described through __new__ instead.
The candidate with the most parameters wins; ties go to the one declared first
(most-derived class first, then inherited members in MRO order).
Parameter types come from an explicit @constructor(...) table when present,
otherwise from the type annotations.
"""

import inspect
import sys
import typing
from typing import Any, Callable, List, NamedTuple, Optional, Tuple

from solid_ioc.core.constants import (
    CONSTRUCTOR_MARKER,
    INIT_CONSTRUCTOR_NAME,
    NEW_CONSTRUCTOR_NAME,
)
from solid_ioc.domain.exceptions import AmbiguousConstructorError
from solid_ioc.domain.value_objects import ConstructorDescriptor, ParameterDescriptor

if sys.version_info >= (3, 10):
    from types import UnionType

    _UNION_ORIGINS = (typing.Union, UnionType)
else:
    _UNION_ORIGINS = (typing.Union,)

_VARIADIC = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
_POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def constructor(*dependencies: Any):
    """
    Mark a constructor and optionally declare its parameter types.

    Usable on __init__ or on a classmethod, bare or with arguments:

        class SqlRepo:
            @constructor(ILogger)
            def __init__(self, logger): ...

            @classmethod
            @constructor
            def in_memory(cls) -> "SqlRepo": ...

    Types given as arguments are used in place of annotations, in order.
    """
    if len(dependencies) == 1 and _is_decoratable(dependencies[0]):
        return _mark(dependencies[0], None)

    def decorator(func):
        return _mark(func, tuple(dependencies) if dependencies else None)

    return decorator


def _is_decoratable(obj: Any) -> bool:
    return isinstance(obj, classmethod) or inspect.isfunction(obj)


def _mark(func, explicit: Optional[Tuple[Any, ...]]):
    target = func.__func__ if isinstance(func, classmethod) else func
    setattr(target, CONSTRUCTOR_MARKER, explicit)
    return func


class _Candidate(NamedTuple):
    name: str
    func: Callable[..., Any]
    parameters: Tuple[inspect.Parameter, ...]
    explicit: Optional[Tuple[Any, ...]]
    index: int
    # Set when the signature cannot be read; raised only if this one is selected
    error: Optional[str] = None


def discover_constructors(concrete: type) -> List[ConstructorDescriptor]:
    """Describe every constructor candidate of `concrete`, in declaration order."""
    return [_describe(concrete, candidate) for candidate in _candidates(concrete)]


def select_constructor(concrete: type) -> ConstructorDescriptor:
    """
    Pick the constructor used to build `concrete`.

    Descriptors are recomputed on every call, so a redefined __init__ is
    picked up and no class is kept alive by this module.

    Raises:
        AmbiguousConstructorError: if the selected constructor's parameter
            types cannot be determined
    """
    candidates = _candidates(concrete)
    chosen = max(candidates, key=_rank)
    return _describe(concrete, chosen)


def _rank(candidate: _Candidate) -> Tuple[int, int]:
    # Unreadable candidates rank below every readable one
    arity = -1 if candidate.error is not None else len(candidate.parameters)
    return arity, -candidate.index


def _candidates(concrete: type) -> List[_Candidate]:
    found: List[_Candidate] = []
    seen = set()
    has_initializer = False
    allocator = None

    for klass in concrete.__mro__:
        if klass is object:
            continue
        for name, attr in vars(klass).items():
            if name in seen:
                continue
            seen.add(name)

            if name == INIT_CONSTRUCTOR_NAME:
                has_initializer = True
                explicit = getattr(attr, CONSTRUCTOR_MARKER, None)
                found.append(_candidate(name, attr, explicit, len(found)))
            elif name == NEW_CONSTRUCTOR_NAME:
                func = attr.__func__ if isinstance(attr, staticmethod) else attr
                # Builtin allocators (tuple.__new__, ...) carry no usable signature
                if inspect.isfunction(func):
                    allocator = func
            elif isinstance(attr, classmethod) and hasattr(
                attr.__func__, CONSTRUCTOR_MARKER
            ):
                explicit = getattr(attr.__func__, CONSTRUCTOR_MARKER)
                found.append(_candidate(name, attr.__func__, explicit, len(found)))

    if not has_initializer:
        if allocator is not None:
            explicit = getattr(allocator, CONSTRUCTOR_MARKER, None)
            found.append(
                _candidate(NEW_CONSTRUCTOR_NAME, allocator, explicit, len(found))
            )
        else:
            found.append(
                _Candidate(
                    INIT_CONSTRUCTOR_NAME, object.__init__, (), None, len(found)
                )
            )
    return found


def _candidate(name, func, explicit, index) -> _Candidate:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError) as e:
        reason = f"signature of {name} is unavailable ({e})"
        return _Candidate(name, func, (), explicit, index, reason)

    parameters = list(signature.parameters.values())
    # Drop self / cls
    if parameters and parameters[0].kind in _POSITIONAL:
        parameters = parameters[1:]
    parameters = tuple(p for p in parameters if p.kind not in _VARIADIC)
    return _Candidate(name, func, parameters, explicit, index)


def _describe(concrete: type, candidate: _Candidate) -> ConstructorDescriptor:
    if candidate.error is not None:
        raise AmbiguousConstructorError(concrete, candidate.error)
    if candidate.explicit is not None:
        if len(candidate.explicit) != len(candidate.parameters):
            raise AmbiguousConstructorError(
                concrete,
                f"{candidate.name} declares {len(candidate.explicit)} dependency "
                f"types for {len(candidate.parameters)} parameters",
            )
        annotations = dict(
            zip((p.name for p in candidate.parameters), candidate.explicit)
        )
    else:
        annotations = _type_hints(concrete, candidate)

    parameters = tuple(
        _parameter(concrete, candidate.name, parameter, annotations)
        for parameter in candidate.parameters
    )
    return ConstructorDescriptor(
        owner=concrete,
        name=candidate.name,
        parameters=parameters,
        declaration_index=candidate.index,
    )


def _type_hints(concrete: type, candidate: _Candidate) -> dict:
    if not candidate.parameters or not inspect.isfunction(candidate.func):
        return {}
    try:
        return typing.get_type_hints(candidate.func)
    except Exception as e:
        raise AmbiguousConstructorError(
            concrete, f"annotations of {candidate.name} cannot be evaluated ({e})"
        ) from e


def _parameter(
    concrete: type,
    constructor_name: str,
    parameter: inspect.Parameter,
    annotations: dict,
) -> ParameterDescriptor:
    has_default = parameter.default is not inspect.Parameter.empty
    annotation = annotations.get(parameter.name, inspect.Parameter.empty)

    if annotation is inspect.Parameter.empty:
        if not has_default:
            raise AmbiguousConstructorError(
                concrete,
                f"parameter '{parameter.name}' of {constructor_name} has no type",
            )
        annotation = None
    else:
        annotation = _unwrap_optional(concrete, parameter.name, annotation)

    return ParameterDescriptor(
        name=parameter.name,
        annotation=annotation,
        has_default=has_default,
        default=parameter.default if has_default else None,
        keyword_only=parameter.kind is inspect.Parameter.KEYWORD_ONLY,
    )


def _unwrap_optional(concrete: type, name: str, annotation: Any) -> Any:
    if typing.get_origin(annotation) not in _UNION_ORIGINS:
        return annotation
    members = [arg for arg in typing.get_args(annotation) if arg is not type(None)]
    if len(members) != 1:
        raise AmbiguousConstructorError(
            concrete, f"parameter '{name}' is annotated with a union of several types"
        )
    return members[0]
