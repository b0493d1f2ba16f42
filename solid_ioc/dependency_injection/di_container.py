"""
Dependency Injection Container
Single Responsibility: manage registration and resolution of dependencies

The registry maps each requested type to exactly one binding. Resolution looks
up the binding and, for classes, builds the constructor's dependencies first
(depth-first, in declared order) before constructing the class itself.
"""

import logging
import threading
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from solid_ioc.domain.exceptions import (
    ConstructionError,
    ContainerError,
    CyclicDependencyError,
    DuplicateRegistrationError,
    RegistrationError,
    UnregisteredTypeError,
    type_name,
)
from solid_ioc.domain.value_objects import (
    Binding,
    ConstructorDescriptor,
    FactoryBinding,
    InstanceBinding,
    TypeBinding,
)
from solid_ioc.enums import Lifetime
from solid_ioc.interfaces.container_interface import IContainer
from solid_ioc.logger import Logger
from solid_ioc.settings import ContainerSettings, get_settings

from .constructor_inspector import select_constructor

T = TypeVar("T")

Key = Union[str, Type[Any]]


class DIContainer(IContainer):
    """
    Dependency-injection container for managing dependencies.

    Registering a type that is already bound replaces the earlier binding
    (last registration wins) and logs a warning. Set `allow_overrides=False`
    in the settings to make re-registration an error instead.

    Registry reads and writes are guarded by a single lock that is held only
    for the lookup, so unrelated resolutions construct in parallel. Singleton
    materialization is serialized so each singleton is built exactly once.
    """

    def __init__(self, settings: Optional[ContainerSettings] = None):
        self.settings = settings if settings is not None else get_settings()
        # Unregistered child of the module logger: the level stays per container
        # and the logger is collected along with the container
        self.logger = logging.Logger(f"{__name__}.{id(self):x}")
        self.logger.parent = Logger(__name__)
        if self.settings.debug_logs_enabled:
            self.logger.setLevel(logging.DEBUG)
        else:
            self.logger.setLevel(self.settings.log_level)

        self._registry: Dict[Key, Binding] = {}
        self._lock = threading.Lock()
        self._singleton_lock = threading.RLock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register(
        self,
        requested: Union[str, Type[T]],
        concrete: Any = None,
        lifetime: Optional[Lifetime] = None,
    ) -> None:
        """
        Registers a binding for a requested type.

        Args:
            requested: Interface or identification key
            concrete: Concrete class to construct, a pre-built instance, or None
                to bind a class to itself
            lifetime: Lifetime.TRANSIENT or Lifetime.SINGLETON; defaults to the
                settings' default_lifetime (instances are always singletons)

        Raises:
            RegistrationError: if the key is empty or the combination is invalid
            DuplicateRegistrationError: if the key is bound and overrides are off
        """
        self._validate_key(requested)
        self._validate_lifetime(requested, lifetime)

        if concrete is None:
            if not isinstance(requested, type):
                raise RegistrationError(
                    requested, "a self-binding requires a class, not a string key"
                )
            binding = TypeBinding(
                requested, requested, lifetime or self.settings.default_lifetime
            )
        elif isinstance(concrete, type):
            binding = TypeBinding(
                requested, concrete, lifetime or self.settings.default_lifetime
            )
        else:
            if lifetime is Lifetime.TRANSIENT:
                raise RegistrationError(
                    requested, "a pre-built instance cannot have a transient lifetime"
                )
            binding = InstanceBinding(requested, concrete)

        self._store(binding)

    def register_singleton(
        self, requested: Union[str, Type[T]], concrete: Any = None
    ) -> None:
        """Registers a binding that is constructed once and shared."""
        self.register(requested, concrete, Lifetime.SINGLETON)

    def register_instance(self, requested: Union[str, Type[T]], instance: Any) -> None:
        """
        Registers a pre-built instance, returned unchanged on every resolution.

        Unlike register(), a class object passed here is stored as the instance.
        """
        self._validate_key(requested)
        self._store(InstanceBinding(requested, instance))

    def register_factory(
        self,
        requested: Union[str, Type[T]],
        factory: Callable[..., T],
        lifetime: Optional[Lifetime] = None,
        dependencies: Iterable[Key] = (),
    ) -> None:
        """
        Registers a factory function for a requested type.

        Args:
            requested: Interface or identification key
            factory: Callable producing the instance
            lifetime: Lifetime.TRANSIENT or Lifetime.SINGLETON (factory called once)
            dependencies: Keys resolved before the call and passed positionally
        """
        self._validate_key(requested)
        self._validate_lifetime(requested, lifetime)
        if not callable(factory):
            raise RegistrationError(requested, "factory must be callable")

        dependencies = tuple(dependencies)
        for dependency in dependencies:
            self._validate_key(dependency)

        self._store(
            FactoryBinding(
                requested,
                factory,
                dependencies,
                lifetime or self.settings.default_lifetime,
            )
        )

    def unregister(self, requested: Union[str, Type[T]]) -> None:
        """
        Removes the binding for a requested type.

        Raises:
            UnregisteredTypeError: if nothing is registered under the key
        """
        try:
            with self._lock:
                if self._registry.pop(requested, None) is None:
                    raise UnregisteredTypeError(requested)
        except TypeError:
            raise UnregisteredTypeError(requested) from None
        self.logger.debug("Unregistered %s", type_name(requested))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def is_registered(self, requested: Union[str, Type[T]]) -> bool:
        """
        Checks whether a binding exists for the requested type

        Args:
            requested: Interface to check

        Returns:
            True if registered, False otherwise
        """
        return self._peek(requested) is not None

    def get_binding(self, requested: Union[str, Type[T]]) -> Binding:
        """Returns the current binding for a requested type."""
        return self._lookup(requested)

    def registered_types(self) -> List[Key]:
        """Returns a snapshot of the registered keys."""
        with self._lock:
            return list(self._registry)

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve(self, requested: Union[str, Type[T]]) -> T:
        """
        Resolves a dependency

        Args:
            requested: Interface or key to resolve

        Returns:
            A fully constructed instance

        Raises:
            UnregisteredTypeError: if the type or any transitive dependency is
                not registered
            AmbiguousConstructorError: if a constructor's parameter types cannot
                be determined
            CyclicDependencyError: if a type transitively depends on itself
            ConstructionError: if a constructor or factory raises
        """
        try:
            return self._resolve(requested, ())
        except ContainerError as e:
            self.logger.error("Failed to resolve %s: %s", type_name(requested), e)
            raise

    def resolve_with_dependencies(self, target_class: Type[T]) -> T:
        """
        Instantiates a class that is not registered, injecting its dependencies

        Args:
            target_class: Class to instantiate

        Returns:
            Instance with its constructor dependencies resolved from the registry
        """
        if not isinstance(target_class, type):
            raise RegistrationError(target_class, "only classes can be auto-wired")
        try:
            return self._build(
                TypeBinding(target_class, target_class), (target_class,)
            )
        except ContainerError as e:
            self.logger.error("Failed to build %s: %s", type_name(target_class), e)
            raise

    def _resolve(
        self, requested: Key, chain: Tuple[Key, ...], required_by: Any = None
    ) -> Any:
        if requested in chain:
            raise CyclicDependencyError(chain + (requested,))

        binding = self._lookup(requested, required_by)
        if isinstance(binding, InstanceBinding):
            return binding.instance

        chain = chain + (requested,)
        if binding.lifetime is Lifetime.SINGLETON:
            return self._materialize_singleton(binding, chain)
        return self._build(binding, chain)

    def _materialize_singleton(self, binding: Binding, chain: Tuple[Key, ...]) -> Any:
        with self._singleton_lock:
            # Another caller may have built it, or re-registered the key, meanwhile
            current = self._peek(binding.requested)
            if isinstance(current, InstanceBinding):
                return current.instance
            if current is not None:
                binding = current

            instance = self._build(binding, chain)

            if binding.lifetime is Lifetime.SINGLETON:
                with self._lock:
                    if self._registry.get(binding.requested) is binding:
                        self._registry[binding.requested] = InstanceBinding(
                            binding.requested, instance
                        )
            return instance

    def _build(self, binding: Binding, chain: Tuple[Key, ...]) -> Any:
        if isinstance(binding, FactoryBinding):
            target = binding.factory
            arguments = [
                self._resolve(dependency, chain, required_by=binding.requested)
                for dependency in binding.dependencies
            ]

            def construct():
                return binding.factory(*arguments)

        else:
            target = binding.concrete
            descriptor = select_constructor(binding.concrete)
            arguments = self._resolve_arguments(descriptor, chain)

            def construct():
                return descriptor.build(arguments)

        self.logger.debug(
            "Constructing %s for %s", binding.describe(), type_name(binding.requested)
        )
        try:
            return construct()
        except ContainerError:
            raise
        except Exception as e:
            raise ConstructionError(binding.requested, target, e) from e

    def _resolve_arguments(
        self, descriptor: ConstructorDescriptor, chain: Tuple[Key, ...]
    ) -> List[Any]:
        arguments = []
        for parameter in descriptor.parameters:
            if parameter.annotation is None or (
                parameter.has_default and not self.is_registered(parameter.annotation)
            ):
                arguments.append(parameter.default)
                continue
            arguments.append(
                self._resolve(parameter.annotation, chain, required_by=descriptor.owner)
            )
        return arguments

    # ------------------------------------------------------------------
    # Registry access
    # ------------------------------------------------------------------

    def _store(self, binding: Binding) -> None:
        with self._lock:
            previous = self._registry.get(binding.requested)
            if previous is not None and not self.settings.allow_overrides:
                raise DuplicateRegistrationError(binding.requested)
            self._registry[binding.requested] = binding

        if previous is not None:
            self.logger.warning(
                "Replacing binding for %s: %s -> %s",
                type_name(binding.requested),
                previous.describe(),
                binding.describe(),
            )
        else:
            self.logger.debug(
                "Registered %s -> %s", type_name(binding.requested), binding.describe()
            )

    def _peek(self, requested: Any) -> Optional[Binding]:
        try:
            with self._lock:
                return self._registry.get(requested)
        except TypeError:
            # Unhashable keys can never be registered
            return None

    def _lookup(self, requested: Any, required_by: Any = None) -> Binding:
        binding = self._peek(requested)
        if binding is None:
            raise UnregisteredTypeError(requested, required_by)
        return binding

    @staticmethod
    def _validate_key(requested: Any) -> None:
        if requested is None:
            raise RegistrationError(requested, "requested type must not be None")
        if isinstance(requested, str) and not requested.strip():
            raise RegistrationError(requested, "requested key must not be empty")
        try:
            hash(requested)
        except TypeError as e:
            raise RegistrationError(requested, "requested key must be hashable") from e

    @staticmethod
    def _validate_lifetime(requested: Any, lifetime: Optional[Lifetime]) -> None:
        if lifetime is not None and not isinstance(lifetime, Lifetime):
            raise RegistrationError(requested, f"unknown lifetime {lifetime!r}")
