"""
Injector Bridge
Single Responsibility: expose container registrations to an `injector.Injector`
"""

from typing import Any, Iterable, Optional

from injector import Binder, CallableProvider, Module

from solid_ioc.domain.exceptions import RegistrationError
from solid_ioc.logger import Logger

from .di_container import DIContainer


class ContainerModule(Module):
    """
    injector Module that delegates each bound class to DIContainer.resolve.

    The container keeps ownership of lifetimes: every injector lookup goes
    through resolve(), so singletons stay shared and transients stay fresh.
    String keys cannot be bound in injector and are skipped when `keys` is
    omitted.
    """

    def __init__(self, container: DIContainer, keys: Optional[Iterable[Any]] = None):
        self._container = container
        self._keys = tuple(keys) if keys is not None else None
        self.logger = Logger(__name__)

    def configure(self, binder: Binder) -> None:
        if self._keys is None:
            keys = [
                k for k in self._container.registered_types() if isinstance(k, type)
            ]
        else:
            keys = list(self._keys)

        for key in keys:
            if not isinstance(key, type):
                raise RegistrationError(key, "only class keys can be bound")
            binder.bind(key, to=self._provider_for(key))
            self.logger.debug("Bound %s to injector", key.__name__)

    def _provider_for(self, key: type) -> CallableProvider:
        def provide():
            return self._container.resolve(key)

        return CallableProvider(provide)
