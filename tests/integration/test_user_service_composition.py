"""
Composition-root scenario: Logger <- Repository <- Service.
"""

from abc import ABC, abstractmethod

import pytest

from solid_ioc import DIContainer, Lifetime, UnregisteredTypeError
from solid_ioc.settings import ContainerSettings


class ILogger(ABC):
    @abstractmethod
    def log(self, message: str) -> None:
        pass


class IUserRepository(ABC):
    @abstractmethod
    def save(self, name: str) -> None:
        pass


class IUserService(ABC):
    @abstractmethod
    def register_user(self, name: str) -> None:
        pass


class ConsoleLogger(ILogger):
    def __init__(self):
        self.messages = []

    def log(self, message: str) -> None:
        self.messages.append(message)


class SqlUserRepository(IUserRepository):
    def __init__(self, logger: ILogger):
        self.logger = logger
        self.users = []

    def save(self, name: str) -> None:
        self.users.append(name)
        self.logger.log(f"saved {name}")


class UserService(IUserService):
    def __init__(self, repository: IUserRepository, logger: ILogger):
        self.repository = repository
        self.logger = logger

    def register_user(self, name: str) -> None:
        self.repository.save(name)
        self.logger.log(f"registered {name}")


def compose(logger_lifetime: Lifetime) -> DIContainer:
    container = DIContainer(ContainerSettings())
    container.register(ILogger, ConsoleLogger, logger_lifetime)
    container.register(IUserRepository, SqlUserRepository)
    container.register(IUserService, UserService)
    return container


class TestUserServiceComposition:
    def test_service_graph_is_fully_constructed(self):
        service = compose(Lifetime.TRANSIENT).resolve(IUserService)

        assert isinstance(service, UserService)
        assert isinstance(service.repository, SqlUserRepository)
        assert isinstance(service.logger, ConsoleLogger)
        assert isinstance(service.repository.logger, ConsoleLogger)

    def test_transient_logger_gives_independent_instances(self):
        service = compose(Lifetime.TRANSIENT).resolve(IUserService)

        assert service.logger is not service.repository.logger

        service.register_user("ada")
        assert service.repository.logger.messages == ["saved ada"]
        assert service.logger.messages == ["registered ada"]

    def test_singleton_logger_is_shared(self):
        service = compose(Lifetime.SINGLETON).resolve(IUserService)

        assert service.logger is service.repository.logger

        service.register_user("ada")
        assert service.logger.messages == ["saved ada", "registered ada"]

    def test_each_resolution_builds_a_new_service(self):
        container = compose(Lifetime.SINGLETON)

        first = container.resolve(IUserService)
        second = container.resolve(IUserService)
        assert first is not second
        assert first.logger is second.logger

    def test_swapping_implementation_at_composition_root(self):
        class MemoryUserRepository(IUserRepository):
            def __init__(self):
                self.users = []

            def save(self, name: str) -> None:
                self.users.append(name)

        container = compose(Lifetime.TRANSIENT)
        container.register(IUserRepository, MemoryUserRepository)

        service = container.resolve(IUserService)
        assert isinstance(service.repository, MemoryUserRepository)

    def test_missing_logger_is_reported(self):
        container = DIContainer(ContainerSettings())
        container.register(IUserRepository, SqlUserRepository)
        container.register(IUserService, UserService)

        with pytest.raises(UnregisteredTypeError) as exc_info:
            container.resolve(IUserService)
        assert exc_info.value.requested is ILogger
