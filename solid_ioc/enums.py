from enum import Enum


class Lifetime(Enum):
    TRANSIENT = "transient"
    SINGLETON = "singleton"
