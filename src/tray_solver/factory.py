"""
Factory Module - Name-keyed registries for pluggable search parts.

Move generators and fringes both register their classes here under their
`name` attribute, so a SearchConfig value maps straight to an instance.
"""

from typing import Dict, Generic, Type, TypeVar

from .errors import ConfigurationError

T = TypeVar("T")


class Registry(Generic[T]):
    """
    Registry of classes exposing a `name` class attribute.

    Usage:
        GENERATORS = Registry("generator")

        @GENERATORS.register
        class MyGenerator(MoveGenerator):
            name = "mine"
            ...

        generator = GENERATORS.create("mine")
    """

    def __init__(self, kind: str):
        self.kind = kind
        self._classes: Dict[str, Type[T]] = {}

    def register(self, cls: Type[T]) -> Type[T]:
        """Decorator adding cls under cls.name."""
        self._classes[cls.name] = cls
        return cls

    def __contains__(self, name: str) -> bool:
        return name in self._classes

    def create(self, name: str) -> T:
        """
        Instantiate the class registered under name.

        Raises:
            ConfigurationError: If nothing is registered under name
        """
        if name not in self._classes:
            available = ", ".join(self._classes)
            raise ConfigurationError(f"Unknown {self.kind}: {name}. Available: {available}")
        return self._classes[name]()


# Move generators; populated by importing tray_solver.strategies
GENERATORS: Registry = Registry("generator")
