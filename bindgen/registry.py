"""
Generator registry for the available binding generators.

Concrete generators register under a name (plus aliases) so drivers can
pick one by name from configuration.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Type, Union

from .core.config import GeneratorConfig, load_config
from .core.generator import Generator

GeneratorConfigLike = Union[GeneratorConfig, Dict[str, Any], str, Path, None]


class RegistryError(Exception):
    """Exception raised for registry-related errors."""

    pass


class GeneratorRegistry:
    """Registry for managing available binding generators."""

    def __init__(self):
        """Initialize empty registry."""
        self._generators: Dict[str, Type[Generator]] = {}
        self._aliases: Dict[str, str] = {}

    def register(
        self,
        name: str,
        generator_class: Type[Generator],
        aliases: Optional[List[str]] = None,
        replace: bool = False,
    ):
        """
        Register a generator.

        Args:
            name: Primary generator name
            generator_class: Class implementing Generator
            aliases: Alternative names
            replace: If True, replace existing registration. If False, skip if exists.

        Raises:
            RegistryError: If the class is not a Generator or an alias conflicts
        """
        if not (
            isinstance(generator_class, type) and issubclass(generator_class, Generator)
        ):
            raise RegistryError("Generator class must inherit from Generator")

        key = name.lower()
        if key in self._generators and not replace:
            return

        alias_keys = [a.lower() for a in aliases or [] if a.lower() != key]
        if not replace:
            for alias_key in alias_keys:
                if alias_key in self._generators:
                    raise RegistryError(
                        f"Alias '{alias_key}' conflicts with an existing generator"
                    )
                target = self._aliases.get(alias_key, key)
                if target != key:
                    raise RegistryError(
                        f"Alias '{alias_key}' already points to '{target}'"
                    )

        self._generators[key] = generator_class
        for alias_key in alias_keys:
            self._aliases[alias_key] = key

    def unregister(self, name: str):
        """Unregister a generator and its aliases."""
        key = name.lower()
        self._generators.pop(key, None)
        for alias in [a for a, target in self._aliases.items() if target == key]:
            del self._aliases[alias]

    def get_generator_class(self, name: str) -> Type[Generator]:
        """
        Get generator class by name or alias.

        Raises:
            RegistryError: If the name is unknown
        """
        key = name.lower()
        key = self._aliases.get(key, key)
        if key in self._generators:
            return self._generators[key]

        raise RegistryError(
            f"No generator registered as: {name}. "
            f"Available: {', '.join(self.list_generators())}"
        )

    def create_generator(self, name: str, config: GeneratorConfigLike = None) -> Generator:
        """
        Create a generator instance.

        Args:
            name: Generator name
            config: GeneratorConfig, override dict or JSON file path

        Returns:
            Configured generator instance
        """
        generator_class = self.get_generator_class(name)

        if isinstance(config, (str, Path)):
            config = load_config(config_file=config)
        elif config is not None and not isinstance(config, (GeneratorConfig, dict)):
            raise RegistryError(f"Invalid config type: {type(config)}")

        return generator_class(config)

    def list_generators(self) -> List[str]:
        """Registered primary names."""
        return sorted(self._generators)

    def get_aliases(self, name: str) -> List[str]:
        key = name.lower()
        return sorted(a for a, target in self._aliases.items() if target == key)

    def is_supported(self, name: str) -> bool:
        key = name.lower()
        return key in self._generators or key in self._aliases


# Global registry instance - created once
_global_registry: Optional[GeneratorRegistry] = None


def get_registry() -> GeneratorRegistry:
    """Get the global generator registry, initializing if needed."""
    global _global_registry
    if _global_registry is None:
        _global_registry = GeneratorRegistry()
        _auto_register_generators(_global_registry)
    return _global_registry


def _auto_register_generators(registry: GeneratorRegistry):
    """Register the generators shipped with bindgen."""
    from .languages.stub import StubGenerator

    registry.register("stub", StubGenerator, aliases=["cpp-stub"])


def register_generator(
    name: str, generator_class: Type[Generator], aliases: Optional[List[str]] = None
):
    """Register a generator in the global registry."""
    get_registry().register(name, generator_class, aliases)


def get_generator(name: str, config: GeneratorConfigLike = None) -> Generator:
    """Get a generator instance from the global registry."""
    return get_registry().create_generator(name, config)


def list_generators() -> List[str]:
    """List all generators in the global registry."""
    return get_registry().list_generators()
