"""
Indicator registration and discovery.

Provides a centralized registry mapping indicator names and aliases to
indicator instances. Lookups are case-insensitive.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from .exceptions import IndicatorNotFoundError, InvalidConfigError

if TYPE_CHECKING:
    from indicator_engine.indicators.base import BaseIndicator

logger = logging.getLogger(__name__)

T = TypeVar("T", bound="BaseIndicator")


def _key(name: str) -> str:
    return name.strip().upper()


class IndicatorRegistry:
    """Central registry for indicator instances.

    Indicators are stateless, so one shared instance per name is enough.
    Thread-safe implementation supporting concurrent access.
    """

    def __init__(self) -> None:
        self._indicators: dict[str, BaseIndicator] = {}
        self._metadata: dict[str, dict[str, Any]] = {}
        self._aliases: dict[str, str] = {}
        self._lock = threading.RLock()

    def register(
        self,
        indicator: BaseIndicator,
        aliases: list[str] | tuple[str, ...] | None = None,
        metadata: dict[str, Any] | None = None,
    ) -> BaseIndicator:
        """Register an indicator instance under its name.

        Args:
            indicator: Indicator to register.
            aliases: Optional alias names, merged with the indicator's own.
            metadata: Optional metadata merged over the indicator description.

        Returns:
            The registered indicator.

        Raises:
            InvalidConfigError: If an indicator with the same name exists.
        """
        key = _key(indicator.name)
        with self._lock:
            if key in self._indicators:
                raise InvalidConfigError(
                    f"Indicator '{indicator.name}' already registered",
                    config_key="name",
                    value=indicator.name,
                    expected="unique indicator name",
                )
            self._indicators[key] = indicator
            self._metadata[key] = {**indicator.describe(), **(metadata or {})}

            for alias in (*indicator.aliases, *(aliases or ())):
                alias_key = _key(alias)
                if alias_key in self._aliases and self._aliases[alias_key] != key:
                    logger.warning(f"Alias '{alias}' already exists, overwriting")
                self._aliases[alias_key] = key

            logger.debug(f"Registered indicator: {indicator.name}")
        return indicator

    def unregister(self, name: str) -> bool:
        """Remove an indicator and its aliases.

        Returns:
            True if the indicator was found and removed, False otherwise.
        """
        with self._lock:
            key = self._resolve(name)
            if key not in self._indicators:
                return False
            del self._indicators[key]
            del self._metadata[key]
            self._aliases = {k: v for k, v in self._aliases.items() if v != key}
            logger.debug(f"Unregistered indicator: {name}")
            return True

    def _resolve(self, name: str) -> str:
        key = _key(name)
        if key in self._indicators:
            return key
        return self._aliases.get(key, key)

    def get(self, name: str) -> BaseIndicator:
        """Get an indicator by name or alias.

        Raises:
            IndicatorNotFoundError: If no indicator matches.
        """
        with self._lock:
            key = self._resolve(name)
            if key not in self._indicators:
                raise IndicatorNotFoundError(
                    f"Indicator '{name}' not found", indicator=name
                )
            return self._indicators[key]

    def has(self, name: str) -> bool:
        with self._lock:
            return self._resolve(name) in self._indicators

    def list_indicators(self, category: str | None = None) -> list[str]:
        """List registered indicator names, optionally filtered by category."""
        with self._lock:
            return sorted(
                indicator.name
                for indicator in self._indicators.values()
                if category is None or indicator.category == category
            )

    def categories(self) -> dict[str, list[str]]:
        """Registered indicator names grouped by category."""
        grouped: dict[str, list[str]] = {}
        with self._lock:
            for indicator in self._indicators.values():
                grouped.setdefault(indicator.category, []).append(indicator.name)
        return {category: sorted(names) for category, names in sorted(grouped.items())}

    def get_metadata(self, name: str) -> dict[str, Any]:
        """Get a copy of an indicator's metadata.

        Raises:
            IndicatorNotFoundError: If no indicator matches.
        """
        with self._lock:
            key = self._resolve(name)
            if key not in self._metadata:
                raise IndicatorNotFoundError(
                    f"Indicator '{name}' not found", indicator=name
                )
            return dict(self._metadata[key])

    def clear(self) -> int:
        """Clear all registrations.

        Returns:
            Number of indicators cleared.
        """
        with self._lock:
            count = len(self._indicators)
            self._indicators.clear()
            self._metadata.clear()
            self._aliases.clear()
            logger.info(f"Cleared {count} indicator registrations")
            return count

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __len__(self) -> int:
        with self._lock:
            return len(self._indicators)


# Global registry instance
registry = IndicatorRegistry()


def register_indicator(
    aliases: list[str] | None = None,
    metadata: dict[str, Any] | None = None,
    target: IndicatorRegistry | None = None,
) -> Callable[[type[T]], type[T]]:
    """Decorator registering an instance of an indicator class.

    The class must be constructible without arguments.

    Example:
        @register_indicator(aliases=["chande"])
        class ChandeMomentum(OscillatorIndicator):
            ...
    """

    def decorator(cls: type[T]) -> type[T]:
        destination = registry if target is None else target
        destination.register(cls(), aliases=aliases, metadata=metadata)
        return cls

    return decorator
