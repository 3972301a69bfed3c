"""
Plugin registry.

Provides:
- PLUGIN_REGISTRY: Global registry of plugin classes by key
- register_plugin: Decorator to register plugin classes
- create_plugin: Instantiate a registered plugin with validated props
- get_plugin_info / list_plugins: Discovery helpers

Plugins are registered at import time via the @register_plugin decorator.

Example:
    @register_plugin("my_indicator")
    class MyIndicator(IndicatorPlugin):
        metadata = PluginMetadata(name="MyIndicator", description="...")

        def map(self, bar, index, history):
            return bar.close

    plugin = create_plugin("my_indicator", {"period": 20})
"""

from __future__ import annotations

import logging
from typing import Any

from .base import IndicatorPlugin, PluginMetadata

logger = logging.getLogger(__name__)

# Global registry: maps plugin key to plugin class
PLUGIN_REGISTRY: dict[str, type[IndicatorPlugin]] = {}


def register_plugin(key: str):
    """
    Decorator to register an indicator plugin class.

    Raises:
        TypeError: If class doesn't inherit from IndicatorPlugin or lacks metadata.
        ValueError: If key is already registered.
    """

    def decorator(cls: type[IndicatorPlugin]) -> type[IndicatorPlugin]:
        if not (isinstance(cls, type) and issubclass(cls, IndicatorPlugin)):
            raise TypeError(
                f"Cannot register '{key}': class '{getattr(cls, '__name__', cls)}' must inherit from IndicatorPlugin\n"
                f"\n"
                f"Fix:\n"
                f"  @register_plugin('{key}')\n"
                f"  class MyIndicator(IndicatorPlugin):\n"
                f"      ..."
            )

        if not isinstance(getattr(cls, "metadata", None), PluginMetadata):
            raise TypeError(
                f"Cannot register '{key}': class '{cls.__name__}' has no PluginMetadata\n"
                f"\n"
                f"Fix: metadata = PluginMetadata(name='{cls.__name__}', description='...')"
            )

        if key in PLUGIN_REGISTRY:
            existing_cls = PLUGIN_REGISTRY[key]
            raise ValueError(
                f"Cannot register '{key}': already registered to '{existing_cls.__name__}'\n"
                f"\n"
                f"Fix: Use a different key or unregister the existing class first."
            )

        PLUGIN_REGISTRY[key] = cls
        return cls

    return decorator


def get_plugin_class(key: str) -> type[IndicatorPlugin]:
    """
    Look up a registered plugin class.

    Raises:
        KeyError: If key is not registered, with available keys listed.
    """
    if key not in PLUGIN_REGISTRY:
        available = ", ".join(sorted(PLUGIN_REGISTRY)) or "(none registered)"
        raise KeyError(
            f"Indicator '{key}' not registered\n"
            f"\n"
            f"Available indicators: {available}"
        )
    return PLUGIN_REGISTRY[key]


def create_plugin(key: str, params: dict[str, Any] | None = None) -> IndicatorPlugin:
    """
    Instantiate a registered plugin and run its init().

    Raises:
        KeyError: Unknown plugin key.
        ValueError: Unknown or invalid params.
    """
    cls = get_plugin_class(key)
    plugin = cls(params)
    plugin.init()
    logger.debug("Created plugin %s with props %s", key, plugin.props)
    return plugin


def get_plugin_info(key: str) -> dict[str, Any]:
    """
    Get metadata about a registered plugin.

    Returns:
        Dict with keys: name, description, params, plots, tags, class_name
    """
    cls = get_plugin_class(key)
    meta = cls.metadata
    return {
        "name": meta.name,
        "description": meta.description,
        "params": meta.defaults(),
        "plots": dict(meta.plots),
        "tags": list(meta.tags),
        "class_name": cls.__name__,
    }


def list_plugins() -> list[str]:
    """Sorted list of registered plugin keys."""
    return sorted(PLUGIN_REGISTRY.keys())


def unregister_plugin(key: str) -> bool:
    """
    Remove a plugin from the registry.

    Primarily useful for testing to clean up after test registrations.
    """
    if key in PLUGIN_REGISTRY:
        del PLUGIN_REGISTRY[key]
        return True
    return False
