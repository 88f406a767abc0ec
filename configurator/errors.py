"""Exception types shared across the configurator package."""

__all__ = ["ConfiguratorError", "LinkConfigurationError", "CatalogLoadError"]


class ConfiguratorError(Exception):
    """Base class for errors raised by the configurator package."""
    pass


class LinkConfigurationError(ConfiguratorError):
    """Raised when the store or navigation configuration cannot produce links."""
    pass


class CatalogLoadError(ConfiguratorError):
    """Raised when a catalog file cannot be read or decoded."""
    pass
