"""Admin workstation: tenant-scoped user management state and services."""

__version__ = "0.1.0"

__all__ = ["__version__"]
