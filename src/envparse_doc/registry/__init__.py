"""Registry package for aggregating declarations per scan unit."""

from .registry import Registry

__all__ = ["Registry"]
