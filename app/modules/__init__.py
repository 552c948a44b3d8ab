"""Feature modules and their public exports."""

from . import devices

__all__ = ["devices"]
