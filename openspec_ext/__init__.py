"""OpenSpec change-management workflow, exposed as named host commands."""

from openspec_ext.identity import __codename__, __tagline__, __version__

__all__ = ["__codename__", "__tagline__", "__version__"]
