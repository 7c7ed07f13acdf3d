"""buildconf - Deterministic configuration for multi-module builds.

This package reads a static build descriptor and produces an immutable
build plan: ordered repositories, pinned plugins, uniform compiler options,
relocated output directories, a subproject evaluation order and the
tasks (including ``clean``) exposed to the build.
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
