"""Repository module.

This module handles:
- Repository references and well-known aliases
- Maven coordinates and plugin pins
- Ordered resolution against registered repositories
"""

from buildconf.repositories.models import (
    WELL_KNOWN_REPOSITORIES,
    Coordinate,
    RepositoryRef,
    ResolvedCoordinate,
)
from buildconf.repositories.resolver import (
    register_repositories,
    resolve_all,
    resolve_coordinate,
)

__all__ = [
    "WELL_KNOWN_REPOSITORIES",
    "Coordinate",
    "RepositoryRef",
    "ResolvedCoordinate",
    "register_repositories",
    "resolve_all",
    "resolve_coordinate",
]
