"""Repository registration and coordinate resolution.

This module handles:
- Building the ordered repository list (declaration order is precedence)
- Locating a coordinate by probing each repository's Maven layout in order

Resolution never falls through on transport or server errors: only a
"not found" answer moves on to the next repository. Anything else is
raised as-is, without retry.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

import httpx

from buildconf.errors import ConfigurationError, OfflineModeError, ResolutionError
from buildconf.repositories.models import Coordinate, RepositoryRef, ResolvedCoordinate

logger = logging.getLogger(__name__)

# Timeout for HEAD requests (seconds)
HEAD_TIMEOUT = 30.0

# Status codes that mean "not in this repository"
NOT_FOUND_STATUSES = frozenset({404, 410})


def register_repositories(
    entries: Iterable[str | RepositoryRef],
) -> tuple[RepositoryRef, ...]:
    """Build an ordered, duplicate-free repository list.

    Args:
        entries: Aliases (``google``, ``mavenCentral``...) or explicit refs.

    Returns:
        Tuple of repositories in declaration order.

    Raises:
        ConfigurationError: On unknown aliases or duplicate URLs.
    """
    repositories: list[RepositoryRef] = []
    seen: dict[str, str] = {}
    for entry in entries:
        ref = RepositoryRef.from_alias(entry) if isinstance(entry, str) else entry
        if ref.url in seen:
            raise ConfigurationError(
                f"Repository '{ref.name}' duplicates '{seen[ref.url]}' ({ref.url})",
                details={"repository": ref.name, "url": ref.url},
            )
        seen[ref.url] = ref.name
        repositories.append(ref)
        logger.debug("Registered repository %s -> %s", ref.name, ref.url)
    return tuple(repositories)


def coordinate_url(repository: RepositoryRef, coordinate: Coordinate) -> str:
    """Return the POM URL of a coordinate inside a repository."""
    return f"{repository.url}/{coordinate.pom_path()}"


def probe(client: httpx.Client, url: str, timeout: float = HEAD_TIMEOUT) -> bool:
    """Check whether a repository serves a given artifact URL.

    Args:
        client: HTTPX client instance.
        url: Artifact URL to probe.
        timeout: Request timeout in seconds.

    Returns:
        True if present, False if the repository answered "not found".

    Raises:
        ResolutionError: On any other HTTP status or transport failure.
    """
    try:
        response = client.head(url, timeout=timeout, follow_redirects=True)
        if response.status_code in NOT_FOUND_STATUSES:
            return False
        response.raise_for_status()
        return True

    except httpx.HTTPStatusError as e:
        raise ResolutionError(
            f"HTTP error probing {url}: {e.response.status_code} {e.response.reason_phrase}",
            code="http_error",
            details={"url": url, "status_code": e.response.status_code},
        ) from e
    except httpx.TimeoutException as e:
        raise ResolutionError(
            f"Timeout probing {url}",
            code="timeout",
            details={"url": url},
        ) from e
    except httpx.RequestError as e:
        raise ResolutionError(
            f"Network error probing {url}: {e}",
            code="network_error",
            details={"url": url},
        ) from e


def resolve_coordinate(
    client: httpx.Client,
    coordinate: Coordinate,
    repositories: Sequence[RepositoryRef],
    timeout: float = HEAD_TIMEOUT,
) -> ResolvedCoordinate:
    """Find the first repository that provides a coordinate.

    Repositories are queried strictly in order; later repositories are
    never contacted once an earlier one has the artifact.

    Raises:
        ResolutionError: If no repository provides the coordinate.
    """
    for repository in repositories:
        url = coordinate_url(repository, coordinate)
        logger.debug("Probing %s for %s", repository.name, coordinate)
        if probe(client, url, timeout=timeout):
            logger.info("Resolved %s from %s", coordinate, repository.name)
            return ResolvedCoordinate(
                coordinate=coordinate, repository=repository, url=url
            )

    searched = [r.name for r in repositories]
    raise ResolutionError(
        f"Could not find {coordinate}. Searched in: {', '.join(searched) or '(none)'}",
        details={"coordinate": str(coordinate), "searched": searched},
    )


def resolve_all(
    coordinates: Iterable[Coordinate],
    repositories: Sequence[RepositoryRef],
    *,
    client: httpx.Client | None = None,
    offline: bool = False,
    timeout: float = HEAD_TIMEOUT,
) -> list[ResolvedCoordinate]:
    """Resolve several coordinates against the same repository list.

    The first failure aborts the whole resolution.

    Args:
        coordinates: Coordinates to resolve.
        repositories: Ordered repositories.
        client: Optional HTTPX client (one is created if not given).
        offline: Refuse to contact the network.
        timeout: Per-request timeout in seconds.

    Returns:
        Resolved coordinates, in input order.

    Raises:
        OfflineModeError: If offline is set and there is anything to resolve.
        ResolutionError: If any coordinate cannot be resolved.
    """
    coordinates = list(coordinates)
    if not coordinates:
        return []
    if offline:
        raise OfflineModeError()

    own_client = client is None
    if client is None:
        client = httpx.Client()
    try:
        return [
            resolve_coordinate(client, coordinate, repositories, timeout=timeout)
            for coordinate in coordinates
        ]
    finally:
        if own_client:
            client.close()


__all__ = [
    "HEAD_TIMEOUT",
    "NOT_FOUND_STATUSES",
    "coordinate_url",
    "probe",
    "register_repositories",
    "resolve_all",
    "resolve_coordinate",
]
