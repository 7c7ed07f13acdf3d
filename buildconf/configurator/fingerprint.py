"""Plan fingerprint computation.

This module handles:
- Canonical snapshot creation from a build plan
- Deterministic hash computation over the normalized snapshot

Paths are recorded relative to the module root so the same descriptor
gives the same fingerprint in any checkout location.
"""

from __future__ import annotations

import hashlib
import json
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from buildconf.configurator.plan import BuildPlan

# Schema version for fingerprint format; bump when the snapshot format changes
FINGERPRINT_SCHEMA_VERSION = "1"


def normalize_plan_snapshot(plan: BuildPlan) -> dict[str, Any]:
    """Create the normalized plan snapshot that is hashed.

    Ordering that carries meaning (repositories, evaluation order) is kept;
    mappings are serialized with sorted keys.

    Args:
        plan: BuildPlan instance.

    Returns:
        Dictionary with normalized plan data.
    """
    layout = plan.layout
    return {
        "schema_version": FINGERPRINT_SCHEMA_VERSION,
        "root_project": plan.root_project,
        "extra": dict(plan.extra),
        "plugin_repositories": [r.url for r in plan.plugin_repositories],
        "repositories": [r.url for r in plan.repositories],
        "plugins": sorted(str(c) for c in plan.plugins),
        "compiler_options": plan.compiler_options.to_dict(),
        "layout": {
            "root": layout.relative(layout.root),
            "projects": {
                name: layout.relative(path)
                for name, path in layout.project_dirs.items()
            },
        },
        "evaluation_order": list(plan.evaluation_order),
        "evaluation_dependencies": {
            name: list(deps) for name, deps in plan.graph.edges.items()
        },
        "tasks": sorted(t.path for t in plan.tasks),
    }


def compute_fingerprint(snapshot: dict[str, Any]) -> str:
    """Compute SHA256 over the canonical JSON form of a snapshot.

    Args:
        snapshot: Normalized snapshot.

    Returns:
        SHA256 hex digest.
    """
    canonical = json.dumps(snapshot, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()


def fingerprint_plan(plan: BuildPlan) -> str:
    """Compute the fingerprint of a plan."""
    return compute_fingerprint(normalize_plan_snapshot(plan))


__all__ = [
    "FINGERPRINT_SCHEMA_VERSION",
    "compute_fingerprint",
    "fingerprint_plan",
    "normalize_plan_snapshot",
]
