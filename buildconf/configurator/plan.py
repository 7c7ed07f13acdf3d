"""Build plan model.

The build plan is the immutable output of the configurator. It is built
once per invocation and handed to whoever consumes it (CLI, resolver,
clean task); nothing in it is mutated afterwards.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from buildconf.project.compiler import CompilerOptions, CompileTask
from buildconf.project.graph import EvaluationGraph
from buildconf.project.layout import BuildLayout
from buildconf.repositories.models import Coordinate, RepositoryRef
from buildconf.tasks.registry import TaskRegistry
from buildconf.types import ConfigurationPhase


@dataclass(frozen=True)
class BuildPlan:
    """Resolved configuration of a multi-module build.

    Attributes:
        root_project: Root project name.
        extra: Extra properties shared by the build.
        plugin_repositories: Ordered repositories for plugin resolution.
        repositories: Ordered repositories for project dependencies.
        plugins: Pinned plugin coordinates.
        compiler_options: Option set shared by every compile task.
        compile_tasks: Compile tasks of every subproject.
        layout: Output directory layout.
        graph: Evaluation graph and order.
        tasks: Sealed task registry.
        phases: Completed configuration phases, in order.
        descriptor_path: Descriptor the plan was built from, if any.
        fingerprint: SHA-256 over the normalized plan.
    """

    root_project: str
    extra: Mapping[str, str]
    plugin_repositories: tuple[RepositoryRef, ...]
    repositories: tuple[RepositoryRef, ...]
    plugins: tuple[Coordinate, ...]
    compiler_options: CompilerOptions
    compile_tasks: tuple[CompileTask, ...]
    layout: BuildLayout
    graph: EvaluationGraph
    tasks: TaskRegistry = field(compare=False)
    phases: tuple[ConfigurationPhase, ...] = ()
    descriptor_path: Path | None = None
    fingerprint: str = ""

    @property
    def subprojects(self) -> tuple[str, ...]:
        """Subproject names in declaration order."""
        return self.graph.nodes

    @property
    def evaluation_order(self) -> tuple[str, ...]:
        """Subproject names in evaluation order (root project excluded)."""
        return self.graph.order


def _repository_list(repositories: tuple[RepositoryRef, ...]) -> list[dict[str, str]]:
    return [{"name": r.name, "url": r.url} for r in repositories]


def plan_to_dict(plan: BuildPlan) -> dict[str, Any]:
    """Convert a plan to a JSON-serializable dictionary.

    Paths are absolute; see the fingerprint module for the relocatable form.
    """
    layout = plan.layout
    return {
        "root_project": plan.root_project,
        "fingerprint": plan.fingerprint,
        "descriptor": str(plan.descriptor_path) if plan.descriptor_path else None,
        "module_root": str(layout.module_root),
        "extra": dict(plan.extra),
        "plugin_repositories": _repository_list(plan.plugin_repositories),
        "repositories": _repository_list(plan.repositories),
        "plugins": [str(c) for c in plan.plugins],
        "compiler_options": plan.compiler_options.to_dict(),
        "layout": {
            "root": str(layout.root),
            "projects": {name: str(path) for name, path in layout.project_dirs.items()},
        },
        "evaluation_order": [plan.root_project, *plan.evaluation_order],
        "evaluation_dependencies": {
            name: list(deps) for name, deps in plan.graph.edges.items()
        },
        "tasks": [
            {"path": t.path, "kind": t.kind.value, "description": t.description}
            for t in plan.tasks
        ],
        "phases": [p.value for p in plan.phases],
    }


__all__ = ["BuildPlan", "plan_to_dict"]
