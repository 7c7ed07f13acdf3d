"""Build configurator service.

This module provides the high-level configuration APIs:
- configure(): Turn a descriptor into an immutable BuildPlan
- configure_from_file(): Load a descriptor file and configure it
- validate_plugin_pins(): Check plugin pins are fixed and mutually compatible
- resolve_plugins(): Resolve plugin pins against the plugin repositories
- clean(): Run the clean task of a plan

Configuration is a single linear pass: repository registration, compiler
option application, output relocation, evaluation dependency declaration,
task registration. Each phase receives the values computed before it.
Any error aborts the pass and propagates unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING, cast

import httpx

from buildconf.config import get_settings
from buildconf.configurator.fingerprint import fingerprint_plan
from buildconf.configurator.plan import BuildPlan
from buildconf.descriptor.io import load_descriptor
from buildconf.descriptor.schema import DescriptorSchema, RepositoryEntry
from buildconf.errors import ConfigurationError
from buildconf.project.compiler import apply_compiler_options, build_compiler_options
from buildconf.project.graph import build_evaluation_graph
from buildconf.project.layout import compute_layout
from buildconf.repositories.models import Coordinate, RepositoryRef, ResolvedCoordinate
from buildconf.repositories.resolver import register_repositories, resolve_all
from buildconf.tasks.clean import CLEAN_TASK_NAME, CleanResult, CleanTask
from buildconf.tasks.registry import TaskRegistry
from buildconf.types import ConfigurationPhase

if TYPE_CHECKING:
    from buildconf.config import Settings

logger = logging.getLogger(__name__)

KOTLIN_PLUGIN_MODULE = "org.jetbrains.kotlin:kotlin-gradle-plugin"
KOTLIN_VERSION_PROPERTY = "kotlin_version"


def _repository_refs(
    entries: list[RepositoryEntry] | None,
) -> list[str | RepositoryRef]:
    refs: list[str | RepositoryRef] = []
    for entry in entries or []:
        if isinstance(entry, str):
            refs.append(entry)
        else:
            refs.append(RepositoryRef.from_url(entry.name, entry.url))
    return refs


def validate_plugin_pins(descriptor: DescriptorSchema) -> tuple[Coordinate, ...]:
    """Check plugin pins form a consistent, reproducible set.

    Pins must use fixed versions, a module may be pinned only once, and
    the Kotlin plugin must match the ``kotlin_version`` extra property
    when both are declared.

    Returns:
        Parsed plugin coordinates in declaration order.

    Raises:
        ConfigurationError: If a pin is dynamic, duplicated or incompatible.
    """
    notations = descriptor.buildscript.dependencies if descriptor.buildscript else []
    plugins: list[Coordinate] = []
    modules: dict[str, Coordinate] = {}
    for notation in notations:
        coordinate = Coordinate.parse(notation)
        if not coordinate.is_fixed_version:
            raise ConfigurationError(
                f"Plugin {coordinate} must pin a fixed version",
                details={"plugin": str(coordinate)},
            )
        if coordinate.module in modules:
            raise ConfigurationError(
                f"Plugin {coordinate.module} is pinned more than once "
                f"({modules[coordinate.module].version}, {coordinate.version})",
                details={"plugin": coordinate.module},
            )
        modules[coordinate.module] = coordinate
        plugins.append(coordinate)

    kotlin_version = (descriptor.extra or {}).get(KOTLIN_VERSION_PROPERTY)
    kotlin_plugin = modules.get(KOTLIN_PLUGIN_MODULE)
    if kotlin_version and kotlin_plugin and kotlin_plugin.version != kotlin_version:
        raise ConfigurationError(
            f"{KOTLIN_PLUGIN_MODULE} {kotlin_plugin.version} does not match "
            f"{KOTLIN_VERSION_PROPERTY}={kotlin_version}",
            details={
                "plugin_version": kotlin_plugin.version,
                "kotlin_version": kotlin_version,
            },
        )
    return tuple(plugins)


def configure(
    descriptor: DescriptorSchema,
    *,
    descriptor_dir: Path | None = None,
    descriptor_path: Path | None = None,
    settings: Settings | None = None,
) -> BuildPlan:
    """Produce the build plan for a descriptor.

    Args:
        descriptor: Validated descriptor.
        descriptor_dir: Directory ``module_root`` is relative to
            (defaults to the current directory).
        descriptor_path: Descriptor file, recorded in the plan.
        settings: Optional settings override.

    Returns:
        Immutable BuildPlan.

    Raises:
        ConfigurationError: On invalid repositories, options, layout,
            references, cycles or duplicate tasks.
    """
    if settings is None:
        settings = get_settings()
    base_dir = descriptor_dir if descriptor_dir is not None else Path.cwd()
    module_root = (base_dir / descriptor.module_root).resolve()
    phases: list[ConfigurationPhase] = []

    logger.info("Configuring :%s in %s", descriptor.root_project, module_root)

    # Phase 1: repositories and plugin pins
    plugin_repositories = register_repositories(
        _repository_refs(
            descriptor.buildscript.repositories if descriptor.buildscript else None
        )
    )
    repositories = register_repositories(_repository_refs(descriptor.repositories))
    plugins = validate_plugin_pins(descriptor)
    if plugins and not plugin_repositories:
        raise ConfigurationError(
            "Plugins are pinned but no plugin repositories are declared",
            details={"plugins": [str(c) for c in plugins]},
        )
    logger.info(
        "Registered %d plugin and %d project repositories",
        len(plugin_repositories),
        len(repositories),
    )
    phases.append(ConfigurationPhase.REPOSITORIES)

    # Phase 2: one option set for every compilation task
    options = build_compiler_options(
        descriptor.compiler, default_incremental=settings.incremental_compilation
    )
    phases.append(ConfigurationPhase.COMPILER_OPTIONS)

    # Phase 3: output relocation, before any output-writing task exists
    layout = compute_layout(
        module_root, descriptor.subproject_names(), descriptor.build_dir
    )
    phases.append(ConfigurationPhase.LAYOUT)

    # Phase 4: evaluation order
    graph = build_evaluation_graph(
        descriptor.root_project,
        ((s.name, s.depends_on or []) for s in descriptor.subprojects),
        descriptor.evaluation_depends_on,
    )
    phases.append(ConfigurationPhase.EVALUATION_ORDER)

    # Phase 5: tasks, all writing below the relocated root
    compile_tasks = apply_compiler_options(
        ((s.name, s.effective_variants()) for s in descriptor.subprojects),
        options,
        layout,
    )
    registry = TaskRegistry()
    registry.register(CleanTask(target=layout.root))
    for task in compile_tasks:
        registry.register(task)
    registry.seal()
    phases.append(ConfigurationPhase.TASKS)

    plan = BuildPlan(
        root_project=descriptor.root_project,
        extra=dict(descriptor.extra or {}),
        plugin_repositories=plugin_repositories,
        repositories=repositories,
        plugins=plugins,
        compiler_options=options,
        compile_tasks=compile_tasks,
        layout=layout,
        graph=graph,
        tasks=registry,
        phases=tuple(phases),
        descriptor_path=descriptor_path,
    )
    plan = replace(plan, fingerprint=fingerprint_plan(plan))
    logger.info("Configuration complete (fingerprint %s...)", plan.fingerprint[:16])
    return plan


def configure_from_file(path: Path, settings: Settings | None = None) -> BuildPlan:
    """Load a descriptor file and configure it.

    ``module_root`` is interpreted relative to the descriptor's directory.

    Raises:
        DescriptorError: If the file cannot be loaded.
        ConfigurationError: If the configuration is invalid.
    """
    descriptor = load_descriptor(path)
    return configure(
        descriptor,
        descriptor_dir=path.resolve().parent,
        descriptor_path=path,
        settings=settings,
    )


def resolve_plugins(
    plan: BuildPlan,
    *,
    client: httpx.Client | None = None,
    settings: Settings | None = None,
) -> list[ResolvedCoordinate]:
    """Resolve every plugin pin against the plugin repositories, in order.

    Raises:
        OfflineModeError: If offline mode is enabled.
        ResolutionError: If a pin cannot be resolved.
    """
    if settings is None:
        settings = get_settings()
    logger.info(
        "Resolving %d plugin(s) against %s",
        len(plan.plugins),
        ", ".join(r.name for r in plan.plugin_repositories) or "(none)",
    )
    return resolve_all(
        plan.plugins,
        plan.plugin_repositories,
        client=client,
        offline=settings.offline,
        timeout=settings.resolve_timeout,
    )


def clean(plan: BuildPlan) -> CleanResult:
    """Run the clean task of a plan.

    Raises:
        CleanError: If the output tree cannot be deleted.
    """
    task = cast(CleanTask, plan.tasks.get(CLEAN_TASK_NAME))
    return task.run()


__all__ = [
    "KOTLIN_PLUGIN_MODULE",
    "KOTLIN_VERSION_PROPERTY",
    "clean",
    "configure",
    "configure_from_file",
    "resolve_plugins",
    "validate_plugin_pins",
]
