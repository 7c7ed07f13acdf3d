"""Thin CLI wrapper for buildconf.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.
"""

import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Any

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from buildconf import __version__
from buildconf.config import get_settings, print_settings_json
from buildconf.errors import BuildConfError

if TYPE_CHECKING:
    from buildconf.configurator.plan import BuildPlan

app = typer.Typer(
    name="buildconf",
    help="Build Configurator - deterministic configuration for multi-module builds",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

DescriptorOption = Annotated[
    Path | None,
    typer.Option(
        "--descriptor",
        "-d",
        help="Build descriptor (default: BUILDCONF_DESCRIPTOR or buildconf.yaml)",
    ),
]
JsonOption = Annotated[
    bool,
    typer.Option("--json", help="Output as JSON"),
]


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"buildconf version {__version__}")
        raise typer.Exit()


def setup_logging(level: str) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging"),
    ] = False,
) -> None:
    """Build Configurator - deterministic configuration for multi-module builds."""
    setup_logging("DEBUG" if verbose else get_settings().log_level)


def _echo_json(data: Any) -> None:
    typer.echo(json.dumps(data, indent=2))


def _fail(error: BuildConfError, json_output: bool) -> typer.Exit:
    if json_output:
        _echo_json({"error": error.to_dict()})
    else:
        console.print(f"[red]Error ({error.code}): {escape(error.message)}[/red]")
        errors = (error.details or {}).get("errors")
        if errors:
            for item in errors:
                console.print(f"  - {item['loc']}: {item['msg']}", markup=False)
    return typer.Exit(code=1)


def _load_plan(descriptor: Path | None, json_output: bool) -> "BuildPlan":
    from buildconf.configurator.service import configure_from_file

    settings = get_settings()
    path = descriptor if descriptor is not None else settings.descriptor
    try:
        return configure_from_file(path, settings=settings)
    except BuildConfError as e:
        raise _fail(e, json_output) from None


@app.command()
def config(json_output: JsonOption = False) -> None:
    """Show effective configuration."""
    settings = get_settings()
    if json_output:
        typer.echo(print_settings_json(settings))
    else:
        console.print("[bold]Effective Configuration:[/bold]")
        console.print()
        console.print("[bold]Paths:[/bold]")
        console.print(f"  Descriptor:          {settings.descriptor}")
        console.print()
        console.print("[bold]Operational:[/bold]")
        console.print(f"  Offline mode:        {settings.offline}")
        console.print(f"  Log level:           {settings.log_level}")
        console.print(f"  Incremental compile: {settings.incremental_compilation}")
        console.print()
        console.print("[bold]Timeouts (seconds):[/bold]")
        console.print(f"  Resolve timeout:     {settings.resolve_timeout}")


plan_app = typer.Typer(help="Inspect and validate build plans")
app.add_typer(plan_app, name="plan")


@plan_app.command("show")
def plan_show(
    descriptor: DescriptorOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show the full build plan."""
    from buildconf.configurator.plan import plan_to_dict

    plan = _load_plan(descriptor, json_output)
    if json_output:
        _echo_json(plan_to_dict(plan))
        return

    layout = plan.layout
    console.print(f"[bold]Build plan for :{plan.root_project}[/bold]")
    console.print(f"  Fingerprint: {plan.fingerprint}")
    console.print(f"  Module root: {layout.module_root}", markup=False)
    if plan.extra:
        console.print()
        console.print("[bold]Extra properties:[/bold]")
        for key, value in plan.extra.items():
            console.print(f"  {key} = {value}", markup=False)
    console.print()
    console.print("[bold]Plugin repositories:[/bold]")
    for i, repo in enumerate(plan.plugin_repositories, start=1):
        console.print(f"  {i}. {repo.name}  {repo.url}", markup=False)
    console.print()
    console.print("[bold]Repositories:[/bold]")
    for i, repo in enumerate(plan.repositories, start=1):
        console.print(f"  {i}. {repo.name}  {repo.url}", markup=False)
    if plan.plugins:
        console.print()
        console.print("[bold]Plugins:[/bold]")
        for coordinate in plan.plugins:
            console.print(f"  {coordinate}", markup=False)
    console.print()
    console.print("[bold]Compiler options:[/bold]")
    console.print(f"  jvm_target:  {plan.compiler_options.jvm_target}")
    console.print(f"  incremental: {plan.compiler_options.incremental}")
    console.print()
    _print_layout(plan)
    console.print()
    _print_order(plan)
    console.print()
    _print_tasks(plan)


@plan_app.command("validate")
def plan_validate(
    descriptor: DescriptorOption = None,
    json_output: JsonOption = False,
) -> None:
    """Validate a descriptor without touching the filesystem or network."""
    plan = _load_plan(descriptor, json_output)
    if json_output:
        _echo_json(
            {
                "valid": True,
                "root_project": plan.root_project,
                "fingerprint": plan.fingerprint,
                "subprojects": list(plan.subprojects),
            }
        )
    else:
        console.print(f"[green]✓ Valid build descriptor: :{plan.root_project}[/green]")
        console.print(f"  Subprojects: {len(plan.subprojects)}")
        console.print(f"  Fingerprint: {plan.fingerprint}")


@plan_app.command("export")
def plan_export(
    path: Annotated[Path, typer.Argument(help="Output file (.yaml, .yml or .json)")],
    descriptor: DescriptorOption = None,
) -> None:
    """Export the normalized descriptor to YAML/JSON."""
    from buildconf.descriptor.io import export_descriptor, load_descriptor

    source = descriptor if descriptor is not None else get_settings().descriptor
    try:
        export_descriptor(load_descriptor(source), path)
    except BuildConfError as e:
        raise _fail(e, False) from None
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1) from None
    console.print(f"[green]Exported {source} to {path}[/green]")


def _print_layout(plan: "BuildPlan") -> None:
    layout = plan.layout
    console.print("[bold]Output layout:[/bold]")
    console.print(f"  Root: {layout.root}", markup=False)
    for name, path in layout.project_dirs.items():
        console.print(f"  :{name} -> {path}", markup=False)


def _print_order(plan: "BuildPlan") -> None:
    console.print("[bold]Evaluation order:[/bold]")
    console.print(f"  1. :{plan.root_project} (root)", markup=False)
    for i, name in enumerate(plan.evaluation_order, start=2):
        deps = plan.graph.edges.get(name, ())
        after = f"  (after {', '.join(':' + d for d in deps)})" if deps else ""
        console.print(f"  {i}. :{name}{after}", markup=False)


def _print_tasks(plan: "BuildPlan") -> None:
    console.print("[bold]Tasks:[/bold]")
    for task in plan.tasks:
        console.print(f"  {task.path}  {task.description}", markup=False)


@app.command()
def layout(
    descriptor: DescriptorOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show the relocated output root and per-subproject directories."""
    plan = _load_plan(descriptor, json_output)
    if json_output:
        _echo_json(
            {
                "root": str(plan.layout.root),
                "projects": {
                    name: str(path) for name, path in plan.layout.project_dirs.items()
                },
            }
        )
    else:
        _print_layout(plan)


@app.command()
def order(
    descriptor: DescriptorOption = None,
    json_output: JsonOption = False,
) -> None:
    """Show the subproject evaluation order."""
    plan = _load_plan(descriptor, json_output)
    if json_output:
        _echo_json(
            {
                "root_project": plan.root_project,
                "order": list(plan.evaluation_order),
                "dependencies": {
                    name: list(deps) for name, deps in plan.graph.edges.items()
                },
            }
        )
    else:
        _print_order(plan)


@app.command()
def tasks(
    descriptor: DescriptorOption = None,
    json_output: JsonOption = False,
) -> None:
    """List registered tasks."""
    plan = _load_plan(descriptor, json_output)
    if json_output:
        _echo_json(
            [
                {"path": t.path, "kind": t.kind.value, "description": t.description}
                for t in plan.tasks
            ]
        )
    else:
        _print_tasks(plan)


@app.command()
def resolve(
    descriptor: DescriptorOption = None,
    offline: Annotated[
        bool | None,
        typer.Option("--offline/--online", help="Override offline mode"),
    ] = None,
    json_output: JsonOption = False,
) -> None:
    """Resolve plugin pins against the plugin repositories, in order."""
    from buildconf.configurator.service import resolve_plugins

    plan = _load_plan(descriptor, json_output)
    settings = get_settings()
    if offline is not None:
        settings = settings.model_copy(update={"offline": offline})

    try:
        resolved = resolve_plugins(plan, settings=settings)
    except BuildConfError as e:
        raise _fail(e, json_output) from None

    if json_output:
        _echo_json(
            [
                {
                    "coordinate": str(r.coordinate),
                    "repository": r.repository.name,
                    "url": r.url,
                }
                for r in resolved
            ]
        )
    else:
        if not resolved:
            console.print("[yellow]No plugins to resolve[/yellow]")
            return
        console.print(f"[bold]Resolved {len(resolved)} plugin(s):[/bold]")
        for r in resolved:
            console.print(f"  [green]{r.coordinate}[/green] from {r.repository.name}")


@app.command()
def clean(
    descriptor: DescriptorOption = None,
    json_output: JsonOption = False,
) -> None:
    """Delete the relocated build output root (no-op if absent)."""
    from buildconf.tasks.clean import CLEAN_TASK_NAME

    plan = _load_plan(descriptor, json_output)
    try:
        result = plan.tasks.run(CLEAN_TASK_NAME)
    except BuildConfError as e:
        raise _fail(e, json_output) from None

    if json_output:
        _echo_json(
            {"success": result.success, "message": result.message, **result.details}
        )
    elif result.details.get("removed"):
        console.print(f"[green]{result.message}[/green]")
    else:
        console.print(f"[yellow]{result.message}[/yellow]")


if __name__ == "__main__":
    app()
