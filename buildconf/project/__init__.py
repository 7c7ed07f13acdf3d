"""Project structure module.

This module handles:
- Uniform compiler options and compilation tasks
- Output directory relocation and per-subproject layout
- The subproject evaluation graph and its topological order
"""

from buildconf.project.compiler import (
    CompilerOptions,
    CompileTask,
    apply_compiler_options,
    build_compiler_options,
    compile_destination,
)
from buildconf.project.graph import EvaluationGraph, build_evaluation_graph
from buildconf.project.layout import BuildLayout, compute_layout

__all__ = [
    "BuildLayout",
    "CompileTask",
    "CompilerOptions",
    "EvaluationGraph",
    "apply_compiler_options",
    "build_compiler_options",
    "build_evaluation_graph",
    "compile_destination",
    "compute_layout",
]
