"""Descriptor import/export functionality.

This module provides helpers for loading build descriptors from YAML/JSON
files and for writing normalized descriptors back out.

Loading failures of any kind (missing file, unsupported extension, parse
errors, schema violations) surface as DescriptorError.
"""

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from buildconf.descriptor.schema import DescriptorSchema
from buildconf.errors import DescriptorError

SUPPORTED_SUFFIXES = (".yaml", ".yml", ".json")


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        yaml.YAMLError: If the file is not valid YAML.
        ValueError: If the document is not a mapping.
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a YAML mapping, got {type(data).__name__}")
    return data


def load_json(path: Path) -> dict[str, Any]:
    """Load a JSON file and return its contents as a dict.

    Raises:
        FileNotFoundError: If the file does not exist.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError: If the document is not an object.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Expected a JSON object, got {type(data).__name__}")
    return data


def parse_descriptor_data(
    data: dict[str, Any], source: str | None = None
) -> DescriptorSchema:
    """Parse and validate descriptor data using the schema.

    Args:
        data: Dictionary containing descriptor data.
        source: Optional origin (file path) for error messages.

    Returns:
        Validated DescriptorSchema instance.

    Raises:
        DescriptorError: If data does not match the schema.
    """
    try:
        return DescriptorSchema.model_validate(data)
    except ValidationError as e:
        where = f" in {source}" if source else ""
        errors = [
            {"loc": ".".join(str(part) for part in err["loc"]), "msg": err["msg"]}
            for err in e.errors()
        ]
        raise DescriptorError(
            f"Invalid build descriptor{where}: {e.error_count()} error(s)",
            details={"source": source, "errors": errors},
        ) from e


def load_descriptor(path: Path) -> DescriptorSchema:
    """Load and validate a descriptor from a file (YAML or JSON).

    File format is determined by extension (.yaml, .yml for YAML,
    .json for JSON).

    Args:
        path: Path to the descriptor file.

    Returns:
        Validated DescriptorSchema instance.

    Raises:
        DescriptorError: If the file is missing, unreadable or invalid.
    """
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise DescriptorError(
            f"Unsupported file extension '{suffix}'. Use .yaml, .yml, or .json",
            details={"source": str(path)},
        )

    try:
        data = load_json(path) if suffix == ".json" else load_yaml(path)
    except FileNotFoundError:
        raise DescriptorError(
            f"Descriptor not found: {path}", details={"source": str(path)}
        ) from None
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise DescriptorError(
            f"Parse error in {path}: {e}", details={"source": str(path)}
        ) from e
    except ValueError as e:
        raise DescriptorError(str(e), details={"source": str(path)}) from e

    return parse_descriptor_data(data, source=str(path))


def descriptor_to_dict(descriptor: DescriptorSchema) -> dict[str, Any]:
    """Return the exportable form of a descriptor."""
    return descriptor.model_dump(exclude_none=True)


def descriptor_to_yaml_string(descriptor: DescriptorSchema) -> str:
    """Convert a descriptor to a YAML string."""
    result: str = yaml.safe_dump(
        descriptor_to_dict(descriptor),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    return result


def descriptor_to_json_string(descriptor: DescriptorSchema) -> str:
    """Convert a descriptor to a JSON string."""
    return json.dumps(descriptor_to_dict(descriptor), indent=2, ensure_ascii=False)


def export_descriptor(descriptor: DescriptorSchema, path: Path) -> None:
    """Export a descriptor to a file (YAML or JSON).

    Raises:
        ValueError: If file extension is not supported.
    """
    suffix = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        text = descriptor_to_yaml_string(descriptor)
    elif suffix == ".json":
        text = descriptor_to_json_string(descriptor) + "\n"
    else:
        raise ValueError(
            f"Unsupported file extension '{suffix}'. Use .yaml, .yml, or .json"
        )
    path.write_text(text, encoding="utf-8")


__all__ = [
    "SUPPORTED_SUFFIXES",
    "descriptor_to_dict",
    "descriptor_to_json_string",
    "descriptor_to_yaml_string",
    "export_descriptor",
    "load_descriptor",
    "load_json",
    "load_yaml",
    "parse_descriptor_data",
]
