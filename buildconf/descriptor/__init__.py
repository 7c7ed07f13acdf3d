"""Build descriptor module.

This module handles:
- Schema validation of build descriptors
- Import/export of descriptors (YAML/JSON)
"""

from buildconf.descriptor.io import (
    descriptor_to_json_string,
    descriptor_to_yaml_string,
    export_descriptor,
    load_descriptor,
    parse_descriptor_data,
)
from buildconf.descriptor.schema import (
    BuildscriptSchema,
    CompilerOptionsSchema,
    DescriptorSchema,
    RepositorySpecSchema,
    SubprojectSchema,
)

__all__ = [
    "BuildscriptSchema",
    "CompilerOptionsSchema",
    "DescriptorSchema",
    "RepositorySpecSchema",
    "SubprojectSchema",
    "descriptor_to_json_string",
    "descriptor_to_yaml_string",
    "export_descriptor",
    "load_descriptor",
    "parse_descriptor_data",
]
