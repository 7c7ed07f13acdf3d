"""Build configurator module.

This module handles:
- The linear configuration pipeline producing a BuildPlan
- Plugin pin validation and resolution
- Plan fingerprinting
"""

from buildconf.configurator.fingerprint import fingerprint_plan
from buildconf.configurator.plan import BuildPlan, plan_to_dict
from buildconf.configurator.service import (
    clean,
    configure,
    configure_from_file,
    resolve_plugins,
    validate_plugin_pins,
)

__all__ = [
    "BuildPlan",
    "clean",
    "configure",
    "configure_from_file",
    "fingerprint_plan",
    "plan_to_dict",
    "resolve_plugins",
    "validate_plugin_pins",
]
