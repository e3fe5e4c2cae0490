"""Canonical step lists for the framework initialization process."""
from __future__ import annotations

from typing import Iterable, Tuple

StepList = Tuple[str, ...]

# Every step of the initializer, in order. ``add_gem_load_paths`` and
# ``load_gems`` genuinely run twice; positions matter, not names.
DEFAULT_STEPS: StepList = (
    "check_ruby_version",
    "install_gem_spec_stubs",
    "set_load_path",
    "add_gem_load_paths",
    "require_frameworks",
    "set_autoload_paths",
    "add_plugin_load_paths",
    "load_environment",
    "preload_frameworks",
    "initialize_encoding",
    "initialize_database",
    "initialize_cache",
    "initialize_framework_caches",
    "initialize_logger",
    "initialize_framework_logging",
    "initialize_dependency_mechanism",
    "initialize_whiny_nils",
    "initialize_time_zone",
    "initialize_i18n",
    "initialize_framework_settings",
    "initialize_framework_views",
    "initialize_metal",
    "add_support_load_paths",
    "check_for_unbuilt_gems",
    "load_gems",
    "load_plugins",
    "add_gem_load_paths",
    "load_gems",
    "check_gem_dependencies",
    "load_application_initializers",
    "after_initialize",
    "initialize_database_middleware",
    "prepare_dispatcher",
    "initialize_routing",
    "load_observers",
    "load_view_paths",
    "load_application_classes",
    "disable_dependency_loading",
)

# Preloading up to (not including) the application classes suits unit tests.
DEFAULT_CUT_POINT = "load_application_classes"

# Once this step has run, pooled resources (e.g. database connections) exist.
RESOURCE_STEP = "load_application_classes"


def as_step_list(steps: Iterable[str]) -> StepList:
    """Return *steps* as an immutable step list."""

    return tuple(str(step) for step in steps)


__all__ = ["DEFAULT_CUT_POINT", "DEFAULT_STEPS", "RESOURCE_STEP", "StepList", "as_step_list"]
