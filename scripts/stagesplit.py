"""Command line interface for inspecting and rehearsing staged initialization."""
from __future__ import annotations

import argparse
import logging
import logging.config
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, List, Optional

from stagesplit import Coordinator, HookName, HookRegistry, Settings, State, StepTable, create_coordinator
from stagesplit.errors import StagedInitError

logger = logging.getLogger(__name__)


def configure_logging() -> None:
    """Configure logging from an INI file or fall back to basic configuration."""

    config_candidates = []
    if config_env := os.getenv("LOGGING_CONFIG"):
        config_candidates.append(Path(config_env))
    config_candidates.append(Path("logging.ini"))

    for config_path in config_candidates:
        if not config_path.exists():
            continue
        if config_path.suffix.lower() not in {".ini", ".cfg"}:
            print(f"Skipping unsupported logging config {config_path}.")
            continue
        logging.config.fileConfig(config_path, disable_existing_loggers=False)
        return

    logging.basicConfig(
        level=Settings.load().log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


class RehearsalTarget:
    """Stand-in target whose steps do nothing."""

    def __init__(self, configuration: Any) -> None:
        self.configuration = configuration


def _coordinator(cut_point: Optional[str], table: Optional[StepTable] = None) -> Coordinator:
    coordinator = create_coordinator(Settings.load(), dispatcher=table)
    if cut_point:
        coordinator.configure_split(cut_point)
    return coordinator


def command_steps(_: argparse.Namespace) -> None:
    coordinator = _coordinator(None)
    if coordinator.state is State.IDLE:
        print("Steps (no cut point configured):")
        early = None
    else:
        print(f"Steps (cut at '{coordinator.phases.cut_point}'):")
        early = len(coordinator.early_phase)
    for position, step in enumerate(coordinator.steps):
        if early is None:
            phase = "-"
        else:
            phase = "early" if position < early else "late"
        print(f"{position:3d}  {phase:5s}  {step}")


def command_phases(args: argparse.Namespace) -> None:
    coordinator = _coordinator(args.cut_point)
    print("Early phase:")
    for step in coordinator.early_phase:
        print(f"- {step}")
    print("Late phase:")
    for step in coordinator.late_phase:
        print(f"- {step}")


def command_simulate(args: argparse.Namespace) -> None:
    table = StepTable()
    coordinator = _coordinator(args.cut_point, table)
    for step in dict.fromkeys(coordinator.steps):
        table.register(step, lambda target: None)

    hooks = HookRegistry()
    coordinator.install_hooks(
        hooks,
        prepare=lambda: logger.info("Preparing rehearsal target"),
        build_target=RehearsalTarget,
        reset_resources=lambda: logger.info("Resetting pooled resources"),
    )
    hooks.fire(HookName.BEFORE_PRELOAD)
    coordinator.boot(MappingProxyType({"rehearsal": True}), RehearsalTarget)
    hooks.fire(HookName.AFTER_PRELOAD)
    hooks.fire(HookName.BEFORE_FORK)
    hooks.fire(HookName.AFTER_FORK)
    logger.info("Rehearsal finished (initialized=%s)", coordinator.initialized)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Split an initialization sequence into two phases.")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    parser_steps = subparsers.add_parser("steps", help="List every step with its phase")
    parser_steps.set_defaults(func=command_steps)

    for name, func, help_text in (
        ("phases", command_phases, "Print the early and late phases"),
        ("simulate", command_simulate, "Run both phases against a no-op target"),
    ):
        sub = subparsers.add_parser(name, help=help_text)
        sub.add_argument("cut_point", nargs="?", help="Step that starts the late phase.")
        sub.set_defaults(func=func)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        configure_logging()
        args.func(args)
    except StagedInitError as exc:
        print(f"Error: {exc}")
        return 2
    return 0


if __name__ == "__main__":  # pragma: no cover - entry point for CLI usage
    raise SystemExit(main())
