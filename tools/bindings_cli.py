"""Command line interface to inspect and maintain saved controller bindings."""
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import Callable, Optional, Sequence, TextIO

from config.config_loader import DEFAULT_CONFIG_FILE, BindingSettings
from modules.bindings.inputs import describe
from modules.bindings.migration import LEGACY_BINDINGS_FILE, migrate_legacy_file
from modules.bindings.registry import BindingRegistry
from utils.logger import configure_logging


def _profile_arg(value: str) -> str:
    """Accept profile ids with or without their leading separator."""
    value = value.strip()
    return value if value.startswith("/") else "/" + value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect and maintain saved VR controller bindings.")
    parser.add_argument("--config", default=DEFAULT_CONFIG_FILE, help="YAML settings file.")
    parser.add_argument("--root", help="Override the bindings root directory from the settings.")
    parser.add_argument("--log-level", help="Override the log level from the settings.")

    commands = parser.add_subparsers(dest="command", required=True)
    commands.add_parser("list", help="List profiles with saved bindings.")

    show = commands.add_parser("show", help="Print the bindings of a profile.")
    show.add_argument("profile", type=_profile_arg)

    validate = commands.add_parser("validate", help="Check every bound input of a profile.")
    validate.add_argument("profile", type=_profile_arg)

    delete = commands.add_parser("delete", help="Delete the saved bindings of a profile.")
    delete.add_argument("profile", type=_profile_arg)

    clear = commands.add_parser("clear", help="Delete every saved profile.")
    clear.add_argument("--yes", action="store_true", help="Do not ask for confirmation.")

    migrate = commands.add_parser("migrate", help="Import profiles from the legacy single-file format.")
    migrate.add_argument("legacy_file", nargs="?", default=LEGACY_BINDINGS_FILE)
    return parser


def _cmd_list(registry: BindingRegistry, args: argparse.Namespace, out: TextIO) -> int:
    profiles = sorted(registry.available_profiles())
    if not profiles:
        out.write("No saved profiles.\n")
        return 0
    for profile_id in profiles:
        out.write(f"{profile_id}\n")
    return 0


def _cmd_show(registry: BindingRegistry, args: argparse.Namespace, out: TextIO) -> int:
    bindings = registry.load_profile(args.profile)
    if bindings is None:
        out.write(f"No saved bindings for {args.profile}\n")
        return 1
    aliases = registry.profile_aliases
    for entry in bindings.entries:
        name = describe(args.profile, entry.input_path, aliases).display_name
        out.write(f"{entry.action}\t{entry.input_path} ({name})\t[{entry.namespace}]\n")
    return 0


def _cmd_validate(registry: BindingRegistry, args: argparse.Namespace, out: TextIO) -> int:
    bindings = registry.load_profile(args.profile)
    if bindings is None:
        out.write(f"No saved bindings for {args.profile}\n")
        return 1
    failures = 0
    for input_path in sorted({entry.input_path for entry in bindings.entries}):
        result = registry.validate(args.profile, input_path)
        if result is not None and not result.legal:
            failures += 1
            out.write(f"[!] {input_path}: {result.reason}\n")
    if failures == 0:
        out.write(f"All {len(bindings)} bindings of {args.profile} are valid.\n")
    return 0 if failures == 0 else 2


def _cmd_delete(registry: BindingRegistry, args: argparse.Namespace, out: TextIO) -> int:
    if registry.delete(args.profile):
        out.write(f"Deleted {args.profile}\n")
        return 0
    out.write(f"No saved bindings for {args.profile}\n")
    return 1


def _cmd_clear(registry: BindingRegistry, args: argparse.Namespace, out: TextIO) -> int:
    if not args.yes:
        out.write("Refusing to clear all profiles without --yes.\n")
        return 1
    if not registry.clear_all():
        out.write("Failed to clear saved bindings, see log.\n")
        return 1
    out.write("Cleared all saved bindings.\n")
    return 0


def _cmd_migrate(registry: BindingRegistry, args: argparse.Namespace, out: TextIO) -> int:
    seeded = migrate_legacy_file(registry, args.legacy_file)
    for profile_id in seeded:
        out.write(f"Imported {profile_id}\n")
    out.write(f"{len(seeded)} profile(s) imported.\n")
    return 0


_COMMANDS: dict[str, Callable[[BindingRegistry, argparse.Namespace, TextIO], int]] = {
    "list": _cmd_list,
    "show": _cmd_show,
    "validate": _cmd_validate,
    "delete": _cmd_delete,
    "clear": _cmd_clear,
    "migrate": _cmd_migrate,
}


def main(argv: Optional[Sequence[str]] = None, *, out: TextIO | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    out = out or sys.stdout

    try:
        settings = BindingSettings.load(args.config)
    except (ValueError, OSError) as exc:
        parser.error(f"cannot read settings: {exc}")
    configure_logging(args.log_level or settings.log_level)

    if args.root:
        settings = replace(settings, root_dir=args.root)

    registry = BindingRegistry.from_settings(settings)
    try:
        return _COMMANDS[args.command](registry, args, out)
    except ValueError as exc:
        parser.error(str(exc))
    finally:
        registry.close()


if __name__ == "__main__":
    sys.exit(main())
