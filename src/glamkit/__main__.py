"""
Command line entry point for glamkit.

Usage:
    python -m glamkit key 0x01090300 16843008
    python -m glamkit slot MAIN_HAND
    python -m glamkit row actor.json 0x01010203
    python -m glamkit sets --data path/to/export
"""

import argparse
import logging
import sys
from concurrent.futures import TimeoutError as FutureTimeoutError
from pathlib import Path
from typing import List, Optional

from . import __version__
from .customize import CustomizeManager
from .game_data.enums import EquipSlot
from .game_data.models import GameDataError
from .materials import MaterialValueIndex, load_actor_snapshot
from .settings import AppSettings, ConfigError
from .utils.logging_config import setup_logging

logger = logging.getLogger(f"{__name__}.main")


def _parse_key(text: str) -> int:
    """Parse a decimal or 0x-prefixed key."""
    value = int(text, 0)
    if not 0 <= value <= 0xFFFFFFFF:
        raise argparse.ArgumentTypeError(f"Key out of 32-bit range: {text}")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="glamkit",
        description="Inspect material value keys and customization sets.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--profile", default="default", help="Settings profile name")
    parser.add_argument(
        "--settings-file",
        metavar="PATH",
        default=None,
        help="INI file to read settings from instead of the platform store",
    )
    sub = parser.add_subparsers(dest="command", help="Command to run")

    key_parser = sub.add_parser("key", help="Describe packed material keys")
    key_parser.add_argument("keys", nargs="+", type=_parse_key, help="Decimal or 0x keys")

    slot_parser = sub.add_parser("slot", help="Print the key of an equipment slot")
    slot_parser.add_argument("slot", help="Equipment slot name, e.g. MAIN_HAND or head")

    row_parser = sub.add_parser("row", help="Resolve a key against an actor snapshot")
    row_parser.add_argument("snapshot", type=Path, help="Actor snapshot JSON file")
    row_parser.add_argument("key", type=_parse_key, help="Decimal or 0x key")

    sets_parser = sub.add_parser("sets", help="Build and summarize customization sets")
    sets_parser.add_argument(
        "--data", type=Path, default=None, help="Game data export (overrides settings)"
    )

    return parser


def _cmd_key(keys: List[int]) -> int:
    for key in keys:
        index = MaterialValueIndex.from_raw_key(key)
        state = "valid" if index.valid else "invalid"
        print(f"0x{key:08X}  {index}  ({state})")
    return 0


def _cmd_slot(name: str) -> int:
    try:
        slot = EquipSlot[name.upper()]
    except KeyError:
        print(f"Unknown equipment slot: {name}", file=sys.stderr)
        return 1
    index = MaterialValueIndex.from_slot(slot)
    if not index.valid:
        print(f"{slot.to_name()} has no materials")
        return 1
    print(f"0x{index.key:08X}  {index}")
    return 0


def _cmd_row(snapshot_path: Path, key: int) -> int:
    index = MaterialValueIndex.from_key(key)
    if index is None:
        print(f"Invalid material key 0x{key:08X}", file=sys.stderr)
        return 1

    actor = load_actor_snapshot(snapshot_path)
    if index.try_get_model(actor) is None:
        print(f"{index}: draw object not available")
        return 1
    textures = index.try_get_textures(actor)
    if textures is None:
        print(f"{index}: slot has no texture bank")
        return 1
    texture = index.texture_from_bank(textures)
    if texture is None:
        print(f"{index}: material has no texture")
        return 1
    table = index.color_table_from_texture(texture)
    if table is None:
        print(f"{index}: texture is not a color table")
        return 1

    row = table[index.row_index]
    print(f"{index}")
    print(f"  diffuse   {row.diffuse}")
    print(f"  specular  {row.specular} x {row.specular_strength}")
    print(f"  emissive  {row.emissive}")
    print(f"  gloss     {row.gloss_strength}  tile set {row.tile_set}")
    return 0


def _cmd_sets(settings: AppSettings, data_path: Optional[Path]) -> int:
    if data_path is not None:
        settings.game_data_path = data_path

    validation = settings.validate()
    for warning in validation.warnings:
        logger.warning(f"  {warning}")
    if not validation.is_valid:
        logger.error("Configuration validation failed:")
        for error in validation.errors:
            logger.error(f"  {error}")
        return 1

    manager = CustomizeManager.from_settings(settings)
    manager.wait(settings.build_timeout or None)
    for clan, gender in manager.all_sets():
        customize_set = manager.get_set(clan, gender)
        options = sum(customize_set.count(i) for i in customize_set.indices)
        print(
            f"{customize_set.name:<28} {len(customize_set.indices):>3} customizations "
            f"{options:>5} options {len(customize_set.npc_options):>4} NPC-only"
        )
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        settings = AppSettings(args.profile, args.settings_file)
        setup_logging(settings)
        logger.debug(f"Configuration loaded from {settings.get_settings_file_path()}")

        if args.command == "key":
            return _cmd_key(args.keys)
        if args.command == "slot":
            return _cmd_slot(args.slot)
        if args.command == "row":
            return _cmd_row(args.snapshot, args.key)
        if args.command == "sets":
            return _cmd_sets(settings, args.data)
    except (ConfigError, GameDataError, FutureTimeoutError, OSError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        return 1

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
