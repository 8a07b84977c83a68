"""CLI entrypoints for crxmanifest commands."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import dataclass
from pathlib import Path

from .config import CONFIG_FILENAME, ConfigError, load_config
from .extractors import EntryExtractor, FileClassifier, GlobExpansionError
from .loader import ManifestError, load_manifest
from .logging import configure_logging, get_logger
from .models import ExtensionManifest

_LOGGER = get_logger("cli")


@dataclass
class _Target:
    manifest: ExtensionManifest
    src_dir: Path
    legacy_newtab_alias: bool


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        default=argparse.SUPPRESS if suppress_default else False,
        help="Increase log verbosity for troubleshooting.",
    )


def _add_target_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "path",
        nargs="?",
        default=".",
        help=(
            "Project root, extension source directory, or manifest file "
            "(defaults to current directory)."
        ),
    )
    parser.add_argument(
        "--manifest",
        default=None,
        help="Manifest filename inside the source directory (default: manifest.json).",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="crxmanifest",
        description="List and classify the files referenced by a browser extension manifest.",
    )
    _add_verbose_option(parser)
    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Also write log records to this file.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    entries_parser = subparsers.add_parser(
        "entries",
        help="Print entry points (background, popup, content scripts, ...) as JSON.",
    )
    _add_verbose_option(entries_parser, suppress_default=True)
    _add_target_options(entries_parser)
    entries_parser.add_argument(
        "--legacy-newtab-alias",
        action="store_true",
        default=None,
        help="Report the newtab override under the 'history' key, as older releases did.",
    )

    files_parser = subparsers.add_parser(
        "files",
        help="Print referenced files bucketed into js/css/html/img/others as JSON.",
    )
    _add_verbose_option(files_parser, suppress_default=True)
    _add_target_options(files_parser)

    return parser


def _resolve_target(path: str, manifest_name: str | None, legacy_alias: bool | None) -> _Target:
    target = Path(path).expanduser()
    if not target.exists():
        raise ManifestError(f"Path not found: {path}")
    if target.is_file() and target.name != CONFIG_FILENAME:
        config = load_config(target.parent)
        manifest = load_manifest(target)
        src_dir = target.parent.resolve()
    else:
        config = load_config(target)
        src_dir = config.src_dir
        manifest = load_manifest(src_dir, manifest_name or config.manifest)

    if legacy_alias is None:
        legacy_alias = config.legacy_newtab_alias
    return _Target(manifest=manifest, src_dir=src_dir, legacy_newtab_alias=legacy_alias)


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for crxmanifest commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    try:
        target = _resolve_target(
            args.path,
            args.manifest,
            getattr(args, "legacy_newtab_alias", None),
        )
        _LOGGER.debug("Using source directory %s", target.src_dir)
        if args.command == "entries":
            extractor = EntryExtractor(legacy_newtab_alias=target.legacy_newtab_alias)
            payload: object = extractor.entries(target.manifest, target.src_dir)
        elif args.command == "files":
            payload = FileClassifier().files(target.manifest, target.src_dir)
        else:  # pragma: no cover - argparse enforces choices
            parser.exit(1, "Unknown command\n")
    except (ManifestError, ConfigError) as exc:
        _LOGGER.debug("Failed to load %s", args.path, exc_info=True)
        parser.exit(1, f"{exc}\n")
    except GlobExpansionError as exc:
        _LOGGER.debug("Glob expansion failed", exc_info=True)
        parser.exit(1, f"crxmanifest {args.command} failed: {exc}\n")

    print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main(sys.argv[1:])
