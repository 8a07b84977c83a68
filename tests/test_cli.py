"""CLI behaviour tests."""

from __future__ import annotations

import json

import pytest

from crxmanifest.cli import _build_parser, main
from crxmanifest.logging import configure_logging


def test_cli_accepts_verbose_before_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["--verbose", "files"])
    assert args.verbose is True
    assert args.command == "files"
    assert args.path == "."


def test_cli_accepts_verbose_after_command() -> None:
    parser = _build_parser()
    args = parser.parse_args(["entries", "ext", "--verbose"])
    assert args.verbose is True
    assert args.path == "ext"


def test_cli_legacy_alias_defaults_to_config() -> None:
    parser = _build_parser()
    assert parser.parse_args(["entries"]).legacy_newtab_alias is None
    assert parser.parse_args(["entries", "--legacy-newtab-alias"]).legacy_newtab_alias is True


def test_cli_entries_prints_json(extension_builder, capsys) -> None:
    extension_builder.write_manifest(
        {
            "background": {"service_worker": "bg.js"},
            "chrome_url_overrides": {"newtab": "tab.html"},
        }
    )
    root = extension_builder.root.resolve()

    main(["entries", str(extension_builder.root)])

    payload = json.loads(capsys.readouterr().out)
    assert payload == {
        "background": str(root / "bg.js"),
        "override": {"newtab": str(root / "tab.html")},
    }


def test_cli_entries_honours_legacy_alias_from_config(extension_builder, capsys) -> None:
    extension_builder.write_manifest({"chrome_url_overrides": {"newtab": "tab.html"}})
    extension_builder.write({".crxmanifest.yml": "legacy_newtab_alias: true\n"})

    main(["entries", str(extension_builder.root)])

    payload = json.loads(capsys.readouterr().out)
    assert list(payload["override"]) == ["history"]


def test_cli_files_uses_config_src_dir(tmp_path, capsys) -> None:
    src = tmp_path / "src"
    (src / "fonts").mkdir(parents=True)
    (src / "fonts" / "a.woff2").write_text("", encoding="utf-8")
    (src / "manifest.json").write_text(
        json.dumps(
            {
                "content_scripts": [{"js": ["cs.js"], "css": ["cs.css"]}],
                "web_accessible_resources": [{"resources": ["fonts/*"]}],
            }
        ),
        encoding="utf-8",
    )
    (tmp_path / ".crxmanifest.yml").write_text("src_dir: src\n", encoding="utf-8")

    main(["files", str(tmp_path)])

    payload = json.loads(capsys.readouterr().out)
    resolved = src.resolve()
    assert payload["js"] == [str(resolved / "cs.js")]
    assert payload["css"] == [str(resolved / "cs.css")]
    assert payload["others"] == [str(resolved / "fonts" / "a.woff2")]


def test_cli_accepts_manifest_file_path(extension_builder, capsys) -> None:
    path = extension_builder.write_manifest({"devtools_page": "dev.html"})

    main(["files", str(path)])

    payload = json.loads(capsys.readouterr().out)
    assert payload["html"] == [str(extension_builder.root.resolve() / "dev.html")]


def test_cli_missing_manifest_exits_with_error(tmp_path, capsys) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["files", str(tmp_path)])

    assert excinfo.value.code == 1
    assert "Manifest not found" in capsys.readouterr().err


def test_cli_invalid_pattern_exits_with_error(extension_builder, capsys) -> None:
    extension_builder.write_manifest({"web_accessible_resources": [{"resources": ["[bad"]}]})

    with pytest.raises(SystemExit) as excinfo:
        main(["files", str(extension_builder.root)])

    assert excinfo.value.code == 1
    assert "Invalid glob pattern" in capsys.readouterr().err


def test_cli_accepts_log_file_option() -> None:
    args = _build_parser().parse_args(["--log-file", "run.log", "files"])
    assert str(args.log_file) == "run.log"
    assert _build_parser().parse_args(["files"]).log_file is None


def test_cli_writes_log_file(extension_builder, tmp_path, capsys) -> None:
    extension_builder.write_manifest({"devtools_page": "dev.html"})
    log_file = tmp_path / "crxmanifest.log"

    try:
        main(["--verbose", "--log-file", str(log_file), "files", str(extension_builder.root)])
    finally:
        configure_logging()

    capsys.readouterr()
    contents = log_file.read_text(encoding="utf-8")
    assert "crxmanifest.loader: Loaded manifest" in contents
    assert "DEBUG crxmanifest.cli: Using source directory" in contents
