"""CLI parser and entrypoint tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from registrygen.cli import _build_parser, _resolve_config, main
from tests._fixtures.source_tree import SourceTreeBuilder


def test_cli_accepts_verbose_before_command() -> None:
    args = _build_parser().parse_args(["--verbose", "build"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_accepts_verbose_after_command() -> None:
    args = _build_parser().parse_args(["build", "--verbose"])
    assert args.verbose is True
    assert args.command == "build"


def test_cli_build_defaults() -> None:
    args = _build_parser().parse_args(["build"])
    assert args.path == "."
    assert args.output is None
    assert args.base_name is None
    assert args.no_fallback_targets is False


def test_cli_serve_options() -> None:
    args = _build_parser().parse_args(["serve", "proj", "--port", "8080", "--host", "127.0.0.1"])
    assert args.command == "serve"
    assert args.path == "proj"
    assert args.port == 8080
    assert args.host == "127.0.0.1"


def test_cli_requires_a_command() -> None:
    with pytest.raises(SystemExit):
        _build_parser().parse_args([])


def test_resolve_config_applies_flags(tmp_path: Path) -> None:
    args = _build_parser().parse_args(
        [
            "build",
            str(tmp_path),
            "--output",
            str(tmp_path / "out"),
            "--base-name",
            "acme",
            "--no-fallback-targets",
        ]
    )
    config = _resolve_config(args)
    assert config.root == tmp_path.resolve()
    assert config.output_dir == (tmp_path / "out").resolve()
    assert config.base_name == "acme"
    assert config.fallback_targets is False


def test_main_build_writes_registry(
    source_tree: SourceTreeBuilder,
    capsys: pytest.CaptureFixture[str],
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    for name in ("BASE_NAME", "HOMEPAGE", "BASE_URL", "REGISTRY_TITLE", "REGISTRY_DESCRIPTION"):
        monkeypatch.delenv(name, raising=False)
    source_tree.elements_src({"lib/utils.ts": "export const cn = () => ''\n"})

    main(["build", str(source_tree.root)])

    out = capsys.readouterr().out
    assert "Registry written to" in out
    assert "(1 items)" in out
    assert source_tree.read_output("lib/utils")["name"] == "utils"
    assert source_tree.read_output("registry")["items"][0]["name"] == "utils"


def test_main_reports_config_errors(tmp_path: Path) -> None:
    (tmp_path / ".registrygen.yml").write_text("registry: [oops\n", encoding="utf-8")
    with pytest.raises(SystemExit) as excinfo:
        main(["build", str(tmp_path)])
    assert excinfo.value.code == 1


def test_cli_accepts_logging_flags_on_either_side() -> None:
    parser = _build_parser()
    before = parser.parse_args(["--quiet", "--log-file", "out.log", "build"])
    after = parser.parse_args(["build", "-q"])
    assert before.quiet is True
    assert before.log_file == Path("out.log")
    assert after.quiet is True
    assert after.log_file is None


def test_main_build_writes_debug_log_file(source_tree: SourceTreeBuilder, tmp_path: Path) -> None:
    source_tree.elements_src({"lib/utils.ts": "export const cn = () => ''\n"})
    log_file = tmp_path / "logs" / "build.log"

    main(["build", str(source_tree.root), "--quiet", "--log-file", str(log_file)])

    text = log_file.read_text(encoding="utf-8")
    assert "registrygen.builder: Building registry from" in text
    assert "lib collector found 1 files" in text
