"""Tests for the sparklr command-line interface."""

from __future__ import annotations

import argparse
from pathlib import Path

import pytest

from sparklr.cli.main import build_arg_parser, parse_size, run
from sparklr.core.document.models import EditorConfig
from sparklr.core.formats.swizzle.transform import from_text, save_document

pytestmark = pytest.mark.usefixtures("restore_root_logger")


@pytest.fixture
def document(tmp_path: Path, sample_config: EditorConfig) -> Path:
    """Sample document saved to disk."""
    return save_document(sample_config, tmp_path / "effect.yaml")


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run commands where no sparklr.yaml exists."""
    monkeypatch.chdir(tmp_path)


class TestParseSize:
    """Tests for parse_size."""

    @pytest.mark.parametrize(
        ("value", "expected"), [("1024x768", (1024, 768)), ("800X600", (800, 600))]
    )
    def test_valid(self, value: str, expected: tuple[int, int]) -> None:
        """WIDTHxHEIGHT parses into a tuple."""
        assert parse_size(value) == expected

    @pytest.mark.parametrize("value", ["1024", "x768", "widexhigh", "10x-5"])
    def test_invalid(self, value: str) -> None:
        """Malformed sizes raise ArgumentTypeError."""
        with pytest.raises(argparse.ArgumentTypeError):
            parse_size(value)


class TestArgParser:
    """Tests for build_arg_parser."""

    def test_recentre_defaults_from_authoring_canvas(self) -> None:
        """--from defaults to 800x600."""
        args = build_arg_parser().parse_args(["recentre", "fx.yaml", "--to", "1000x800"])
        assert args.from_size == (800, 600)
        assert args.to_size == (1000, 800)
        assert args.out is None

    def test_command_required(self) -> None:
        """A subcommand must be given."""
        with pytest.raises(SystemExit):
            build_arg_parser().parse_args([])


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_document(self, document: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A valid document exits 0."""
        assert run(["validate", str(document)]) == 0
        assert "Valid: 2 emitter(s)" in capsys.readouterr().out

    def test_invalid_document(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Validation errors are listed and exit 1."""
        path = tmp_path / "bad.yaml"
        path.write_text("system:\n  maxParticles: 0\nemitters: []\n", encoding="utf-8")

        assert run(["validate", str(path)]) == 1
        assert "maxParticles must be between 1 and 10000" in capsys.readouterr().out

    def test_missing_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A missing document exits 1."""
        assert run(["validate", str(tmp_path / "nope.yaml")]) == 1
        assert "Document not found" in capsys.readouterr().err

    def test_parse_error(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Malformed YAML exits 1 with the parser message."""
        path = tmp_path / "broken.yaml"
        path.write_text("emitters: [", encoding="utf-8")
        assert run(["validate", str(path)]) == 1
        assert "Failed to parse YAML" in capsys.readouterr().err


class TestNormalizeCommand:
    """Tests for the normalize command."""

    def test_writes_canonical_yaml_to_stdout(
        self, document: Path, sample_config: EditorConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The canonical export goes to stdout."""
        assert run(["normalize", str(document)]) == 0
        assert from_text(capsys.readouterr().out) == sample_config

    def test_drops_malformed_emitters(self, tmp_path: Path) -> None:
        """Rejected records are left out of the output file."""
        src = tmp_path / "mixed.yaml"
        src.write_text(
            "emitters:\n"
            "  - {type: point, position: {x: 1, y: 2}, emissionRate: 5,"
            " particle: {type: sprite, lifetime: 1}}\n"
            "  - {type: laser}\n",
            encoding="utf-8",
        )
        out = tmp_path / "clean" / "mixed.yaml"

        assert run(["normalize", str(src), "--out", str(out)]) == 0
        config = from_text(out.read_text(encoding="utf-8"))
        assert [e.type for e in config.emitters] == ["point"]

    def test_indent_from_app_config(
        self, document: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The export indent comes from the app config."""
        app_config = tmp_path / "app.yaml"
        app_config.write_text("export:\n  indent: 4\n", encoding="utf-8")

        assert run(["--app-config", str(app_config), "normalize", str(document)]) == 0
        assert "\n    maxParticles: 1000" in capsys.readouterr().out


class TestRecentreCommand:
    """Tests for the recentre command."""

    def test_recentres_to_new_size(self, document: Path, tmp_path: Path) -> None:
        """Emitters move by the change of canvas centre."""
        out = tmp_path / "moved.yaml"
        assert run(["recentre", str(document), "--to", "1000x800", "--out", str(out)]) == 0

        config = from_text(out.read_text(encoding="utf-8"))
        assert (config.emitters[0].position.x, config.emitters[0].position.y) == (500, 400)
        assert (config.emitters[1].position.x, config.emitters[1].position.y) == (600, 400)

    def test_same_size_is_unchanged(
        self, document: Path, sample_config: EditorConfig, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Recentring onto the same size leaves positions alone."""
        assert run(["recentre", str(document), "--from", "640x480", "--to", "640x480"]) == 0
        assert from_text(capsys.readouterr().out) == sample_config

    def test_defaults_to_configured_viewport(self, document: Path, tmp_path: Path) -> None:
        """Without --to the document is fitted to the app config viewport."""
        app_config = tmp_path / "app.yaml"
        app_config.write_text("viewport:\n  width: 1000\n  height: 800\n", encoding="utf-8")
        out = tmp_path / "fitted.yaml"

        argv = ["--app-config", str(app_config), "recentre", str(document), "--out", str(out)]
        assert run(argv) == 0

        config = from_text(out.read_text(encoding="utf-8"))
        assert (config.emitters[0].position.x, config.emitters[0].position.y) == (500, 400)


class TestSequencesCommand:
    """Tests for the sequences command."""

    def test_reports_sequence(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Detected sequences and individual files are listed."""
        frames = tmp_path / "frames"
        frames.mkdir()
        for name in ("coin_000.png", "coin_001.png", "coin_003.png", "logo.png"):
            (frames / name).write_bytes(b"png")

        assert run(["sequences", str(frames)]) == 0
        out = capsys.readouterr().out
        assert "coin_{000-003}.png" in out
        assert "Missing frames: 2 (1 gaps)" in out
        assert "logo.png" in out

    def test_not_a_directory(self, tmp_path: Path) -> None:
        """A missing directory exits 1."""
        assert run(["sequences", str(tmp_path / "missing")]) == 1
