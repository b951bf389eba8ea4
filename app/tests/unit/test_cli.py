"""Tests for the CLI batch operations (app/cli.py)."""

import json

import pytest
from cli import (
    build_parser,
    cmd_import_library,
    cmd_info,
    cmd_validate,
    load_scene,
    main,
    scene_summary,
    try_load_scene,
)
from models.scene import SceneModel


@pytest.fixture
def board_file(tmp_path, sample_scene_dict):
    """A valid board file with a chip, a substrate and two wires."""
    filepath = tmp_path / "board.json"
    filepath.write_text(json.dumps(sample_scene_dict))
    return str(filepath)


@pytest.fixture
def library_file(tmp_path):
    filepath = tmp_path / "parts.json"
    filepath.write_text(json.dumps([
        {"w": 2, "h": 1, "label": "LED", "pinsTop": ["A", "K"]},
        {"w": 3, "h": 1, "label": "R", "pinsBottom": ["1", "", "2"]},
    ]))
    return str(filepath)


class TestLoadScene:
    def test_load_valid(self, board_file):
        model = load_scene(board_file)
        assert isinstance(model, SceneModel)
        assert len(model.components) == 2
        assert len(model.wires) == 2

    def test_load_nonexistent(self):
        with pytest.raises(SystemExit):
            load_scene("/nonexistent/file.json")

    def test_load_invalid_json(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("not json")
        with pytest.raises(SystemExit):
            load_scene(str(bad))

    def test_load_invalid_structure(self, tmp_path):
        bad = tmp_path / "bad_struct.json"
        bad.write_text('{"foo": "bar"}')
        with pytest.raises(SystemExit):
            load_scene(str(bad))


class TestTryLoadScene:
    def test_success(self, board_file):
        model, error = try_load_scene(board_file)
        assert model is not None
        assert error == ""

    def test_missing_file_message(self):
        model, error = try_load_scene("/nonexistent/file.json")
        assert model is None
        assert "file not found" in error

    def test_invalid_file_message(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"components": [], "wires": [{"x1": 0}]}))
        model, error = try_load_scene(str(bad))
        assert model is None
        assert error.startswith("invalid board file")


class TestValidateCommand:
    def test_valid_board(self, board_file, capsys):
        args = build_parser().parse_args(["validate", board_file])
        assert cmd_validate(args) == 0
        assert "Board is valid" in capsys.readouterr().out

    def test_invalid_board(self, tmp_path, capsys):
        bad = tmp_path / "bad.json"
        bad.write_text("[]")
        args = build_parser().parse_args(["validate", str(bad)])
        assert cmd_validate(args) == 1
        assert "Board has errors" in capsys.readouterr().err

    def test_via_main(self, board_file):
        assert main(["validate", board_file]) == 0

    def test_non_string_id_reported(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text(json.dumps({"components": [{"id": ["U1"], "x": 0, "y": 0, "w": 1, "h": 1}], "wires": []}))
        assert main(["validate", str(bad)]) == 1


class TestInfoCommand:
    def test_summary_counts(self, sample_scene_dict):
        summary = scene_summary(SceneModel.from_dict(sample_scene_dict))
        assert summary == {
            "grid": {"w": 12, "h": 8},
            "components": 1,
            "boards": 1,
            "pins": 4,
            "wires": {"front": 1, "back": 1},
        }

    def test_json_output(self, board_file, capsys):
        args = build_parser().parse_args(["info", board_file, "--json"])
        assert cmd_info(args) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["pins"] == 4

    def test_text_output_lists_components(self, board_file, capsys):
        assert main(["info", board_file]) == 0
        out = capsys.readouterr().out
        assert "12 x 8" in out
        assert "NE555" in out
        assert "proto" in out


class TestImportLibraryCommand:
    def test_merged_to_stdout(self, board_file, library_file, capsys):
        args = build_parser().parse_args(["import-library", board_file, library_file])
        assert cmd_import_library(args) == 0
        data = json.loads(capsys.readouterr().out)
        labels = [c["label"] for c in data["components"]]
        assert labels == ["NE555", "proto", "LED", "R"]
        assert [c["id"] for c in data["components"][2:]] == ["U3", "U4"]

    def test_merged_to_file(self, board_file, library_file, tmp_path):
        outfile = tmp_path / "merged.json"
        assert main(["import-library", board_file, library_file, "-o", str(outfile)]) == 0
        data = json.loads(outfile.read_text())
        assert len(data["components"]) == 4

    def test_invalid_library(self, board_file, tmp_path):
        bad = tmp_path / "parts.json"
        bad.write_text('{"w": 1, "h": 1}')
        args = build_parser().parse_args(["import-library", board_file, str(bad)])
        assert cmd_import_library(args) == 1


class TestRenderCommand:
    def test_render_writes_png(self, qapp, board_file, tmp_path):
        outfile = tmp_path / "board.png"
        assert main(["render", board_file, "-o", str(outfile)]) == 0
        assert outfile.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


class TestParser:
    def test_no_command(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_validate_requires_scene(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["validate"])

    def test_render_requires_output(self, board_file):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["render", board_file])

    def test_verbose_flag(self, board_file):
        args = build_parser().parse_args(["--verbose", "info", board_file])
        assert args.verbose
