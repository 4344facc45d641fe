"""Tests for the gridplace command line."""

import json

import pytest
import yaml

from gridplace.cli import load_layout_document, main


@pytest.fixture
def layout_file(tmp_path):
    path = tmp_path / "dashboard.yaml"
    path.write_text(
        "config:\n"
        "  preset: xs\n"
        "items:\n"
        "  - {i: a, x: 0, y: 0, w: 1, h: 1}\n"
        "  - {i: b, x: 0, y: 1, w: 1, h: 1}\n"
        "  - {i: c, x: 0, y: 4, w: 1, h: 1}\n"
    )
    return path


def item_positions(output):
    data = yaml.safe_load(output)
    return {item["i"]: (item["x"], item["y"]) for item in data["items"]}


class TestLoadLayoutDocument:
    """Tests for reading layout documents."""

    def test_mapping_with_config(self, layout_file):
        items, config = load_layout_document(str(layout_file))
        assert len(items) == 3
        assert config.cols == 4

    def test_bare_list(self, tmp_path):
        path = tmp_path / "layout.json"
        path.write_text(json.dumps([{"i": "a", "x": 0, "y": 0, "w": 1, "h": 1}]))
        items, config = load_layout_document(str(path))
        assert items[0]["i"] == "a"
        assert config.cols == 12

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_layout_document(str(tmp_path / "missing.yaml"))


class TestCommands:
    """Tests for CLI subcommands."""

    def test_no_command(self, capsys):
        assert main([]) == 1

    def test_compact(self, layout_file, capsys):
        assert main(["compact", str(layout_file)]) == 0
        out = capsys.readouterr().out
        assert item_positions(out) == {"a": (0, 0), "b": (0, 1), "c": (0, 2)}

    def test_compact_horizontal(self, layout_file, capsys):
        assert main(["compact", str(layout_file), "--mode", "horizontal"]) == 0
        out = capsys.readouterr().out
        assert item_positions(out)["c"] == (0, 4)

    def test_compact_allow_overlap_keeps_gaps(self, layout_file, capsys):
        assert main(["compact", str(layout_file), "--allow-overlap"]) == 0
        out = capsys.readouterr().out
        assert item_positions(out)["c"] == (0, 4)

    def test_move(self, layout_file, capsys):
        assert main(["move", str(layout_file), "b", "0", "0"]) == 0
        positions = item_positions(capsys.readouterr().out)
        assert positions["b"] == (0, 0)
        assert positions["a"] == (0, 1)

    def test_move_past_last_column_clamped(self, layout_file, capsys):
        assert main(["move", str(layout_file), "a", "10", "0"]) == 0
        positions = item_positions(capsys.readouterr().out)
        assert positions["a"] == (3, 0)

    def test_move_prevented(self, layout_file, capsys):
        assert main(["move", str(layout_file), "b", "0", "0", "--prevent-collision"]) == 0
        positions = item_positions(capsys.readouterr().out)
        assert positions["b"] == (0, 1)

    def test_validate_ok(self, layout_file, capsys):
        assert main(["validate", str(layout_file)]) == 0
        assert "Layout OK: 3 items" in capsys.readouterr().out

    def test_validate_reports_overlap(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text(
            "- {i: a, x: 0, y: 0, w: 2, h: 2}\n"
            "- {i: b, x: 1, y: 1, w: 2, h: 2}\n"
            "- {i: c, x: 11, y: 0, w: 2, h: 1}\n"
        )
        assert main(["validate", str(path)]) == 1
        out = capsys.readouterr().out
        assert "Overlap: a and b" in out
        assert "c: overflows 12 columns" in out

    def test_validate_malformed(self, tmp_path, capsys):
        path = tmp_path / "bad.yaml"
        path.write_text("- {i: a, x: zero, y: 0, w: 1, h: 1}\n")
        assert main(["validate", str(path)]) == 1
        assert "items[0].x must be a number!" in capsys.readouterr().err

    def test_position(self, layout_file, capsys):
        assert main(["position", str(layout_file), "--width", "420"]) == 0
        data = yaml.safe_load(capsys.readouterr().out)
        assert data["positions"]["a"] == {"top": 10, "left": 10, "width": 93, "height": 30}

    def test_presets(self, capsys):
        assert main(["presets"]) == 0
        out = capsys.readouterr().out
        assert "default" in out
        assert "xxs" in out

    def test_missing_file_is_error(self, tmp_path, capsys):
        assert main(["compact", str(tmp_path / "missing.yaml")]) == 1
        assert "Error:" in capsys.readouterr().err
