"""Tests for the command-line runner."""

import os

import pytest

import main


class TestMain:
    def test_list(self, capsys):
        assert main.main(["--list"]) == 0
        out = capsys.readouterr().out
        assert "letter-fish" in out
        assert "golden-ratio-spiral" in out

    def test_headless_recording(self, tmp_path):
        code = main.main(
            ["fibonacci", "--headless", "--record", "--frames", "3", "--output-dir", str(tmp_path)]
        )
        assert code == 0
        assert sorted(os.listdir(tmp_path)) == ["Fibonacci001.png", "Fibonacci002.png", "Fibonacci003.png"]

    def test_headless_preview_writes_nothing(self, tmp_path):
        engine = main.run_headless("genuary1", frames=5, output_dir=str(tmp_path))
        assert engine.halt_reason == "static sketch drawn"
        assert os.listdir(tmp_path) == []

    def test_unknown_sketch_fails(self):
        assert main.main(["no-such-sketch", "--headless"]) == 1

    def test_sketch_name_required(self):
        with pytest.raises(SystemExit):
            main.main([])

    def test_seed_is_applied(self):
        engine, _ = main.build_engine("letter-fish", seed=11)
        assert engine.sketch.config.seed == 11
