import argparse
import importlib.util
import random
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "benchmark_rotations.py"
spec = importlib.util.spec_from_file_location("benchmark_rotations", SCRIPT)
benchmark_rotations = importlib.util.module_from_spec(spec)
spec.loader.exec_module(benchmark_rotations)


class TestBenchmarkRotations:
    def test_positive_int(self):
        assert benchmark_rotations.positive_int("3") == 3

        # Zero or negative counts are rejected before any round runs.
        with pytest.raises(argparse.ArgumentTypeError):
            benchmark_rotations.positive_int("0")
        with pytest.raises(argparse.ArgumentTypeError):
            benchmark_rotations.positive_int("-5")

    def test_zero_rounds_rejected(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["benchmark_rotations.py", "--rounds", "0"])
        with pytest.raises(SystemExit):
            benchmark_rotations.main()

    def test_zero_num_data_rejected(self, monkeypatch):
        monkeypatch.setattr("sys.argv", ["benchmark_rotations.py", "--num-data", "0"])
        with pytest.raises(SystemExit):
            benchmark_rotations.main()

    def test_run_round(self):
        result = benchmark_rotations.run_round(num_data=50, order="ascending", rng=random.Random(0))

        # Every key is inserted and then deleted, so both averages are finite and non-negative.
        assert result["insert_rotations"] >= 0
        assert result["delete_rotations"] >= 0
