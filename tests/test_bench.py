import logging

import pytest


def test_generate_dataset_writes_pairs(tmp_path, rng):
    from bench.dataset import generate_dataset

    path = generate_dataset(tmp_path / "nested" / "pairs", 7, digits=12, hex_digits=True, rng=rng)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 7
    for line in lines:
        left, right = line.split(";")
        assert len(left) == len(right) == 12
        int(left, 16), int(right, 16)


def test_generate_default_datasets_scales_counts(tmp_path, rng):
    from bench.dataset import DEFAULT_DATASETS, generate_default_datasets

    paths = generate_default_datasets(tmp_path, scale=0.01, digits=10, rng=rng)
    assert sorted(p.name for p in paths) == sorted(name for name, _, _ in DEFAULT_DATASETS)
    mul = tmp_path / "BigDataDeciMul"
    assert len(mul.read_text(encoding="utf-8").splitlines()) == 1
    assert len((tmp_path / "BigDataHexAdd").read_text(encoding="utf-8").splitlines()) == 10


def test_load_pairs_skips_malformed_lines(tmp_path):
    from bench.harness import load_pairs

    path = tmp_path / "pairs"
    path.write_text("1;2\nno separator\n;5\n6;\n 3;4 \n", encoding="utf-8")
    assert load_pairs(path) == [("1", "2"), ("3", "4")]


def test_load_pairs_missing_file_raises_file_io(tmp_path):
    from bench.harness import load_pairs
    from bigint.errors import FileIO

    with pytest.raises(FileIO):
        load_pairs(tmp_path / "missing")


def test_run_benchmark_counts_failures(engine, caplog):
    from bench.harness import run_benchmark

    pairs = [("ff", "1"), ("zz", "1"), ("abc", "def")]
    with caplog.at_level(logging.INFO, logger="bench.harness"):
        result = run_benchmark("*", pairs, multiplier=engine)
    assert result.label == "Hexadecimal Multiplication"
    assert result.count == 3
    assert result.errors == 1
    assert result.seconds >= 0
    assert result.per_op_us >= 0
    assert any(r.getMessage().startswith("Hexadecimal Multiplication: ") for r in caplog.records)


def test_run_benchmark_rejects_division():
    from bench.harness import run_benchmark
    from bigint.errors import InvalidInput

    with pytest.raises(InvalidInput):
        run_benchmark("/", [("1", "1")])


def test_run_file_benchmark_uses_dataset_names(tmp_path, rng):
    from bench.dataset import generate_default_datasets
    from bench.harness import dataset_name, run_file_benchmark

    assert dataset_name("-", False) == "BigDataDeciSub"
    assert dataset_name("*", True) == "BigDataHexMul"
    generate_default_datasets(tmp_path, scale=0.01, digits=20, rng=rng)
    expected = len((tmp_path / "BigDataDeciSub").read_text(encoding="utf-8").splitlines())
    result = run_file_benchmark(tmp_path, "-", hex_mode=False)
    assert result.count == expected
    assert result.errors == 0


def test_timer_logs_nanoseconds(caplog):
    from bench.harness import Timer

    with caplog.at_level(logging.INFO, logger="bench.harness"):
        with Timer("noop") as timer:
            pass
    assert timer.elapsed_ns >= 0
    assert timer.seconds == timer.elapsed_ns / 1e9
    assert caplog.records[-1].getMessage() == f"noop: {timer.elapsed_ns} ns"
