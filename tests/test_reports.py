def test_measure_multiplication_collects_counters(rng):
    from reports.performance_dashboard import measure_multiplication

    timings = measure_multiplication(sizes=(4, 16), samples=2, rng=rng)
    assert [t.digits for t in timings] == [4, 16]
    small, large = timings
    assert small.splits == 0
    assert large.splits > 0
    assert large.cache_entries > 0
    assert all(t.naive_s >= 0 and t.karatsuba_s >= 0 and t.cached_s >= 0 for t in timings)


def test_performance_dashboard_png(tmp_path, rng):
    from reports.performance_dashboard import SizeTiming, make_performance_dashboard, measure_multiplication

    timings = measure_multiplication(sizes=(8, 16), samples=1, rng=rng)
    out = make_performance_dashboard(tmp_path / "charts" / "performance.png", timings)
    assert out.exists()
    assert out.stat().st_size > 0

    synthetic = [SizeTiming(8, 1e-4, 2e-4, 1e-6, 3, 9, 13), SizeTiming(16, 4e-4, 5e-4, 2e-6, 9, 27, 40)]
    assert make_performance_dashboard(tmp_path / "synthetic.png", synthetic).exists()
