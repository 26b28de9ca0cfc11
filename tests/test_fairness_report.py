import math

import numpy as np

from squart.analysis.fairness_report import (
    CombinationRecord,
    analyze_combination,
    diff_matrix,
    move_samples,
    run_analysis,
)


def test_move_samples_shape():
    samples = move_samples(5, 6, 0, seed_count=4)
    assert samples.shape == (4, 2)
    assert (samples[:, 0] == 25).all()
    assert (samples[:, 1] == 24).all()


def test_square_open_board_is_perfectly_balanced():
    record = analyze_combination(5, 5, 0, seed_count=3)

    assert record.average_horizontal == 20
    assert record.average_vertical == 20
    assert record.zero_diff_rate == 1.0
    assert record.average_abs_diff == 0


def test_rectangular_open_board_always_differs():
    record = analyze_combination(5, 7, 0, seed_count=3)

    assert record.average_horizontal == 30
    assert record.average_vertical == 28
    assert record.zero_diff_rate == 0.0
    assert record.average_abs_diff == 2


def test_run_analysis_sorts_best_first():
    results = run_analysis((5, 6), (5, 6), [0], seed_count=2)

    assert len(results) == 4
    assert [(r.rows, r.cols) for r in results[:2]] == [(5, 5), (6, 6)]
    assert all(a.average_abs_diff <= b.average_abs_diff for a, b in zip(results, results[1:]))


def test_ties_prefer_higher_zero_diff_rate():
    low = CombinationRecord(5, 5, 10, 1, 1, zero_diff_rate=0.2, average_abs_diff=1.0)
    high = CombinationRecord(5, 6, 10, 1, 1, zero_diff_rate=0.6, average_abs_diff=1.0)
    ordered = sorted([low, high], key=lambda r: (r.average_abs_diff, -r.zero_diff_rate))
    assert ordered == [high, low]


def test_diff_matrix_fills_requested_percentage():
    results = run_analysis((5, 6), (5, 7), [0], seed_count=1)
    matrix = diff_matrix(results, 0, (5, 6), (5, 7))

    assert matrix.shape == (2, 3)
    assert matrix[0, 0] == 0
    assert matrix[0, 2] == 2
    assert matrix[1, 0] == 1

    missing = diff_matrix(results, 10, (5, 6), (5, 7))
    assert np.isnan(missing).all()


def test_format_line():
    record = analyze_combination(5, 5, 0, seed_count=1)
    assert record.format_line() == "5×5 | inactive 0% | avg|Δ|=0.00 | zero 100% | H=20.0 | V=20.0"
    assert not math.isnan(record.average_abs_diff)
