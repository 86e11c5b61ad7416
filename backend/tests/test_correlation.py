# backend/tests/test_correlation.py
import pytest

from backend.app.services.correlation import correlation_matrix, paired_values, pearson


def test_pearson_perfect_and_inverse():
    assert pearson([1, 2, 3], [2, 4, 6]) == pytest.approx(1.0)
    assert pearson([1, 2, 3], [6, 4, 2]) == pytest.approx(-1.0)


def test_pearson_degenerate_cases_return_zero():
    assert pearson([], []) == 0
    assert pearson([1, 2], [1, 2, 3]) == 0
    assert pearson([5, 5, 5], [1, 2, 3]) == 0
    assert pearson([0.1, 0.1, 0.1], [0.3, 0.3, 0.3]) == 0


def test_self_correlation_through_pairwise_engine():
    x = [3.2, -1, 7, 7, 0.5]
    xs, ys = paired_values(x, x)
    assert pearson(xs, ys) == pytest.approx(1.0)


def test_pairwise_complete_case_alignment():
    a = [1, 2, 3, None, 5, 6, 7, 8, 9, 10]
    b = [2, 1, 4, 3, 6, 5, 8, "n/a", 10, 9]
    c = [5, 3, 8, 1, 9, 2, 7, 4, 6, 0]

    ab_x, ab_y = paired_values(a, b)
    assert len(ab_x) == 8
    assert 4 not in ab_x and 8 not in ab_x  # rows 3 and 7 dropped

    ac_x, ac_y = paired_values(a, c)
    assert len(ac_x) == 9
    assert 8 in ac_x                        # row 7 still used for (a, c)


def test_paired_values_stops_at_shorter_column():
    xs, ys = paired_values([1, 2, 3, 4], [1, 2])
    assert xs == [1.0, 2.0] and ys == [1.0, 2.0]


def test_matrix_is_symmetric_with_unit_diagonal():
    cols = {
        "x": [1, 2, 3, 4],
        "y": [1, 3, 2, 4],
        "z": ["4", "3", "x", "1"],
    }
    result = correlation_matrix(cols)
    assert result.columns == ["x", "y", "z"]
    m = result.matrix
    for i in range(3):
        assert m[i][i] == 1
        for j in range(3):
            assert m[i][j] == m[j][i]
    assert m[0][1] == 0.8


def test_matrix_rounds_to_three_decimals():
    result = correlation_matrix({"a": [1, 2, 3, 4, 5], "b": [2, 1, 4, 3, 7]})
    r = result.matrix[0][1]
    assert r == round(r, 3)


def test_matrix_requires_two_columns():
    with pytest.raises(ValueError):
        correlation_matrix({"only": [1, 2, 3]})
