import pytest

from rsacrt.numeric import carmichael, check_key_relation, isqrt_exact, solve_quadratic, split_power_of_two


def test_isqrt_perfect_square():
    assert isqrt_exact(16) == (4, True)


def test_isqrt_not_square():
    root, ok = isqrt_exact(15)
    assert not ok
    assert root == 3


@pytest.mark.parametrize("n, expected", [(0, (0, True)), (1, (1, True)), (2, (1, False)), (3, (1, False)),
                                         (4, (2, True)), (8, (2, False)), (99, (9, False)), (100, (10, True))])
def test_isqrt_small(n, expected):
    assert isqrt_exact(n) == expected


def test_isqrt_large():
    r = (1 << 1023) + 12345
    assert isqrt_exact(r * r) == (r, True)
    assert isqrt_exact(r * r - 1) == (r - 1, False)
    assert isqrt_exact(r * r + 1) == (r, False)


def test_isqrt_floor_below_next_square():
    for r in range(2, 200):
        root, ok = isqrt_exact(r * r - 1)
        assert root == r - 1
        assert not ok


def test_isqrt_negative():
    with pytest.raises(ValueError):
        isqrt_exact(-1)


def test_quadratic_negative_discriminant():
    assert solve_quadratic(1, 0, 4) is None


def test_quadratic_plus_root():
    # x^2 - 5x + 6 = (x - 2)(x - 3)
    assert solve_quadratic(1, -5, 6) == 3


def test_quadratic_non_square_discriminant():
    # x^2 - 2 = 0
    assert solve_quadratic(1, 0, -2) is None


def test_quadratic_non_integer_root():
    # 2x^2 - x = 0 has roots 0 and 1/2; the "+" branch gives 1/2
    assert solve_quadratic(2, -1, 0) is None


def test_quadratic_negative_root():
    # x^2 + 5x + 6 = (x + 2)(x + 3)
    assert solve_quadratic(1, 5, 6) == -2


def test_quadratic_not_quadratic():
    with pytest.raises(ValueError):
        solve_quadratic(0, 1, 1)


def test_split_power_of_two():
    assert split_power_of_two(48) == (3, 4)
    assert split_power_of_two(1) == (1, 0)
    assert split_power_of_two(1 << 200) == (1, 200)
    with pytest.raises(ValueError):
        split_power_of_two(0)


def test_key_relation():
    assert carmichael(61, 53) == 780
    assert check_key_relation(17, 2753, 61, 53)
    assert check_key_relation(17, 413, 61, 53)  # 2753 mod 780
    assert not check_key_relation(17, 2755, 61, 53)
