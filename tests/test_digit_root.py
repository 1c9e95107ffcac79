import pytest
from modular_vortex import (
    digit_sum,
    digit_root,
    exp_digit_root,
    generate_roots,
    detect_cycle,
    Vortex,
    InvalidArgumentError,
)


def test_digit_sum():
    assert digit_sum(9875, 10) == 29
    assert digit_sum(0, 10) == 0
    assert digit_sum(0b1011, 2) == 3
    assert digit_sum(0xFF, 16) == 30


def test_digit_root_known_values():
    assert digit_root(9875, 10) == 2
    assert digit_root(0, 10) == 0
    assert digit_root(9, 10) == 9
    assert digit_root(5, 7) == 5


def test_digit_root_base10_formula():
    """Standard digital root: 1 + (x - 1) mod 9 for x > 0."""
    for x in range(1, 2000):
        assert digit_root(x, 10) == 1 + (x - 1) % 9


@pytest.mark.parametrize("radix", [2, 3, 7, 10, 16, 97])
def test_digit_root_stays_below_radix(radix):
    for x in range(0, 500):
        assert 0 <= digit_root(x, radix) < radix


def test_exp_digit_root_base_cases():
    assert exp_digit_root(12345, 0, 10) == 1
    assert exp_digit_root(12345, 1, 10) == digit_root(12345, 10)


@pytest.mark.parametrize("radix", [2, 5, 10, 16])
def test_exp_digit_root_matches_direct_power(radix):
    """dr(x^n) computed without the power equals dr of the actual power."""
    for x in range(0, 13):
        for n in range(1, 7):
            assert exp_digit_root(x, n, radix) == digit_root(x ** n, radix), \
                f"x={x} n={n} radix={radix}"


def test_exp_digit_root_large_exponent():
    """Iterative accumulation: no recursion limit on n."""
    assert exp_digit_root(2, 5000, 10) == digit_root(2 ** 5000, 10)


@pytest.mark.parametrize("fn,args", [
    (digit_sum, (10, 1)),
    (digit_sum, (-1, 10)),
    (digit_root, (10, 0)),
    (digit_root, (-5, 10)),
    (exp_digit_root, (3, -1, 10)),
    (exp_digit_root, (3, 2, 1)),
])
def test_digit_functions_reject_bad_arguments(fn, args):
    with pytest.raises(InvalidArgumentError):
        fn(*args)


def test_digit_root_generator_drives_loop():
    roots = generate_roots(5, 97, generator="digit_root")
    assert all(0 <= r < 97 for r in roots)
    assert len(roots) <= 98
    assert detect_cycle(roots)
    for k, value in enumerate(roots):
        assert value == exp_digit_root(5, k + 1, 97)


def test_digit_root_generator_base10():
    """Digital roots of 2^k: 2, 4, 8, 7, 5, 1, 2, ..."""
    result = Vortex(10, 2, generator="digit_root").compute()
    assert result.roots == [2, 4, 8, 7, 5, 1, 2]
    assert result.tail == [2, 4, 8, 7, 5, 1]
    assert result.generator == "digit_root"


def test_digit_root_generator_needs_radix_two():
    with pytest.raises(InvalidArgumentError):
        Vortex(1, 3, generator="digit_root").compute()
