"""Unit tests for Vector2 arithmetic."""

from __future__ import annotations

import math

import pytest

from arena_run.vector import Vector2, ZERO


pytestmark = pytest.mark.unit


class TestArithmetic:
    def test_add_and_sub(self):
        a = Vector2(1.0, 2.0)
        b = Vector2(3.0, -4.0)
        assert a.add(b) == Vector2(4.0, -2.0)
        assert a.sub(b) == Vector2(-2.0, 6.0)
        assert a + b == a.add(b)
        assert a - b == a.sub(b)

    def test_scale_both_sides(self):
        v = Vector2(1.5, -2.0)
        assert v.scale(2) == Vector2(3.0, -4.0)
        assert v * 2 == 2 * v == v.scale(2)

    def test_divide(self):
        assert Vector2(3.0, 9.0).divide(3) == Vector2(1.0, 3.0)
        assert Vector2(3.0, 9.0) / 3 == Vector2(1.0, 3.0)

    def test_length(self):
        assert Vector2(3.0, 4.0).length() == 5.0
        assert ZERO.length() == 0.0

    def test_distance_to(self):
        assert Vector2(1.0, 1.0).distance_to(Vector2(4.0, 5.0)) == 5.0

    def test_unpacks(self):
        x, y = Vector2(7.0, 8.0)
        assert (x, y) == (7.0, 8.0)

    def test_is_immutable(self):
        v = Vector2(1.0, 1.0)
        with pytest.raises(AttributeError):
            v.x = 5.0


class TestDivideByZero:
    """Division by zero yields non-finite components instead of raising."""

    def test_signs(self):
        v = Vector2(2.0, -3.0).divide(0)
        assert v.x == math.inf
        assert v.y == -math.inf

    def test_zero_over_zero_is_nan(self):
        v = Vector2(0.0, 1.0) / 0
        assert math.isnan(v.x)
        assert v.y == math.inf


class TestNormalize:
    def test_zero_vector_stays_zero(self):
        n = Vector2(0.0, 0.0).normalize()
        assert n == Vector2(0.0, 0.0)
        assert not math.isnan(n.x) and not math.isnan(n.y)

    def test_unit_length(self):
        n = Vector2(3.0, 4.0).normalize()
        assert n.x == pytest.approx(0.6)
        assert n.y == pytest.approx(0.8)
        assert n.length() == pytest.approx(1.0)

    def test_diagonal(self):
        n = Vector2(1.0, -1.0).normalize()
        assert n.x == pytest.approx(1 / math.sqrt(2))
        assert n.y == pytest.approx(-1 / math.sqrt(2))
