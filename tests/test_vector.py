"""Tests for Vector3, Ray and the sampling helpers in core.utils."""

import math
import random

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.utils import (clamp, degrees_to_radians, random_in_hemisphere,
                                   random_in_unit_disk, random_in_unit_sphere,
                                   random_unit_vector, random_vector, reflect, refract,
                                   schlick)
from pathtracer.core.vector import Vector3


class TestVector3:
    """Arithmetic on the shared point/direction/color type."""

    def test_arithmetic(self):
        a = Vector3(1.0, 2.0, 3.0)
        b = Vector3(4.0, 5.0, 6.0)
        assert a + b == Vector3(5.0, 7.0, 9.0)
        assert b - a == Vector3(3.0, 3.0, 3.0)
        assert -a == Vector3(-1.0, -2.0, -3.0)
        assert a * 2 == Vector3(2.0, 4.0, 6.0)
        assert 2 * a == Vector3(2.0, 4.0, 6.0)
        assert a * b == Vector3(4.0, 10.0, 18.0)
        assert b / 2 == Vector3(2.0, 2.5, 3.0)

    def test_dot_and_cross(self):
        x = Vector3(1.0, 0.0, 0.0)
        y = Vector3(0.0, 1.0, 0.0)
        assert x.dot(y) == 0.0
        assert x.cross(y) == Vector3(0.0, 0.0, 1.0)
        assert y.cross(x) == Vector3(0.0, 0.0, -1.0)

    def test_length_and_normalize(self):
        v = Vector3(3.0, 4.0, 0.0)
        assert v.length_squared() == 25.0
        assert v.length() == 5.0
        assert v.normalize().length() == pytest.approx(1.0)
        assert v.unit_vector() == v.normalize()

    def test_normalize_zero_vector(self):
        """A zero vector normalizes to itself instead of dividing by zero."""
        assert Vector3.zeros().normalize() == Vector3(0.0, 0.0, 0.0)

    def test_indexing_and_iteration(self):
        v = Vector3(7.0, 8.0, 9.0)
        assert (v[0], v[1], v[2]) == (7.0, 8.0, 9.0)
        assert list(v) == [7.0, 8.0, 9.0]
        assert v.to_tuple() == (7.0, 8.0, 9.0)
        with pytest.raises(IndexError):
            v[3]

    def test_near_zero(self):
        assert Vector3(1e-9, -1e-9, 0.0).near_zero()
        assert not Vector3(1e-3, 0.0, 0.0).near_zero()

    def test_add_into_accumulates_in_place(self):
        acc = Vector3.zeros()
        result = acc.add_into(Vector3(1.0, 2.0, 3.0))
        acc.add_into(Vector3(1.0, 1.0, 1.0))
        assert result is acc
        assert acc == Vector3(2.0, 3.0, 4.0)

    def test_hashable(self):
        assert len({Vector3(1.0, 2.0, 3.0), Vector3(1.0, 2.0, 3.0)}) == 1


class TestRay:
    def test_at(self):
        ray = Ray(Vector3(1.0, 0.0, 0.0), Vector3(0.0, 2.0, 0.0), time=0.25)
        assert ray.at(1.5) == Vector3(1.0, 3.0, 0.0)
        assert ray.time == 0.25

    def test_default_time(self):
        assert Ray(Vector3.zeros(), Vector3.ones()).time == 0.0


class TestSampling:
    """Random sampling helpers always honour their domain."""

    def test_random_in_unit_sphere(self, rng):
        for _ in range(200):
            assert random_in_unit_sphere(rng).length_squared() < 1.0

    def test_random_unit_vector(self, rng):
        for _ in range(200):
            assert random_unit_vector(rng).length() == pytest.approx(1.0)

    def test_random_in_hemisphere(self, rng):
        normal = Vector3(0.0, 1.0, 0.0)
        for _ in range(200):
            assert random_in_hemisphere(normal, rng).dot(normal) >= 0.0

    def test_random_in_unit_disk(self, rng):
        for _ in range(200):
            p = random_in_unit_disk(rng)
            assert p.z == 0.0
            assert p.length_squared() < 1.0

    def test_random_vector_range(self, rng):
        for _ in range(100):
            v = random_vector(2.0, 3.0, rng)
            assert all(2.0 <= c <= 3.0 for c in v)

    def test_seeded_generators_repeat(self):
        assert random_in_unit_sphere(random.Random(9)) == random_in_unit_sphere(random.Random(9))


class TestOptics:
    def test_reflect(self):
        v = Vector3(1.0, -1.0, 0.0)
        n = Vector3(0.0, 1.0, 0.0)
        assert reflect(v, n) == Vector3(1.0, 1.0, 0.0)

    def test_refract_normal_incidence(self):
        """Straight-on incidence is never bent, whatever the ratio."""
        d = refract(Vector3(0.0, -1.0, 0.0), Vector3(0.0, 1.0, 0.0), 1.0 / 1.5)
        assert d.x == pytest.approx(0.0)
        assert d.y == pytest.approx(-1.0)

    def test_refract_follows_snell(self):
        s = 1.0 / math.sqrt(2.0)
        d = refract(Vector3(s, -s, 0.0), Vector3(0.0, 1.0, 0.0), 1.0 / 1.5)
        sin_out = d.x / d.length()
        assert sin_out == pytest.approx(s / 1.5)

    def test_schlick(self):
        assert schlick(1.0, 1.5) == pytest.approx(0.04)
        assert schlick(0.0, 1.5) == pytest.approx(1.0)

    def test_scalar_helpers(self):
        assert degrees_to_radians(180.0) == pytest.approx(math.pi)
        assert clamp(5.0, 0.0, 1.0) == 1.0
        assert clamp(-5.0, 0.0, 1.0) == 0.0
        assert clamp(0.5, 0.0, 1.0) == 0.5
