"""Tests for the scattering and emission rules of each material."""

import math

import pytest

from pathtracer.core.ray import Ray
from pathtracer.core.vector import Color, Point, Vector3
from pathtracer.geometry.hittable import HitRecord
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.diffuse_light import DiffuseLight
from pathtracer.materials.isotropic import Isotropic
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal
from pathtracer.materials.textures import CheckerTexture, SolidColor

from conftest import FixedRandom


class SequenceRandom:
    """Generator that replays a fixed list of uniform draws."""

    def __init__(self, values):
        self.values = list(values)

    def uniform(self, a, b):
        return self.values.pop(0)

    def random(self):
        return self.values.pop(0)


def _record(normal=Vector3(0.0, 1.0, 0.0), front_face=True, material=None):
    return HitRecord(p=Point(0.0, 0.0, 0.0), normal=normal, t=1.0, u=0.25, v=0.75,
                     front_face=front_face, material=material)


def _assert_same_direction(a, b):
    a = a.normalize()
    b = b.normalize()
    assert a.x == pytest.approx(b.x, abs=1e-9)
    assert a.y == pytest.approx(b.y, abs=1e-9)
    assert a.z == pytest.approx(b.z, abs=1e-9)


class TestMaterialBase:
    def test_default_emission_is_black(self):
        assert Material().emitted(0.0, 0.0, Point(0, 0, 0)) == Color(0, 0, 0)

    def test_scatter_is_abstract(self):
        with pytest.raises(NotImplementedError):
            Material().scatter(Ray(Point(0, 0, 0), Vector3(0, 0, 1)), _record())


class TestLambertian:
    def test_scatters_into_normal_hemisphere(self, rng):
        material = Lambertian(Color(0.2, 0.4, 0.6))
        ray_in = Ray(Point(0, 5, 0), Vector3(0, -1, 0), time=0.3)
        for _ in range(100):
            scattered, attenuation = material.scatter(ray_in, _record(), rng)
            assert scattered.direction.dot(Vector3(0, 1, 0)) > 0
            assert scattered.origin == Point(0, 0, 0)
            assert scattered.time == 0.3
            assert attenuation == Color(0.2, 0.4, 0.6)

    def test_degenerate_direction_falls_back_to_normal(self):
        material = Lambertian(Color(0.5, 0.5, 0.5))
        # A unit-sphere sample that almost exactly cancels the normal.
        rng = SequenceRandom([0.0, -(1.0 - 1e-10), 0.0])
        scattered, _ = material.scatter(Ray(Point(0, 5, 0), Vector3(0, -1, 0)), _record(), rng)
        assert scattered.direction == Vector3(0.0, 1.0, 0.0)

    def test_textured_albedo(self, rng):
        checker = CheckerTexture(Color(1, 0, 0), Color(0, 0, 1))
        material = Lambertian(checker)
        rec = _record()
        rec.p = Point(0.1, 0.1, 0.1)
        _, attenuation = material.scatter(Ray(Point(0, 5, 0), Vector3(0, -1, 0)), rec, rng)
        assert attenuation == Color(1, 0, 0)

    def test_plain_color_is_wrapped(self):
        assert isinstance(Lambertian(Color(1, 1, 1)).texture, SolidColor)


class TestMetal:
    def test_mirror_reflection(self, rng):
        material = Metal(Color(0.9, 0.9, 0.9), 0.0)
        ray_in = Ray(Point(-1, 1, 0), Vector3(1, -1, 0), time=0.7)
        scattered, attenuation = material.scatter(ray_in, _record(), rng)
        _assert_same_direction(scattered.direction, Vector3(1, 1, 0))
        assert attenuation == Color(0.9, 0.9, 0.9)
        assert scattered.time == 0.7

    def test_fuzz_is_clamped(self):
        assert Metal(Color(1, 1, 1), 5.0).fuzz == 1.0
        assert Metal(Color(1, 1, 1), 0.3).fuzz == 0.3

    def test_reflection_into_surface_is_absorbed(self, rng):
        material = Metal(Color(1, 1, 1), 0.0)
        # Travelling along the normal, the mirror direction points into the surface.
        ray_in = Ray(Point(0, -1, 0), Vector3(0, 1, 0))
        assert material.scatter(ray_in, _record(), rng) is None

    def test_fuzzy_reflection_stays_close(self, rng):
        material = Metal(Color(1, 1, 1), 0.1)
        ray_in = Ray(Point(0, 1, 0), Vector3(0, -1, 0))
        for _ in range(50):
            result = material.scatter(ray_in, _record(), rng)
            assert result is not None
            direction = result[0].direction
            assert (direction - Vector3(0, 1, 0)).length() < 0.1 + 1e-9


class TestDielectric:
    def test_unit_index_passes_straight_through(self, fixed_rng):
        """A sphere with index 1.0 does not bend the ray."""
        sphere = Sphere(Point(0, 0, 0), 1.0, Dielectric(1.0))
        direction = Vector3(0.02, -0.01, 1.0)
        ray = Ray(Point(0.1, 0.2, -5), direction)
        rec = sphere.hit(ray, 0.001, math.inf)
        assert rec is not None
        scattered, attenuation = rec.material.scatter(ray, rec, fixed_rng)
        _assert_same_direction(scattered.direction, direction)
        assert attenuation == Color(1.0, 1.0, 1.0)

    def test_unit_index_exit_also_straight(self, fixed_rng):
        sphere = Sphere(Point(0, 0, 0), 1.0, Dielectric(1.0))
        direction = Vector3(0.1, -0.2, 1.0)
        ray = Ray(Point(0.1, 0.1, 0), direction)
        rec = sphere.hit(ray, 0.001, math.inf)
        assert not rec.front_face
        scattered, _ = rec.material.scatter(ray, rec, fixed_rng)
        _assert_same_direction(scattered.direction, direction)

    def test_normal_incidence_refracts_straight(self, fixed_rng):
        material = Dielectric(1.5)
        ray_in = Ray(Point(0, 1, 0), Vector3(0, -1, 0))
        scattered, _ = material.scatter(ray_in, _record(), fixed_rng)
        _assert_same_direction(scattered.direction, Vector3(0, -1, 0))

    def test_total_internal_reflection(self):
        """Leaving glass at a grazing angle always reflects."""
        material = Dielectric(1.5)
        ray_in = Ray(Point(-1, 0.1, 0), Vector3(1, -0.1, 0))
        rec = _record(front_face=False)
        for draw in (0.0, 0.5, 0.999):
            scattered, _ = material.scatter(ray_in, rec, FixedRandom(draw))
            assert scattered.direction.y > 0

    def test_snell_bending_on_entry(self):
        material = Dielectric(1.5)
        s = 1.0 / math.sqrt(2.0)
        ray_in = Ray(Point(-1, 1, 0), Vector3(s, -s, 0))
        scattered, _ = material.scatter(ray_in, _record(), FixedRandom(0.99))
        direction = scattered.direction.normalize()
        assert direction.y < 0
        assert direction.x == pytest.approx(s / 1.5)

    def test_reflectance_draw_chooses_reflection(self):
        material = Dielectric(1.5)
        s = 1.0 / math.sqrt(2.0)
        ray_in = Ray(Point(-1, 1, 0), Vector3(s, -s, 0))
        # Reflectance at 45 degrees is about 0.05, so a draw of 0 reflects.
        scattered, _ = material.scatter(ray_in, _record(), FixedRandom(0.0))
        _assert_same_direction(scattered.direction, Vector3(1, 1, 0))


class TestDiffuseLight:
    def test_never_scatters(self, rng):
        light = DiffuseLight(Color(4, 4, 4))
        assert light.scatter(Ray(Point(0, 1, 0), Vector3(0, -1, 0)), _record(), rng) is None

    def test_emits_its_color(self):
        assert DiffuseLight(Color(4, 4, 4)).emitted(0.1, 0.2, Point(0, 0, 0)) == Color(4, 4, 4)

    def test_textured_emission(self):
        light = DiffuseLight(CheckerTexture(Color(1, 1, 1), Color(0, 0, 0)))
        assert light.emitted(0.0, 0.0, Point(-0.1, 0.1, 0.1)) == Color(0, 0, 0)


class TestIsotropic:
    def test_scatters_anywhere(self, rng):
        material = Isotropic(Color(0.8, 0.8, 0.8))
        ray_in = Ray(Point(0, 0, -5), Vector3(0, 0, 1), time=0.4)
        directions = []
        for _ in range(200):
            scattered, attenuation = material.scatter(ray_in, _record(), rng)
            assert scattered.direction.length_squared() < 1.0
            assert scattered.origin == Point(0, 0, 0)
            assert scattered.time == 0.4
            assert attenuation == Color(0.8, 0.8, 0.8)
            directions.append(scattered.direction)
        # Both hemispheres around the incoming direction are reached.
        assert any(d.z < 0 for d in directions)
        assert any(d.z > 0 for d in directions)
