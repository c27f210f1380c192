"""Tests for procedural and image textures and the texture loader."""

import numpy as np
import pytest
from PIL import Image

from pathtracer.core.errors import SceneError, TextureLoadError
from pathtracer.core.vector import Color, Point
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.perlin import Perlin
from pathtracer.materials.texture_loader import create_image_material, load_image, load_texture
from pathtracer.materials.textures import (CheckerTexture, ImageTexture, NoiseTexture,
                                           SolidColor, as_texture)

RED = [255, 0, 0]
GREEN = [0, 255, 0]
BLUE = [0, 0, 255]
WHITE = [255, 255, 255]


@pytest.fixture
def quad_pixels():
    """2x2 image: red, green on the top row; blue, white on the bottom row."""
    return np.array([[RED, GREEN], [BLUE, WHITE]], dtype=np.uint8)


class TestSolidAndChecker:
    def test_solid_color(self):
        assert SolidColor(Color(0.1, 0.2, 0.3)).value(0.5, 0.5, Point(9, 9, 9)) == Color(0.1, 0.2, 0.3)

    def test_as_texture(self):
        texture = SolidColor(Color(1, 1, 1))
        assert as_texture(texture) is texture
        assert isinstance(as_texture(Color(1, 1, 1)), SolidColor)

    def test_checker_sign_selects_texture(self):
        checker = CheckerTexture(Color(1, 1, 1), Color(0, 0, 0))
        assert checker.value(0, 0, Point(0.1, 0.1, 0.1)) == Color(1, 1, 1)
        assert checker.value(0, 0, Point(-0.1, 0.1, 0.1)) == Color(0, 0, 0)
        assert checker.value(0, 0, Point(-0.1, -0.1, 0.1)) == Color(1, 1, 1)

    def test_checker_nests_textures(self):
        inner = CheckerTexture(Color(0.5, 0.5, 0.5), Color(0.2, 0.2, 0.2))
        checker = CheckerTexture(inner, Color(0, 0, 0))
        assert checker.value(0, 0, Point(0.1, 0.1, 0.1)) == Color(0.5, 0.5, 0.5)


class TestPerlin:
    def test_seeded_tables_repeat(self):
        a = Perlin(np.random.default_rng(3))
        b = Perlin(np.random.default_rng(3))
        p = Point(0.3, 1.7, -2.2)
        assert a.noise(p) == b.noise(p)
        assert a.turb(p) == b.turb(p)

    def test_gradients_are_unit_length(self, np_rng):
        perlin = Perlin(np_rng)
        assert perlin.ranvec.shape == (256, 3)
        np.testing.assert_allclose(np.linalg.norm(perlin.ranvec, axis=1), 1.0)
        for perm in (perlin.perm_x, perlin.perm_y, perlin.perm_z):
            assert sorted(perm.tolist()) == list(range(256))

    def test_noise_vanishes_on_lattice_points(self, np_rng):
        perlin = Perlin(np_rng)
        assert perlin.noise(Point(1.0, 2.0, 3.0)) == pytest.approx(0.0, abs=1e-12)
        assert perlin.noise(Point(-4.0, 0.0, 7.0)) == pytest.approx(0.0, abs=1e-12)

    def test_noise_range_and_variation(self, np_rng, rng):
        perlin = Perlin(np_rng)
        values = [perlin.noise(Point(rng.uniform(-10, 10), rng.uniform(-10, 10), rng.uniform(-10, 10)))
                  for _ in range(300)]
        assert all(-1.0 <= v <= 1.0 for v in values)
        assert max(values) - min(values) > 0.1

    def test_noise_is_continuous(self, np_rng):
        perlin = Perlin(np_rng)
        p = Point(0.37, 0.52, 0.81)
        q = Point(0.37 + 1e-6, 0.52, 0.81)
        assert perlin.noise(p) == pytest.approx(perlin.noise(q), abs=1e-4)

    def test_turbulence_is_non_negative(self, np_rng, rng):
        perlin = Perlin(np_rng)
        for _ in range(100):
            p = Point(rng.uniform(-5, 5), rng.uniform(-5, 5), rng.uniform(-5, 5))
            assert perlin.turb(p) >= 0.0
            assert perlin.turb(p, depth=1) == pytest.approx(abs(perlin.noise(p)))


class TestNoiseTexture:
    @pytest.mark.parametrize("marble", [True, False])
    def test_values_are_grey_in_unit_range(self, marble, np_rng, rng):
        texture = NoiseTexture(4.0, marble=marble, rng=np_rng)
        for _ in range(100):
            c = texture.value(0, 0, Point(rng.uniform(-3, 3), rng.uniform(-3, 3), rng.uniform(-3, 3)))
            assert c.x == c.y == c.z
            assert 0.0 <= c.x <= 1.0

    def test_shared_noise_instance(self, np_rng):
        perlin = Perlin(np_rng)
        a = NoiseTexture(1.0, noise=perlin)
        b = NoiseTexture(1.0, noise=perlin)
        p = Point(0.4, 0.5, 0.6)
        assert a.value(0, 0, p) == b.value(0, 0, p)


class TestImageTexture:
    def test_corners(self, quad_pixels):
        texture = ImageTexture(quad_pixels)
        assert (texture.width, texture.height) == (2, 2)
        # v = 1 is the top of the image.
        assert texture.value(0.0, 1.0, Point(0, 0, 0)) == Color(1.0, 0.0, 0.0)
        assert texture.value(1.0, 1.0, Point(0, 0, 0)) == Color(0.0, 1.0, 0.0)
        assert texture.value(0.0, 0.0, Point(0, 0, 0)) == Color(0.0, 0.0, 1.0)
        assert texture.value(1.0, 0.0, Point(0, 0, 0)) == Color(1.0, 1.0, 1.0)

    def test_bilinear_center(self, quad_pixels):
        c = ImageTexture(quad_pixels).value(0.5, 0.5, Point(0, 0, 0))
        assert c.x == pytest.approx(0.5)
        assert c.y == pytest.approx(0.5)
        assert c.z == pytest.approx(0.5)

    def test_coordinates_are_clamped(self, quad_pixels):
        texture = ImageTexture(quad_pixels)
        assert texture.value(-3.0, 7.0, Point(0, 0, 0)) == texture.value(0.0, 1.0, Point(0, 0, 0))

    def test_missing_data_is_cyan(self):
        assert ImageTexture(None).value(0.5, 0.5, Point(0, 0, 0)) == Color(0.0, 1.0, 1.0)

    def test_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            ImageTexture(np.zeros((4, 4), dtype=np.uint8))

    def test_alpha_channel_is_ignored(self):
        rgba = np.full((1, 1, 4), 255, dtype=np.uint8)
        assert ImageTexture(rgba).value(0.5, 0.5, Point(0, 0, 0)) == Color(1.0, 1.0, 1.0)


class TestTextureLoader:
    def test_load_png(self, tmp_path, quad_pixels):
        path = tmp_path / "quad.png"
        Image.fromarray(quad_pixels).save(path)
        data = load_image(str(path))
        assert data.shape == (2, 2, 3)
        assert data.dtype == np.uint8
        np.testing.assert_array_equal(data, quad_pixels)
        texture = load_texture(str(path))
        assert texture.value(0.0, 1.0, Point(0, 0, 0)) == Color(1.0, 0.0, 0.0)

    def test_converts_greyscale(self, tmp_path):
        path = tmp_path / "grey.png"
        Image.fromarray(np.full((3, 5), 128, dtype=np.uint8)).save(path)
        assert load_image(str(path)).shape == (3, 5, 3)

    def test_missing_file(self, tmp_path):
        with pytest.raises(TextureLoadError) as excinfo:
            load_texture(str(tmp_path / "nope.jpg"))
        assert isinstance(excinfo.value, SceneError)
        assert excinfo.value.path == str(tmp_path / "nope.jpg")

    def test_undecodable_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"definitely not an image")
        with pytest.raises(TextureLoadError):
            load_image(str(path))

    def test_create_image_material(self, tmp_path, quad_pixels):
        path = tmp_path / "quad.png"
        Image.fromarray(quad_pixels).save(path)
        material = create_image_material(str(path), Lambertian)
        assert isinstance(material, Lambertian)
        assert isinstance(material.texture, ImageTexture)
