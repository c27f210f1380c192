# core/errors.py


class RayTracerError(Exception):
    """Base class for every error raised by the renderer."""


class SceneError(RayTracerError):
    """A scene could not be constructed. Rendering never starts after one."""


class BVHBuildError(SceneError):
    """
    The bounding volume hierarchy was asked to partition geometry it cannot
    handle: no objects, an unbounded object, an inverted box or a NaN key.
    """


class TextureLoadError(SceneError):
    """An image texture asset is missing or could not be decoded."""

    def __init__(self, path, reason: str):
        super().__init__(f"Error loading texture {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigError(RayTracerError, ValueError):
    """Invalid render configuration."""


class RenderError(RayTracerError):
    """A render pass produced an unusable image buffer."""
