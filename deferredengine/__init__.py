"""Scene, transforms, basic shapes, importer and uniform-buffer packing for a deferred renderer."""

__version__ = "0.1.0"

__all__ = [
    "buffer",
    "engine",
    "gui",
    "importer",
    "inputs",
    "platform",
    "resources",
    "scene",
    "shaders",
    "shapes",
    "transform",
]