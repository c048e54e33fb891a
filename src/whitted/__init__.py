"""Recursive (Whitted-style) ray tracer.

This package renders scenes made of spheres and planes lit by point lights,
using the Phong illumination model, hard shadows, procedural surface patterns
and recursive mirror reflection / Snell's-law refraction.

Subpackages:
    core: Tuples, colors, transforms, rays, shading engine, canvas, render loop
    geometry: Shape primitives and local intersection/normal functions
    materials: Phong materials and procedural patterns
    scene: Scene objects, intersections, lights, and the world container
    camera: Pinhole camera mapping pixels to primary rays
    preview: Tone mapping, image export, and Matplotlib preview utilities
"""

__version__ = "0.1.0"
