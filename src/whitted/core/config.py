"""Numeric constants shared across the tracer.

All tolerances used by the geometry and shading code live here so the
intersection, shadow and refraction tests agree on what "close enough" means.
"""

# Tolerance for tuple equality, parallel-ray tests and surface offsets
EPSILON = 1e-5

# Smallest determinant magnitude accepted for an invertible transform
DETERMINANT_EPSILON = 1e-12

# Default number of secondary-ray bounces allowed per primary ray
DEFAULT_MAX_DEPTH = 5
