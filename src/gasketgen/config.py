"""
Configuration & Drawing Constants
=================================
This module serves as the central registry for the constants shared by the
geometry engine, the DXF writer and the command line shell.

Why is this file needed?
------------------------
1. Consistency: sampling densities and clearance thresholds are used by
   several generators and must agree between preview and export.
2. Tuning: the graded clearance thresholds are a policy decision, kept here
   instead of being hard-coded in the clearance engine.

Exports:
    LAYER_PERIMETER, LAYER_HOLES (str): The two fixed DXF layer names.
    FIRETUBE_ERROR_BELOW, FIRETUBE_WARN_BELOW (float): Graded clearance thresholds.
"""

# Layers
LAYER_PERIMETER: str = "Perimeter"
LAYER_HOLES: str = "Holes"
LAYER_COLOR: int = 7  # ACI white/black
LAYER_LINETYPE: str = "Continuous"

# DXF output
DXF_VERSION: str = "R12"
DXF_LUNITS_DECIMAL: int = 2
DXF_SUFFIX: str = ".dxf"

# Polyline sampling
ELLIPSE_SEGMENTS: int = 280
CORNER_SEGMENTS: int = 24

# Adaptive arc sampling for the tangent-arc outline
ARC_MAX_SEGMENT_LENGTH: float = 0.06
ARC_MIN_SEGMENTS: int = 10

# Clearance thresholds (firetube graded model, in drawing units)
FIRETUBE_ERROR_BELOW: float = 0.5
FIRETUBE_WARN_BELOW: float = 1.0

# Numerical tolerance for "is this point on the boundary" style comparisons
GEOMETRY_EPS: float = 1e-9

# Default output base names per generator
DEFAULT_FILENAMES: dict[str, str] = {
    "ellipse": "ellipse_gasket",
    "flange": "flange_gasket",
    "firetube": "firetube_gasket",
    "jumper": "jumper_gasket",
}
