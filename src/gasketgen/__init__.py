"""Parametric 2D gasket geometry, clearance checks and DXF R12 export."""
