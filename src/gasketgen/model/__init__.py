"""
The MODEL layer contains pure data structures and business logic.
It has NO knowledge of matplotlib or the command line; the session reaches
DXF export only through the controller.
It deals with Units, Geometry, Clearances and the gasket generators.
"""
