"""
The CONTROLLER layer turns validated specs into output (DXF text and files)
and exposes the engine API used by the session and the command line.
"""
