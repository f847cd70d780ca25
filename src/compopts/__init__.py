"""
Component Options Editor Package

Bridges a modeling host's component attribute dictionaries and an
options dialog:

    selection   -> which component definition to edit
    projector   -> dictionaries flattened for the dialog
    writer      -> dialog edits coerced and written back in one operation

ARCHITECTURAL GUARANTEE:
------------------------
This package contains ZERO knowledge of:
    - Dialog rendering
    - Geometry or the host's undo engine
    - Dynamic Component formula semantics

The host is reached only through an explicit document handle
(see compopts.host). No ambient application state is read.
"""

__version__ = "0.1.0"
