"""
Label layout and print-rendering engine.

``core`` holds the element model, geometry, data binding, serialization,
templates and the undoable editing session; ``printing`` turns a design
into device pixels for a chosen printer resolution.
"""

__version__ = "1.0.0"
