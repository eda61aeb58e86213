"""Monoraster - Rasterize vector paths into antialiased coverage.

Monoraster decomposes path edges into curve pieces that are monotonic along both
axes and sweeps scanlines across them to compute exact per-pixel coverage for
fills and strokes, without relying on a tessellation library.

Example:
    $ monoraster path "M 2 2 L 30 2 L 16 28 Z" -o triangle.png

This will write triangle.png with the filled triangle rendered in grayscale.
"""

__version__ = "0.1.0"
__author__ = "Dimosthenis Kaponis"

__all__ = ["__author__", "__version__"]
