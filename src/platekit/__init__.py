"""PlateKit - Lay out print images and cut paths on a sheet.

PlateKit traces images into closed vector cut-paths, offsets them for
cutting tolerance, lets contours be consolidated with a freeform gesture and
exports the resulting cut file.

Example:
    $ platekit trace sticker.png --offset 4 --svg sticker-cut.svg

This will create sticker.platekit.json with a print layer and a cut layer,
plus an SVG cut file with the offset contours.
"""

__version__ = "0.1.0"
__author__ = "PlateKit contributors"

__all__ = ["__author__", "__version__"]
