"""File I/O layer for PlateKit.

This module handles everything that touches files or raster data, keeping
the geometry engine free of I/O.

Key responsibilities:
- Load images and trace them into cut-paths (OpenCV)
- Save and load project files (JSON)
- Export cut layers as SVG (svgwrite)
- Export print layers as a PDF sheet (OpenCV, Pillow)
"""

from platekit.io.export import build_svg, export_svg, write_svg
from platekit.io.pdf import export_pdf, render_print_sheet, write_pdf
from platekit.io.project import default_project_path, load_project, save_project
from platekit.io.tracer import (
    create_cut_layer,
    create_print_layer,
    decode_image,
    encode_image,
    find_layer_image,
    layer_image,
    load_image,
    retrace_layer,
    stored_trace_config,
    trace_image,
)

__all__ = [
    "build_svg",
    "create_cut_layer",
    "create_print_layer",
    "decode_image",
    "default_project_path",
    "encode_image",
    "export_pdf",
    "export_svg",
    "find_layer_image",
    "layer_image",
    "load_image",
    "load_project",
    "render_print_sheet",
    "retrace_layer",
    "save_project",
    "stored_trace_config",
    "trace_image",
    "write_pdf",
    "write_svg",
]
