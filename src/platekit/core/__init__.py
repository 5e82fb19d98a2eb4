"""Core contour geometry engine for PlateKit.

This module contains the core algorithms for:

- Geometry primitives (signed area, winding, normals, intersections)
- Point reduction of traced contours
- Signed offset with mitre and arc joins
- Self-intersection detection and loop hit-testing
- The shape consolidation gesture
- Planar boolean operations (via Shapely)

All functions are:
- Synchronous and single-threaded
- Pure (inputs are never mutated; new paths/layers are returned)
- Total over their input domain: degenerate input is a no-op, not an error

Key functions:
- signed_area: Shoelace signed area
- offset_path: Offset a closed path by a signed distance
- reduce_points: Greedy distance-based point reduction
- find_self_intersections: Crossings between non-adjacent edges
- hit_test: Main-shape and loop containment of a pointer location
- render_layer: Reduce and offset every contour of a cut layer

Key classes:
- ShapeConsolidator: Pointer handlers for the consolidation gesture
"""

from platekit.core import pathfinder
from platekit.core.consolidation import (
    ConsolidationOutcome,
    Gesture,
    GesturePhase,
    ShapeConsolidator,
)
from platekit.core.geometry import (
    is_clockwise,
    line_intersection,
    offset_direction,
    point_in_polygon,
    segment_intersection,
    signed_area,
    winding_direction,
)
from platekit.core.hit_test import HitTestResult, hit_contours, hit_test, is_hit
from platekit.core.intersections import (
    SelfIntersection,
    extract_loop,
    find_self_intersections,
)
from platekit.core.offset import offset_path
from platekit.core.pipeline import render_layer, render_path
from platekit.core.reduction import reduce_points

__all__ = [
    # Consolidation
    "ConsolidationOutcome",
    "Gesture",
    "GesturePhase",
    "ShapeConsolidator",
    # Hit testing
    "HitTestResult",
    "SelfIntersection",
    "extract_loop",
    "find_self_intersections",
    "hit_contours",
    "hit_test",
    "is_hit",
    # Geometry functions
    "is_clockwise",
    "line_intersection",
    "offset_direction",
    "point_in_polygon",
    "segment_intersection",
    "signed_area",
    "winding_direction",
    # Contour transformations
    "offset_path",
    "reduce_points",
    "render_layer",
    "render_path",
    # Boolean operations
    "pathfinder",
]
