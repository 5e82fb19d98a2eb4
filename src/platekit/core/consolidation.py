"""Freeform "shape consolidation" gesture.

With the shape tool armed, the user drags a stroke across the contours of a
cut layer. Every contour the stroke touches is selected for the rest of the
gesture. On release, two or more touched contours are united into merged
geometry; anything less is discarded.

The gesture is a small state machine passed around as immutable values::

    IDLE --pointer_down--> BUILDING --pointer_up--> CONSOLIDATING --> IDLE
                                    \\--pointer_up (< 2 touched)--> IDLE

Hit-testing and union always run on the rendered contours (after point
reduction and offset), so what gets merged is exactly what the user sees.
There is no cancel and no timeout: releasing the pointer always resolves
the gesture.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

import structlog

from platekit.config import GeometryConfig
from platekit.core import pathfinder
from platekit.core.hit_test import hit_contours
from platekit.core.pipeline import render_layer
from platekit.domain import Layer, Point, RenderTransform, VectorPath

logger = structlog.get_logger(__name__)

UniteFn = Callable[[Sequence[VectorPath]], list[VectorPath]]


class GesturePhase(Enum):
    """Phase of the consolidation gesture."""

    IDLE = "idle"
    BUILDING = "building"
    CONSOLIDATING = "consolidating"


@dataclass(frozen=True)
class Gesture:
    """Snapshot of an in-progress consolidation gesture.

    Attributes:
        phase: Current phase
        stroke: Pointer samples collected so far (sheet coordinates)
        touched: Indices of contours hit by any sample
    """

    phase: GesturePhase = GesturePhase.IDLE
    stroke: tuple[Point, ...] = ()
    touched: frozenset[int] = field(default_factory=frozenset)

    def is_active(self) -> bool:
        return self.phase == GesturePhase.BUILDING


@dataclass(frozen=True)
class ConsolidationOutcome:
    """Result of releasing the pointer.

    Attributes:
        gesture: Gesture after resolution (always idle)
        layer: Layer after resolution (the input layer when nothing merged)
        merged: Whether contours were replaced
        touched: Sorted indices of touched contours
        reason: Why nothing merged, None on success
    """

    gesture: Gesture
    layer: Layer
    merged: bool
    touched: tuple[int, ...] = ()
    reason: str | None = None


class ShapeConsolidator:
    """Drives the consolidation gesture for a cut layer.

    The consolidator holds no gesture state of its own; every handler takes
    the current Gesture (and layer) and returns the next one.

    Example:
        consolidator = ShapeConsolidator()
        gesture = consolidator.pointer_down(Gesture(), start)
        for sample in samples:
            gesture = consolidator.pointer_move(gesture, sample, layer)
        outcome = consolidator.pointer_up(gesture, layer)
        layer = outcome.layer
    """

    def __init__(
        self,
        unite: UniteFn = pathfinder.unite,
        config: GeometryConfig | None = None,
    ) -> None:
        """Initialize the consolidator.

        Args:
            unite: Boolean union collaborator
            config: Geometry thresholds used for rendering and hit-testing
        """
        self._unite = unite
        self.config = config or GeometryConfig()

    def pointer_down(self, gesture: Gesture, point: Point, armed: bool = True) -> Gesture:
        """Start a stroke if the shape tool is armed and no gesture is active."""
        if not armed or gesture.phase != GesturePhase.IDLE:
            return gesture
        return Gesture(phase=GesturePhase.BUILDING, stroke=(point,))

    def pointer_move(self, gesture: Gesture, point: Point, layer: Layer) -> Gesture:
        """Extend the stroke and add every contour hit at ``point``.

        Args:
            gesture: Current gesture
            point: Pointer sample in sheet coordinates
            layer: Layer snapshot to hit-test against

        Returns:
            Updated gesture (unchanged unless building)
        """
        if not gesture.is_active():
            return gesture

        hits = hit_contours(
            point,
            render_layer(layer, self.config),
            RenderTransform.from_layer(layer),
            self.config.determinant_epsilon,
        )
        return Gesture(
            phase=GesturePhase.BUILDING,
            stroke=(*gesture.stroke, point),
            touched=gesture.touched | hits,
        )

    def pointer_up(self, gesture: Gesture, layer: Layer) -> ConsolidationOutcome:
        """Resolve the gesture.

        Two or more touched contours are united. The union result takes the
        place of the first touched contour, the other touched contours are
        removed, the untouched ones keep their rendered geometry, and the
        layer offset is reset to zero since it is now baked in. A failing or
        empty union leaves the layer untouched.

        Args:
            gesture: Current gesture
            layer: Layer snapshot the gesture ran on

        Returns:
            ConsolidationOutcome with an idle gesture
        """
        idle = Gesture()
        if not gesture.is_active():
            return ConsolidationOutcome(gesture=idle, layer=layer, merged=False, reason="no_gesture")

        rendered = render_layer(layer, self.config)
        touched = tuple(
            i for i in sorted(gesture.touched) if i < len(rendered) and rendered[i].is_polygon()
        )
        if len(touched) < 2:
            logger.debug("Gesture discarded", layer=layer.id, touched=list(touched))
            return ConsolidationOutcome(
                gesture=idle, layer=layer, merged=False, touched=touched, reason="too_few_contours"
            )

        gesture = replace(gesture, phase=GesturePhase.CONSOLIDATING)
        selected = [rendered[i] for i in touched]

        try:
            merged = self._unite(selected)
        except Exception as e:
            logger.warning(
                "Union failed",
                layer=layer.id,
                touched=list(touched),
                error=str(e),
                error_type=type(e).__name__,
            )
            return ConsolidationOutcome(
                gesture=idle, layer=layer, merged=False, touched=touched, reason="union_failed"
            )

        if not merged:
            logger.warning("Union returned no contours", layer=layer.id, touched=list(touched))
            return ConsolidationOutcome(
                gesture=idle, layer=layer, merged=False, touched=touched, reason="empty_union"
            )

        touched_set = set(touched)
        paths: list[VectorPath] = []
        for index, path in enumerate(rendered):
            if index == touched[0]:
                paths.extend(merged)
            elif index not in touched_set:
                paths.append(path)

        logger.info(
            "Contours consolidated",
            layer=layer.id,
            phase=gesture.phase.value,
            touched=list(touched),
            produced=len(merged),
        )
        return ConsolidationOutcome(
            gesture=idle,
            layer=replace(layer, vector_paths=paths, offset=0.0),
            merged=True,
            touched=touched,
        )

    def run_stroke(self, layer: Layer, stroke: Sequence[Point]) -> ConsolidationOutcome:
        """Replay a whole stroke: down on the first sample, move on all, up.

        Args:
            layer: Layer to consolidate
            stroke: Pointer samples in sheet coordinates

        Returns:
            ConsolidationOutcome of the release
        """
        gesture = Gesture()
        if stroke:
            gesture = self.pointer_down(gesture, stroke[0])
            for point in stroke:
                gesture = self.pointer_move(gesture, point, layer)
        return self.pointer_up(gesture, layer)
