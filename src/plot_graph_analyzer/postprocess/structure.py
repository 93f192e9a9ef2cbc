"""First post-processing pass: structural cleanup.

Folds appraisal (EMOTION) vertices into the events they appraise, replaces
LISTEN vertices by communication edges into the receiver's reaction, and trims
the event loop a simulation ends in when it is paused because every character
keeps repeating itself.
"""

import logging
from typing import Optional

from plot_graph_analyzer.graph.annotations import remove_annots
from plot_graph_analyzer.graph.vertex import Vertex, VertexType

from .walker import Handler, SpinePass

logger = logging.getLogger(__name__)


class StructurePass(SpinePass):
    """Removes the transient vertex types before annotation processing."""

    def handlers(self) -> dict[VertexType, Handler]:
        return {
            VertexType.EMOTION: self.visit_emotion,
            VertexType.LISTEN: self.visit_listen,
        }

    def visit_emotion(self, vertex: Vertex) -> None:
        emotion = vertex.without_annotation
        cause = vertex.cause
        if cause:
            cause = remove_annots(cause)

        target = None
        for candidate in self.history:
            if not cause or candidate.without_annotation in (cause, "+" + cause):
                target = candidate
                break

        if target is not None:
            target.add_emotion(emotion)
        else:
            logger.warning("No appraised event found for emotion vertex: %s", vertex.label)
        self.remove(vertex)

    def visit_listen(self, vertex: Vertex) -> None:
        # communication edges move on to the receiver's next event
        self.remove(vertex)

    def post_processing(self) -> None:
        if not self.settings.trim_repeated_tail:
            return
        loops = {root.id: self.repeated_tail(root) for root in self.graph.roots}
        # a simulation is only paused once every character is looping
        if not loops or not all(loops.values()):
            return
        for root in self.graph.roots:
            self.trim_repeated_tail(root, *loops[root.id])

    def repeated_tail(self, root: Vertex) -> Optional[tuple[int, int]]:
        """Find the shortest event block a spine ends in at least `repeat_threshold` times.

        Returns:
            (repetitions, block size), or None if the spine does not end in a loop
        """
        keys = [(vertex.type, vertex.without_annotation) for vertex in self.graph.spine(root)]
        threshold = self.settings.repeat_threshold
        end = len(keys)

        for size in range(1, end // threshold + 1):
            block = keys[end - size:]
            repeats = 1
            while (repeats + 1) * size <= end and keys[end - (repeats + 1) * size:end - repeats * size] == block:
                repeats += 1
            if repeats >= threshold:
                return repeats, size
        return None

    def trim_repeated_tail(self, root: Vertex, repeats: int, size: int) -> int:
        """Remove all but the first repetition of the looping block at the end of a spine.

        Returns:
            Number of removed vertices
        """
        spine = self.graph.spine(root)
        surplus = spine[len(spine) - (repeats - 1) * size:]
        for vertex in surplus:
            self.graph.remove_vertex_and_patch(root, vertex)
        logger.info(
            "Trimmed %d repetitions of a %d event loop from %s's plot",
            repeats - 1, size, root.label,
        )
        return len(surplus)
