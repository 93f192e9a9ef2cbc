"""Second post-processing pass: resolves event annotations into plot edges.

Walks each character's spine once, keeping the character's events seen so far
(most recent first), and derives:

- ACTUALIZATION edges from intentions to the actions carrying them out
- CAUSALITY edges from happenings to the percepts they caused
- MOTIVATION edges from motivating events to intentions and speech acts
- EQUIVALENCE edges from re-asserted intentions to their first occurrence
- TERMINATION edges for dropped intentions, tradeoffs, losses and resolutions
- CROSSCHARACTER edges between events of different characters sharing an id

Under-specified structure (unparsable or irrelevant intention drops) is
removed instead of failing the run.
"""

import logging
import re
from collections import defaultdict
from itertools import combinations
from typing import Optional

from plot_graph_analyzer.graph.annotations import remove_annotation, remove_annots, split_top_level
from plot_graph_analyzer.graph.edge import EdgeType
from plot_graph_analyzer.graph.plot_graph import PlotGraph
from plot_graph_analyzer.graph.vertex import Vertex, VertexType

from .walker import Handler, SpinePass

logger = logging.getLogger(__name__)

DROP_INTENTION = "drop_intention"

_DROP_PATTERN = re.compile(
    DROP_INTENTION + r"\((?P<drop>.*?)\)\[" + EdgeType.CAUSALITY.value + r"\((?P<cause>.*)\)\]"
)
_GOAL_PREFIX = re.compile(r"^[+-]?!")


def _sign_and_content(label: str) -> tuple[str, str]:
    """Split ``+has(bread)`` into ("+", "has(bread)")."""
    return label[:1], label[1:]


class AnnotationPass(SpinePass):
    """Resolves motivation, cause, source and cross-character annotations."""

    def apply(self, graph: PlotGraph) -> PlotGraph:
        self.cross_character_ids: dict[str, list[Vertex]] = defaultdict(list)
        return super().apply(graph)

    def handlers(self) -> dict[VertexType, Handler]:
        return {
            VertexType.ACTION: self.visit_action,
            VertexType.PERCEPT: self.visit_percept,
            VertexType.SPEECH: self.visit_speech,
            VertexType.INTENTION: self.visit_intention,
            VertexType.EVENT: self.visit_event,
            VertexType.EMOTION: self.visit_emotion,
            VertexType.LISTEN: self.visit_listen,
        }

    # ------------------------------------------------------------------
    # Leftovers of earlier stages
    # ------------------------------------------------------------------

    def visit_event(self, vertex: Vertex) -> None:
        logger.warning("Located semantically underspecified EVENT vertex: %s", vertex.label)

    def visit_emotion(self, vertex: Vertex) -> None:
        logger.warning("Found emotion vertex during annotation processing, should have been removed: %s", vertex.label)

    def visit_listen(self, vertex: Vertex) -> None:
        logger.warning("Found listen vertex during annotation processing, should have been removed: %s", vertex.label)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def visit_action(self, vertex: Vertex) -> None:
        motivation = vertex.get_annotation(EdgeType.MOTIVATION.value)
        if motivation:
            for target in self.history:
                if motivation == target.intention:
                    self.graph.add_edge(EdgeType.ACTUALIZATION, target, vertex)
                    break

        self.process_cross_character_annotation(vertex)
        self.remember(vertex)

    def visit_percept(self, vertex: Vertex) -> None:
        cause = vertex.cause
        if cause:
            for target in self.history:
                # actions are perceived as-is, happenings as +cause
                if target.without_annotation in (cause, "+" + cause):
                    self.graph.add_edge(EdgeType.CAUSALITY, target, vertex)
                    break

        self.handle_tradeoff(vertex)
        self.process_cross_character_annotation(vertex)
        if vertex.has_emotion():
            self.handle_loss_and_resolution(vertex)
        self.remember(vertex)

    def visit_speech(self, vertex: Vertex) -> None:
        self.attach_motivation(vertex)
        self.remember(vertex)

    def visit_intention(self, vertex: Vertex) -> None:
        if vertex.label.startswith(DROP_INTENTION):
            self.handle_drop_intention(vertex)
            return

        if self.look_for_perseverance(vertex) and self.settings.perseverance_skips_motivation:
            return

        self.attach_motivation(vertex)
        self.remember(vertex)

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def look_for_perseverance(self, vertex: Vertex) -> bool:
        """Link a re-asserted intention to its earlier occurrence."""
        if not vertex.intention:
            return False
        for target in self.history:
            if target.intention == vertex.intention and target.root == vertex.root:
                # equivalence edges point up
                self.graph.add_edge(EdgeType.EQUIVALENCE, vertex, target)
                return True
        return False

    def attach_motivation(self, vertex: Vertex) -> None:
        """Create MOTIVATION edges for the ``;`` separated targets of a motivation annotation."""
        annotation = vertex.get_annotation(EdgeType.MOTIVATION.value)
        if not annotation:
            return

        motivating: list[Vertex] = []
        for motivation in split_top_level(annotation, ";"):
            motivation = remove_annots(motivation.strip())
            for target in self.history:
                content = target.without_annotation
                is_motivation = (
                    motivation == target.intention       # intentions
                    or motivation == content             # percepts
                    or motivation == content[1:]         # percepts of added beliefs
                )
                if is_motivation and target not in motivating:
                    self.graph.add_edge(EdgeType.MOTIVATION, target, vertex)
                    motivating.append(target)
                    break

        if not self.settings.keep_motivation or motivating:
            vertex.label = remove_annotation(vertex.label, EdgeType.MOTIVATION.value)

    def handle_drop_intention(self, vertex: Vertex) -> None:
        """Turn ``drop_intention(<goal>)[causality(<cause>)]`` into a TERMINATION edge."""
        match = _DROP_PATTERN.match(vertex.label)
        if match is None:
            logger.debug("Removing degenerate intention drop: %s", vertex.label)
            self.remove(vertex)
            return

        dropped = remove_annots(_GOAL_PREFIX.sub("", match.group("drop")))
        dropped_intention = self._find(lambda target: target.intention == dropped)
        if dropped_intention is None:
            # the dropped intention never made it into the plot
            self.remove(vertex)
            return

        cause = match.group("cause")
        if cause.startswith("+!"):
            # +!rethink_life and !rethink_life are the same cause
            cause = cause[1:]

        cause_vertex = self._find(lambda target: target.without_annotation == cause)
        if cause_vertex is not None:
            self.create_termination(cause_vertex, dropped_intention)
            self.remove(vertex)
        else:
            vertex_type = VertexType.INTENTION if cause.startswith("!") else VertexType.PERCEPT
            vertex.retype(vertex_type, cause)
            self.create_termination(vertex, dropped_intention)
            self.remember(vertex)

    def handle_tradeoff(self, vertex: Vertex) -> bool:
        """Terminate the addition of a belief whose removal was caused by another event.

        ``-has(bread)[source(eat(bread))]`` makes ``eat(bread)`` terminate ``+has(bread)``.

        Returns:
            Whether a tradeoff was found
        """
        source = vertex.source
        if not source or vertex.label.startswith("+"):
            return False
        source = remove_annots(source)

        src = self._find(
            lambda target: target.without_annotation == source
            or (target.without_annotation == source[1:] and target.type == VertexType.ACTION)
        )
        if src is None:
            return False

        content = _sign_and_content(vertex.without_annotation)[1]
        for target in self.history:
            sign, target_content = _sign_and_content(target.without_annotation)
            if target_content == content and sign == "+":
                self.create_termination(src, target)
                return True
        return False

    def handle_loss_and_resolution(self, vertex: Vertex) -> None:
        """Terminate an earlier opposite-signed belief of the same character.

        Positive then negative is a loss, negative then positive a resolution. A
        later event with mixed emotions is either, and terminates only the most
        recent match; a single-valenced one terminates every match.
        """
        sign, content = _sign_and_content(vertex.without_annotation)
        is_positive, is_negative = vertex.valences

        for target in self.history:
            target_sign, target_content = _sign_and_content(target.without_annotation)
            if target_content != content or target_sign == sign or target.root != vertex.root:
                continue

            if is_positive and is_negative:
                self.create_termination(vertex, target)
                return

            was_positive, was_negative = target.valences
            if (not is_positive and was_positive) or (not is_negative and was_negative):
                self.create_termination(vertex, target)

    def process_cross_character_annotation(self, vertex: Vertex) -> None:
        cross_character_id = vertex.get_annotation(EdgeType.CROSSCHARACTER.value)
        if cross_character_id and vertex not in self.cross_character_ids[cross_character_id]:
            self.cross_character_ids[cross_character_id].append(vertex)

    def post_processing(self) -> None:
        """Connect events of different characters that share a cross-character id."""
        for cross_character_id, connected in self.cross_character_ids.items():
            for first, second in combinations(connected, 2):
                if first.root == second.root:
                    continue
                self.graph.add_bidirectional_edge(EdgeType.CROSSCHARACTER, first, second)
                logger.debug("Connected %s and %s (id %s)", first.label, second.label, cross_character_id)

    # ------------------------------------------------------------------

    def create_termination(self, source: Vertex, target: Vertex) -> None:
        self.graph.add_edge(EdgeType.TERMINATION, source, target)

    def _find(self, predicate) -> Optional[Vertex]:
        for target in self.history:
            if predicate(target):
                return target
        return None
