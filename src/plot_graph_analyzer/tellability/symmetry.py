"""
Semantic Symmetry

Repetition statistics over each character's sequences of emotions, intentions,
beliefs and actions. The statistics are logged for inspection; the symmetry
value itself is not weighted yet and stays 0.
"""

import logging
from dataclasses import dataclass, field

from plot_graph_analyzer.graph.plot_graph import PlotGraph
from plot_graph_analyzer.graph.vertex import Vertex, VertexType

logger = logging.getLogger(__name__)


@dataclass
class CharacterSequences:
    """A character's events, split into parallel sequences of terms."""
    emotions: list[str] = field(default_factory=list)
    intentions: list[str] = field(default_factory=list)
    beliefs: list[str] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    @classmethod
    def from_spine(cls, spine: list[Vertex]) -> "CharacterSequences":
        sequences = cls()
        for vertex in spine:
            sequences.emotions.extend(sorted(vertex.emotions))
            if vertex.intention:
                sequences.intentions.append(vertex.intention)
            if vertex.type == VertexType.PERCEPT:
                sequences.beliefs.append(vertex.functor)
            if vertex.type == VertexType.ACTION:
                sequences.actions.append(vertex.functor)
        return sequences

    def items(self) -> list[tuple[str, list[str]]]:
        return [
            ("emotions", self.emotions),
            ("intentions", self.intentions),
            ("beliefs", self.beliefs),
            ("actions", self.actions),
        ]


@dataclass
class RepetitionStatistics:
    """Weighted distances between repeated occurrences of subsequences.

    gap: space between the end of one occurrence and the start of the next
    (negative when occurrences overlap); overlap: +1 per overlapping and -1 per
    separate repetition; spacing: distance between occurrence starts. Each sum
    is weighted by the subsequence's number of occurrences.
    """
    gap: int = 0
    overlap: int = 0
    spacing: int = 0


def subsequence_starts(sequence: list[str]) -> dict[tuple[str, ...], list[int]]:
    """Map every contiguous subsequence of length >= 2 (not touching the end) to its start indices."""
    starts: dict[tuple[str, ...], list[int]] = {}
    for start in range(len(sequence)):
        for end in range(len(sequence) - 1, start + 1, -1):
            starts.setdefault(tuple(sequence[start:end]), []).append(start)
    return starts


def repetition_statistics(sequence: list[str]) -> RepetitionStatistics:
    stats = RepetitionStatistics()
    for subsequence, starts in subsequence_starts(sequence).items():
        if len(starts) < 2:
            continue
        gap = overlap = spacing = 0
        for previous, current in zip(starts, starts[1:]):
            distance = current - (previous + len(subsequence))
            gap += distance
            overlap += 1 if distance < 0 else -1
            spacing += current - previous
        stats.gap += gap * len(starts)
        stats.overlap += overlap * len(starts)
        stats.spacing += spacing * len(starts)
    return stats


def sequence_symmetry(sequence: list[str]) -> float:
    stats = repetition_statistics(sequence)
    logger.debug("Gap: %d, overlap: %d, spacing: %d", stats.gap, stats.overlap, stats.spacing)
    # TODO: weight the statistics into a symmetry value once a weighting is chosen
    return 0.0


def compute_symmetry(graph: PlotGraph) -> float:
    """Average symmetry over all characters of the plot."""
    roots = graph.roots
    if not roots:
        return 0.0

    symmetries = []
    for root in roots:
        sequences = CharacterSequences.from_spine(graph.spine(root))
        values = []
        for kind, sequence in sequences.items():
            logger.debug("%s %s:", root.label, kind)
            values.append(sequence_symmetry(sequence))
        symmetries.append(sum(values) / len(values))

    symmetry = sum(symmetries) / len(roots)
    logger.info("Overall symmetry: %s", symmetry)
    return symmetry
