"""Edge types of the plot graph."""

import uuid
from dataclasses import dataclass, field
from enum import Enum


class EdgeType(str, Enum):
    """Types of edges between plot events.

    The values double as annotation keys in event labels, e.g.
    ``farm_work[motivation(hungry)]`` or ``-has(bread)[crossCharacter(17)]``.
    """

    # Spine edges, linking a character's events chronologically
    ROOT = "root"
    TEMPORAL = "temporal"

    # Overlays added by the post-processor
    MOTIVATION = "motivation"
    COMMUNICATION = "communication"
    ACTUALIZATION = "actualization"
    TERMINATION = "termination"
    EQUIVALENCE = "equivalence"
    CAUSALITY = "causality"
    CROSSCHARACTER = "crossCharacter"

    @property
    def is_spine(self) -> bool:
        return self in SPINE_EDGE_TYPES


SPINE_EDGE_TYPES = frozenset({EdgeType.ROOT, EdgeType.TEMPORAL})


@dataclass(frozen=True)
class Edge:
    """A typed, directed edge. Its id is independent of its type."""

    type: EdgeType
    source: int
    target: int
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
