"""Vertices of the plot graph, one per reported event."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from . import annotations
from . import emotions as emotion_table


class VertexType(str, Enum):
    """Types of plot events."""

    ROOT = "root"
    ACTION = "action"
    PERCEPT = "percept"
    INTENTION = "intention"
    SPEECH = "speech"
    EVENT = "event"

    # Transient, removed by the structural pass
    EMOTION = "emotion"
    LISTEN = "listen"


def derive_intention(label: str, vertex_type: VertexType) -> str:
    """Return the intention an event of this type and label serves, or "".

    ``!plant(wheat)[source(self)]`` as INTENTION serves ``plant(wheat)``; a speech
    act serves the communicated content itself.
    """
    if vertex_type == VertexType.INTENTION:
        return annotations.remove_annots(label).lstrip("+-").lstrip("!")
    if vertex_type == VertexType.SPEECH:
        return annotations.remove_annots(label)
    return ""


@dataclass(eq=False)
class Vertex:
    """A single plot event of one character.

    `root` is the handle of the owning character's ROOT vertex and only serves
    to decide whether two events belong to the same character.
    """

    label: str
    type: VertexType = VertexType.EVENT
    step: int = 0
    emotions: set[str] = field(default_factory=set)
    intention: str = ""
    root: Optional[int] = None
    id: int = -1
    polyvalent: bool = False
    units: list[str] = field(default_factory=list)

    @classmethod
    def create(cls, label: str, vertex_type: VertexType = VertexType.EVENT, step: int = 0) -> "Vertex":
        """Create a vertex with its intention derived from label and type."""
        return cls(label=label, type=vertex_type, step=step, intention=derive_intention(label, vertex_type))

    def retype(self, vertex_type: VertexType, label: str) -> None:
        """Change type and label, keeping the derived intention consistent."""
        self.type = vertex_type
        self.label = label
        self.intention = derive_intention(label, vertex_type)

    @property
    def without_annotation(self) -> str:
        return annotations.remove_annots(self.label)

    @property
    def annotation_block(self) -> str:
        return annotations.get_annots(self.label)

    @property
    def cause(self) -> str:
        return annotations.get_annotation(self.label, annotations.CAUSE)

    @property
    def source(self) -> str:
        return annotations.get_annotation(self.label, annotations.SOURCE)

    @property
    def functor(self) -> str:
        """Name of the event term, without arguments and sign."""
        return self.without_annotation.split("(", 1)[0].lstrip("+-!")

    def get_annotation(self, key: str) -> str:
        return annotations.get_annotation(self.label, key)

    def has_emotion(self, emotion: Optional[str] = None) -> bool:
        if emotion is None:
            return bool(self.emotions)
        return emotion in self.emotions

    def add_emotion(self, emotion: str) -> None:
        self.emotions.add(emotion)

    @property
    def valences(self) -> tuple[bool, bool]:
        """(has positive emotion, has negative emotion)"""
        return emotion_table.valences(self.emotions)

    def copy(self) -> "Vertex":
        return Vertex(
            label=self.label,
            type=self.type,
            step=self.step,
            emotions=set(self.emotions),
            intention=self.intention,
            root=self.root,
            id=self.id,
            polyvalent=self.polyvalent,
            units=list(self.units),
        )

    def __str__(self) -> str:
        text = self.label
        if self.emotions:
            text += "(" + ",".join(sorted(self.emotions)) + ")"
        if self.polyvalent:
            text += " *"
        return text
