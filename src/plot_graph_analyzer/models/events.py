"""Models for the event reports produced by the reasoning engine."""

from pydantic import BaseModel, Field

from plot_graph_analyzer.graph.vertex import VertexType


class EventReport(BaseModel):
    """A single event reported for one character at one simulation step."""

    character: str
    label: str  # symbolic term, optionally annotated: plant(wheat)[motivation(plant(wheat))]
    type: VertexType = VertexType.EVENT
    step: int = Field(default=0, ge=0)

    # Speech acts: who hears the message and which intention motivated it
    receivers: list[str] = Field(default_factory=list)
    motivation: str = ""

    # Emotions: the event that was appraised
    cause: str = ""


class PlotLog(BaseModel):
    """A complete recorded simulation run."""

    name: str = ""
    characters: list[str] = Field(default_factory=list)
    events: list[EventReport] = Field(default_factory=list)

    def involved_characters(self) -> list[str]:
        """Declared characters plus any that only appear in events, in order of appearance."""
        names = list(self.characters)
        for event in self.events:
            for name in (event.character, *event.receivers):
                if name not in names:
                    names.append(name)
        return names
