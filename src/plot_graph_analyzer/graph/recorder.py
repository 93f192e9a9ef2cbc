"""Incremental assembly of the plot graph from the engine's event stream."""

from typing import TYPE_CHECKING, Iterable, Optional

from .annotations import CAUSE
from .edge import EdgeType
from .plot_graph import PlotGraph, PlotGraphError
from .vertex import Vertex, VertexType

if TYPE_CHECKING:
    from plot_graph_analyzer.analysis import AnalysisResult, PlotAnalyzer
    from plot_graph_analyzer.models.events import EventReport


class PlotRecorder:
    """Records the events of one simulation run into a live plot graph.

    There is a single producer: the simulation driving the characters. Analysis
    always runs on a clone, so the live graph is never touched by it.

    Usage:
        recorder = PlotRecorder(["hen", "dog"])
        recorder.add_event("hen", "found(wheat)", VertexType.PERCEPT, step=1)
        speech = recorder.add_msg_send("hen", "help(plant(wheat))", motivation="plant(wheat)", step=2)
        recorder.add_msg_receive("dog", "help(plant(wheat))", speech, step=2)
        result = recorder.analyze()
    """

    def __init__(self, characters: Iterable[str] = (), name: str = ""):
        self.graph = PlotGraph(name=name)
        self._roots: dict[str, Vertex] = {}
        for character in characters:
            self.add_character(character)

    @property
    def characters(self) -> list[str]:
        return list(self._roots)

    def add_character(self, name: str) -> Vertex:
        """Start a new character tree. Adding a known character is a no-op."""
        if name not in self._roots:
            self._roots[name] = self.graph.add_root(name)
        return self._roots[name]

    def _root(self, character: str) -> Vertex:
        try:
            return self._roots[character]
        except KeyError:
            raise PlotGraphError(f"Unknown character: {character}") from None

    def add_event(
        self,
        character: str,
        label: str,
        vertex_type: VertexType = VertexType.EVENT,
        step: int = 0,
    ) -> Vertex:
        """Append an event to the end of a character's spine."""
        parent = self.graph.last_of(self._root(character))
        return self.graph.append(parent, Vertex.create(label, vertex_type, step))

    def add_msg_send(self, sender: str, message: str, motivation: str = "", step: int = 0) -> Vertex:
        """Record a speech act, annotated with the intention that motivated it."""
        label = message
        if motivation:
            label += f"[{EdgeType.MOTIVATION.value}({motivation})]"
        return self.add_event(sender, label, VertexType.SPEECH, step)

    def add_msg_receive(self, receiver: str, message: str, sender_vertex: Vertex, step: int = 0) -> Vertex:
        """Record the receipt of a message and link it to the speech act."""
        listen = self.add_event(receiver, message, VertexType.LISTEN, step)
        self.graph.add_edge(EdgeType.COMMUNICATION, sender_vertex, listen)
        return listen

    def add_emotion(self, character: str, emotion: str, cause: str = "", step: int = 0) -> Vertex:
        """Record an appraisal; the structural pass folds it into the appraised event."""
        label = emotion
        if cause:
            label += f"[{CAUSE}({cause})]"
        return self.add_event(character, label, VertexType.EMOTION, step)

    def report(self, event: "EventReport") -> Vertex:
        """Record an event report, adding its characters on first sight."""
        self.add_character(event.character)
        if event.type == VertexType.SPEECH:
            speech = self.add_msg_send(event.character, event.label, event.motivation, event.step)
            for receiver in event.receivers:
                self.add_character(receiver)
                self.add_msg_receive(receiver, event.label, speech, event.step)
            return speech
        if event.type == VertexType.EMOTION:
            return self.add_emotion(event.character, event.label, event.cause, event.step)
        if event.type == VertexType.ROOT:
            raise PlotGraphError(f"Cannot report a root event for {event.character}")
        return self.add_event(event.character, event.label, event.type, event.step)

    def analyze(self, analyzer: Optional["PlotAnalyzer"] = None) -> "AnalysisResult":
        """Analyze a clone of the live graph."""
        from plot_graph_analyzer.analysis import PlotAnalyzer

        analyzer = analyzer or PlotAnalyzer()
        return analyzer.analyze(self.graph)
