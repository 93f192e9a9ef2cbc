"""Tests for the structural post-processing pass."""

import logging

import pytest

from plot_graph_analyzer.analysis import PlotAnalyzer
from plot_graph_analyzer.config import Settings
from plot_graph_analyzer.graph import EdgeType, PlotRecorder, VertexType
from plot_graph_analyzer.postprocess import StructurePass


def spine_labels(graph, character):
    root = next(root for root in graph.roots if root.label == character)
    return [vertex.label for vertex in graph.spine(root)]


class TestEmotions:
    """Tests for folding appraisals into events."""

    def test_emotion_attached_to_cause(self, recorder, settings):
        """Test that an emotion lands on the event it appraises."""
        found = recorder.add_event("hen", "+found(wheat)", VertexType.PERCEPT, step=1)
        recorder.add_event("hen", "look(around)", VertexType.ACTION, step=2)
        recorder.add_emotion("hen", "joy", cause="found(wheat)", step=2)

        graph = StructurePass(settings).apply(recorder.graph)

        assert graph.vertex(found.id).emotions == {"joy"}
        assert spine_labels(graph, "hen") == ["+found(wheat)", "look(around)"]

    def test_emotion_without_cause(self, recorder, settings):
        """Test that an emotion without cause appraises the latest event."""
        recorder.add_event("hen", "+found(wheat)", VertexType.PERCEPT, step=1)
        look = recorder.add_event("hen", "look(around)", VertexType.ACTION, step=2)
        recorder.add_emotion("hen", "pride", step=2)

        graph = StructurePass(settings).apply(recorder.graph)

        assert graph.vertex(look.id).emotions == {"pride"}

    def test_unknown_cause(self, recorder, settings, caplog):
        """Test that unlocatable appraisals are dropped with a warning."""
        found = recorder.add_event("hen", "+found(wheat)", VertexType.PERCEPT, step=1)
        recorder.add_emotion("hen", "fear", cause="fox", step=2)

        with caplog.at_level(logging.WARNING):
            graph = StructurePass(settings).apply(recorder.graph)

        assert "fear[cause(fox)]" in caplog.text
        assert not graph.vertex(found.id).has_emotion()
        assert spine_labels(graph, "hen") == ["+found(wheat)"]

    def test_original_untouched(self, recorder, settings):
        """Test that the pass works on a clone."""
        recorder.add_event("hen", "+found(wheat)", VertexType.PERCEPT, step=1)
        recorder.add_emotion("hen", "joy", cause="found(wheat)", step=1)

        StructurePass(settings).apply(recorder.graph)

        assert spine_labels(recorder.graph, "hen") == ["+found(wheat)", "joy[cause(found(wheat))]"]


class TestListen:
    """Tests for replacing message receipts."""

    def test_communication_reaches_reaction(self, recorder, settings):
        """Test that the speech act links to the receiver's next event."""
        speech = recorder.add_msg_send("hen", "help(plant(wheat))", step=1)
        recorder.add_msg_receive("dog", "help(plant(wheat))", speech, step=1)
        refuse = recorder.add_event("dog", "refuse(help)", VertexType.SPEECH, step=2)

        graph = StructurePass(settings).apply(recorder.graph)

        assert spine_labels(graph, "dog") == ["refuse(help)"]
        assert graph.has_edge(speech.id, refuse.id, EdgeType.COMMUNICATION)


class TestRepeatedTail:
    """Tests for trimming the loop a simulation ends in."""

    @pytest.fixture
    def trimming(self):
        return Settings(_env_file=None, trim_repeated_tail=True, repeat_threshold=3)

    def record(self, labels, idle=None):
        recorder = PlotRecorder(["hen"] if idle is None else ["hen", "dog"])
        for step, label in enumerate(labels):
            recorder.add_event("hen", label, VertexType.ACTION, step=step)
            if idle is not None:
                recorder.add_event("dog", idle, VertexType.ACTION, step=step)
        return recorder

    def test_trims_loop(self, trimming):
        """Test that all but one repetition of a trailing block is removed."""
        recorder = self.record(["wake", "peck", "sleep", "peck", "sleep", "peck", "sleep", "peck", "sleep"])

        graph = StructurePass(trimming).apply(recorder.graph)

        assert spine_labels(graph, "hen") == ["wake", "peck", "sleep"]

    def test_single_event_loop(self, trimming):
        """Test trimming a repeated single event."""
        recorder = self.record(["wake", "wait", "wait", "wait"])

        graph = StructurePass(trimming).apply(recorder.graph)

        assert spine_labels(graph, "hen") == ["wake", "wait"]

    def test_below_threshold(self, trimming):
        """Test that short repetitions are plot, not a loop."""
        recorder = self.record(["wake", "wait", "wait"])

        graph = StructurePass(trimming).apply(recorder.graph)

        assert spine_labels(graph, "hen") == ["wake", "wait", "wait"]

    def test_all_characters_looping(self, trimming):
        """Test that every character's loop is trimmed once all of them repeat."""
        recorder = self.record(["wake", "wait", "wait", "wait"], idle="sleep")

        graph = StructurePass(trimming).apply(recorder.graph)

        assert spine_labels(graph, "hen") == ["wake", "wait"]
        assert spine_labels(graph, "dog") == ["sleep"]

    def test_one_character_looping(self, trimming):
        """Test that nothing is trimmed while another character still acts."""
        recorder = self.record(["wake", "wait", "wait", "wait"])
        for step, label in enumerate(["bark", "run", "dig", "eat"]):
            recorder.add_event("dog", label, VertexType.ACTION, step=step)

        graph = StructurePass(trimming).apply(recorder.graph)

        assert spine_labels(graph, "hen") == ["wake", "wait", "wait", "wait"]

    def test_disabled_by_default(self, settings):
        """Test that repeated attempts are kept with their appraisals."""
        recorder = PlotRecorder(["hen"])
        recorder.add_event("hen", "!plant(wheat)", VertexType.INTENTION, step=1)
        for step, emotion in enumerate(["joy", "distress", "anger"], start=2):
            recorder.add_event("hen", "plant(wheat)[motivation(plant(wheat))]", VertexType.ACTION, step=step)
            recorder.add_emotion("hen", emotion, step=step)

        graph = StructurePass(settings).apply(recorder.graph)

        root = graph.roots[0]
        spine = graph.spine(root)
        assert settings.trim_repeated_tail is False
        assert len(spine) == 4
        assert [vertex.emotions for vertex in spine[1:]] == [{"joy"}, {"distress"}, {"anger"}]

    def test_analyzer_settings(self, trimming):
        """Test that the analyzer post-processes with its own settings."""
        recorder = self.record(["wake", "wait", "wait", "wait"])

        graph = PlotAnalyzer(settings=trimming).postprocess(recorder.graph)

        assert spine_labels(graph, "hen") == ["wake", "wait"]
        assert spine_labels(recorder.graph, "hen") == ["wake", "wait", "wait", "wait"]
