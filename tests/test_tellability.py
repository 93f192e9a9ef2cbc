"""Tests for tellability scoring."""

import pytest

from plot_graph_analyzer.analysis import PlotAnalyzer
from plot_graph_analyzer.graph import EdgeType, PlotGraph, Vertex, VertexType
from plot_graph_analyzer.tellability import PlotStatistics, TellabilityResult, compute_symmetry, score
from plot_graph_analyzer.tellability.symmetry import (
    CharacterSequences,
    RepetitionStatistics,
    repetition_statistics,
    subsequence_starts,
)


class TestCompute:
    """Tests for the tellability formula."""

    def test_no_conflict(self):
        """Test that plots without a productive conflict score zero."""
        result = TellabilityResult(
            productive_conflicts=0,
            num_polyvalent_vertices=5,
            num_all_vertices=10,
            suspense=3,
            plot_length=4,
        )
        assert result.compute() == 0

    def test_scenario(self):
        """Test the equally weighted sum of polyvalence and suspense."""
        result = TellabilityResult(
            productive_conflicts=2,
            num_polyvalent_vertices=4,
            num_all_vertices=20,
            suspense=3,
            plot_length=12,
        )
        assert result.compute() == pytest.approx(0.45)

    def test_symmetry_not_weighted(self):
        """Test that symmetry does not change the score."""
        result = TellabilityResult(productive_conflicts=1, num_all_vertices=4, plot_length=4, symmetry=0.8)
        assert result.compute() == 0

    def test_empty_counts(self):
        """Test that empty plots do not divide by zero."""
        assert TellabilityResult(productive_conflicts=1).compute() == 0

    def test_to_dict(self):
        """Test the serializable form."""
        result = TellabilityResult(
            productive_conflicts=1,
            num_all_vertices=2,
            num_polyvalent_vertices=1,
            plot_length=2,
            suspense=1,
            functional_unit_count={"Nested Goal": 1, "Giving Up": 0},
        )
        data = result.to_dict()
        assert data["tellability"] == pytest.approx(1.0)
        assert data["functional_unit_count"] == {"Nested Goal": 1, "Giving Up": 0}
        assert result.plot_unit_types == ["Nested Goal"]


class TestPlotStatistics:
    """Tests for plot counting."""

    @pytest.fixture
    def graph(self):
        """hen: !eat(bread), +has(bread), eat(bread), -has(bread); dog: bark"""
        graph = PlotGraph()
        hen = graph.add_root("hen")
        plan = graph.append(hen, Vertex.create("!eat(bread)", VertexType.INTENTION))
        has = graph.append(plan, Vertex.create("+has(bread)", VertexType.PERCEPT))
        eat = graph.append(has, Vertex.create("eat(bread)", VertexType.ACTION))
        graph.append(eat, Vertex.create("-has(bread)", VertexType.PERCEPT))
        dog = graph.add_root("dog")
        graph.append(dog, Vertex.create("bark", VertexType.ACTION))
        return graph

    def vertex(self, graph, label):
        return next(vertex for vertex in graph.vertices if vertex.label == label)

    def test_sizes(self, graph):
        """Test vertex count and plot length without roots."""
        stats = PlotStatistics.count(graph)
        assert stats.num_all_vertices == 5
        assert stats.plot_length == 4

    def test_unproductive_conflict(self, graph):
        """Test that intentions without attempts are not productive."""
        stats = PlotStatistics.count(graph)
        assert stats.conflicts == 1
        assert stats.productive_conflicts == 0
        assert stats.suspense == 0

    def test_suspense_from_actualization(self, graph):
        """Test the distance between intention and attempt."""
        graph.add_edge(EdgeType.ACTUALIZATION, self.vertex(graph, "!eat(bread)"), self.vertex(graph, "eat(bread)"))

        stats = PlotStatistics.count(graph)

        assert stats.productive_conflicts == 1
        assert stats.suspense == 2

    def test_suspense_until_termination(self, graph):
        """Test that a later termination of the intention extends suspense."""
        plan = self.vertex(graph, "!eat(bread)")
        graph.add_edge(EdgeType.ACTUALIZATION, plan, self.vertex(graph, "eat(bread)"))
        graph.add_edge(EdgeType.TERMINATION, self.vertex(graph, "-has(bread)"), plan)

        stats = PlotStatistics.count(graph)

        assert stats.suspense == 3
        assert stats.suspense <= stats.plot_length

    def test_other_character_ignored(self, graph):
        """Test that resolutions by other characters do not count."""
        plan = self.vertex(graph, "!eat(bread)")
        graph.add_edge(EdgeType.ACTUALIZATION, plan, self.vertex(graph, "+has(bread)"))
        graph.add_edge(EdgeType.TERMINATION, self.vertex(graph, "bark"), plan)

        stats = PlotStatistics.count(graph)

        assert stats.suspense == 1


class TestSymmetry:
    """Tests for repetition statistics."""

    def test_subsequences(self):
        """Test that subsequences of length two or more are indexed by start."""
        starts = subsequence_starts(["a", "b", "a", "b", "c"])
        assert starts[("a", "b")] == [0, 2]
        assert starts[("a", "b", "a", "b")] == [0]
        assert ("b",) not in starts

    def test_statistics(self):
        """Test weighted distances of a repeated pair."""
        assert repetition_statistics(["a", "b", "a", "b", "c"]) == RepetitionStatistics(gap=0, overlap=-2, spacing=4)

    def test_no_repetition(self):
        """Test that unique sequences have no statistics."""
        assert repetition_statistics(["a", "b", "c"]) == RepetitionStatistics()

    def test_character_sequences(self):
        """Test splitting a spine into parallel sequences."""
        spine = [
            Vertex.create("+has(bread)", VertexType.PERCEPT),
            Vertex.create("!eat(bread)", VertexType.INTENTION),
            Vertex.create("eat(bread)", VertexType.ACTION),
        ]
        spine[0].add_emotion("joy")
        sequences = CharacterSequences.from_spine(spine)
        assert sequences.emotions == ["joy"]
        assert sequences.intentions == ["eat(bread)"]
        assert sequences.beliefs == ["has"]
        assert sequences.actions == ["eat"]

    def test_symmetry_reserved(self, hungry_hen):
        """Test that symmetry does not contribute yet."""
        recorder, _ = hungry_hen
        assert compute_symmetry(recorder.graph) == 0
        assert compute_symmetry(PlotGraph()) == 0


class TestScore:
    """Tests for scoring whole plots."""

    def test_hungry_hen(self, hungry_hen, settings):
        """Test a plot with an intentional problem resolution."""
        recorder, events = hungry_hen
        graph = PlotAnalyzer(settings=settings).postprocess(recorder.graph)

        result = score(graph)

        assert result.functional_unit_count["Intentional Problem Resolution"] == 1
        assert result.functional_unit_count["Fortuitous Problem Resolution"] == 1
        assert result.functional_unit_count["Success born of Adversity"] == 1
        assert result.num_functional_units == 3
        assert result.num_polyvalent_vertices == 3
        assert result.num_all_vertices == 4
        assert result.productive_conflicts == 1
        assert result.suspense == 1
        assert result.plot_length == 4
        assert result.compute() == pytest.approx(3 / 4 + 1 / 4)
        assert not graph.vertex(events["sated"].id).polyvalent

    def test_connectivity(self, hungry_hen, settings):
        """Test that the three unit instances are connected."""
        recorder, _ = hungry_hen
        graph = PlotAnalyzer(settings=settings).postprocess(recorder.graph)

        result = score(graph)

        assert len(result.connectivity_graph) == 3
        assert len(result.connectivity_graph.components()) == 1
        assert {instance.subject for instance in result.connectivity_graph.instances} == {"hen"}

    def test_without_conflict(self, recorder, settings):
        """Test that a plot without attempts has no tellability."""
        recorder.add_event("hen", "+found(wheat)", VertexType.PERCEPT, step=1)
        recorder.add_emotion("hen", "joy", cause="found(wheat)", step=1)
        recorder.add_event("hen", "!plant(wheat)[motivation(found(wheat))]", VertexType.INTENTION, step=2)

        result = PlotAnalyzer(settings=settings).analyze(recorder.graph)

        assert result.tellability.productive_conflicts == 0
        assert result.score == 0
