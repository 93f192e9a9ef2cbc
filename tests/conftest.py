"""Shared fixtures."""

import pytest

from plot_graph_analyzer.config import Settings
from plot_graph_analyzer.graph import PlotRecorder, VertexType


@pytest.fixture
def settings():
    """Default settings, independent of the environment and any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def recorder():
    return PlotRecorder(["hen", "dog"], name="test")


@pytest.fixture
def hungry_hen():
    """A hen that is hungry, decides to eat bread, eats it and is no longer hungry.

    After post-processing: hungry -motivation-> !eat -actualization-> eat,
    eat -termination-> hungry (an intentional problem resolution).
    """
    recorder = PlotRecorder(["hen"], name="hungry hen")
    events = {
        "hungry": recorder.add_event("hen", "+hungry(hen)", VertexType.PERCEPT, step=1),
    }
    recorder.add_emotion("hen", "distress", cause="hungry(hen)", step=1)
    events["plan"] = recorder.add_event("hen", "!eat(bread)[motivation(hungry(hen))]", VertexType.INTENTION, step=2)
    events["eat"] = recorder.add_event("hen", "eat(bread)[motivation(eat(bread))]", VertexType.ACTION, step=3)
    recorder.add_emotion("hen", "joy", cause="eat(bread)", step=3)
    events["sated"] = recorder.add_event("hen", "-hungry(hen)[source(eat(bread))]", VertexType.PERCEPT, step=4)
    return recorder, events


HUNGRY_HEN_LOG = {
    "name": "hungry hen",
    "characters": ["hen"],
    "events": [
        {"character": "hen", "label": "+hungry(hen)", "type": "percept", "step": 1},
        {"character": "hen", "label": "distress", "type": "emotion", "cause": "hungry(hen)", "step": 1},
        {"character": "hen", "label": "!eat(bread)[motivation(hungry(hen))]", "type": "intention", "step": 2},
        {"character": "hen", "label": "eat(bread)[motivation(eat(bread))]", "type": "action", "step": 3},
        {"character": "hen", "label": "joy", "type": "emotion", "cause": "eat(bread)", "step": 3},
        {"character": "hen", "label": "-hungry(hen)[source(eat(bread))]", "type": "percept", "step": 4},
    ],
}


@pytest.fixture
def hungry_hen_log(tmp_path):
    """The hungry hen story as a JSON plot log file."""
    import json

    path = tmp_path / "hungry_hen.json"
    path.write_text(json.dumps(HUNGRY_HEN_LOG))
    return path
