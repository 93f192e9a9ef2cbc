"""OCC emotions and their valence.

Pleasure/arousal/dominance values follow the ALMA mapping used by the affective
reasoning engine. Only the sign of pleasure matters for plot analysis.
"""

from typing import NamedTuple


class PAD(NamedTuple):
    pleasure: float
    arousal: float
    dominance: float


EMOTIONS: dict[str, PAD] = {
    "admiration": PAD(0.5, 0.3, -0.2),
    "anger": PAD(-0.51, 0.59, 0.25),
    "disappointment": PAD(-0.3, 0.1, -0.4),
    "distress": PAD(-0.4, -0.2, -0.5),
    "fear": PAD(-0.64, 0.6, -0.43),
    "fears_confirmed": PAD(-0.5, -0.3, -0.7),
    "gloating": PAD(0.3, -0.3, -0.1),
    "gratification": PAD(0.6, 0.5, 0.4),
    "gratitude": PAD(0.4, 0.2, -0.3),
    "happy_for": PAD(0.4, 0.2, 0.2),
    "hate": PAD(-0.6, 0.6, 0.3),
    "hope": PAD(0.2, 0.2, -0.1),
    "joy": PAD(0.4, 0.2, 0.1),
    "love": PAD(0.3, 0.1, 0.2),
    "pity": PAD(-0.4, -0.2, -0.5),
    "pride": PAD(0.4, 0.3, 0.3),
    "relief": PAD(0.2, -0.3, 0.4),
    "remorse": PAD(-0.3, 0.1, -0.6),
    "reproach": PAD(-0.3, -0.1, 0.4),
    "resentment": PAD(-0.2, -0.3, -0.2),
    "satisfaction": PAD(0.3, -0.2, 0.4),
    "shame": PAD(-0.3, 0.1, -0.6),
}


def pleasure(emotion: str) -> float:
    """Pleasure value of an emotion; unknown emotions are neutral."""
    pad = EMOTIONS.get(emotion)
    return pad.pleasure if pad else 0.0


def is_positive(emotion: str) -> bool:
    return pleasure(emotion) > 0


def is_negative(emotion: str) -> bool:
    return pleasure(emotion) < 0


def valences(emotions) -> tuple[bool, bool]:
    """Return (has positive, has negative) for a collection of emotion names."""
    positive = negative = False
    for emotion in emotions:
        positive |= is_positive(emotion)
        negative |= is_negative(emotion)
    return positive, negative
