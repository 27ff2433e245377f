"""
Static mood configuration: the valence table every aggregate is scored with.

Changing a score here changes trend lines for every user, so edits go with a
bump of MOOD_TABLE_VERSION.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

MOOD_TABLE_VERSION = "2025.1"

FALLBACK_MOOD = "Other"
FALLBACK_SCORE = 3
FALLBACK_EMOJI = "💭"

HAPPY_MOODS = frozenset({"Joy", "Excited", "Proud", "Love"})

# Meal tag for entries that are not about food.
LIFE_MEAL_TYPE = "Life"


@dataclass(frozen=True)
class MoodDefinition:
    name: str
    score: int
    emoji: str

    @property
    def is_happy(self) -> bool:
        return self.name in HAPPY_MOODS


MOOD_TABLE: Tuple[MoodDefinition, ...] = (
    MoodDefinition("Joy", 5, "🥰"),
    MoodDefinition("Excited", 5, "🎉"),
    MoodDefinition("Proud", 5, "😎"),
    MoodDefinition("Love", 5, "❤️"),
    MoodDefinition("Calm", 4, "🌿"),
    MoodDefinition("Neutral", 3, "😶"),
    MoodDefinition("Tired", 2, "😴"),
    MoodDefinition("Stressed", 2, "🤯"),
    MoodDefinition("Sad", 1, "😢"),
    MoodDefinition("Angry", 1, "🤬"),
    MoodDefinition("Crying", 1, "😭"),
    MoodDefinition("Sick", 1, "🤢"),
    MoodDefinition("Other", 3, FALLBACK_EMOJI),
)

_BY_NAME: Dict[str, MoodDefinition] = {mood.name: mood for mood in MOOD_TABLE}

# (lower bound, tone) pairs, highest first
_SCORE_TONES = (
    (4.5, "Amazing"),
    (4.0, "Good"),
    (3.0, "Okay"),
    (2.0, "Low"),
)


def normalize_label(label: Optional[str]) -> str:
    """Blank labels count as "Other"; every other label is kept verbatim."""
    if label is None or not label.strip():
        return FALLBACK_MOOD
    return label


def get_definition(label: Optional[str]) -> Optional[MoodDefinition]:
    return _BY_NAME.get(normalize_label(label))


def score_of(label: Optional[str]) -> int:
    """
    Valence score of a mood label, 1 (worst) to 5 (best).

    Lookup is an exact, case-sensitive match on the canonical names. Custom
    labels score neutral so they never pull a trend toward either extreme.
    """
    definition = get_definition(label)
    return definition.score if definition else FALLBACK_SCORE


def is_happy(label: Optional[str]) -> bool:
    return label in HAPPY_MOODS


def emoji_for(label: Optional[str]) -> str:
    definition = get_definition(label)
    return definition.emoji if definition else FALLBACK_EMOJI


def describe_score(score: Optional[float]) -> Optional[str]:
    """Tone word for an average score, None when there is no score."""
    if score is None:
        return None
    for lower_bound, tone in _SCORE_TONES:
        if score >= lower_bound:
            return tone
    return "Rough"
