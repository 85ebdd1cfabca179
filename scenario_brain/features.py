"""
Scenario Feature Extraction

Turns free-form scenario text into lexical category counts and a handful of
bounded composite signals that drive every region stage:

- Category counts (visual, auditory, threat, ...) from fixed keyword tables
- Composites: positivity, negativity, sensory, urgency, novelty, tone
- Environment guess (nature / urban / unknown)
- Key subjects: the first distinct content words of the scenario

Extraction is a pure function of the text.
"""

import re
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, Tuple


# =============================================================================
# VOCABULARY
# =============================================================================

CATEGORY_KEYWORDS: Dict[str, Tuple[str, ...]] = {
    'visual': ('see', 'saw', 'seen', 'looking', 'glow', 'shadow', 'bright', 'dark', 'figure',
               'shape', 'color', 'glimmer', 'approaching', 'vision', 'silhouette'),
    'auditory': ('hear', 'heard', 'listening', 'voice', 'voices', 'shout', 'music', 'whisper',
                 'echo', 'song', 'crying', 'scream'),
    'threat': ('danger', 'threat', 'threatening', 'weapon', 'knife', 'sword', 'gun', 'growl',
               'snarl', 'attack', 'attacking', 'angry', 'hooded', 'blood', 'hostile', 'monster'),
    'positive': ('friendly', 'smile', 'kind', 'helpful', 'gift', 'calm', 'safe', 'relief',
                 'wagging', 'gentle', 'joy', 'laugh', 'comfort'),
    'negative': ('fear', 'afraid', 'scared', 'terrified', 'worried', 'sad', 'crying', 'despair',
                 'panic', 'lonely', 'hurt', 'injured'),
    'social': ('crowd', 'people', 'person', 'figure', 'merchant', 'child', 'stranger', 'tavern',
               'villager', 'guard', 'friend', 'companion', 'patron'),
    'motion': ('approach', 'approaching', 'running', 'run', 'rushing', 'charging', 'walk',
               'walking', 'move', 'moving', 'follow', 'following', 'darting'),
    'mystery': ('mysterious', 'unknown', 'shadowy', 'strange', 'unusual', 'enigmatic', 'secrets',
                'hidden', 'hooded', 'cloak', 'dark'),
    'memory': ('remember', 'memory', 'recalled', 'once', 'childhood', 'before', 'nostalgia',
               'familiar', 'reminds'),
    'objects': ('door', 'chest', 'box', 'letter', 'map', 'artifact', 'sword', 'torch', 'lantern',
                'book', 'coin', 'key'),
}

# Only used to classify the environment
NATURE_KEYWORDS = ('forest', 'tree', 'river', 'mountain', 'field', 'wind', 'rain', 'storm', 'sun')
URBAN_KEYWORDS = ('street', 'city', 'market', 'tavern', 'alley', 'cobblestone', 'tower', 'castle',
                  'square', 'inn')

STOP_WORDS = frozenset({
    'the', 'and', 'with', 'from', 'that', 'there', 'this', 'into', 'while', 'then', 'your',
    'their', 'about', 'toward', 'towards', 'them', 'they', 'have', 'just', 'over', 'under',
    'very', 'when', 'where', 'because', 'someone', 'something', 'around', 'after', 'before',
    'onto', 'through', 'back', 'only', 'even',
})

MAX_KEY_SUBJECTS = 4

_TOKEN_PATTERN = re.compile(r"[a-z']+")


def clamp(value: float, low: float, high: float) -> float:
    """Bound value to [low, high]."""
    return max(low, min(high, value))


def tokenize(text: str) -> list:
    """Lowercase alphabetic runs (apostrophes kept)."""
    return _TOKEN_PATTERN.findall(text.lower())


@dataclass(frozen=True)
class ScenarioFeatures:
    """Lexical scoring of a scenario. Never mutated after extraction."""
    # Category counts
    visual: int = 0
    auditory: int = 0
    threat: int = 0
    positive: int = 0
    negative: int = 0
    social: int = 0
    motion: int = 0
    mystery: int = 0
    memory: int = 0
    objects: int = 0

    # Environment raw counts
    nature: int = 0
    urban: int = 0
    length: int = 0

    # Composites
    positivity: float = 0.0     # [0, 1]
    negativity: float = 0.0     # [0, 1]
    sensory: float = 0.0        # [0, 1]
    urgency: float = 0.0        # [0, 1]
    novelty: float = 1.0        # [0.1, 1]
    tone: float = 0.0           # [-1, 1]

    environment: str = 'unknown'
    key_subjects: Tuple[str, ...] = ()
    has_memory_cue: bool = False

    def counts(self) -> Dict[str, int]:
        """Category counts keyed by category name."""
        return {name: getattr(self, name) for name in CATEGORY_KEYWORDS}


class FeatureExtractor:
    """
    Scores scenario text against the fixed keyword tables.

    The extractor holds no state between calls; one instance can score any
    number of scenarios.
    """

    def __init__(self, max_subjects: int = MAX_KEY_SUBJECTS):
        self.max_subjects = max_subjects

    def extract(self, text: str) -> ScenarioFeatures:
        tokens = tokenize(text)
        counts = Counter(tokens)

        def score(keywords: Iterable[str]) -> int:
            return sum(counts[word] for word in keywords)

        categories = {name: score(words) for name, words in CATEGORY_KEYWORDS.items()}
        nature = score(NATURE_KEYWORDS)
        urban = score(URBAN_KEYWORDS)

        positive = categories['positive']
        threat = categories['threat']
        negative = categories['negative']

        if nature > urban:
            environment = 'nature'
        elif urban > 0:
            environment = 'urban'
        else:
            environment = 'unknown'

        return ScenarioFeatures(
            **categories,
            nature=nature,
            urban=urban,
            length=len(tokens),
            positivity=min(1.0, positive / 3),
            negativity=min(1.0, (threat + negative) / 4),
            sensory=min(1.0, (categories['visual'] + categories['auditory']) / 4),
            urgency=min(1.0, (categories['motion'] + threat * 1.2) / 4),
            novelty=max(0.1, min(1.0, 1 - categories['memory'] * 0.18)),
            tone=clamp(min(1.0, positive / 2) - min(1.0, (threat + negative) / 3), -1.0, 1.0),
            environment=environment,
            key_subjects=self._key_subjects(tokens),
            has_memory_cue=categories['memory'] > 0,
        )

    def _key_subjects(self, tokens: list) -> Tuple[str, ...]:
        # dict keeps first-occurrence order
        distinct = dict.fromkeys(
            word for word in tokens if len(word) > 3 and word not in STOP_WORDS
        )
        return tuple(list(distinct)[:self.max_subjects])


def analyze_scenario(text: str) -> ScenarioFeatures:
    """Extract features with the default extractor."""
    return FeatureExtractor().extract(text)
