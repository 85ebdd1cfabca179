"""
Pipeline Context

The run-scoped working memory threaded through the eight region stages.
Each stage may append to the logs or overwrite its own scalar fields; later
stages see those writes unchanged.
"""

from dataclasses import dataclass, field
from typing import Dict, Generic, Iterator, List, Optional, TypeVar

from .features import ScenarioFeatures
from .profile import EmotionStyle, Outlook, Profile, RiskPosture

T = TypeVar('T')


class AppendOnlyLog(Generic[T]):
    """Ordered log that only grows. Read the tail with most_recent(n)."""

    def __init__(self):
        self._entries: List[T] = []

    def append(self, entry: T) -> None:
        self._entries.append(entry)

    def most_recent(self, n: int) -> List[T]:
        if n <= 0:
            return []
        return list(self._entries[-n:])

    def first(self) -> Optional[T]:
        return self._entries[0] if self._entries else None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._entries))

    def __getitem__(self, index: int) -> T:
        return self._entries[index]

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __repr__(self) -> str:
        return f"AppendOnlyLog({self._entries!r})"


CADENCE_BY_STYLE: Dict[EmotionStyle, str] = {
    EmotionStyle.STEADY: 'measured',
    EmotionStyle.EXPRESSIVE: 'vivid',
    EmotionStyle.GUARDED: 'guarded',
}

CAUTION_BIAS_BY_RISK: Dict[RiskPosture, float] = {
    RiskPosture.CAUTIOUS: 0.25,
    RiskPosture.BALANCED: 0.0,
    RiskPosture.BOLD: -0.2,
}

OPTIMISM_BY_OUTLOOK: Dict[Outlook, float] = {
    Outlook.OPTIMISTIC: 0.2,
    Outlook.BALANCED: 0.0,
    Outlook.PESSIMISTIC: -0.2,
}


@dataclass
class PipelineContext:
    """Mutable state shared by the region stages of one run."""
    scenario_features: ScenarioFeatures

    # Fixed at construction from the profile
    cadence: str = 'measured'
    caution_bias: float = 0.0
    optimism: float = 0.0

    # Append-only logs
    sensory_notes: AppendOnlyLog = field(default_factory=AppendOnlyLog)
    memories: AppendOnlyLog = field(default_factory=AppendOnlyLog)
    insights: AppendOnlyLog = field(default_factory=AppendOnlyLog)

    # Last write wins
    focus_agenda: str = ''
    action_plan: str = ''
    rationale: str = ''

    # Bounded scalars
    conflict_level: float = 0.0     # [0, 1]
    emotional_alarm: float = 0.0    # [0, 1]
    mood_score: float = 0.0         # [-1, 1]
    mood_descriptor: str = 'neutral'

    @classmethod
    def create(cls, profile: Profile, features: ScenarioFeatures) -> 'PipelineContext':
        return cls(
            scenario_features=features,
            cadence=CADENCE_BY_STYLE[profile.emotion_style],
            caution_bias=CAUTION_BIAS_BY_RISK[profile.risk],
            optimism=OPTIMISM_BY_OUTLOOK[profile.outlook],
        )

    def recent_insights(self, n: int = 3) -> List[str]:
        return self.insights.most_recent(n)

    def to_dict(self) -> Dict[str, object]:
        """Convert to dictionary."""
        return {
            'cadence': self.cadence,
            'caution_bias': self.caution_bias,
            'optimism': self.optimism,
            'sensory_notes': list(self.sensory_notes),
            'memories': list(self.memories),
            'insights': list(self.insights),
            'focus_agenda': self.focus_agenda,
            'action_plan': self.action_plan,
            'rationale': self.rationale,
            'conflict_level': self.conflict_level,
            'emotional_alarm': self.emotional_alarm,
            'mood_score': self.mood_score,
            'mood_descriptor': self.mood_descriptor,
        }
