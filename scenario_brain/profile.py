"""
Persona Profile

The simulated individual: demographics, Big Five trait scores and
dispositional settings, plus the age-derived trait multipliers the region
stages read (impulsivity, wisdom, resilience, recall).

Profiles are immutable; build one with Profile(...), Profile.from_dict(...)
or randomize_profile().
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

import numpy as np

logger = logging.getLogger(__name__)


class ProfileValidationError(ValueError):
    """Raised when a profile field is outside its allowed values."""
    pass


class Gender(Enum):
    FEMALE = "female"
    MALE = "male"
    NONBINARY = "nonbinary"
    UNSPECIFIED = "unspecified"


class Outlook(Enum):
    OPTIMISTIC = "optimistic"
    BALANCED = "balanced"
    PESSIMISTIC = "pessimistic"


class RiskPosture(Enum):
    CAUTIOUS = "cautious"
    BALANCED = "balanced"
    BOLD = "bold"


class EmotionStyle(Enum):
    STEADY = "steady"
    EXPRESSIVE = "expressive"
    GUARDED = "guarded"


class AgeGroup(Enum):
    CHILD = "child"
    TEEN = "teen"
    ADULT = "adult"
    ELDER = "elder"


@dataclass(frozen=True)
class AgeTraits:
    """Age-driven multipliers (0-1)."""
    impulsivity: float
    wisdom: float
    resilience: float
    recall: float


AGE_TRAIT_TABLE: Dict[AgeGroup, AgeTraits] = {
    AgeGroup.CHILD: AgeTraits(impulsivity=0.82, wisdom=0.28, resilience=0.65, recall=0.58),
    AgeGroup.TEEN: AgeTraits(impulsivity=0.68, wisdom=0.42, resilience=0.6, recall=0.64),
    AgeGroup.ADULT: AgeTraits(impulsivity=0.45, wisdom=0.72, resilience=0.75, recall=0.78),
    AgeGroup.ELDER: AgeTraits(impulsivity=0.32, wisdom=0.88, resilience=0.7, recall=0.82),
}

# Insertion order matters: ties in trait rankings keep this order
TRAIT_NAMES = ('openness', 'conscientiousness', 'extraversion', 'agreeableness', 'neuroticism')

DEFAULT_AGE = 30
DEFAULT_IQ = 100
DEFAULT_TRAIT_SCORE = 50.0

BACKGROUND_IDEAS = (
    'Ranger Scholar',
    'Temple Archivist',
    'Streetwise Courier',
    'Arcane Naturalist',
    'Clockwork Engineer',
    'Harbor Diplomat',
    'Desert Survivalist',
    'Stormbound Navigator',
    'Battlefield Medic',
    'Court Chronicler',
)


def derive_age_group(age: int) -> AgeGroup:
    if age < 16:
        return AgeGroup.CHILD
    if age < 23:
        return AgeGroup.TEEN
    if age < 58:
        return AgeGroup.ADULT
    return AgeGroup.ELDER


def _default_big_five() -> Dict[str, float]:
    return {name: DEFAULT_TRAIT_SCORE for name in TRAIT_NAMES}


def _parse_enum(enum_cls, value, default, field_name: str):
    if value is None or value == '':
        return default
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        options = ', '.join(member.value for member in enum_cls)
        raise ProfileValidationError(
            f"Invalid {field_name}: {value!r}. Allowed values: {options}"
        ) from None


def _parse_number(value, default, field_name: str) -> float:
    if value is None or value == '':
        return default
    if isinstance(value, bool):
        raise ProfileValidationError(f"{field_name} must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        raise ProfileValidationError(f"{field_name} must be numeric, got {value!r}") from None
    if not np.isfinite(number):
        raise ProfileValidationError(f"{field_name} must be finite, got {value!r}")
    return number


@dataclass(frozen=True)
class Profile:
    """
    Persona configuration for a single simulation run.

    Trait scores are normalized to [0, 100] and age is floored at 0 on
    construction; iq is kept as given (stage formulas saturate instead).
    """
    age: int = DEFAULT_AGE
    gender: Gender = Gender.UNSPECIFIED
    iq: int = DEFAULT_IQ
    background: str = ''
    big_five: Mapping[str, float] = field(default_factory=_default_big_five)
    outlook: Outlook = Outlook.BALANCED
    risk: RiskPosture = RiskPosture.BALANCED
    emotion_style: EmotionStyle = EmotionStyle.STEADY

    def __post_init__(self):
        # Frozen dataclass: normalize through object.__setattr__
        object.__setattr__(self, 'age', max(0, int(_parse_number(self.age, DEFAULT_AGE, 'age'))))
        object.__setattr__(self, 'iq', int(_parse_number(self.iq, DEFAULT_IQ, 'iq')))
        background = self.background if self.background is not None else ''
        if not isinstance(background, str):
            raise ProfileValidationError(f"background must be text, got {background!r}")
        object.__setattr__(self, 'background', background.strip())
        object.__setattr__(self, 'gender', _parse_enum(Gender, self.gender, Gender.UNSPECIFIED, 'gender'))
        object.__setattr__(self, 'outlook', _parse_enum(Outlook, self.outlook, Outlook.BALANCED, 'outlook'))
        object.__setattr__(self, 'risk', _parse_enum(RiskPosture, self.risk, RiskPosture.BALANCED, 'risk'))
        object.__setattr__(
            self, 'emotion_style',
            _parse_enum(EmotionStyle, self.emotion_style, EmotionStyle.STEADY, 'emotionStyle'),
        )

        supplied = dict(self.big_five or {})
        unknown = set(supplied) - set(TRAIT_NAMES)
        if unknown:
            raise ProfileValidationError(f"Unknown traits: {', '.join(sorted(unknown))}")
        traits = {}
        for name in TRAIT_NAMES:
            score = _parse_number(supplied.get(name), DEFAULT_TRAIT_SCORE, name)
            traits[name] = max(0.0, min(100.0, score))
        object.__setattr__(self, 'big_five', MappingProxyType(traits))

    def __hash__(self):
        return hash((self.age, self.gender, self.iq, self.background,
                     tuple(self.big_five.items()), self.outlook, self.risk, self.emotion_style))

    # ==========================================================================
    # DERIVED
    # ==========================================================================

    @property
    def age_group(self) -> AgeGroup:
        return derive_age_group(self.age)

    @property
    def age_traits(self) -> AgeTraits:
        return AGE_TRAIT_TABLE[self.age_group]

    @property
    def openness(self) -> float:
        return self.big_five['openness']

    @property
    def conscientiousness(self) -> float:
        return self.big_five['conscientiousness']

    @property
    def extraversion(self) -> float:
        return self.big_five['extraversion']

    @property
    def agreeableness(self) -> float:
        return self.big_five['agreeableness']

    @property
    def neuroticism(self) -> float:
        return self.big_five['neuroticism']

    # ==========================================================================
    # RECORD CONVERSION
    # ==========================================================================

    def to_dict(self) -> Dict[str, Any]:
        """Full profile record, including the derived age fields."""
        traits = self.age_traits
        return {
            'age': self.age,
            'gender': self.gender.value,
            'iq': self.iq,
            'background': self.background,
            'bigFive': dict(self.big_five),
            'outlook': self.outlook.value,
            'risk': self.risk.value,
            'emotionStyle': self.emotion_style.value,
            'ageGroup': self.age_group.value,
            'ageTraits': {
                'impulsivity': traits.impulsivity,
                'wisdom': traits.wisdom,
                'resilience': traits.resilience,
                'recall': traits.recall,
            },
        }

    @classmethod
    def from_dict(cls, record: Mapping[str, Any]) -> 'Profile':
        """
        Build a profile from a record shaped like to_dict().

        Derived fields (ageGroup, ageTraits) are ignored and recomputed.
        Missing fields fall back to defaults.
        """
        if not isinstance(record, Mapping):
            raise ProfileValidationError(f"Profile record must be a mapping, got {type(record).__name__}")
        big_five = record.get('bigFive', record.get('big_five')) or {}
        if not isinstance(big_five, Mapping):
            raise ProfileValidationError("bigFive must be a mapping of trait scores")
        return cls(
            age=record.get('age'),
            gender=record.get('gender'),
            iq=record.get('iq'),
            background=record.get('background'),
            big_five=big_five,
            outlook=record.get('outlook'),
            risk=record.get('risk'),
            emotion_style=record.get('emotionStyle', record.get('emotion_style')),
        )


def randomize_profile(rng: Optional[np.random.Generator] = None) -> Profile:
    """
    Roll a random persona.

    Age 12-72, IQ 85-145, traits 25-90; background drawn from the archetype
    list 80% of the time, otherwise left blank.
    """
    if rng is None:
        rng = np.random.default_rng()

    def choice(enum_cls):
        members = list(enum_cls)
        return members[int(rng.integers(len(members)))]

    background = ''
    if rng.random() > 0.2:
        background = BACKGROUND_IDEAS[int(rng.integers(len(BACKGROUND_IDEAS)))]

    profile = Profile(
        age=int(rng.integers(12, 73)),
        gender=choice(Gender),
        iq=int(rng.integers(85, 146)),
        background=background,
        big_five={name: float(rng.integers(25, 91)) for name in TRAIT_NAMES},
        outlook=choice(Outlook),
        risk=choice(RiskPosture),
        emotion_style=choice(EmotionStyle),
    )
    logger.debug(f"Randomized persona: {profile.age_group.value}, background={background or 'none'}")
    return profile
