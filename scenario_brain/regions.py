"""
Region Processors

Eight fixed processing stages, always run in this order:

    visual -> auditory -> anterior -> amygdala -> limbic
           -> hippocampus -> motor -> prefrontal

Each stage reads the profile, the scenario features and the context written
so far, returns a RegionResult, and may write its own context fields:

| Stage       | Writes                                        |
|-------------|-----------------------------------------------|
| visual      | sensory_notes, insights                       |
| auditory    | sensory_notes, insights                       |
| anterior    | focus_agenda, conflict_level, insights        |
| amygdala    | emotional_alarm, insights                     |
| limbic      | mood_score, mood_descriptor, insights         |
| hippocampus | memories, insights                            |
| motor       | action_plan, insights                         |
| prefrontal  | rationale                                     |

Every activity value is clamped to the stage's own bounds. Threshold
comparisons are strict, so boundary values fall to the calmer branch.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Tuple

from .context import PipelineContext
from .features import ScenarioFeatures, clamp
from .profile import EmotionStyle, Profile, RiskPosture


class BrainRegion(Enum):
    """The simulated regions, in processing order."""
    VISUAL = "visual"
    AUDITORY = "auditory"
    ANTERIOR = "anterior"
    AMYGDALA = "amygdala"
    LIMBIC = "limbic"
    HIPPOCAMPUS = "hippocampus"
    MOTOR = "motor"
    PREFRONTAL = "prefrontal"

    @property
    def display_name(self) -> str:
        return REGION_NAMES[self]

    @property
    def idle_text(self) -> str:
        return REGION_IDLE_TEXT[self]

    @property
    def activity_bounds(self) -> Tuple[float, float]:
        return ACTIVITY_BOUNDS[self]


REGION_SEQUENCE: Tuple[BrainRegion, ...] = tuple(BrainRegion)

REGION_NAMES: Dict[BrainRegion, str] = {
    BrainRegion.VISUAL: 'Visual Cortex',
    BrainRegion.AUDITORY: 'Auditory Cortex',
    BrainRegion.ANTERIOR: 'Anterior Cingulate',
    BrainRegion.AMYGDALA: 'Amygdala',
    BrainRegion.LIMBIC: 'Limbic System',
    BrainRegion.HIPPOCAMPUS: 'Hippocampus',
    BrainRegion.MOTOR: 'Motor Cortex',
    BrainRegion.PREFRONTAL: 'Prefrontal Cortex',
}

REGION_IDLE_TEXT: Dict[BrainRegion, str] = {
    BrainRegion.VISUAL: 'Awaiting sensory input.',
    BrainRegion.AUDITORY: 'Listening for cues.',
    BrainRegion.ANTERIOR: 'Scanning priorities.',
    BrainRegion.AMYGDALA: 'Ready to escalate emotions.',
    BrainRegion.LIMBIC: 'Awaiting emotional tone.',
    BrainRegion.HIPPOCAMPUS: 'Preparing recollections.',
    BrainRegion.MOTOR: 'Waiting on directives.',
    BrainRegion.PREFRONTAL: 'Ready to integrate the whole picture.',
}

ACTIVITY_BOUNDS: Dict[BrainRegion, Tuple[float, float]] = {
    BrainRegion.VISUAL: (14.0, 100.0),
    BrainRegion.AUDITORY: (10.0, 95.0),
    BrainRegion.ANTERIOR: (18.0, 100.0),
    BrainRegion.AMYGDALA: (12.0, 100.0),
    BrainRegion.LIMBIC: (16.0, 96.0),
    BrainRegion.HIPPOCAMPUS: (12.0, 92.0),
    BrainRegion.MOTOR: (15.0, 95.0),
    BrainRegion.PREFRONTAL: (25.0, 100.0),
}

# Motor plans, also matched by the prefrontal safety call
DEFENSIVE_PLAN = 'Adopt defensive stance, widen distance, prepare escape or deterrent gesture.'
OPEN_PLAN = 'Relax posture, open palms, signal welcome while retaining situational awareness.'
INSPECT_PLAN = 'Inspect object methodically before interaction; ready careful manipulation.'
OBSERVE_PLAN = 'Hold neutral stance, observe for new data before committing to motion.'
SAFETY_CALL = 'Keep distance and seek support if available.'

EMOTION_STYLE_MODIFIER: Dict[EmotionStyle, float] = {
    EmotionStyle.STEADY: 0.0,
    EmotionStyle.EXPRESSIVE: 0.08,
    EmotionStyle.GUARDED: -0.06,
}

RISK_BIAS: Dict[RiskPosture, float] = {
    RiskPosture.CAUTIOUS: -0.25,
    RiskPosture.BALANCED: 0.0,
    RiskPosture.BOLD: 0.25,
}


@dataclass(frozen=True)
class RegionResult:
    """What a stage reports back to the orchestrator."""
    message: str
    summary: str
    highlight: str
    activity: float
    stream_text: str = ''


def round_half_up(value: float) -> int:
    """Nearest integer, halves rounded toward +inf."""
    return int(math.floor(value + 0.5))


def fraction_percent(value: float) -> str:
    """Signed 0-1 fraction as a whole percent, halves rounded away from zero."""
    magnitude = int(math.floor(abs(value) * 100 + 0.5))
    return f"-{magnitude}" if value < 0 else str(magnitude)


# =============================================================================
# STAGES
# =============================================================================

def simulate_visual(profile: Profile, features: ScenarioFeatures,
                    context: PipelineContext, scenario: str) -> RegionResult:
    detail_drive = (profile.openness + profile.iq * 0.4) / 200
    clarity = clamp(32 + features.visual * 28 + features.motion * 15 + detail_drive * 40,
                    *ACTIVITY_BOUNDS[BrainRegion.VISUAL])
    subject = features.key_subjects[0] if features.key_subjects else 'the scene'

    if features.motion > 1:
        motion_tone = 'closing the distance steadily'
    elif features.motion > 0:
        motion_tone = 'in motion'
    else:
        motion_tone = 'fairly still'

    ambience = {
        'nature': 'dappled natural light',
        'urban': 'angular urban silhouettes',
    }.get(features.environment, 'ambient glow')

    descriptors = []
    if features.threat > 0:
        descriptors.append('watching posture for threat signals')
    if features.positive > 0:
        descriptors.append('noting gentle cues and warmth')
    if features.mystery > 0:
        descriptors.append('tracking obscured details and shadowed edges')
    if features.objects > 0:
        descriptors.append('tagging nearby objects for relevance')

    detail = ' • '.join(descriptors) or 'No major anomalies detected.'
    message = f"Framing {subject}; {motion_tone}, under {ambience}. {detail}"

    context.sensory_notes.append(message)
    context.insights.append(f"Visual focus on {subject}.")

    return RegionResult(
        message=message,
        summary=f"Visual lock on {subject}, clarity {round_half_up(clarity)}%.",
        highlight=f"Detail emphasis {round_half_up(clarity)}%",
        activity=clarity,
        stream_text=f"Observations prioritize {subject}, with {motion_tone} and {ambience}.",
    )


def simulate_auditory(profile: Profile, features: ScenarioFeatures,
                      context: PipelineContext, scenario: str) -> RegionResult:
    sensitivity = clamp(
        28 + features.auditory * 35 + profile.agreeableness * 0.2 + (12 if features.social > 0 else 0),
        *ACTIVITY_BOUNDS[BrainRegion.AUDITORY],
    )
    quiet = features.auditory == 0

    if quiet:
        message = 'Soundscape minimal; leaning on visual cues while listening for shifts.'
        summary = 'Low auditory input, vigilance maintained.'
    else:
        texture = 'layered' if features.auditory > 2 else 'subtle'
        setting = 'voices suggest social context.' if features.social > 0 else 'ambient noises mapped.'
        message = f"Parsing {texture} audio cues—{setting}"
        summary = 'Auditory map constructed.'

    context.sensory_notes.append(message)
    context.insights.append('Audio channel calibrated.')

    return RegionResult(
        message=message,
        summary=summary,
        highlight='Silence flagged' if quiet else 'Acoustic texture logged',
        activity=sensitivity,
        stream_text=message,
    )


def simulate_anterior(profile: Profile, features: ScenarioFeatures,
                      context: PipelineContext, scenario: str) -> RegionResult:
    conscientious = profile.conscientiousness / 100
    conflict = abs(features.positivity - features.negativity)
    activity = clamp(38 + features.urgency * 30 + conscientious * 35 + conflict * 22,
                     *ACTIVITY_BOUNDS[BrainRegion.ANTERIOR])
    focus_target = context.sensory_notes.first() or 'primary stimulus'

    if features.threat > 0.5:
        agenda = 'Prioritize safety posture and gather more threat indicators.'
    elif features.positivity > 0.4:
        agenda = 'Open channel for rapport while monitoring variability.'
    else:
        agenda = 'Balance data gathering with cautious readiness.'

    context.focus_agenda = agenda
    context.conflict_level = conflict
    context.insights.append(f"Attention directive: {agenda}")

    message = f"Routing attention: {agenda} Current focus anchored to {focus_target}."
    return RegionResult(
        message=message,
        summary=f"Agenda set: {agenda}",
        highlight=f"Conflict level {fraction_percent(conflict)}%",
        activity=activity,
        stream_text=message,
    )


def simulate_amygdala(profile: Profile, features: ScenarioFeatures,
                      context: PipelineContext, scenario: str) -> RegionResult:
    neuroticism = profile.neuroticism / 100
    base_alarm = clamp(
        features.threat * 0.6 + features.negativity * 0.4 + neuroticism * 0.5 - context.optimism,
        0.0, 1.0,
    )
    alarm = clamp(base_alarm + EMOTION_STYLE_MODIFIER[profile.emotion_style], 0.0, 1.0)
    activity = clamp(32 + alarm * 58 + context.conflict_level * 22,
                     *ACTIVITY_BOUNDS[BrainRegion.AMYGDALA])

    if alarm > 0.7:
        descriptor = 'Adrenal axis primed—perceiving high threat.'
    elif alarm > 0.4:
        descriptor = 'Alert raised; ready to escalate if cues worsen.'
    elif alarm > 0.2:
        descriptor = 'Moderate caution with emotional brakes engaged.'
    else:
        descriptor = 'Calm vigilance; emotional field remains steady.'

    context.emotional_alarm = alarm
    context.insights.append('Amygdala calibrated emotional urgency.')

    return RegionResult(
        message=f"{descriptor} (alarm {fraction_percent(alarm)}%).",
        summary=f"Emotional alarm {fraction_percent(alarm)}%",
        highlight=descriptor,
        activity=activity,
        stream_text=f"Assessing emotional stakes: {descriptor}",
    )


def simulate_limbic(profile: Profile, features: ScenarioFeatures,
                    context: PipelineContext, scenario: str) -> RegionResult:
    baseline = features.positivity - features.negativity
    mood = clamp(
        baseline + context.optimism - context.emotional_alarm * 0.45
        + (profile.agreeableness - 50) / 240,
        -1.0, 1.0,
    )
    context.mood_score = mood

    if mood > 0.5:
        descriptor = 'Warm anticipation and trust forming.'
    elif mood > 0.15:
        descriptor = 'Cautious optimism—feelings lean positive.'
    elif mood > -0.2:
        descriptor = 'Neutral baseline maintained.'
    elif mood > -0.6:
        descriptor = 'Edging into concern; emotions dampened.'
    else:
        descriptor = 'Heavy apprehension saturates the mood.'

    context.mood_descriptor = descriptor
    context.insights.append(f"Mood anchor: {descriptor}")

    activity = clamp(34 + abs(mood) * 48 + context.emotional_alarm * 25,
                     *ACTIVITY_BOUNDS[BrainRegion.LIMBIC])

    return RegionResult(
        message=f"{descriptor} Emotional color {round_half_up((mood + 1) * 50)}%.",
        summary=descriptor,
        highlight=f"Mood vector {fraction_percent(mood)}%",
        activity=activity,
        stream_text=descriptor,
    )


def simulate_hippocampus(profile: Profile, features: ScenarioFeatures,
                         context: PipelineContext, scenario: str) -> RegionResult:
    recall = profile.age_traits.recall
    curiosity = profile.openness / 100
    intensity = clamp(28 + recall * 40 + int(features.has_memory_cue) * 18 + curiosity * 20,
                      *ACTIVITY_BOUNDS[BrainRegion.HIPPOCAMPUS])

    if features.has_memory_cue:
        memory = 'Triggered explicit memory—scenario resonates with past experience mentioned.'
    elif profile.background:
        memory = f"Drawing on {profile.background.lower()} background for pattern recognition."
    else:
        memory = 'Scanning episodic archives for relevant analogues despite limited cues.'

    if features.key_subjects:
        memory += f" Linking to prior encounters with {features.key_subjects[0]}."

    context.memories.append(memory)
    context.insights.append('Memory anchors layered into current model.')

    return RegionResult(
        message=memory,
        summary='Memory synthesis engaged.',
        highlight=f"Recall energy {round_half_up(intensity)}%",
        activity=intensity,
        stream_text=memory,
    )


def select_action_plan(features: ScenarioFeatures, alarm: float) -> str:
    """Motor plan priority: defensive > open > inspect > observe."""
    if features.threat > 0.6 or alarm > 0.65:
        return DEFENSIVE_PLAN
    if features.positivity > 0.4:
        return OPEN_PLAN
    if features.objects > 0.6:
        return INSPECT_PLAN
    return OBSERVE_PLAN


def simulate_motor(profile: Profile, features: ScenarioFeatures,
                   context: PipelineContext, scenario: str) -> RegionResult:
    iq_factor = profile.iq / 160
    calm = 1 - context.emotional_alarm
    readiness = clamp(
        32 + iq_factor * 30 + calm * 25 + (context.mood_score + 1) * 10
        + (RISK_BIAS[profile.risk] - context.caution_bias) * 30,
        *ACTIVITY_BOUNDS[BrainRegion.MOTOR],
    )

    plan = select_action_plan(features, context.emotional_alarm)
    context.action_plan = plan
    context.insights.append(f"Motor plan: {plan}")

    return RegionResult(
        message=plan,
        summary='Action posture drafted.',
        highlight=f"Readiness {round_half_up(readiness)}%",
        activity=readiness,
        stream_text=f"Preparing body: {plan}",
    )


def simulate_prefrontal(profile: Profile, features: ScenarioFeatures,
                        context: PipelineContext, scenario: str) -> RegionResult:
    complexity = clamp(
        38 + (profile.iq - 90) * 0.5 + profile.conscientiousness * 0.2
        + profile.age_traits.wisdom * 35,
        *ACTIVITY_BOUNDS[BrainRegion.PREFRONTAL],
    )

    if complexity > 80:
        reasoning_style = 'multi-layer reasoning'
    elif complexity > 60:
        reasoning_style = 'strategic synthesis'
    else:
        reasoning_style = 'pragmatic synthesis'

    if context.mood_score > 0.4:
        sentiment = 'lean toward engagement'
    elif context.mood_score < -0.3:
        sentiment = 'exercise restraint'
    else:
        sentiment = 'maintain balanced posture'

    safety_call = SAFETY_CALL if context.emotional_alarm > 0.65 else context.action_plan

    summary = f"Conclusion: {sentiment}. Selected course—{safety_call}"
    message = (
        f"{reasoning_style} applied. {summary} Integrating memories ({len(context.memories)}) "
        f"and sensory threads ({len(context.sensory_notes)})."
    )
    context.rationale = message

    return RegionResult(
        message=message,
        summary=summary,
        highlight=f"Executive load {round_half_up(complexity)}%",
        activity=complexity,
        stream_text=message,
    )


StageHandler = Callable[[Profile, ScenarioFeatures, PipelineContext, str], RegionResult]

STAGE_HANDLERS: Dict[BrainRegion, StageHandler] = {
    BrainRegion.VISUAL: simulate_visual,
    BrainRegion.AUDITORY: simulate_auditory,
    BrainRegion.ANTERIOR: simulate_anterior,
    BrainRegion.AMYGDALA: simulate_amygdala,
    BrainRegion.LIMBIC: simulate_limbic,
    BrainRegion.HIPPOCAMPUS: simulate_hippocampus,
    BrainRegion.MOTOR: simulate_motor,
    BrainRegion.PREFRONTAL: simulate_prefrontal,
}


def simulate_region(region: BrainRegion, profile: Profile, features: ScenarioFeatures,
                    context: PipelineContext, scenario: str) -> RegionResult:
    """Run one stage against the shared context."""
    return STAGE_HANDLERS[BrainRegion(region)](profile, features, context, scenario)
