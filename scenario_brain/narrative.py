"""
Narrative Composition

Two closing texts for a run:

- The integrative summary, built from the final pipeline context
- The baseline narrative, a single-voice comparison built from the persona,
  the scenario and the context's mood and action plan (never from the
  individual stage results)
"""

from typing import Mapping

from .context import PipelineContext
from .features import ScenarioFeatures
from .profile import EmotionStyle, Gender, Profile, RiskPosture

TRAIT_LABELS = {
    'openness': 'Openness',
    'conscientiousness': 'Conscientiousness',
    'extraversion': 'Extraversion',
    'agreeableness': 'Agreeableness',
    'neuroticism': 'Emotional Reactivity',
}

GENDER_LABELS = {
    Gender.FEMALE: 'female',
    Gender.MALE: 'male',
    Gender.NONBINARY: 'non-binary',
    Gender.UNSPECIFIED: 'unspecified gender',
}

RISK_LABELS = {
    RiskPosture.CAUTIOUS: 'a cautious risk posture',
    RiskPosture.BALANCED: 'a balanced risk posture',
    RiskPosture.BOLD: 'a risk-forward posture',
}

EMOTION_LABELS = {
    EmotionStyle.STEADY: 'steady emotional cadence',
    EmotionStyle.EXPRESSIVE: 'expressive emotional cadence',
    EmotionStyle.GUARDED: 'guarded emotional cadence',
}

MOOD_FALLBACK = 'Mood baseline holding steady.'
PLAN_FALLBACK = 'Hold position until more evidence arrives.'
INSIGHTS_FALLBACK = 'Insights remain preliminary.'
BASELINE_ACTION_FALLBACK = 'maintain observation before acting.'


def _format_score(value: float) -> str:
    # Whole scores print without ".0"; fractions keep every digit
    value = float(value)
    return str(int(value)) if value.is_integer() else repr(value)


def summarize_top_traits(big_five: Mapping[str, float]) -> str:
    """'Standout traits: A 80, B 70.' for the two highest scores (ties keep input order)."""
    if not big_five:
        return ''
    ranked = sorted(big_five.items(), key=lambda item: item[1], reverse=True)
    top = [f"{TRAIT_LABELS.get(name, name)} {_format_score(value)}" for name, value in ranked[:2]]
    return f"Standout traits: {', '.join(top)}."


def describe_persona(profile: Profile) -> str:
    background = profile.background.strip() or 'generalist'
    trait_summary = summarize_top_traits(profile.big_five)
    trait_text = f"{trait_summary} " if trait_summary else ''
    age_descriptor = profile.age_group.value.capitalize()

    return (
        f"Persona summary: {age_descriptor} {background} ({GENDER_LABELS[profile.gender]}) "
        f"with a {profile.outlook.value} outlook, {EMOTION_LABELS[profile.emotion_style]}, "
        f"and {RISK_LABELS[profile.risk]}. {trait_text}Intellectual depth: IQ {profile.iq}."
    )


def format_action_for_baseline(action_plan: str) -> str:
    """Lowercase-led, period-terminated clause for 'they would ...'."""
    trimmed = (action_plan or '').strip()
    if not trimmed:
        return BASELINE_ACTION_FALLBACK
    lowered = trimmed[0].lower() + trimmed[1:]
    return lowered if lowered.endswith('.') else f"{lowered}."


def baseline_tone(mood_score: float) -> str:
    if mood_score > 0.2:
        return 'warm'
    if mood_score < -0.3:
        return 'guarded'
    return 'even'


def create_integrative_summary(context: PipelineContext, window: int = 3) -> str:
    mood = context.mood_descriptor or MOOD_FALLBACK
    plan = context.action_plan or PLAN_FALLBACK
    recent = context.insights.most_recent(window)
    insights = f"Key insights: {' '.join(recent)}" if recent else INSIGHTS_FALLBACK
    return f"{mood} {plan} {insights}"


def generate_baseline_response(profile: Profile, scenario: str,
                               features: ScenarioFeatures, context: PipelineContext) -> str:
    """The single-voice comparison text."""
    tone = baseline_tone(context.mood_score)
    action = format_action_for_baseline(context.action_plan)
    persona = describe_persona(profile)
    return (
        f"Baseline analysis ({tone} tone): {persona} In response to “{scenario}”, "
        f"they would {action} This outlook reflects an IQ of {profile.iq} "
        f"and a {profile.outlook.value} temperament."
    )


class NarrativeComposer:
    """Bundles the closing narratives for a finished run."""

    def __init__(self, insight_window: int = 3):
        self.insight_window = insight_window

    def integrative_summary(self, context: PipelineContext) -> str:
        return create_integrative_summary(context, self.insight_window)

    def baseline(self, profile: Profile, scenario: str,
                 features: ScenarioFeatures, context: PipelineContext) -> str:
        return generate_baseline_response(profile, scenario, features, context)

    def persona(self, profile: Profile) -> str:
        return describe_persona(profile)
