"""
Scenario Brain Tests Configuration
==================================

Shared fixtures for the simulation tests.
"""

import sys
from pathlib import Path

import pytest

# Make the package importable without installation
project_root = Path(__file__).resolve().parents[1]
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


HOODED_SCENARIO = "A hooded figure approaches silently, knife glinting, and you feel afraid"
FRIENDLY_SCENARIO = "A friendly merchant with a kind smile offers you a gift in the market square"


@pytest.fixture
def default_profile():
    """IQ 100, every trait 50, balanced/balanced/steady."""
    from scenario_brain import Profile

    return Profile(
        age=30,
        gender="unspecified",
        iq=100,
        background="",
        big_five={name: 50 for name in (
            'openness', 'conscientiousness', 'extraversion', 'agreeableness', 'neuroticism')},
        outlook="balanced",
        risk="balanced",
        emotion_style="steady",
    )


@pytest.fixture
def scholar_profile():
    from scenario_brain import Profile

    return Profile(
        age=64,
        gender="female",
        iq=132,
        background="Temple Archivist",
        big_five={
            'openness': 82,
            'conscientiousness': 74,
            'extraversion': 31,
            'agreeableness': 66,
            'neuroticism': 40,
        },
        outlook="optimistic",
        risk="cautious",
        emotion_style="guarded",
    )


@pytest.fixture
def hooded_scenario():
    return HOODED_SCENARIO


@pytest.fixture
def friendly_scenario():
    return FRIENDLY_SCENARIO
