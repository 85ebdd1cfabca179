# Scenario Brain - Multi-Region Cognitive Narration
#
# A persona reads a short scenario; eight simulated regions take turns
# reacting to it, and the run closes with an integrative summary and a
# single-voice baseline for comparison.
#
# PACKAGE LAYOUT:
# ├── features.py      - Lexical scenario scoring
# ├── profile.py       - Persona profile + age-derived traits
# ├── context.py       - Run-scoped context shared by the stages
# ├── regions.py       - The eight region stages
# ├── orchestrator.py  - Stage driver + decaying activity history
# ├── narrative.py     - Integrative summary + baseline narrative
# ├── persistence.py   - Profile export/import (JSON)
# └── config.py        - SimulationConfig
#
# STAGE ORDER:
# visual -> auditory -> anterior -> amygdala -> limbic -> hippocampus
#        -> motor -> prefrontal

# =============================================================================
# PRIMARY EXPORTS: Simulation run
# =============================================================================

from .orchestrator import (
    PipelineOrchestrator,
    run_simulation,  # Primary entry point

    # Run records
    ActivityHistory,
    ActivitySnapshot,
    SimulationReport,
    StageOutcome,
    StreamEntry,
    TimelineEvent,

    # Status / errors
    ScenarioRejectedError,
    REJECTION_MESSAGE,
    COMPLETE_MESSAGE,
)

from .config import SimulationConfig

# =============================================================================
# SUPPORTING MODULES
# =============================================================================

# Feature extraction
from .features import (
    FeatureExtractor,
    ScenarioFeatures,
    analyze_scenario,
)

# Persona
from .profile import (
    Profile,
    ProfileValidationError,
    Gender,
    Outlook,
    RiskPosture,
    EmotionStyle,
    AgeGroup,
    AgeTraits,
    derive_age_group,
    randomize_profile,
)

# Shared context
from .context import (
    AppendOnlyLog,
    PipelineContext,
)

# Region stages
from .regions import (
    BrainRegion,
    REGION_SEQUENCE,
    RegionResult,
    simulate_region,
)

# Narratives
from .narrative import (
    NarrativeComposer,
    create_integrative_summary,
    describe_persona,
    generate_baseline_response,
)

# Persistence
from .persistence import (
    ProfilePersistence,
    ProfileImportError,
    export_profile,
    import_profile,
)

__version__ = "1.0.0"

__all__ = [
    # Run
    'PipelineOrchestrator',
    'run_simulation',
    'ActivityHistory',
    'ActivitySnapshot',
    'SimulationReport',
    'StageOutcome',
    'StreamEntry',
    'TimelineEvent',
    'ScenarioRejectedError',
    'REJECTION_MESSAGE',
    'COMPLETE_MESSAGE',
    'SimulationConfig',

    # Features
    'FeatureExtractor',
    'ScenarioFeatures',
    'analyze_scenario',

    # Persona
    'Profile',
    'ProfileValidationError',
    'Gender',
    'Outlook',
    'RiskPosture',
    'EmotionStyle',
    'AgeGroup',
    'AgeTraits',
    'derive_age_group',
    'randomize_profile',

    # Context
    'AppendOnlyLog',
    'PipelineContext',

    # Regions
    'BrainRegion',
    'REGION_SEQUENCE',
    'RegionResult',
    'simulate_region',

    # Narratives
    'NarrativeComposer',
    'create_integrative_summary',
    'describe_persona',
    'generate_baseline_response',

    # Persistence
    'ProfilePersistence',
    'ProfileImportError',
    'export_profile',
    'import_profile',
]
