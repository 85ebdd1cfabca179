"""
Pipeline Orchestrator

One orchestrator is one simulation run. Construct a fresh one per scenario;
nothing carries over between runs.

    run = PipelineOrchestrator(scenario, profile)
    report = run.run()

    # or step through, abandoning whenever you like
    for outcome in run.stages():
        print(outcome.region.display_name, outcome.result.activity)

After each stage every recorded region intensity decays by the configured
factor (0.55) and the stage's own region is overwritten with its fresh
activity, so the history fades smoothly instead of dropping to zero.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

import numpy as np

from .config import SimulationConfig
from .context import PipelineContext
from .features import FeatureExtractor, ScenarioFeatures
from .narrative import NarrativeComposer
from .profile import Profile
from .regions import REGION_SEQUENCE, BrainRegion, RegionResult, simulate_region

logger = logging.getLogger(__name__)

REJECTION_MESSAGE = 'Describe a situation to ignite the neural conversation.'
RUNNING_MESSAGE = 'Running multi-region cognition...'
COMPLETE_MESSAGE = 'Simulation complete. Compare with the baseline AI voice.'


class ScenarioRejectedError(ValueError):
    """Raised when the scenario text is empty or blank."""

    def __init__(self, status: str = REJECTION_MESSAGE):
        super().__init__(status)
        self.status = status


# =============================================================================
# RECORDS
# =============================================================================

@dataclass(frozen=True)
class ActivitySnapshot:
    """Region intensities right after one stage."""
    label: str
    snapshot: Dict[str, float]


@dataclass(frozen=True)
class StreamEntry:
    """One line of the running consciousness log."""
    author: str
    message: str


@dataclass(frozen=True)
class TimelineEvent:
    step: int
    region_name: str
    highlight: str
    activity: float


@dataclass(frozen=True)
class StageOutcome:
    step: int
    region: BrainRegion
    result: RegionResult
    snapshot: ActivitySnapshot


@dataclass
class SimulationReport:
    """Everything a finished run produced."""
    scenario: str
    profile: Profile
    features: ScenarioFeatures
    context: PipelineContext
    results: List[RegionResult] = field(default_factory=list)
    history: List[ActivitySnapshot] = field(default_factory=list)
    stream: List[StreamEntry] = field(default_factory=list)
    timeline: List[TimelineEvent] = field(default_factory=list)
    integrative_summary: str = ''
    baseline: str = ''
    status: str = COMPLETE_MESSAGE

    def result_for(self, region: BrainRegion) -> RegionResult:
        return self.results[REGION_SEQUENCE.index(BrainRegion(region))]


# =============================================================================
# ACTIVITY HISTORY
# =============================================================================

class ActivityHistory:
    """
    Decaying multi-series record of region intensities (0-100).

    Every region is always present in every snapshot; unvisited regions
    read 0.
    """

    def __init__(self, decay_factor: float = 0.55):
        self.decay_factor = decay_factor
        self.regions = [region.value for region in REGION_SEQUENCE]
        self._intensity = np.zeros(len(self.regions))
        self._snapshots: List[ActivitySnapshot] = []

    def record(self, region: BrainRegion, value: float, label: str) -> ActivitySnapshot:
        self._intensity = self._intensity * self.decay_factor
        self._intensity[self.regions.index(BrainRegion(region).value)] = value
        snapshot = ActivitySnapshot(
            label=label,
            snapshot=dict(zip(self.regions, self._intensity.tolist())),
        )
        self._snapshots.append(snapshot)
        return snapshot

    @property
    def current(self) -> Dict[str, float]:
        return dict(zip(self.regions, self._intensity.tolist()))

    @property
    def snapshots(self) -> List[ActivitySnapshot]:
        return list(self._snapshots)

    def as_matrix(self) -> np.ndarray:
        """History as a (steps, regions) array, columns in region order."""
        if not self._snapshots:
            return np.zeros((0, len(self.regions)))
        return np.array([[s.snapshot[r] for r in self.regions] for s in self._snapshots])

    def series(self, region: BrainRegion) -> np.ndarray:
        """One region's intensity across all recorded steps."""
        column = self.regions.index(BrainRegion(region).value)
        return self.as_matrix()[:, column]

    def labels(self) -> List[str]:
        return [s.label for s in self._snapshots]

    def __len__(self) -> int:
        return len(self._snapshots)


# =============================================================================
# ORCHESTRATOR
# =============================================================================

class PipelineOrchestrator:
    """
    Drives the eight region stages for a single scenario/profile pair.

    The scenario is validated before any run state exists: a blank scenario
    raises ScenarioRejectedError and leaves nothing behind.
    """

    def __init__(
        self,
        scenario: str,
        profile: Profile,
        config: Optional[SimulationConfig] = None,
        extractor: Optional[FeatureExtractor] = None,
        on_stage: Optional[Callable[[StageOutcome], None]] = None,
    ):
        cleaned = (scenario or '').strip()
        if not cleaned:
            logger.info("Scenario rejected: empty or blank text")
            raise ScenarioRejectedError()

        self.config = config or SimulationConfig()
        self.scenario = cleaned
        self.profile = profile
        self.on_stage = on_stage

        self.features = (extractor or FeatureExtractor()).extract(cleaned)
        self.context = PipelineContext.create(profile, self.features)
        self.history = ActivityHistory(self.config.decay_factor)
        self.composer = NarrativeComposer(self.config.insight_window)

        self.results: List[RegionResult] = []
        self.timeline: List[TimelineEvent] = []
        self.stream: List[StreamEntry] = [
            StreamEntry('Scenario Ingestion',
                        f"Scenario received: “{cleaned}”. Preparing sensory parsing."),
        ]
        self.status = RUNNING_MESSAGE
        self._started = False
        self._report: Optional[SimulationReport] = None

    @property
    def finished(self) -> bool:
        return self._report is not None

    def stages(self) -> Iterator[StageOutcome]:
        """
        Run stages one at a time, yielding after each.

        Stopping iteration early abandons the run; its partial results stay
        on this object only.
        """
        if self._started:
            raise RuntimeError("A run can only be driven once; create a new orchestrator")
        self._started = True

        for step, region in enumerate(REGION_SEQUENCE, start=1):
            outcome = self._run_stage(step, region)
            if self.on_stage is not None:
                self.on_stage(outcome)
            yield outcome
            if self.config.pace:
                time.sleep(self.config.final_stage_delay if region is BrainRegion.PREFRONTAL
                           else self.config.stage_delay)

        self._report = self._finish()

    def run(self) -> SimulationReport:
        """Run every stage back to back and return the report."""
        for _ in self.stages():
            pass
        return self._report

    @property
    def report(self) -> Optional[SimulationReport]:
        return self._report

    def _run_stage(self, step: int, region: BrainRegion) -> StageOutcome:
        result = simulate_region(region, self.profile, self.features, self.context, self.scenario)
        self.results.append(result)

        name = region.display_name
        self.stream.append(StreamEntry(name, result.stream_text or result.message))
        self.timeline.append(TimelineEvent(
            step=step,
            region_name=name,
            highlight=result.highlight or result.summary or 'Activity spike',
            activity=result.activity,
        ))
        label = result.summary or result.highlight or result.message
        snapshot = self.history.record(region, result.activity, label)

        logger.debug(f"Stage {step} {region.value}: activity {result.activity:.2f}")
        return StageOutcome(step=step, region=region, result=result, snapshot=snapshot)

    def _finish(self) -> SimulationReport:
        summary = self.composer.integrative_summary(self.context)
        self.stream.append(StreamEntry('Integrative Summary', summary))
        baseline = self.composer.baseline(self.profile, self.scenario, self.features, self.context)
        self.status = COMPLETE_MESSAGE
        logger.info(f"Simulation complete: alarm {self.context.emotional_alarm:.2f}, "
                    f"mood {self.context.mood_score:.2f}")

        return SimulationReport(
            scenario=self.scenario,
            profile=self.profile,
            features=self.features,
            context=self.context,
            results=list(self.results),
            history=self.history.snapshots,
            stream=list(self.stream),
            timeline=list(self.timeline),
            integrative_summary=summary,
            baseline=baseline,
            status=self.status,
        )


def run_simulation(
    scenario: str,
    profile: Optional[Profile] = None,
    config: Optional[SimulationConfig] = None,
    on_stage: Optional[Callable[[StageOutcome], None]] = None,
) -> SimulationReport:
    """
    Convenience entry point: one full run with a fresh orchestrator.

    Args:
        scenario: Free-form scenario text (blank text is rejected)
        profile: Persona; the default profile when omitted
        config: Optional SimulationConfig
        on_stage: Optional callback invoked after each stage

    Returns:
        SimulationReport for the run
    """
    orchestrator = PipelineOrchestrator(scenario, profile or Profile(), config=config, on_stage=on_stage)
    return orchestrator.run()
