"""
Tests for the pipeline orchestrator and the decaying activity history.
"""

import numpy as np
import pytest

from scenario_brain import (
    COMPLETE_MESSAGE,
    REGION_SEQUENCE,
    REJECTION_MESSAGE,
    ActivityHistory,
    BrainRegion,
    PipelineOrchestrator,
    ScenarioRejectedError,
    SimulationConfig,
    run_simulation,
)
from scenario_brain import orchestrator as orchestrator_module
from scenario_brain.orchestrator import RUNNING_MESSAGE
from scenario_brain.regions import DEFENSIVE_PLAN


class TestRejection:

    @pytest.mark.parametrize("scenario", ["", "   ", "\n\t ", None])
    def test_blank_scenario_rejected(self, default_profile, scenario):
        seen = []
        with pytest.raises(ScenarioRejectedError) as excinfo:
            PipelineOrchestrator(scenario, default_profile, on_stage=seen.append)

        assert excinfo.value.status == REJECTION_MESSAGE
        assert seen == []

    def test_rejection_is_value_error(self, default_profile):
        with pytest.raises(ValueError):
            run_simulation("  ", default_profile)

    def test_scenario_is_trimmed(self, default_profile):
        report = run_simulation("  a lantern in the dark  ", default_profile)
        assert report.scenario == "a lantern in the dark"


class TestStageOrder:

    def test_results_in_fixed_order(self, default_profile, hooded_scenario):
        seen = []
        report = run_simulation(hooded_scenario, default_profile, on_stage=seen.append)

        assert [o.region for o in seen] == list(REGION_SEQUENCE)
        assert [o.step for o in seen] == list(range(1, 9))
        assert len(report.results) == 8
        assert report.status == COMPLETE_MESSAGE

    def test_result_for(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)

        assert report.result_for(BrainRegion.MOTOR).message == DEFENSIVE_PLAN
        assert report.result_for('visual') is report.results[0]


class TestActivityHistory:

    def test_decay_invariant(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)
        activities = [r.activity for r in report.results]

        assert len(report.history) == 8
        for k, snapshot in enumerate(report.history):
            assert set(snapshot.snapshot) == {r.value for r in REGION_SEQUENCE}
            for j, region in enumerate(REGION_SEQUENCE):
                value = snapshot.snapshot[region.value]
                if j > k:
                    assert value == 0.0
                elif j == k:
                    assert value == activities[k]
                else:
                    assert value == pytest.approx(activities[j] * 0.55 ** (k - j))

    def test_custom_decay_factor(self, default_profile, hooded_scenario):
        config = SimulationConfig(decay_factor=0.5)
        report = run_simulation(hooded_scenario, default_profile, config=config)

        last = report.history[-1].snapshot
        assert last['motor'] == pytest.approx(report.result_for('motor').activity * 0.5)

    def test_labels_prefer_summary(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)

        assert report.history[0].label == "Visual lock on hooded, clarity 78%."
        assert report.history[6].label == 'Action posture drafted.'

    def test_matrix_and_series(self):
        history = ActivityHistory(decay_factor=0.5)
        history.record(BrainRegion.VISUAL, 80.0, "a")
        history.record(BrainRegion.AUDITORY, 40.0, "b")
        history.record(BrainRegion.ANTERIOR, 60.0, "c")

        matrix = history.as_matrix()
        assert matrix.shape == (3, 8)
        np.testing.assert_allclose(history.series(BrainRegion.VISUAL), [80.0, 40.0, 20.0])
        np.testing.assert_allclose(history.series('auditory'), [0.0, 40.0, 20.0])
        assert history.labels() == ["a", "b", "c"]
        assert history.current['anterior'] == 60.0
        assert len(history) == 3

    def test_revisited_region_is_overwritten(self):
        history = ActivityHistory()
        history.record(BrainRegion.VISUAL, 80.0, "first")
        history.record(BrainRegion.VISUAL, 20.0, "second")

        assert history.current['visual'] == 20.0

    def test_empty_history(self):
        history = ActivityHistory()
        assert history.as_matrix().shape == (0, 8)
        assert history.snapshots == []


class TestStreamAndTimeline:

    def test_stream_entries(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)

        assert len(report.stream) == 10
        assert report.stream[0].author == 'Scenario Ingestion'
        assert report.stream[0].message == (
            f"Scenario received: “{hooded_scenario}”. Preparing sensory parsing."
        )
        assert [e.author for e in report.stream[1:9]] == [r.display_name for r in REGION_SEQUENCE]
        assert report.stream[-1].author == 'Integrative Summary'
        assert report.stream[-1].message == report.integrative_summary

    def test_stream_uses_stage_stream_text(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)
        assert report.stream[7].message == f"Preparing body: {DEFENSIVE_PLAN}"

    def test_timeline(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)

        assert [e.step for e in report.timeline] == list(range(1, 9))
        assert report.timeline[0].region_name == 'Visual Cortex'
        assert report.timeline[3].highlight == 'Adrenal axis primed—perceiving high threat.'
        assert report.timeline[3].activity == 100.0


class TestClosingNarratives:

    def test_hooded_integrative_summary(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)

        assert report.integrative_summary == (
            "Heavy apprehension saturates the mood. "
            f"{DEFENSIVE_PLAN} "
            "Key insights: Mood anchor: Heavy apprehension saturates the mood. "
            "Memory anchors layered into current model. "
            f"Motor plan: {DEFENSIVE_PLAN}"
        )

    def test_hooded_baseline(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)

        assert report.baseline == (
            "Baseline analysis (guarded tone): Persona summary: Adult generalist "
            "(unspecified gender) with a balanced outlook, steady emotional cadence, "
            "and a balanced risk posture. Standout traits: Openness 50, Conscientiousness 50. "
            "Intellectual depth: IQ 100. "
            f"In response to “{hooded_scenario}”, they would adopt defensive stance, widen "
            "distance, prepare escape or deterrent gesture. This outlook reflects an IQ of 100 "
            "and a balanced temperament."
        )


class TestRunLifecycle:

    def test_deterministic(self, scholar_profile, friendly_scenario):
        first = run_simulation(friendly_scenario, scholar_profile)
        second = run_simulation(friendly_scenario, scholar_profile)

        assert first.results == second.results
        assert first.history == second.history
        assert first.integrative_summary == second.integrative_summary
        assert first.baseline == second.baseline

    def test_abandoned_run_leaves_no_report(self, default_profile, hooded_scenario):
        run = PipelineOrchestrator(hooded_scenario, default_profile)
        for outcome in run.stages():
            if outcome.step == 3:
                break

        assert run.report is None
        assert not run.finished
        assert run.status == RUNNING_MESSAGE
        assert len(run.results) == 3
        assert len(run.history) == 3

    def test_abandoned_run_does_not_affect_next(self, default_profile, hooded_scenario):
        abandoned = PipelineOrchestrator(hooded_scenario, default_profile)
        next(abandoned.stages())

        fresh = run_simulation(hooded_scenario, default_profile)
        reference = run_simulation(hooded_scenario, default_profile)
        assert fresh.results == reference.results

    def test_run_cannot_be_driven_twice(self, default_profile, hooded_scenario):
        run = PipelineOrchestrator(hooded_scenario, default_profile)
        run.run()

        assert run.finished
        with pytest.raises(RuntimeError):
            run.run()

    def test_context_exposed_on_report(self, default_profile, hooded_scenario):
        report = run_simulation(hooded_scenario, default_profile)

        assert report.context.action_plan == DEFENSIVE_PLAN
        assert report.context.to_dict()['emotional_alarm'] == 1.0
        assert report.features.environment == 'unknown'


class TestPacing:

    def test_no_sleep_by_default(self, monkeypatch, default_profile, hooded_scenario):
        delays = []
        monkeypatch.setattr(orchestrator_module.time, 'sleep', delays.append)
        run_simulation(hooded_scenario, default_profile)

        assert delays == []

    def test_paced_run_sleeps_between_stages(self, monkeypatch, default_profile, hooded_scenario):
        delays = []
        monkeypatch.setattr(orchestrator_module.time, 'sleep', delays.append)
        paced = run_simulation(hooded_scenario, default_profile, config=SimulationConfig(pace=True))

        assert delays == [0.65] * 7 + [0.2]
        assert paced.results == run_simulation(hooded_scenario, default_profile).results
