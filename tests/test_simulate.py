"""
Smoke tests for the terminal front-end.
"""

import pytest

import simulate
from scenario_brain import REJECTION_MESSAGE, Profile, ProfilePersistence


@pytest.fixture(autouse=True)
def isolated_exports(monkeypatch, tmp_path):
    monkeypatch.setenv("SCENARIO_BRAIN_EXPORT_DIR", str(tmp_path / "profiles"))
    monkeypatch.delenv("SCENARIO_BRAIN_PACE", raising=False)


class TestMain:

    def test_single_scenario(self, capsys, hooded_scenario):
        assert simulate.main(["--scenario", hooded_scenario]) == 0

        out = capsys.readouterr().out
        assert "Step 1: Visual Cortex" in out
        assert "Step 8: Prefrontal Cortex" in out
        assert "Baseline analysis (guarded tone)" in out
        assert "Simulation complete" in out

    def test_blank_scenario(self, capsys):
        assert simulate.main(["--scenario", "   "]) == 1
        assert REJECTION_MESSAGE in capsys.readouterr().out

    def test_export_only(self, tmp_path, capsys):
        target = tmp_path / "persona.json"
        assert simulate.main(["--export", str(target)]) == 0

        assert target.exists()
        assert ProfilePersistence().load(target) == Profile()
        assert "exported" in capsys.readouterr().out

    def test_load_profile(self, tmp_path, capsys, scholar_profile, friendly_scenario):
        path = ProfilePersistence(tmp_path).export(scholar_profile)

        assert simulate.main(["--profile", path, "--scenario", friendly_scenario]) == 0
        assert "Elder Temple Archivist" in capsys.readouterr().out

    def test_missing_profile(self, tmp_path, capsys):
        assert simulate.main(["--profile", str(tmp_path / "absent.json")]) == 2
        assert "Error" in capsys.readouterr().out

    def test_seeded_randomize(self, capsys):
        assert simulate.main(["--randomize", "--seed", "11", "--scenario", "a dark alley"]) == 0
        first = capsys.readouterr().out
        assert simulate.main(["--randomize", "--seed", "11", "--scenario", "a dark alley"]) == 0
        second = capsys.readouterr().out

        assert first == second


class TestHelpers:

    def test_make_bar(self):
        assert simulate.make_bar(0.5, width=10) == '█' * 5 + '░' * 5
        assert simulate.make_bar(2.0, width=4) == '████'
        assert simulate.make_bar(-1.0, width=4) == '░░░░'

    def test_history_before_any_run(self, capsys):
        simulate.print_history(None)
        assert "No activity recorded yet" in capsys.readouterr().out


class TestProfileCommands:

    def test_malformed_profile_file(self, tmp_path, capsys):
        path = tmp_path / "bad.json"
        path.write_text('{"schemaVersion": 1, "profile": {"background": 123}}', encoding='utf-8')

        assert simulate.main(["--profile", str(path), "--scenario", "x"]) == 2
        assert "Invalid profile record" in capsys.readouterr().out

    def test_print_exports(self, tmp_path, capsys, scholar_profile):
        persistence = ProfilePersistence(tmp_path)
        path = persistence.export(scholar_profile)

        simulate.print_exports(persistence)
        out = capsys.readouterr().out
        assert path in out
        assert "Elder Temple Archivist" in out

    def test_print_exports_empty(self, tmp_path, capsys):
        simulate.print_exports(ProfilePersistence(tmp_path / "none"))
        assert "No exported personas" in capsys.readouterr().out
