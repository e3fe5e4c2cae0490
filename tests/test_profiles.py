from __future__ import annotations

from pathlib import Path

import pytest

from stagesplit import Settings, create_coordinator
from stagesplit.core.steps import DEFAULT_CUT_POINT, DEFAULT_STEPS
from stagesplit.coordinator import State
from stagesplit.errors import ProfileError, SettingsError, UnknownStepError
from stagesplit.profiles import load_step_profile


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "profile.yaml"
    path.write_text(text, encoding="utf-8")
    return path


def _settings(**overrides) -> Settings:
    values = dict(
        cut_point=None,
        profile_path=None,
        system_name="Test",
        report_width=30,
        log_level="INFO",
    )
    values.update(overrides)
    return Settings(**values)


def test_load_step_profile(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        "steps:\n  - check\n  - load\n  - load\n  - classes\ncut_point: classes\nresource_step: classes\n",
    )

    profile = load_step_profile(path)

    assert profile.steps == ("check", "load", "load", "classes")
    assert profile.cut_point == "classes"
    assert profile.resource_step == "classes"


@pytest.mark.parametrize(
    "text",
    ["steps: []\n", "- check\n", "steps:\n  - 3\n", "steps: [check\n"],
)
def test_invalid_profiles_are_rejected(tmp_path: Path, text: str) -> None:
    with pytest.raises(ProfileError):
        load_step_profile(_write(tmp_path, text))


def test_profile_cut_point_must_be_a_step(tmp_path: Path) -> None:
    with pytest.raises(UnknownStepError):
        load_step_profile(_write(tmp_path, "steps: [check, load]\ncut_point: finish\n"))


def test_missing_profile(tmp_path: Path) -> None:
    with pytest.raises(ProfileError):
        load_step_profile(tmp_path / "absent.yaml")


def test_settings_load_reads_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("STAGESPLIT_CUT_POINT", "load_gems")
    monkeypatch.setenv("STAGESPLIT_PROFILE", str(tmp_path / "p.yaml"))
    monkeypatch.setenv("STAGESPLIT_REPORT_WIDTH", "50")
    monkeypatch.delenv("STAGESPLIT_SYSTEM_NAME", raising=False)

    settings = Settings.load()

    assert settings.cut_point == "load_gems"
    assert settings.profile_path == tmp_path / "p.yaml"
    assert settings.report_width == 50
    assert settings.system_name == "StageSplit"


def test_create_coordinator_uses_default_steps() -> None:
    coordinator = create_coordinator(_settings())

    assert coordinator.steps == DEFAULT_STEPS
    assert coordinator.phases.cut_point == DEFAULT_CUT_POINT
    assert coordinator.runner.timer.system_name == "Test"
    assert coordinator.runner.timer.width == 30


def test_create_coordinator_uses_profile(tmp_path: Path) -> None:
    path = _write(tmp_path, "steps: [check, load, finish]\ncut_point: finish\n")

    coordinator = create_coordinator(_settings(profile_path=path))

    assert coordinator.early_phase == ("check", "load")
    assert coordinator.resource_step is None
    assert not coordinator.preloads_resources()


@pytest.mark.parametrize("cut_point", [None, DEFAULT_CUT_POINT])
def test_profile_without_cut_point_leaves_coordinator_idle(tmp_path: Path, cut_point) -> None:
    path = _write(tmp_path, "steps: [check, load, finish]\n")

    coordinator = create_coordinator(_settings(cut_point=cut_point, profile_path=path))

    assert coordinator.state is State.IDLE
    assert coordinator.steps == ("check", "load", "finish")
    coordinator.configure_split("load")
    assert coordinator.early_phase == ("check",)


def test_settings_cut_point_applies_to_profile_containing_it(tmp_path: Path) -> None:
    path = _write(tmp_path, "steps: [check, load, finish]\n")

    coordinator = create_coordinator(_settings(cut_point="finish", profile_path=path))

    assert coordinator.late_phase == ("finish",)


def test_settings_cut_point_is_unset_by_default(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("STAGESPLIT_CUT_POINT", raising=False)
    monkeypatch.delenv("STAGESPLIT_REPORT_WIDTH", raising=False)

    settings = Settings.load()

    assert settings.cut_point is None
    assert create_coordinator(settings).phases.cut_point == DEFAULT_CUT_POINT


def test_invalid_report_width_is_a_settings_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("STAGESPLIT_REPORT_WIDTH", "wide")

    with pytest.raises(SettingsError, match="STAGESPLIT_REPORT_WIDTH"):
        Settings.load()
