# tests/bootstrap_installer/test_bs_orchestrator.py
import signal
from pathlib import Path

import pytest

from bootstrap_installer import bs_clone, bs_launch, bs_orchestrator
from bootstrap_installer.bs_errors import AccessDenied, EntryPointNotFound
from bootstrap_installer.bs_orchestrator import (
    WORKDIR_PREFIX,
    exit_on_termination_signals,
    run_bootstrap_orchestration,
    working_directory,
)


@pytest.fixture
def preflight(mocker):
    """Stubs the CLI, auth, access and Python checks."""
    return {
        name: mocker.patch.object(bs_orchestrator, name, return_value=None)
        for name in (
            "ensure_gh_cli",
            "ensure_authenticated",
            "verify_repo_access",
            "check_python",
        )
    }


@pytest.fixture
def fake_clone(mocker, completed):
    """
    Replaces `gh repo clone` with a function that writes `files` into the
    target directory. Every clone target is recorded in `targets`.
    """
    state = {"files": {"main.py": ""}, "targets": []}

    def fake_run(command, *args, **kwargs):
        target = Path(command[4])
        state["targets"].append((target, command))
        for relative, content in state["files"].items():
            path = target / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        return completed()

    mocker.patch.object(bs_clone, "run_command", side_effect=fake_run)
    return state


@pytest.fixture
def fake_launch(mocker, completed):
    return mocker.patch.object(
        bs_launch, "run_command", return_value=completed(returncode=0)
    )


def test_dry_run_scenario(preflight, fake_clone, fake_launch, app_settings):
    context = {}

    exit_code = run_bootstrap_orchestration(
        "myorg/repo",
        None,
        ["--dry-run", "--email", "a@b.com"],
        app_settings,
        context=context,
    )

    assert exit_code == 0
    assert context["entry_point"] == "main.py"
    assert fake_launch.call_args[0][0] == [
        "python3",
        "main.py",
        "--dry-run",
        "--email",
        "a@b.com",
    ]
    workdir = fake_clone["targets"][0][0]
    assert workdir.name.startswith(WORKDIR_PREFIX)
    assert not workdir.exists()


def test_explicit_installer_scenario(
    preflight, fake_clone, fake_launch, app_settings
):
    fake_clone["files"] = {"main.py": "", "scripts/setup.py": ""}

    run_bootstrap_orchestration(
        "myorg/repo", "scripts/setup.py", ["--verbose"], app_settings
    )

    assert fake_launch.call_args[0][0] == [
        "python3",
        "scripts/setup.py",
        "--verbose",
    ]


def test_branch_reaches_clone(preflight, fake_clone, fake_launch, app_settings):
    app_settings.branch = "release-2"

    run_bootstrap_orchestration("myorg/repo", None, [], app_settings)

    command = fake_clone["targets"][0][1]
    assert command[-2:] == ["-b", "release-2"]


def test_steps_run_in_order_and_receive_repo(
    preflight, fake_clone, fake_launch, app_settings, mocker
):
    manager = mocker.MagicMock()
    for name, mock in preflight.items():
        manager.attach_mock(mock, name)

    run_bootstrap_orchestration("myorg/repo", None, [], app_settings)

    assert [c[0] for c in manager.mock_calls] == [
        "ensure_gh_cli",
        "ensure_authenticated",
        "verify_repo_access",
        "check_python",
    ]
    assert preflight["verify_repo_access"].call_args[0] == ("myorg/repo",)


def test_exit_code_is_propagated(preflight, fake_clone, mocker, completed, app_settings):
    mocker.patch.object(
        bs_launch, "run_command", return_value=completed(returncode=7)
    )

    assert run_bootstrap_orchestration("myorg/repo", None, [], app_settings) == 7


def test_preflight_failure_stops_before_clone(
    preflight, fake_clone, fake_launch, app_settings
):
    preflight["verify_repo_access"].side_effect = AccessDenied(
        "Cannot access repository: myorg/repo"
    )

    with pytest.raises(AccessDenied):
        run_bootstrap_orchestration("myorg/repo", None, [], app_settings)

    preflight["check_python"].assert_not_called()
    assert fake_clone["targets"] == []
    fake_launch.assert_not_called()


def test_workdir_removed_on_failure(
    preflight, fake_clone, fake_launch, app_settings
):
    with pytest.raises(EntryPointNotFound):
        run_bootstrap_orchestration(
            "myorg/repo", "missing.py", [], app_settings
        )

    workdir = fake_clone["targets"][0][0]
    assert not workdir.exists()
    fake_launch.assert_not_called()


def test_workdir_removed_on_interrupt(
    preflight, fake_clone, mocker, app_settings
):
    mocker.patch.object(bs_launch, "run_command", side_effect=KeyboardInterrupt)

    with pytest.raises(KeyboardInterrupt):
        run_bootstrap_orchestration("myorg/repo", None, [], app_settings)

    assert not fake_clone["targets"][0][0].exists()


def test_second_run_gets_fresh_workdir(
    preflight, fake_clone, fake_launch, app_settings
):
    first = run_bootstrap_orchestration("myorg/repo", None, ["-v"], app_settings)
    second = run_bootstrap_orchestration("myorg/repo", None, ["-v"], app_settings)

    assert first == second == 0
    (dir_one, _), (dir_two, _) = fake_clone["targets"]
    assert dir_one != dir_two
    assert not dir_one.exists()
    assert not dir_two.exists()


def test_working_directory_is_empty_and_removed():
    with working_directory() as workdir:
        assert workdir.is_dir()
        assert list(workdir.iterdir()) == []
        (workdir / "leftover.txt").write_text("x", encoding="utf-8")

    assert not workdir.exists()


def test_termination_signal_raises_system_exit():
    previous = signal.getsignal(signal.SIGTERM)

    with pytest.raises(SystemExit) as excinfo:
        with exit_on_termination_signals():
            signal.raise_signal(signal.SIGTERM)

    assert excinfo.value.code == 128 + signal.SIGTERM
    assert signal.getsignal(signal.SIGTERM) == previous


def test_workdir_removed_on_termination_during_launch(
    preflight, fake_clone, mocker, app_settings
):
    mocker.patch.object(
        bs_launch, "run_command", side_effect=SystemExit(128 + signal.SIGTERM)
    )

    with pytest.raises(SystemExit) as excinfo:
        run_bootstrap_orchestration("myorg/repo", None, [], app_settings)

    assert excinfo.value.code == 143
    assert not fake_clone["targets"][0][0].exists()


def test_sigterm_during_launch_unwinds_and_removes_workdir(
    preflight, fake_clone, mocker, app_settings
):
    previous = signal.getsignal(signal.SIGTERM)

    def deliver_sigterm(*args, **kwargs):
        signal.raise_signal(signal.SIGTERM)

    mocker.patch.object(bs_launch, "run_command", side_effect=deliver_sigterm)

    with pytest.raises(SystemExit) as excinfo:
        run_bootstrap_orchestration("myorg/repo", None, [], app_settings)

    assert excinfo.value.code == 128 + signal.SIGTERM
    assert not fake_clone["targets"][0][0].exists()
    assert signal.getsignal(signal.SIGTERM) == previous
