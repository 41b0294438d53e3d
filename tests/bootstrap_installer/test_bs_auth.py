# tests/bootstrap_installer/test_bs_auth.py
from unittest.mock import MagicMock

import pytest

from bootstrap_installer import bs_auth
from bootstrap_installer.bs_auth import ensure_authenticated
from bootstrap_installer.bs_errors import AuthFailed


@pytest.fixture
def fake_gh(mocker, completed):
    """
    Patches run_command in bs_auth. `status_rc` controls `gh auth status`;
    `login_rcs` is consumed one exit code per `gh auth login` call.
    """
    state = {"status_rc": 1, "login_rcs": [], "login_calls": []}

    def fake_run(command, *args, **kwargs):
        if command[1:3] == ["auth", "status"]:
            return completed(returncode=state["status_rc"])
        if command[1:3] == ["auth", "login"]:
            state["login_calls"].append(command)
            return completed(returncode=state["login_rcs"].pop(0))
        raise AssertionError(f"unexpected command {command}")

    state["mock"] = mocker.patch.object(
        bs_auth, "run_command", side_effect=fake_run
    )
    return state


def test_existing_session_skips_login(fake_gh, app_settings):
    fake_gh["status_rc"] = 0
    prompt = MagicMock()
    context = {}

    attempts = ensure_authenticated(app_settings, context=context, prompt=prompt)

    assert attempts == 0
    assert fake_gh["login_calls"] == []
    prompt.assert_not_called()
    assert context["auth_attempts"] == 0


def test_login_requests_minimal_scopes(fake_gh, app_settings):
    fake_gh["login_rcs"] = [0]

    ensure_authenticated(app_settings, prompt=MagicMock())

    assert fake_gh["login_calls"] == [
        ["gh", "auth", "login", "--web", "--scopes", "repo,read:org"]
    ]


def test_first_attempt_success_does_not_prompt(fake_gh, app_settings):
    fake_gh["login_rcs"] = [0]
    prompt = MagicMock()

    assert ensure_authenticated(app_settings, prompt=prompt) == 1
    prompt.assert_not_called()


def test_success_on_last_attempt(fake_gh, app_settings):
    fake_gh["login_rcs"] = [1, 1, 0]
    prompt = MagicMock(return_value="")
    context = {}

    attempts = ensure_authenticated(app_settings, context=context, prompt=prompt)

    assert attempts == 3
    assert prompt.call_count == 2
    assert context["auth_attempts"] == 3


def test_three_failures_are_fatal(fake_gh, app_settings, capsys):
    fake_gh["login_rcs"] = [1, 1, 1]
    prompt = MagicMock(return_value="")

    with pytest.raises(AuthFailed) as excinfo:
        ensure_authenticated(app_settings, prompt=prompt)

    assert len(fake_gh["login_calls"]) == 3
    # No wait after the final failure.
    assert prompt.call_count == 2
    assert excinfo.value.message == (
        "GitHub authentication failed after 3 attempts"
    )
    assert excinfo.value.hints == bs_auth.TROUBLESHOOTING_TIPS
    assert bs_auth.RETRY_PROMPT in capsys.readouterr().out


def test_attempt_limit_is_configurable(fake_gh, app_settings):
    app_settings.max_auth_attempts = 1
    fake_gh["login_rcs"] = [1]
    prompt = MagicMock()

    with pytest.raises(AuthFailed):
        ensure_authenticated(app_settings, prompt=prompt)

    assert len(fake_gh["login_calls"]) == 1
    prompt.assert_not_called()


def test_missing_gh_binary_counts_as_failed_login(mocker, app_settings):
    mocker.patch.object(
        bs_auth, "run_command", side_effect=FileNotFoundError("gh")
    )

    with pytest.raises(AuthFailed):
        ensure_authenticated(app_settings, prompt=MagicMock())


def test_closed_stdin_between_attempts_fails_with_hints(fake_gh, app_settings):
    fake_gh["login_rcs"] = [1, 1, 1]
    prompt = MagicMock(side_effect=EOFError)

    with pytest.raises(AuthFailed) as excinfo:
        ensure_authenticated(app_settings, prompt=prompt)

    assert len(fake_gh["login_calls"]) == 1
    prompt.assert_called_once_with("")
    assert "after 1 attempts" in excinfo.value.message
    assert excinfo.value.hints == bs_auth.TROUBLESHOOTING_TIPS
    assert isinstance(excinfo.value.original_error, EOFError)
