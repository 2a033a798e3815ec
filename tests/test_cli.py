"""
Tests for the diningbot command line
"""

import pytest

import diningbot_server.cli as cli


@pytest.fixture
def env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ("TELEGRAM_BOT_TOKEN", "TELEGRAM_PERSONAL_ID", "BROWSER_MODE", "AS_SERVER", "PORT"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def runs(env):
    recorded = []

    async def fake_run_daily_menu(config, max_attempts=None, sender=None):
        recorded.append((config, max_attempts))
        return True

    env.setattr(cli, "run_daily_menu", fake_run_daily_menu)
    return recorded


def test_parser_reads_flags(env):
    args = cli.build_parser().parse_args([
        "run", "-t", "tok", "--personal-id", "7", "--browser-mode", "remote", "--server", "-p", "9000",
    ])
    cfg = cli.config_from_args(args)
    assert cfg.telegram_bot_token == "tok"
    assert cfg.personal_id == 7
    assert cfg.browser_mode == "remote"
    assert cfg.as_server is True
    assert cfg.port == 9000


def test_unknown_browser_mode_rejected_by_parser():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args(["run", "--browser-mode", "kiosk"])


def test_missing_token_exits_with_error(runs):
    assert cli.main(["run", "--personal-id", "7"]) == 1
    assert runs == []


def test_missing_personal_id_exits_with_error(runs):
    assert cli.main(["run", "-t", "tok"]) == 1
    assert runs == []


def test_run_once_without_retries(runs):
    assert cli.main(["run", "-t", "tok", "--personal-id", "7"]) == 0
    assert len(runs) == 1
    config, max_attempts = runs[0]
    assert config.personal_id == 7
    assert max_attempts == 1


def test_env_supplies_credentials(runs, env):
    env.setenv("TELEGRAM_BOT_TOKEN", "env-token")
    env.setenv("TELEGRAM_PERSONAL_ID", "99")
    assert cli.main(["run"]) == 0
    assert runs[0][0].telegram_bot_token == "env-token"


def test_failed_run_still_exits_zero(env):
    async def failing(config, max_attempts=None, sender=None):
        return False

    env.setattr(cli, "run_daily_menu", failing)
    assert cli.main(["run", "-t", "tok", "--personal-id", "7"]) == 0


def test_server_mode_starts_listener(runs, env):
    started = []
    import diningbot_server.app as app_module
    env.setattr(app_module, "run_server", lambda config: started.append(config.port))

    assert cli.main(["run", "-t", "tok", "--personal-id", "7", "--server", "-p", "8181"]) == 0
    assert started == [8181]
    assert runs == []


def test_no_command_prints_help(capsys):
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out
