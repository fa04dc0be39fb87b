"""
Unit tests for settings, the environment loader and the run.py launcher
"""
import importlib

import pytest
import uvicorn

import run
from app.config import get_settings
from app.config.loader import ConfigLoader
from app.config.settings import Settings, build_settings

MYSQL_URL = "mysql+aiomysql://u:p@db:3306/idioms"
OVERRIDDEN = ("ENVIRONMENT", "HOST", "PORT", "WORKERS", "RELOAD", "DEBUG", "DATABASE_URL", "CLIENT_BASE_URL")

settings_module = importlib.import_module("app.config.settings")


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Empty working directory with no env vars shadowing the .env files"""
    monkeypatch.chdir(tmp_path)
    for name in OVERRIDDEN:
        # setenv first so the variable is restored or removed after the test
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.setattr(settings_module, "settings", settings_module.settings)
    return tmp_path


@pytest.fixture
def served(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    return calls


def test_nested_settings_read_dotenv(workdir):
    (workdir / ".env").write_text(f"DATABASE_URL={MYSQL_URL}\nCLIENT_BASE_URL=https://idioms.test\n")

    settings = build_settings()

    assert settings.database.url == MYSQL_URL
    assert settings.client.base_url == "https://idioms.test"


def test_environment_file_overrides_dotenv(workdir):
    (workdir / ".env").write_text("DATABASE_URL=sqlite+aiosqlite:///./base.db\nAPP_NAME=Base\n")
    (workdir / ".env.production").write_text(f"DATABASE_URL={MYSQL_URL}\n")

    settings = ConfigLoader.load_environment_config("production")

    assert settings.environment.value == "production"
    assert settings.database.url == MYSQL_URL
    assert settings.app_name == "Base"
    assert settings.is_production()


def test_process_environment_wins_over_files(workdir, monkeypatch):
    (workdir / ".env").write_text(f"DATABASE_URL={MYSQL_URL}\n")
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./env.db")

    assert build_settings().database.url == "sqlite+aiosqlite:///./env.db"


def test_missing_environment_file_is_valid(workdir):
    assert ConfigLoader.validate_environment_config("development")
    assert ConfigLoader.load_environment_config("development").database.url == Settings().database.url


def test_invalid_environment_values_fail_validation(workdir):
    (workdir / ".env.staging").write_text("PORT=not-a-port\n")

    assert not ConfigLoader.validate_environment_config("staging")
    assert not ConfigLoader.validate_environment_config("nowhere")


def test_sample_file_lists_database_url(workdir):
    path = ConfigLoader.create_sample_env_file("production")

    content = (workdir / path).read_text(encoding="utf-8")
    assert "DATABASE_URL=" in content
    assert "ENVIRONMENT=production" in content


def test_run_starts_without_environment_file(workdir, served):
    run.main([])

    [(app, kwargs)] = served
    assert app == "app.main:app"
    assert kwargs["port"] == 8000
    assert kwargs["reload"] is False


def test_run_overrides_reach_global_settings(workdir, served):
    (workdir / ".env.staging").write_text(f"DATABASE_URL={MYSQL_URL}\n")

    run.main(["--env", "staging", "--debug", "--port", "9001"])

    settings = get_settings()
    assert settings.environment.value == "staging"
    assert settings.debug is True
    assert settings.port == 9001
    assert settings.database.url == MYSQL_URL
    assert served[0][1]["port"] == 9001


def test_run_disables_reload_in_production(workdir, served):
    run.main(["--env", "production", "--reload", "--workers", "4"])

    kwargs = served[0][1]
    assert kwargs["reload"] is False
    assert kwargs["workers"] == 4


def test_run_rejects_invalid_configuration(workdir, served):
    (workdir / ".env.testing").write_text("WORKERS=99\n")

    with pytest.raises(SystemExit) as exc:
        run.main(["--env", "testing"])

    assert exc.value.code == 1
    assert served == []
