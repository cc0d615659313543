import pytest

from bookshelf.config import load_settings
from bookshelf.core import ConfigurationException


DB_VARS = {
    "DB_USER": "bookshelf",
    "DB_PASSWORD": "s3cret",
    "DB_HOST": "db.example",
    "DB_PORT": "5432",
    "DB_NAME": "library",
}


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in list(DB_VARS) + ["PORT", "HOST", "ENVIRONMENT", "LOG_LEVEL", "CORS_METHODS", "DB_SSLMODE"]:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch


def test_loads_database_settings_from_environment(clean_env):
    for name, value in DB_VARS.items():
        clean_env.setenv(name, value)

    settings = load_settings(env_file=None)

    assert settings.db_user == "bookshelf"
    assert settings.db_password == "s3cret"
    assert settings.db_host == "db.example"
    assert settings.db_port == 5432
    assert settings.db_name == "library"
    assert settings.db_sslmode == "require"


def test_defaults(clean_env):
    for name, value in DB_VARS.items():
        clean_env.setenv(name, value)

    settings = load_settings(env_file=None)

    assert settings.port == 8080
    assert settings.host == "0.0.0.0"
    assert settings.cors_origins == ["*"]
    assert settings.cors_methods == ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    assert settings.cors_headers == ["Content-Type", "Authorization"]


def test_loads_from_dotenv_file(clean_env, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("\n".join(f"{k}={v}" for k, v in DB_VARS.items()))

    settings = load_settings(env_file=str(env_file))

    assert settings.db_name == "library"


def test_missing_database_variables_raise(clean_env):
    clean_env.setenv("DB_USER", "bookshelf")

    with pytest.raises(ConfigurationException) as exc_info:
        load_settings(env_file=None)

    assert exc_info.value.details["fields"] == ["db_host", "db_name", "db_password", "db_port"]


def test_missing_dotenv_and_environment_raise(clean_env, tmp_path):
    with pytest.raises(ConfigurationException):
        load_settings(env_file=str(tmp_path / "does-not-exist.env"))


def test_invalid_port_raises(clean_env):
    for name, value in DB_VARS.items():
        clean_env.setenv(name, value)
    clean_env.setenv("DB_PORT", "not-a-port")

    with pytest.raises(ConfigurationException) as exc_info:
        load_settings(env_file=None)

    assert exc_info.value.details["fields"] == ["db_port"]


def test_comma_separated_cors_methods(clean_env):
    for name, value in DB_VARS.items():
        clean_env.setenv(name, value)
    clean_env.setenv("CORS_METHODS", "GET, POST")

    settings = load_settings(env_file=None)

    assert settings.cors_methods == ["GET", "POST"]


def test_rejects_unknown_environment(clean_env):
    for name, value in DB_VARS.items():
        clean_env.setenv(name, value)
    clean_env.setenv("ENVIRONMENT", "qa")

    with pytest.raises(ConfigurationException):
        load_settings(env_file=None)
