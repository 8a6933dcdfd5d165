from pathlib import Path

import pytest

from zonver.config import ConfigError, Settings, load_settings


@pytest.fixture(autouse=True)
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)


def test_defaults() -> None:
    settings = load_settings(environ={})
    assert settings == Settings()
    assert settings.manifest == "build.zig.zon"
    assert settings.tag_template == "{{ version }}"
    assert settings.api_base == "https://api.github.com"
    assert settings.owner is None
    assert settings.sha is None


def test_github_repository_fills_owner_and_repo() -> None:
    settings = load_settings(environ={"GITHUB_REPOSITORY": "octo/mmc-cli", "GITHUB_TOKEN": "t", "SHA": "abc123"})
    assert settings.require_repository() == ("octo", "mmc-cli")
    assert settings.github_token == "t"
    assert settings.sha == "abc123"


def test_bad_github_repository_fails_only_when_required() -> None:
    settings = load_settings(environ={"GITHUB_REPOSITORY": "no-slash"})
    assert settings.github_repository == "no-slash"
    with pytest.raises(ConfigError, match="owner/repo"):
        settings.require_repository()


def test_github_repository_fills_only_missing_part() -> None:
    settings = load_settings(environ={"ZONVER_OWNER": "fork", "GITHUB_REPOSITORY": "octo/mmc-cli"})
    assert settings.require_repository() == ("fork", "mmc-cli")


def test_yaml_file_then_env_then_overrides(tmp_path: Path) -> None:
    config = tmp_path / "zonver.yml"
    config.write_text(
        "manifest: pkg/build.zig.zon\nowner: from-file\nrepo: file-repo\ntag_template: 'v{{ version }}'\n",
        encoding="utf-8",
    )
    settings = load_settings(
        config,
        environ={"ZONVER_OWNER": "from-env", "GITHUB_REPOSITORY": "gh/ignored"},
        overrides={"repo": "from-flag", "manifest": None},
    )
    assert settings.manifest == "pkg/build.zig.zon"
    assert settings.owner == "from-env"
    assert settings.repo == "from-flag"
    assert settings.tag_template == "v{{ version }}"


def test_default_config_file_is_picked_up(tmp_path: Path) -> None:
    (tmp_path / ".zonver.yml").write_text("owner: octo\nrepo: mmc-cli\n", encoding="utf-8")
    settings = load_settings(environ={})
    assert (settings.owner, settings.repo) == ("octo", "mmc-cli")


def test_missing_config_file(tmp_path: Path) -> None:
    with pytest.raises(ConfigError, match="does not exist"):
        load_settings(tmp_path / "missing.yml", environ={})


def test_config_must_be_mapping(tmp_path: Path) -> None:
    config = tmp_path / "c.yml"
    config.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_settings(config, environ={})


def test_unknown_config_key(tmp_path: Path) -> None:
    config = tmp_path / "c.yml"
    config.write_text("owner: octo\ntoken: secret\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="token"):
        load_settings(config, environ={})


def test_invalid_yaml(tmp_path: Path) -> None:
    config = tmp_path / "c.yml"
    config.write_text("owner: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        load_settings(config, environ={})


def test_log_level_from_env_and_validation() -> None:
    assert load_settings(environ={"ZONVER_LOG_LEVEL": "debug"}).log_level == "debug"
    with pytest.raises(ConfigError, match="log level"):
        load_settings(environ={}, overrides={"log_level": "chatty"})


def test_require_repository_without_values() -> None:
    with pytest.raises(ConfigError):
        Settings(owner="octo").require_repository()
