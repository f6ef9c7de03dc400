import os

from contactbook.config import DEFAULTS, read_config
from contactbook.db import get_db_path


def _same(a, b) -> bool:
    return os.path.realpath(str(a)) == os.path.realpath(str(b))


def test_missing_config_falls_back_to_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONTACTBOOK_CONFIG", raising=False)
    assert read_config() == DEFAULTS


def test_config_is_read_from_working_directory(tmp_path, monkeypatch):
    (tmp_path / "config.yaml").write_text("page_size: 25\nseed_on_startup: 'off'\n", encoding="utf-8")
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("CONTACTBOOK_CONFIG", raising=False)
    cfg = read_config()
    assert cfg["page_size"] == 25
    assert cfg["seed_on_startup"] is False


def test_config_env_override(tmp_path, monkeypatch):
    other = tmp_path / "other.yaml"
    other.write_text("page_size: 0\ndb_path: ' book.db '\n", encoding="utf-8")
    monkeypatch.setenv("CONTACTBOOK_CONFIG", str(other))
    cfg = read_config()
    assert cfg["page_size"] == DEFAULTS["page_size"]
    assert cfg["db_path"] == "book.db"


class TestDbPath:

    def test_env_path_wins_over_config(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("db_path: from_config.db\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CONTACTBOOK_CONFIG", raising=False)
        monkeypatch.setenv("CONTACTBOOK_DB_PATH", "env/from_env.db")
        assert _same(get_db_path(), tmp_path / "env" / "from_env.db")
        assert (tmp_path / "env").is_dir()

    def test_relative_config_path_resolves_against_cwd(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("db_path: data/book.db\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CONTACTBOOK_CONFIG", raising=False)
        monkeypatch.delenv("CONTACTBOOK_DB_PATH")
        assert _same(get_db_path(), tmp_path / "data" / "book.db")
        assert (tmp_path / "data").is_dir()

    def test_test_db_path_used_under_pytest(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("db_path: live.db\ntest_db_path: t/test.db\n", encoding="utf-8")
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CONTACTBOOK_CONFIG", raising=False)
        monkeypatch.delenv("CONTACTBOOK_DB_PATH")
        assert _same(get_db_path(), tmp_path / "t" / "test.db")

    def test_default_file_in_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("CONTACTBOOK_CONFIG", raising=False)
        monkeypatch.delenv("CONTACTBOOK_DB_PATH")
        assert _same(get_db_path(), tmp_path / "contactbook.db")
