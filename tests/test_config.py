import json

import pytest

from employee_directory.config import DirectoryConfig, load_config


class TestLoadConfig:
    def test_defaults_without_file(self):
        cfg = load_config()
        assert cfg == DirectoryConfig()
        assert cfg.mongo_uri == "mongodb://localhost:27017"
        assert cfg.database == "EmployeeDB"
        assert cfg.collection == "employees"
        assert cfg.page_size == 5

    def test_yaml_with_mongo_section(self, tmp_path):
        path = tmp_path / "directory.yaml"
        path.write_text(
            "mongo:\n"
            "  uri: mongodb://atlas.example:27017\n"
            "  database: HR\n"
            "  collection: staff\n"
            "  server_selection_timeout_ms: 3000\n"
            "page_size: 10\n",
            encoding="utf-8",
        )
        cfg = load_config(path)
        assert cfg.mongo_uri == "mongodb://atlas.example:27017"
        assert cfg.database == "HR"
        assert cfg.collection == "staff"
        assert cfg.page_size == 10
        assert cfg.server_selection_timeout_ms == 3000

    def test_flat_json(self, tmp_path):
        path = tmp_path / "directory.json"
        path.write_text(json.dumps({"mongo_uri": "mongodb://json:27017", "page_size": 7}), encoding="utf-8")
        cfg = load_config(path)
        assert cfg.mongo_uri == "mongodb://json:27017"
        assert cfg.page_size == 7
        assert cfg.database == "EmployeeDB"

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "directory.yaml"
        path.write_text("mongo:\n  uri: mongodb://file:27017\n  database: FromFile\n", encoding="utf-8")
        monkeypatch.setenv("MONGO_URI", "mongodb://env:27017")
        monkeypatch.setenv("DIRECTORY_PAGE_SIZE", "20")
        monkeypatch.setenv("MONGO_TIMEOUT_MS", "1500")

        cfg = load_config(path)
        assert cfg.mongo_uri == "mongodb://env:27017"
        assert cfg.database == "FromFile"
        assert cfg.page_size == 20
        assert cfg.server_selection_timeout_ms == 1500

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "directory.toml"
        path.write_text("page_size = 5", encoding="utf-8")
        with pytest.raises(ValueError, match="Unsupported config extension"):
            load_config(path)

    @pytest.mark.parametrize("content, message", [
        ("page_size: 0\n", "page_size"),
        ("mongo:\n  server_selection_timeout_ms: -1\n", "server_selection_timeout_ms"),
    ])
    def test_validation(self, tmp_path, content, message):
        path = tmp_path / "directory.yml"
        path.write_text(content, encoding="utf-8")
        with pytest.raises(ValueError, match=message):
            load_config(path)
