"""Tests for configuration loading."""

import pytest

from property_market.utils.config import CONFIG_ENV_VAR, PROJECT_ROOT, load_config, resolve_path


class TestLoadConfig:
    def test_loads_successfully(self):
        config = load_config()
        assert isinstance(config, dict)

    def test_has_data_section(self):
        config = load_config()
        assert "data" in config
        assert "corpus_path" in config["data"]

    def test_has_estimator_section(self):
        config = load_config()
        assert config["estimator"]["n_neighbors"] == 3

    def test_has_storage_section(self):
        config = load_config()
        for key in ["database_url", "upload_dir", "max_portfolio_files"]:
            assert key in config["storage"], f"Missing storage setting {key}"

    def test_bcrypt_rounds_reasonable(self):
        config = load_config()
        assert 4 <= config["security"]["bcrypt_rounds"] <= 15

    def test_env_var_override(self, tmp_path, monkeypatch):
        path = tmp_path / "config.yaml"
        path.write_text("estimator:\n  n_neighbors: 5\n")
        monkeypatch.setenv(CONFIG_ENV_VAR, str(path))
        assert load_config()["estimator"]["n_neighbors"] == 5

    def test_invalid_path_raises(self):
        with pytest.raises(FileNotFoundError):
            load_config("/nonexistent/path/config.yaml")


class TestResolvePath:
    def test_relative_to_project_root(self):
        assert resolve_path("dataset/datasetprice.csv") == PROJECT_ROOT / "dataset" / "datasetprice.csv"

    def test_absolute_unchanged(self, tmp_path):
        assert resolve_path(str(tmp_path)) == tmp_path
