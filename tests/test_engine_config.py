import json

from natid_engine.engine_config import EngineConfig, VERSION


def test_defaults(config):
    assert config.is_scheme_enabled("be.nn")
    assert config.is_country_enabled("BE")
    assert config.eu_vat_enabled is True
    assert config.get_disabled_schemes() == []


def test_changes_are_persisted(config):
    config.set_scheme_enabled("nl.bsn", False)
    config.set_country_enabled("us", False)

    reloaded = EngineConfig(str(config.config_path))
    assert not reloaded.is_scheme_enabled("nl.bsn")
    assert not reloaded.is_country_enabled("US")
    assert not reloaded.is_country_enabled("us")


def test_re_enable(config):
    config.set_scheme_enabled("nl.bsn", False)
    config.set_scheme_enabled("nl.bsn", True)
    assert config.is_scheme_enabled("nl.bsn")


def test_saved_file_merges_over_defaults(tmp_path):
    path = tmp_path / "engine_config.json"
    path.write_text(json.dumps({"disabled_countries": ["de"]}))

    config = EngineConfig(str(path))
    assert not config.is_country_enabled("DE")
    assert config.eu_vat_enabled is True


def test_corrupt_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "engine_config.json"
    path.write_text("{not json")

    config = EngineConfig(str(path))
    assert config.get_disabled_schemes() == []
    assert "unreadable config" in caplog.text


def test_reset(config):
    config.set_scheme_enabled("be.nn", False)
    config.reset()
    assert config.is_scheme_enabled("be.nn")


def test_version():
    import natid_engine
    assert natid_engine.__version__ == VERSION
