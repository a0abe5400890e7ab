import pytest
import yaml
from core.exceptions import TouchstoneError
from core.settings import TouchstoneReaderSettings, frequency_range_selector, load_reader_settings
from inout.touchstone_parser import TouchstoneReader


def test_default_settings():
    settings = TouchstoneReaderSettings.default()
    assert settings.frequency_selector is None
    assert settings.parameter_selector is None


def test_frequency_range_selector_is_inclusive():
    select = frequency_range_selector(2.0, 1.0)
    assert select(1.0) and select(1.5) and select(2.0)
    assert not select(0.5)
    assert not select(2.5)


def test_load_reader_settings(tmp_path, two_port_ri_text):
    path = tmp_path / "settings.yml"
    with open(path, "w") as f:
        yaml.dump({"frequency_range": [150, 250]}, f)
    settings = load_reader_settings(path)
    pairs = list(TouchstoneReader.from_string(two_port_ri_text, settings))
    assert [p.frequency for p in pairs] == [200.0]


def test_load_empty_settings(tmp_path):
    path = tmp_path / "settings.yml"
    path.write_text("")
    assert load_reader_settings(path).frequency_selector is None


@pytest.mark.parametrize("content", [
    {"frequency_range": [1.0]},
    {"frequency_range": ["low", "high"]},
    {"unknown_key": 1},
])
def test_invalid_settings_schema(tmp_path, content):
    path = tmp_path / "settings.yml"
    with open(path, "w") as f:
        yaml.dump(content, f)
    with pytest.raises(TouchstoneError):
        load_reader_settings(path)


def test_missing_settings_file(tmp_path):
    with pytest.raises(TouchstoneError, match="Failed to read settings"):
        load_reader_settings(tmp_path / "missing.yml")
