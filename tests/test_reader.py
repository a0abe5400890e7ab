import io
import numpy as np
import pytest
from core.exceptions import InvalidTouchstoneDataError, TouchstoneError
from core.options import FrequencyUnit
from core.settings import TouchstoneReaderSettings
from inout.touchstone_parser import TouchstoneReader, read_touchstone_file


def test_reader_from_file(s2p_file):
    with TouchstoneReader.from_file(s2p_file) as reader:
        assert reader.options.frequency_unit is FrequencyUnit.MHZ
        pairs = list(reader)
    assert reader.closed
    assert [p.frequency for p in pairs] == [100.0, 200.0]
    assert pairs[1].parameters[2, 2].real == 0.8


def test_close_is_idempotent(two_port_text):
    reader = TouchstoneReader.from_string(two_port_text)
    reader.close()
    reader.close()
    assert reader.closed


def test_reading_after_close_fails(two_port_text):
    reader = TouchstoneReader.from_string(two_port_text)
    reader.close()
    with pytest.raises(ValueError):
        list(reader)


def test_close_on_early_abandonment(s2p_file):
    with TouchstoneReader.from_file(s2p_file) as reader:
        for pair in reader:
            break
    assert reader.closed


def test_header_error_closes_source():
    stream = io.StringIO("# GHZ XYZ\n1.0 0.5 0\n")
    with pytest.raises(InvalidTouchstoneDataError):
        TouchstoneReader(stream)
    assert stream.closed


def test_header_stops_at_first_data_line(two_port_ri_text):
    reader = TouchstoneReader.from_string(two_port_ri_text)
    # Header lines consumed, first data line still unread.
    assert reader._cursor.line_number == 2
    assert reader._cursor.peek().startswith("100")


def test_empty_input():
    reader = TouchstoneReader.from_string("")
    assert reader.options.frequency_unit is FrequencyUnit.GHZ
    assert list(reader) == []


def test_read_touchstone_file(s2p_file):
    data = read_touchstone_file(str(s2p_file))
    np.testing.assert_allclose(data["freq"], [100e6, 200e6])
    assert len(data["S"]) == 2
    assert data["S"][0].shape == (2, 2)
    np.testing.assert_almost_equal(data["S"][0][0, 1], 0.2)
    assert data["options"].frequency_unit is FrequencyUnit.MHZ


def test_read_touchstone_file_with_settings(s2p_file):
    settings = TouchstoneReaderSettings(frequency_selector=lambda f: f < 150)
    data = read_touchstone_file(str(s2p_file), settings)
    np.testing.assert_allclose(data["freq"], [100e6])


def test_read_touchstone_file_without_data(tmp_path):
    path = tmp_path / "empty.s1p"
    path.write_text("! nothing here\n# GHZ S MA R 50\n")
    with pytest.raises(TouchstoneError, match="No network data"):
        read_touchstone_file(str(path))
