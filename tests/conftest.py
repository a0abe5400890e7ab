import pytest

TWO_PORT_MA = (
    "! Two-port amplifier, magnitude/angle\n"
    "# GHZ S MA R 50\n"
    "[Number of Ports] 2\n"
    "1.0 0.9 -10 0.1 80 0.1 80 0.9 -10\n"
)

TWO_PORT_RI = (
    "# MHZ S RI R 50\n"
    "! freq  S11  S12  S21  S22 (or S11 S21 S12 S22)\n"
    "100 0.1 0.0 0.2 0.0 0.3 0.0 0.4 0.0\n"
    "! interleaved comment\n"
    "200 0.5 0.0 0.6 0.0 0.7 0.0 0.8 0.0\n"
)


@pytest.fixture
def two_port_text():
    return TWO_PORT_MA


@pytest.fixture
def two_port_ri_text():
    return TWO_PORT_RI


@pytest.fixture
def s2p_file(tmp_path):
    path = tmp_path / "network.s2p"
    path.write_text(TWO_PORT_RI)
    return path


@pytest.fixture
def dummy_logger(caplog):
    caplog.set_level("DEBUG")
    return caplog
