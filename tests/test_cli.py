import subprocess
import sys
from pathlib import Path

import pandas as pd

ROOT = Path(__file__).resolve().parent.parent


def run_cli(*args):
    cmd = [sys.executable, str(ROOT / "read_touchstone.py"), *map(str, args)]
    return subprocess.run(cmd, capture_output=True, text=True, cwd=ROOT)


def test_cli_smoke(s2p_file):
    proc = run_cli(s2p_file)
    output = proc.stdout + proc.stderr
    assert proc.returncode == 0
    assert "# MHZ S RI R 50" in output
    assert "Read 2 frequency points, 2 ports" in output


def test_cli_csv_dump(s2p_file, tmp_path):
    csv_path = tmp_path / "out.csv"
    proc = run_cli(s2p_file, "--summary", "--csv", csv_path)
    assert proc.returncode == 0
    df = pd.read_csv(csv_path)
    assert list(df["frequency"]) == [100.0, 200.0]
    assert "S21" in df.columns


def test_cli_with_settings(s2p_file, tmp_path):
    settings = tmp_path / "settings.yml"
    settings.write_text("frequency_range: [150, 250]\n")
    proc = run_cli(s2p_file, "--settings", settings, "--summary")
    assert proc.returncode == 0
    assert "Read 1 frequency points" in proc.stdout


def test_cli_reports_format_errors(tmp_path):
    bad = tmp_path / "bad.s2p"
    bad.write_text("# GHZ XYZ\n")
    proc = run_cli(bad)
    assert proc.returncode == 1
    assert "XYZ" in proc.stderr
