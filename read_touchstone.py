#!/usr/bin/env python
import argparse
import logging
import sys
from typing import List, Optional

from core.exceptions import TouchstoneError
from core.settings import load_reader_settings
from inout.touchstone_parser import TouchstoneReader
from utils.logging_config import setup_logging, get_logger

logger = get_logger(__name__)


def pairs_to_dataframe(pairs):
    """One row per frequency point, one complex column per Sij."""
    import pandas as pd
    rows = []
    for freq, matrix in pairs:
        row = {"frequency": freq}
        N = matrix.num_ports
        for i in range(1, N + 1):
            for j in range(1, N + 1):
                row[f"S{i}{j}"] = complex(matrix[i, j])
        rows.append(row)
    return pd.DataFrame(rows)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Read a Touchstone file and print its header and network data.

    Command-line arguments:
      file: Path to the Touchstone file.
      --settings: Optional YAML reader settings (e.g. a frequency range).
      --csv: Optional path to dump the network data as CSV.
      --summary: Print only a summary of the network data.
      --verbose: Enable DEBUG logging.
    """
    parser = argparse.ArgumentParser(description="Read a Touchstone network file.")
    parser.add_argument("file", help="Path to the Touchstone file.")
    parser.add_argument("--settings", help="Path to a YAML reader settings file.", default=None)
    parser.add_argument("--csv", help="Path to dump network data as CSV.", default=None)
    parser.add_argument("--summary", action="store_true", help="Print a summary only.")
    parser.add_argument("--verbose", action="store_true", help="Enable DEBUG logging.")
    args = parser.parse_args(argv)

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        settings = load_reader_settings(args.settings) if args.settings else None
        with TouchstoneReader.from_file(args.file, settings) as reader:
            print(reader.options.to_line())
            print(f"Keywords: {reader.keywords}")
            pairs = list(reader)
    except (TouchstoneError, OSError) as e:
        logger.error("Failed to read '%s': %s", args.file, e)
        return 1

    if not args.summary:
        for freq, matrix in pairs:
            values = " ".join(f"{complex(p):.6g}" for p in matrix)
            print(f"{freq:g}: {values}")
    ports = pairs[0].parameters.num_ports if pairs else 0
    print(f"Read {len(pairs)} frequency points, {ports} ports")

    if args.csv:
        pairs_to_dataframe(pairs).to_csv(args.csv, index=False)
        print(f"Network data dumped to {args.csv}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
