# utils/touchstone.py
from typing import Iterable

from core.options import FormatType, TouchstoneOptions
from core.scattering import FrequencyParametersPair, ListFormat


def format_parameter(param, fmt: FormatType) -> str:
    if fmt is FormatType.RI:
        return f"{param.real:.9e} {param.imaginary:.9e}"
    if fmt is FormatType.DB:
        return f"{param.magnitude_db:.9e} {param.angle:.9e}"
    return f"{param.magnitude:.9e} {param.angle:.9e}"


def format_data_line(pair: FrequencyParametersPair, fmt: FormatType = FormatType.MA,
                     list_format: ListFormat = ListFormat.SOURCE_PORT_MAJOR) -> str:
    """
    Encode one frequency point as a Touchstone data line.

    Parameters are written in ``list_format`` order, all on one line.
    """
    matrix = pair.parameters
    N = matrix.num_ports
    if list_format is ListFormat.SOURCE_PORT_MAJOR:
        order = [(i, j) for i in range(1, N + 1) for j in range(1, N + 1)]
    else:
        order = [(i, j) for j in range(1, N + 1) for i in range(1, N + 1)]
    values = " ".join(format_parameter(matrix[i, j], fmt) for i, j in order)
    return f"{pair.frequency:.9e} {values}"


def write_touchstone(file_path, pairs: Iterable[FrequencyParametersPair],
                     options: TouchstoneOptions = None) -> None:
    """
    Write frequency points to a Touchstone file with a single options line.

    Data is written source-port-major; a two-port file therefore declares
    ``[Two-Port Data Order] 12_21`` so it reads back unchanged.
    """
    options = options or TouchstoneOptions()
    pairs = list(pairs)
    with open(file_path, "w") as f:
        f.write(options.to_line() + "\n")
        if pairs and pairs[0].parameters.num_ports == 2:
            f.write("[Two-Port Data Order] 12_21\n")
        for pair in pairs:
            f.write(format_data_line(pair, options.format) + "\n")
