# inout/touchstone_parser.py
"""
Touchstone (.sNp / .ts) reader.

A file is read in two stages over one forward-only line cursor:

* ``HeaderParser`` consumes the comment, options (``#``) and keyword (``[``)
  lines at the top of the file and stops in front of the first data line.
* ``DataParser`` lazily turns every remaining data line into a
  ``FrequencyParametersPair``.

``TouchstoneReader`` ties both together and owns the underlying text source::

    with TouchstoneReader.from_file("amp.s2p") as reader:
        print(reader.options)
        for frequency, matrix in reader:
            ...
"""
import io
import re
from typing import Iterator, List, Optional, TextIO

import numpy as np

from core.cancellation import CancellationToken
from core.exceptions import (InvalidTouchstoneDataError, TouchstoneError,
                             TouchstoneNotSupportedError)
from core.keywords import (REFERENCE_KEYWORD, TouchstoneKeywords, TwoPortDataOrder,
                           lookup_keyword)
from core.lookup import integer_sqrt, lookup_token
from core.options import (FORMAT_TYPES, FREQUENCY_UNITS, PARAMETER_TYPES,
                          RESISTANCE_SIGNIFIER, FormatType, TouchstoneOptions)
from core.scattering import (FrequencyParametersPair, ListFormat, ScatteringParameter,
                             ScatteringParametersMatrix)
from core.settings import TouchstoneReaderSettings
from utils.logging_config import get_logger

logger = get_logger(__name__)

COMMENT_CHAR = "!"
OPTION_CHAR = "#"
KEYWORD_CHAR = "["
HEADER_CHARS = (COMMENT_CHAR, OPTION_CHAR, KEYWORD_CHAR)

KEYWORD_PATTERN = re.compile(r"^\[([^\]]+)\]\s*(.*)$")

PARAMETER_CONVERTERS = {
    FormatType.DB: ScatteringParameter.from_decibel_angle,
    FormatType.MA: ScatteringParameter.from_magnitude_angle,
    FormatType.RI: ScatteringParameter.from_real_imaginary,
}


def strip_comment(line: str) -> str:
    """Drop a trailing ``!`` comment and surrounding whitespace."""
    return line.split(COMMENT_CHAR, 1)[0].strip()


def parse_number(token: str) -> float:
    """float() without the underscore digit grouping of Python literals."""
    if "_" in token:
        raise ValueError(f"could not convert string to float: '{token}'")
    return float(token)


class LineCursor:
    """Forward-only line reader with one line of look-ahead and a 1-based line counter."""
    def __init__(self, stream: TextIO):
        self._stream = stream
        self._pending: Optional[str] = None
        self.line_number = 0
        self.closed = False

    def _fetch(self) -> Optional[str]:
        if self.closed:
            raise ValueError("I/O operation on closed Touchstone reader.")
        line = self._stream.readline()
        return line.rstrip("\r\n") if line else None

    def peek(self) -> Optional[str]:
        if self._pending is None:
            self._pending = self._fetch()
        return self._pending

    def read_line(self) -> Optional[str]:
        line = self.peek()
        self._pending = None
        if line is not None:
            self.line_number += 1
        return line

    def close(self) -> None:
        if not self.closed:
            self._stream.close()
            self.closed = True


class _Parser:
    section = ""

    def __init__(self, cursor: LineCursor):
        self.cursor = cursor

    def error(self, message: str, section: Optional[str] = None) -> InvalidTouchstoneDataError:
        return InvalidTouchstoneDataError(section or self.section, message, self.cursor.line_number)


class HeaderParser(_Parser):
    """
    Parse the header of a Touchstone file into options and keywords.

    Only the first options line is applied. Later ones are validated the same
    way and then ignored.
    """
    def __init__(self, cursor: LineCursor, options: TouchstoneOptions, keywords: TouchstoneKeywords):
        super().__init__(cursor)
        self.options = options
        self.keywords = keywords
        self.options_parsed = False

    def parse(self) -> None:
        while True:
            line = self.cursor.peek()
            if line is None:
                break
            stripped = line.strip()
            if stripped and stripped[0] not in HEADER_CHARS:
                # First data line: leave it for the data parser.
                break
            self.cursor.read_line()
            if not stripped or stripped[0] == COMMENT_CHAR:
                continue
            if stripped[0] == OPTION_CHAR:
                if self.options_parsed:
                    self.parse_options(stripped, TouchstoneOptions())
                    logger.debug("Ignoring additional options line %d: %s",
                                 self.cursor.line_number, stripped)
                else:
                    self.parse_options(stripped, self.options)
                    self.options_parsed = True
                    logger.debug("Options set to %s", self.options)
            else:
                self.parse_keyword(stripped)

    def parse_options(self, line: str, options: TouchstoneOptions) -> None:
        self.section = "Options"
        tokens = iter(strip_comment(line)[1:].split())
        for token in tokens:
            # Options may appear in any order.
            unit = lookup_token(FREQUENCY_UNITS, token)
            fmt = lookup_token(FORMAT_TYPES, token)
            parameter = lookup_token(PARAMETER_TYPES, token)
            if unit is not None:
                options.frequency_unit = unit
            elif fmt is not None:
                options.format = fmt
            elif parameter is not None:
                options.parameter = parameter
            elif token.upper() == RESISTANCE_SIGNIFIER:
                value = next(tokens, None)
                if value is None:
                    raise self.error("No value specified for resistance")
                try:
                    options.resistance = parse_number(value)
                except ValueError as e:
                    raise self.error("Bad value for resistance") from e
            else:
                raise self.error(f"Invalid option value {token}")

    def parse_keyword(self, line: str) -> None:
        self.section = "Keywords"
        match = KEYWORD_PATTERN.match(strip_comment(line))
        if match is None:
            raise self.error("Bad keyword format")

        name, value = match.group(1).strip(), match.group(2).strip()
        if value:
            entry = lookup_keyword(name)
            if entry is None:
                raise self.error("Unknown keyword")
            parse_value, field_name = entry
            try:
                converted = parse_value(value)
            except (ValueError, TypeError) as e:
                raise self.error("Bad keyword value") from e
            setattr(self.keywords, field_name, converted)
            logger.debug("Keyword [%s] = %r", name, converted)
        elif name.lower() == REFERENCE_KEYWORD.lower():
            # [Reference] values on the lines following the keyword.
            raise TouchstoneNotSupportedError(
                f"[{REFERENCE_KEYWORD}] values on following lines are not supported "
                f"(line {self.cursor.line_number})")
        else:
            raise self.error("Invalid keyword format")


class DataParser(_Parser):
    """Lazily parse network data lines into ``FrequencyParametersPair`` objects."""
    section = "Data"

    def __init__(self, cursor: LineCursor, options: TouchstoneOptions,
                 keywords: TouchstoneKeywords, settings: TouchstoneReaderSettings):
        super().__init__(cursor)
        self.options = options
        self.keywords = keywords
        self.settings = settings

    def parse(self, cancel_token: Optional[CancellationToken] = None) -> Iterator[FrequencyParametersPair]:
        while True:
            line = self.cursor.read_line()
            if line is None:
                return
            data = strip_comment(line)
            if not data:
                continue
            pair = self.parse_line(data, cancel_token)
            if pair is not None:
                yield pair

    def selected(self, frequency: float) -> bool:
        selector = self.settings.frequency_selector
        if selector is None:
            return True
        try:
            return bool(selector(frequency))
        except Exception as e:
            logger.debug("Frequency selector failed for %g (line %d): %s",
                         frequency, self.cursor.line_number, e)
            return False

    def parse_line(self, line: str,
                   cancel_token: Optional[CancellationToken] = None) -> Optional[FrequencyParametersPair]:
        """Parse one data line; None when the frequency selector rejects it."""
        data = line.split()

        # Two values per parameter after the frequency.
        payload = len(data) - 1
        ports = integer_sqrt(payload // 2) if payload % 2 == 0 else None
        if not ports:
            raise self.error("Invalid data format")

        try:
            frequency = parse_number(data[0])
        except ValueError as e:
            raise self.error("Invalid format for frequency") from e

        if not self.selected(frequency):
            return None

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        if self.settings.parameter_selector is not None:
            raise TouchstoneNotSupportedError("Parameter selection is not supported.")

        convert = PARAMETER_CONVERTERS[self.options.format]
        parameters: List[ScatteringParameter] = []
        for i in range(1, len(data), 2):
            try:
                val1, val2 = parse_number(data[i]), parse_number(data[i + 1])
                parameters.append(convert(val1, val2))
            except (ValueError, OverflowError) as e:
                raise self.error("Invalid data format") from e

        list_format = ListFormat.SOURCE_PORT_MAJOR
        if ports == 2 and self.keywords.two_port_data_order is TwoPortDataOrder.TWO_ONE_ONE_TWO:
            list_format = ListFormat.DESTINATION_PORT_MAJOR

        if cancel_token is not None:
            cancel_token.raise_if_cancelled()

        matrix = ScatteringParametersMatrix(parameters, list_format)
        return FrequencyParametersPair(frequency, matrix)


class TouchstoneReader:
    """
    Reader over a Touchstone text source.

    The header is parsed on construction; network data is read lazily and only
    once, since the underlying source is consumed as it is iterated.
    """
    def __init__(self, stream: TextIO, settings: Optional[TouchstoneReaderSettings] = None):
        self.settings = settings or TouchstoneReaderSettings.default()
        self._options = TouchstoneOptions()
        self._keywords = TouchstoneKeywords()
        self._cursor = LineCursor(stream)
        try:
            HeaderParser(self._cursor, self._options, self._keywords).parse()
        except Exception:
            self.close()
            raise
        self._data_parser = DataParser(self._cursor, self._options, self._keywords, self.settings)

    @classmethod
    def from_file(cls, path, settings: Optional[TouchstoneReaderSettings] = None) -> "TouchstoneReader":
        return cls(open(path), settings)

    @classmethod
    def from_string(cls, text: str, settings: Optional[TouchstoneReaderSettings] = None) -> "TouchstoneReader":
        return cls(io.StringIO(text), settings)

    @property
    def options(self) -> TouchstoneOptions:
        return self._options

    @property
    def keywords(self) -> TouchstoneKeywords:
        return self._keywords

    def network_data(self, cancel_token: Optional[CancellationToken] = None) -> Iterator[FrequencyParametersPair]:
        return self._data_parser.parse(cancel_token)

    def __iter__(self) -> Iterator[FrequencyParametersPair]:
        return self.network_data()

    def close(self) -> None:
        self._cursor.close()

    @property
    def closed(self) -> bool:
        return self._cursor.closed

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def __repr__(self):
        return f"<TouchstoneReader options={self._options} closed={self.closed}>"


def read_touchstone_file(filename: str, settings: Optional[TouchstoneReaderSettings] = None) -> dict:
    """
    Read a whole Touchstone file.

    Returns:
        A dictionary with:
          - "freq": A numpy array of frequency values in Hz.
          - "S": A list of N x N complex numpy arrays (parameter matrices).
          - "options": The file's TouchstoneOptions.
          - "keywords": The file's TouchstoneKeywords.

    Raises:
        TouchstoneError: If the file is malformed or holds no network data.
    """
    with TouchstoneReader.from_file(filename, settings) as reader:
        entries = [(f, m.to_numpy()) for f, m in reader]
        options, keywords = reader.options, reader.keywords
    if not entries:
        raise TouchstoneError(f"No network data found in touchstone file '{filename}'.")

    scale = options.frequency_unit.to_hz(1.0)
    freq, S_params = zip(*entries)
    return {"freq": np.array(freq) * scale, "S": list(S_params),
            "options": options, "keywords": keywords}
