# utils/units.py
import pint

ureg = pint.UnitRegistry()


def to_hz(value: float, unit: str) -> float:
    """
    Convert a frequency expressed in ``unit`` to hertz.

    :param value: The frequency magnitude.
    :param unit: A pint unit string, e.g. "GHz".
    :return: The frequency in Hz as a float.
    :raises ValueError: If the unit is not a frequency unit known to pint.
    """
    try:
        return float(ureg.Quantity(value, unit).to("Hz").magnitude)
    except Exception as e:
        raise ValueError(f"Could not convert {value!r} {unit} to Hz: {e}")
