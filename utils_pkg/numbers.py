import math

# Range of a sqlite INTEGER column
INT64_MIN = -2 ** 63
INT64_MAX = 2 ** 63 - 1


def parse_float(x):
    """Lenient float parsing for GeoJSON property values.

    Accepts numbers and numeric strings (comma as decimal separator too).
    Returns None for missing, unparsable or non-finite (nan, inf) values
    instead of raising.
    """
    if x is None or isinstance(x, bool):
        return None
    if isinstance(x, (int, float)):
        try:
            value = float(x)
        except OverflowError:
            return None
    else:
        s = str(x).strip().replace(',', '.')
        if not s:
            return None
        try:
            value = float(s)
        except ValueError:
            return None
    if not math.isfinite(value):
        return None
    return value


def parse_int(x):
    """Like parse_float, truncated to int; None when outside the sqlite INTEGER range."""
    value = parse_float(x)
    if value is None:
        return None
    value = int(value)
    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value
