"""Conversions between user units and the units the bridge speaks."""

from lucia.errors import InvalidRangeError

MAX_BRIGHTNESS = 255
MAX_MIRED = 0xFFFF


def to_device_brightness(percent: float) -> int:
    """Brightness percentage (0-100) -> bridge brightness byte (0-255)."""
    if not 0.0 <= percent <= 100.0:
        raise InvalidRangeError(f"brightness must be within 0-100%, got {percent}")
    return round(percent / 100.0 * MAX_BRIGHTNESS)


def from_device_brightness(value: int) -> float:
    if not 0 <= value <= MAX_BRIGHTNESS:
        raise InvalidRangeError(f"device brightness must be within 0-{MAX_BRIGHTNESS}, got {value}")
    return value / MAX_BRIGHTNESS * 100.0


def to_mired(kelvin: int) -> int:
    """
    Color temperature in kelvin -> micro reciprocal degrees (mired).

    Very low kelvin values would not fit the bridge's 16 bit ``ct`` field and
    are rejected together with zero and negative values.
    """
    if kelvin <= 0:
        raise InvalidRangeError(f"temperature must be a positive kelvin value, got {kelvin}")
    mired = round(1_000_000 / kelvin)
    if mired > MAX_MIRED:
        raise InvalidRangeError(f"temperature {kelvin}K is too low to be expressed in mired")
    return mired


def from_mired(mired: int) -> int:
    if mired <= 0:
        raise InvalidRangeError(f"mired must be positive, got {mired}")
    return round(1_000_000 / mired)
