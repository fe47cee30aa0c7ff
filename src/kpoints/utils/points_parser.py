"""Point amount parsing utilities."""

import re


def parse_points(points_str: str) -> int:
    """Parse a point amount string into an int.

    Handles various formats:
    - "3"
    - "+3"
    - " 20 "
    - "1,000"
    - "3pt" / "3 points"

    Fractional values are rejected; points are always whole numbers.

    Args:
        points_str: Point amount string

    Returns:
        Integer amount

    Raises:
        ValueError: If the string cannot be parsed as a whole number
    """
    if points_str is None or not str(points_str).strip():
        raise ValueError("Empty points string")

    # Remove whitespace
    cleaned = str(points_str).strip().lower()

    # Remove unit suffixes
    cleaned = re.sub(r"\s*(points?|pts?)$", "", cleaned)

    # Remove thousands separators
    cleaned = cleaned.replace(",", "")

    if not re.fullmatch(r"[+-]?\d+", cleaned):
        raise ValueError(f"Could not parse points '{points_str}': must be a whole number")
    return int(cleaned)
