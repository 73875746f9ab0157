def to_nmea_coord(degrees: float) -> str:
    """
    Convert decimal degrees to NMEA ddmm.mmmm format.

    The sign is dropped; use hemisphere() for the N/S or E/W letter.
    Degrees are zero-padded to two digits for both latitude and longitude.
    """
    value = abs(degrees)
    whole = int(value)
    minutes = (value - whole) * 60
    return f"{whole:02d}{minutes:07.4f}"


def hemisphere(degrees: float, positive: str, negative: str) -> str:
    """Return the hemisphere letter for a signed coordinate."""
    return positive if degrees >= 0 else negative
