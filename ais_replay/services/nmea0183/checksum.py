def calculate_checksum(body: str) -> str:
    """
    Calculate the NMEA checksum of a sentence body.

    Args:
        body: Text between the leading $ or ! and the *

    Returns:
        Two-character uppercase hex string
    """
    checksum = 0
    for char in body:
        checksum ^= ord(char)
    return f"{checksum:02X}"


def verify_checksum(sentence: str) -> bool:
    """Check that a complete sentence carries the checksum of its own body."""
    sentence = sentence.strip()
    if len(sentence) < 4 or sentence[0] not in "$!":
        return False
    body, sep, checksum = sentence[1:].rpartition("*")
    if not sep:
        return False
    return calculate_checksum(body) == checksum.upper()
