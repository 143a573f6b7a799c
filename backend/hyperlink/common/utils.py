"""
Utility Functions Module

Provides request helpers such as client IP extraction and upload size parsing.
"""

import re
from typing import Optional

_SIZE_UNITS = {
    "": 0,
    "b": 0,
    "byte": 0,
    "bytes": 0,
    "k": 10,
    "kb": 10,
    "kilobyte": 10,
    "kilobytes": 10,
    "m": 20,
    "mb": 20,
    "megabyte": 20,
    "megabytes": 20,
    "g": 30,
    "gb": 30,
    "gigabyte": 30,
    "gigabytes": 30,
    "t": 40,
    "tb": 40,
    "terabyte": 40,
    "terabytes": 40,
}

_SIZE_PATTERN = re.compile(r"^\s*([0-9]*\.?[0-9]*)\s*([A-Za-z]*)\s*$")


def parse_size_in_bytes(size: str) -> int:
    """
    Parse a human readable size into bytes

    Units are binary multiples. Unknown units are treated as bytes.

    Args:
        size: Size string such as "512", "10MB", "1.5 gb"

    Returns:
        int: Size in bytes

    Raises:
        ValueError: If the value cannot be parsed

    Example:
        >>> parse_size_in_bytes("10MB")
        10485760
    """
    match = _SIZE_PATTERN.match(size or "")
    if not match or not match.group(1) or match.group(1) == ".":
        raise ValueError(f"Invalid size value: {size!r}")

    value = float(match.group(1))
    shift = _SIZE_UNITS.get(match.group(2).lower(), 0)
    return int(value * (1 << shift))


def get_client_ip(headers, fallback: Optional[str] = None) -> str:
    """
    Extract client IP from proxy headers

    Checks x-real-ip first, then x-forwarded-for, then the peer address.
    """
    client_ip = headers.get("x-real-ip")
    if not client_ip:
        client_ip = headers.get("x-forwarded-for")
    if not client_ip:
        client_ip = fallback or ""
    return client_ip


def base_filename(filename: str) -> str:
    """
    Strip directory parts from an uploaded filename

    Example:
        >>> base_filename("docs/2024/report.pdf")
        'report.pdf'
    """
    return (filename or "").replace("\\", "/").rsplit("/", 1)[-1]
