"""
Object identifier generation and validation.
Identifiers follow the document-store layout: 4-byte timestamp, 5 random bytes, 3-byte counter.
"""

import itertools
import os
import random
import re
import time

OBJECT_ID_PATTERN = r"^[0-9a-fA-F]{24}$"
OBJECT_ID_REGEX = re.compile(OBJECT_ID_PATTERN)

_process_unique = os.urandom(5)
_counter = itertools.count(random.randint(0, 0xFFFFFF))


def generate_object_id() -> str:
    """
    Generate a new 24-character hexadecimal identifier.

    Identifiers generated by one process sort by creation second, then by counter.
    """
    timestamp = int(time.time()).to_bytes(4, "big")
    counter = (next(_counter) & 0xFFFFFF).to_bytes(3, "big")
    return (timestamp + _process_unique + counter).hex()


def is_valid_object_id(value: str) -> bool:
    """Check that a value is a 24-character hexadecimal identifier."""
    return isinstance(value, str) and bool(OBJECT_ID_REGEX.match(value))
