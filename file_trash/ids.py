"""Sortable unique identifiers for trashed files and removal groups.

Ids use the ULID layout: a 48-bit millisecond timestamp followed by 80
random bits, written as 26 Crockford base32 characters. Ids generated in
the same millisecond by this process increment the random part, so string
order always follows creation order within a process.
"""
import os
import threading
import time

_CROCKFORD_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"
_RANDOM_BITS = 80
_RANDOM_MAX = (1 << _RANDOM_BITS) - 1

_lock = threading.Lock()
_last_ms = -1
_last_random = 0


def _encode(value: int, length: int = 26) -> str:
    digits = []
    number = value
    while number:
        number, remainder = divmod(number, 32)
        digits.append(_CROCKFORD_ALPHABET[remainder])
    if not digits:
        digits.append("0")
    return "".join(reversed(digits)).rjust(length, "0")


def new_id() -> str:
    global _last_ms, _last_random
    with _lock:
        now_ms = time.time_ns() // 1_000_000
        if now_ms <= _last_ms:
            # same millisecond (or clock went backwards): stay monotonic
            now_ms = _last_ms
            if _last_random == _RANDOM_MAX:
                now_ms += 1
                rand = int.from_bytes(os.urandom(10), "big")
            else:
                rand = _last_random + 1
        else:
            rand = int.from_bytes(os.urandom(10), "big")
        _last_ms = now_ms
        _last_random = rand
    return _encode((now_ms << _RANDOM_BITS) | rand)


def id_time_ms(value: str) -> int:
    """Return the millisecond timestamp embedded in an id."""
    number = 0
    for ch in value.upper():
        number = number * 32 + _CROCKFORD_ALPHABET.index(ch)
    return number >> _RANDOM_BITS
