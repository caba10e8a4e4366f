"""Helpers for RobTop's ad-hoc obfuscation schemes."""

from __future__ import annotations
from itertools import cycle
from typing import Union


def cyclic_xor(data: bytes, key: Union[str, bytes]) -> bytes:
    """Apply RobTop's XOR routine: XOR every byte with the key, repeated cyclically.

    The operation is its own inverse.

    Args:
        data: Bytes to en- or decode
        key: XOR key; str keys are used by their UTF-8 bytes

    Returns:
        The XORed bytes
    """
    key_bytes = key.encode("utf-8") if isinstance(key, str) else key
    if not key_bytes:
        raise ValueError("XOR key must not be empty")
    return bytes(d ^ k for d, k in zip(data, cycle(key_bytes)))
