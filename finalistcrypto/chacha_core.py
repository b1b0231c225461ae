"""ChaCha block function and counter state shared by the ChaCha stream ciphers."""

from __future__ import annotations

import struct
from collections.abc import Sequence

__all__ = ["ChaChaCore", "derive_xchacha"]

_M32 = 0xFFFFFFFF
_M64 = (1 << 64) - 1

# "expand 32-byte k"
_CONSTANTS = (0x61707865, 0x3320646E, 0x79622D32, 0x6B206574)

_QUARTER_ROUNDS = (
    (0, 4, 8, 12),
    (1, 5, 9, 13),
    (2, 6, 10, 14),
    (3, 7, 11, 15),
    (0, 5, 10, 15),
    (1, 6, 11, 12),
    (2, 7, 8, 13),
    (3, 4, 9, 14),
)


def _rotl(x: int, n: int) -> int:
    return ((x << n) | (x >> (32 - n))) & _M32


def _double_rounds(state: Sequence[int], drounds: int) -> list[int]:
    """Apply ``drounds`` column-and-diagonal double rounds to a 16-word state."""
    x = list(state)
    for _ in range(drounds):
        for a, b, c, d in _QUARTER_ROUNDS:
            x[a] = (x[a] + x[b]) & _M32
            x[d] = _rotl(x[d] ^ x[a], 16)
            x[c] = (x[c] + x[d]) & _M32
            x[b] = _rotl(x[b] ^ x[c], 12)
            x[a] = (x[a] + x[b]) & _M32
            x[d] = _rotl(x[d] ^ x[a], 8)
            x[c] = (x[c] + x[d]) & _M32
            x[b] = _rotl(x[b] ^ x[c], 7)
    return x


def _check_rounds(drounds: int) -> None:
    if not isinstance(drounds, int) or drounds < 0:
        raise ValueError("drounds must be a non-negative integer")


class ChaChaCore:
    """ChaCha key, nonce and block counter, producing keystream a block at a time.

    ``drounds`` arguments count double rounds: 10 for ChaCha20.
    """

    BLOCK = 64

    def __init__(self, key: bytes, nonce: bytes) -> None:
        key = bytes(key)
        nonce = bytes(nonce)
        if len(key) != 32:
            raise ValueError(f"key must be 32 bytes, got {len(key)}")
        if len(nonce) not in (8, 12):
            raise ValueError(f"nonce must be 8 or 12 bytes, got {len(nonce)}")
        first = struct.unpack("<I", nonce[:4])[0] if len(nonce) == 12 else 0
        tail = struct.unpack("<2I", nonce[-8:])
        self._key = struct.unpack("<8I", key)
        self._d = [0, first, *tail]

    @classmethod
    def _from_words(cls, key_words: Sequence[int], d: Sequence[int]) -> ChaChaCore:
        core = cls.__new__(cls)
        core._key = tuple(key_words)
        core._d = list(d)
        return core

    def _input(self) -> list[int]:
        return [*_CONSTANTS, *self._key, *self._d]

    def _position(self) -> int:
        return (self._d[1] << 32) | self._d[0]

    def _set_position(self, pos: int) -> None:
        pos &= _M64
        self._d[0] = pos & _M32
        self._d[1] = pos >> 32

    def seek64(self, blockct: int) -> None:
        """Set the 64-bit block counter used by the next refill."""
        if not 0 <= blockct <= _M64:
            raise ValueError("block count must fit in 64 bits")
        self._set_position(blockct)

    def seek32(self, blockct: int) -> None:
        """Set the 32-bit block counter used by the next refill."""
        if not 0 <= blockct <= _M32:
            raise ValueError("block count must fit in 32 bits")
        self._d[0] = blockct

    def refill(self, drounds: int) -> bytes:
        """Return one 64-byte keystream block and advance the counter."""
        _check_rounds(drounds)
        start = self._input()
        x = _double_rounds(start, drounds)
        block = struct.pack("<16I", *((a + b) & _M32 for a, b in zip(x, start)))
        self._set_position(self._position() + 1)
        return block

    def refill4(self, drounds: int) -> bytes:
        """Return four consecutive keystream blocks and advance the counter by four."""
        return b"".join(self.refill(drounds) for _ in range(4))

    def _raw_rounds(self, drounds: int) -> list[int]:
        """Run the rounds on the current state without the final addition."""
        _check_rounds(drounds)
        return _double_rounds(self._input(), drounds)

    def set_stream_param(self, param: int, value: int) -> None:
        """Set the 64-bit counter (param 0) or nonce (param 1) word pair."""
        if param not in (0, 1):
            raise ValueError("stream parameter must be 0 or 1")
        if not 0 <= value <= _M64:
            raise ValueError("stream parameter value must fit in 64 bits")
        self._d[2 * param] = value & _M32
        self._d[2 * param + 1] = value >> 32

    def get_stream_param(self, param: int) -> int:
        """Return the 64-bit counter (param 0) or nonce (param 1) word pair."""
        if param not in (0, 1):
            raise ValueError("stream parameter must be 0 or 1")
        return (self._d[2 * param + 1] << 32) | self._d[2 * param]


def derive_xchacha(key: bytes, nonce: bytes, rounds: int) -> ChaChaCore:
    """Derive the XChaCha sub-key from a 24-byte nonce and return the ready core."""
    key = bytes(key)
    nonce = bytes(nonce)
    if len(key) != 32:
        raise ValueError(f"key must be 32 bytes, got {len(key)}")
    if len(nonce) != 24:
        raise ValueError(f"nonce must be 24 bytes, got {len(nonce)}")
    nonce_words = struct.unpack("<6I", nonce)
    setup = ChaChaCore._from_words(struct.unpack("<8I", key), nonce_words[:4])
    x = setup._raw_rounds(rounds)
    return ChaChaCore._from_words(
        (*x[0:4], *x[12:16]), (0, 0, nonce_words[4], nonce_words[5])
    )