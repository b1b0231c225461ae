"""Skein hash functions built on the Threefish tweakable block cipher."""

from __future__ import annotations

import struct
from functools import lru_cache
from typing import ClassVar

from .threefish import Threefish, Threefish256, Threefish512, Threefish1024

__all__ = ["Skein", "Skein256", "Skein512", "Skein1024"]

_MASK = (1 << 64) - 1

_VERSION = 1
_ID_STRING_LE = 0x33414853
_SCHEMA_VER = (_VERSION << 32) | _ID_STRING_LE
_CFG_TREE_INFO_SEQUENTIAL = 0
_T1_FLAG_FIRST = 1 << 62
_T1_FLAG_FINAL = 1 << 63
_T1_BLK_TYPE_CFG = 4 << 56
_T1_BLK_TYPE_MSG = 48 << 56
_T1_BLK_TYPE_OUT = 63 << 56
_CFG_STR_LEN = 4 * 8


def _process_block(
    cipher: type[Threefish], chain: bytes, block: bytes, position: int, tweak1: int
) -> bytes:
    """Run one UBI step: encrypt the block under the chain value and feed it forward."""
    fish = cipher(chain, position & _MASK, tweak1)
    encrypted = fish.encrypt_block(block)
    return bytes(a ^ b for a, b in zip(encrypted, block))


@lru_cache(maxsize=None)
def _initial_chain(cipher: type[Threefish], block_size: int, output_size: int) -> bytes:
    config = struct.pack(
        "<QQQ", _SCHEMA_VER, (output_size * 8) & _MASK, _CFG_TREE_INFO_SEQUENTIAL
    ).ljust(block_size, b"\0")
    tweak1 = _T1_FLAG_FIRST | _T1_BLK_TYPE_CFG | _T1_FLAG_FINAL
    return _process_block(cipher, bytes(block_size), config, _CFG_STR_LEN, tweak1)


class Skein:
    """Base class for Skein hashers; use one of the sized subclasses."""

    CIPHER: ClassVar[type[Threefish] | None] = None
    block_size: ClassVar[int] = 0
    name: ClassVar[str] = "skein"

    def __init__(self, output_size: int | None = None, data: bytes = b"") -> None:
        if self.CIPHER is None or not self.block_size:
            raise TypeError("Skein must be used through a sized subclass")
        if output_size is None:
            output_size = self.block_size
        if not isinstance(output_size, int) or output_size < 1:
            raise ValueError("output_size must be a positive number of bytes")
        self.digest_size = output_size
        self.reset()
        if data:
            self.update(data)

    def reset(self) -> None:
        """Return the hasher to its freshly created state."""
        assert self.CIPHER is not None
        self._chain = _initial_chain(self.CIPHER, self.block_size, self.digest_size)
        self._tweak0 = 0
        self._tweak1 = _T1_FLAG_FIRST | _T1_BLK_TYPE_MSG
        self._buffer = bytearray()

    def update(self, data: bytes) -> None:
        """Absorb more message bytes."""
        assert self.CIPHER is not None
        self._buffer.extend(data)
        size = self.block_size
        # The last block is kept back until finalisation, even when full.
        while len(self._buffer) > size:
            block = bytes(self._buffer[:size])
            del self._buffer[:size]
            self._tweak0 = (self._tweak0 + size) & _MASK
            self._chain = _process_block(
                self.CIPHER, self._chain, block, self._tweak0, self._tweak1
            )
            self._tweak1 &= ~_T1_FLAG_FIRST

    def digest(self) -> bytes:
        """Return the digest of everything absorbed so far."""
        assert self.CIPHER is not None
        size = self.block_size
        pos = len(self._buffer)
        final_block = bytes(self._buffer).ljust(size, b"\0")
        chain = _process_block(
            self.CIPHER,
            self._chain,
            final_block,
            self._tweak0 + pos,
            self._tweak1 | _T1_FLAG_FINAL,
        )
        out_tweak = _T1_FLAG_FIRST | _T1_BLK_TYPE_OUT | _T1_FLAG_FINAL
        blocks = -(-self.digest_size // size)
        output = b"".join(
            _process_block(
                self.CIPHER,
                chain,
                struct.pack("<Q", counter).ljust(size, b"\0"),
                8,
                out_tweak,
            )
            for counter in range(blocks)
        )
        return output[: self.digest_size]

    def hexdigest(self) -> str:
        """Return the digest as a lower-case hex string."""
        return self.digest().hex()

    def copy(self) -> Skein:
        """Return an independent copy of this hasher."""
        other = type(self).__new__(type(self))
        other.digest_size = self.digest_size
        other._chain = self._chain
        other._tweak0 = self._tweak0
        other._tweak1 = self._tweak1
        other._buffer = bytearray(self._buffer)
        return other


class Skein256(Skein):
    """Skein with a 256-bit internal state."""

    CIPHER = Threefish256
    block_size = 32
    name = "skein256"


class Skein512(Skein):
    """Skein with a 512-bit internal state."""

    CIPHER = Threefish512
    block_size = 64
    name = "skein512"


class Skein1024(Skein):
    """Skein with a 1024-bit internal state."""

    CIPHER = Threefish1024
    block_size = 128
    name = "skein1024"