"""Threefish tweakable block cipher with 256, 512 and 1024-bit blocks."""

from __future__ import annotations

import struct
from functools import reduce
from operator import xor
from typing import ClassVar

__all__ = ["Threefish", "Threefish256", "Threefish512", "Threefish1024"]

_MASK = (1 << 64) - 1

# Key schedule parity constant.
C240 = 0x1BD11BDAA9FC1A22

R_256 = (
    (14, 16),
    (52, 57),
    (23, 40),
    (5, 37),
    (25, 33),
    (46, 12),
    (58, 22),
    (32, 32),
)

R_512 = (
    (46, 36, 19, 37),
    (33, 27, 14, 42),
    (17, 49, 36, 39),
    (44, 9, 54, 56),
    (39, 30, 34, 24),
    (13, 50, 10, 17),
    (25, 29, 39, 43),
    (8, 35, 56, 22),
)

R_1024 = (
    (24, 13, 8, 47, 8, 17, 22, 37),
    (38, 19, 10, 55, 49, 18, 23, 52),
    (33, 4, 51, 13, 34, 41, 59, 17),
    (5, 20, 48, 41, 47, 28, 16, 25),
    (41, 9, 37, 31, 12, 47, 44, 30),
    (16, 34, 56, 51, 4, 53, 42, 41),
    (31, 44, 47, 46, 19, 42, 44, 25),
    (9, 48, 35, 52, 23, 31, 37, 20),
)

P_256 = (0, 3, 2, 1)
P_512 = (6, 1, 0, 7, 2, 5, 4, 3)
P_1024 = (0, 15, 2, 11, 6, 13, 4, 9, 14, 1, 8, 5, 10, 3, 12, 7)


def _rotl(x: int, r: int) -> int:
    return ((x << r) | (x >> (64 - r))) & _MASK


def _rotr(x: int, r: int) -> int:
    return ((x >> r) | (x << (64 - r))) & _MASK


class Threefish:
    """Base class; use one of the sized subclasses."""

    ROUNDS: ClassVar[int] = 0
    WORDS: ClassVar[int] = 0
    ROTATIONS: ClassVar[tuple[tuple[int, ...], ...]] = ()
    PERMUTATION: ClassVar[tuple[int, ...]] = ()

    def __init__(self, key: bytes, tweak0: int = 0, tweak1: int = 0) -> None:
        if not self.WORDS:
            raise TypeError("Threefish must be used through a sized subclass")
        for tweak in (tweak0, tweak1):
            if not 0 <= tweak <= _MASK:
                raise ValueError("tweak words must fit in 64 bits")
        k = self._read_words(key, "key")
        k.append(reduce(xor, k, C240))
        tweaks = (tweak0, tweak1, tweak0 ^ tweak1)
        nw = self.WORDS
        subkeys = []
        for s in range(self.ROUNDS // 4 + 1):
            sk = [k[(s + i) % (nw + 1)] for i in range(nw)]
            sk[nw - 3] = (sk[nw - 3] + tweaks[s % 3]) & _MASK
            sk[nw - 2] = (sk[nw - 2] + tweaks[(s + 1) % 3]) & _MASK
            sk[nw - 1] = (sk[nw - 1] + s) & _MASK
            subkeys.append(tuple(sk))
        self._subkeys = tuple(subkeys)

    @property
    def block_size(self) -> int:
        """Block (and key) size in bytes."""
        return self.WORDS * 8

    def _read_words(self, data: bytes, what: str) -> list[int]:
        data = bytes(data)
        if len(data) != self.WORDS * 8:
            raise ValueError(
                f"{what} must be {self.WORDS * 8} bytes, got {len(data)}"
            )
        return list(struct.unpack(f"<{self.WORDS}Q", data))

    def _write_words(self, words: list[int]) -> bytes:
        return struct.pack(f"<{self.WORDS}Q", *words)

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt one block and return the ciphertext."""
        v = self._read_words(block, "block")
        perm = self.PERMUTATION
        for i in range(self.ROUNDS // 8):
            for d, rotations in enumerate(self.ROTATIONS):
                if d % 4 == 0:
                    key = self._subkeys[2 * i + d // 4]
                    v = [(x + k) & _MASK for x, k in zip(v, key)]
                out = [0] * self.WORDS
                pairs = zip(v[0::2], v[1::2], perm[0::2], perm[1::2], rotations)
                for x0, x1, p0, p1, r in pairs:
                    y0 = (x0 + x1) & _MASK
                    out[p0] = y0
                    out[p1] = _rotl(x1, r) ^ y0
                v = out
        final = self._subkeys[self.ROUNDS // 4]
        return self._write_words([(x + k) & _MASK for x, k in zip(v, final)])

    def decrypt_block(self, block: bytes) -> bytes:
        """Decrypt one block and return the plaintext."""
        v = self._read_words(block, "block")
        final = self._subkeys[self.ROUNDS // 4]
        v = [(x - k) & _MASK for x, k in zip(v, final)]
        perm = self.PERMUTATION
        for i in reversed(range(self.ROUNDS // 8)):
            for d in reversed(range(8)):
                rotations = self.ROTATIONS[d]
                out: list[int] = []
                for p0, p1, r in zip(perm[0::2], perm[1::2], rotations):
                    f0, f1 = v[p0], v[p1]
                    x1 = _rotr(f0 ^ f1, r)
                    out.extend(((f0 - x1) & _MASK, x1))
                if d % 4 == 0:
                    key = self._subkeys[2 * i + d // 4]
                    out = [(x - k) & _MASK for x, k in zip(out, key)]
                v = out
        return self._write_words(v)


class Threefish256(Threefish):
    """Threefish with a 256-bit block and key."""

    ROUNDS = 72
    WORDS = 4
    ROTATIONS = R_256
    PERMUTATION = P_256


class Threefish512(Threefish):
    """Threefish with a 512-bit block and key."""

    ROUNDS = 72
    WORDS = 8
    ROTATIONS = R_512
    PERMUTATION = P_512


class Threefish1024(Threefish):
    """Threefish with a 1024-bit block and key."""

    ROUNDS = 80
    WORDS = 16
    ROTATIONS = R_1024
    PERMUTATION = P_1024