"""Groestl compression and output transformation over the 1024-bit state."""

from __future__ import annotations

from functools import reduce
from operator import xor

__all__ = ["BLOCK_SIZE", "compress", "output_transform"]

BLOCK_SIZE = 128
_ROWS = 8
_COLUMNS = 16
_ROUNDS = 14


def _gf_mul(a: int, b: int) -> int:
    """Multiply in GF(2^8) modulo x^8 + x^4 + x^3 + x + 1."""
    result = 0
    while b:
        if b & 1:
            result ^= a
        a <<= 1
        if a & 0x100:
            a ^= 0x11B
        b >>= 1
    return result


def _make_sbox() -> bytes:
    exp = [0] * 255
    log = [0] * 256
    x = 1
    for power in range(255):
        exp[power] = x
        log[x] = power
        x = _gf_mul(x, 3)
    sbox = bytearray(256)
    for value in range(256):
        inv = exp[(255 - log[value]) % 255] if value else 0
        s = inv
        for shift in range(1, 5):
            s ^= ((inv << shift) | (inv >> (8 - shift))) & 0xFF
        sbox[value] = s ^ 0x63
    return bytes(sbox)


_SBOX = _make_sbox()

_MIX = (2, 2, 3, 4, 5, 3, 5, 7)
_MUL = {c: bytes(_gf_mul(x, c) for x in range(256)) for c in set(_MIX)}
# Output row i takes input row k multiplied by _MIX[(k - i) % 8].
_MIX_ROWS = tuple(
    tuple(_MUL[_MIX[(k - i) % _ROWS]] for k in range(_ROWS)) for i in range(_ROWS)
)

_SHIFT_P = (0, 1, 2, 3, 4, 5, 6, 11)
_SHIFT_Q = (1, 3, 5, 11, 0, 2, 4, 6)


def _shift_sources(shifts: tuple[int, ...]) -> tuple[int, ...]:
    """Byte index each output byte is taken from (state stored column by column)."""
    return tuple(
        ((col + shifts[row]) % _COLUMNS) * _ROWS + row
        for col in range(_COLUMNS)
        for row in range(_ROWS)
    )


_SOURCES_P = _shift_sources(_SHIFT_P)
_SOURCES_Q = _shift_sources(_SHIFT_Q)


def _round_constants(q: bool) -> tuple[bytes, ...]:
    constants = []
    for r in range(_ROUNDS):
        const = bytearray(b"\xff" * BLOCK_SIZE if q else bytes(BLOCK_SIZE))
        row = _ROWS - 1 if q else 0
        for col in range(_COLUMNS):
            const[col * _ROWS + row] ^= (col << 4) ^ r
        constants.append(bytes(const))
    return tuple(constants)


_CONSTANTS_P = _round_constants(False)
_CONSTANTS_Q = _round_constants(True)


def _xor_bytes(a: bytes, b: bytes) -> bytes:
    return bytes(x ^ y for x, y in zip(a, b))


def _mix_bytes(state: list[int]) -> bytes:
    out = bytearray()
    for offset in range(0, BLOCK_SIZE, _ROWS):
        column = state[offset : offset + _ROWS]
        out.extend(
            reduce(xor, (table[v] for table, v in zip(tables, column)))
            for tables in _MIX_ROWS
        )
    return bytes(out)


def _permute(state: bytes, constants: tuple[bytes, ...], sources: tuple[int, ...]) -> bytes:
    for const in constants:
        added = _xor_bytes(state, const)
        shifted = [_SBOX[added[i]] for i in sources]
        state = _mix_bytes(shifted)
    return state


def _perm_p(state: bytes) -> bytes:
    return _permute(state, _CONSTANTS_P, _SOURCES_P)


def _perm_q(state: bytes) -> bytes:
    return _permute(state, _CONSTANTS_Q, _SOURCES_Q)


def _check(value: bytes, what: str) -> bytes:
    value = bytes(value)
    if len(value) != BLOCK_SIZE:
        raise ValueError(f"{what} must be {BLOCK_SIZE} bytes, got {len(value)}")
    return value


def compress(h: bytes, block: bytes) -> bytes:
    """Return the chaining value after absorbing one 128-byte message block."""
    h = _check(h, "chaining value")
    block = _check(block, "block")
    mixed = _xor_bytes(_perm_p(_xor_bytes(h, block)), _perm_q(block))
    return _xor_bytes(mixed, h)


def output_transform(h: bytes) -> bytes:
    """Return P(h) xor h; the digest is the tail of this value."""
    h = _check(h, "chaining value")
    return _xor_bytes(_perm_p(h), h)