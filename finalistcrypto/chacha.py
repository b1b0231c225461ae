"""ChaCha stream ciphers: ChaCha20/12/8, the 12-byte-nonce IETF variant and XChaCha20."""

from __future__ import annotations

from typing import ClassVar

from .chacha_core import ChaChaCore, derive_xchacha

__all__ = [
    "KeystreamExhausted",
    "ChaCha",
    "ChaCha20",
    "ChaCha12",
    "ChaCha8",
    "Ietf",
    "XChaCha20",
]

_BLOCK = 64
_M32 = 0xFFFFFFFF
_M64 = (1 << 64) - 1
_BIG_LEN = 0
_SMALL_LEN = 1 << 32


class KeystreamExhausted(Exception):
    """Raised when a request would run past the end of the keystream."""


def _xor(data: bytes, key: bytes) -> bytes:
    if not data:
        return b""
    n = len(data)
    value = int.from_bytes(data, "little") ^ int.from_bytes(key[:n], "little")
    return value.to_bytes(n, "little")


class ChaCha:
    """Base class for ChaCha ciphers; use one of the concrete subclasses."""

    DROUNDS: ClassVar[int] = 0
    NONCE_SIZE: ClassVar[int] = 0
    EXTENDED: ClassVar[bool] = False
    key_size: ClassVar[int] = 32

    def __init__(self, key: bytes, nonce: bytes) -> None:
        if not self.DROUNDS:
            raise TypeError("ChaCha must be used through a concrete subclass")
        key = bytes(key)
        nonce = bytes(nonce)
        if len(key) != self.key_size:
            raise ValueError(f"key must be {self.key_size} bytes, got {len(key)}")
        if len(nonce) != self.NONCE_SIZE:
            raise ValueError(f"nonce must be {self.NONCE_SIZE} bytes, got {len(nonce)}")
        if self.EXTENDED:
            self._core = derive_xchacha(key, nonce, self.DROUNDS)
            self._remaining = _BIG_LEN
            self._fresh = True
        else:
            self._core = ChaChaCore(key, nonce)
            small = self.NONCE_SIZE == 12
            self._remaining = _SMALL_LEN if small else _BIG_LEN
            self._fresh = not small
        self._out = bytes(_BLOCK)
        self._have = 0

    def apply_keystream(self, data: bytes) -> bytes:
        """XOR the next keystream bytes into ``data`` and return the result.

        Raises KeystreamExhausted if the block counter would wrap.
        """
        data = bytes(data)
        # After a seek we may sit partway into a block not generated yet.
        if self._have < 0:
            self._out = self._core.refill(self.DROUNDS)
            self._have += _BLOCK
            self._remaining = (self._remaining - 1) & _M64
        have = self._have
        ready = min(have, len(data))
        needed = -(-(len(data) - ready) // _BLOCK)
        if needed > self._remaining and not self._fresh:
            raise KeystreamExhausted("keystream exhausted")
        self._remaining = (self._remaining - needed) & _M64
        self._fresh = self._fresh and needed == 0

        start = _BLOCK - have
        pieces = [_xor(data[:ready], self._out[start : start + ready])]
        have -= ready
        for offset in range(ready, len(data), _BLOCK):
            chunk = data[offset : offset + _BLOCK]
            self._out = self._core.refill(self.DROUNDS)
            pieces.append(_xor(chunk, self._out))
            have = _BLOCK - len(chunk)
        self._have = have
        return b"".join(pieces)

    def seek(self, pos: int) -> None:
        """Move to byte offset ``pos`` in the keystream."""
        if not isinstance(pos, int) or not 0 <= pos <= _M64:
            raise ValueError("position must be a non-negative 64-bit integer")
        blockct, offset = divmod(pos, _BLOCK)
        if self.NONCE_SIZE != 12:
            self._remaining = (_BIG_LEN - blockct) & _M64
            self._fresh = blockct == 0
            self._have = -offset
            self._core.seek64(blockct)
        else:
            if not (blockct < _SMALL_LEN or (blockct == _SMALL_LEN and offset == 0)):
                raise ValueError("position is past the end of the keystream")
            self._remaining = _SMALL_LEN - blockct
            self._have = -offset
            self._core.seek32(blockct & _M32)


class ChaCha20(ChaCha):
    """ChaCha20 with an 8-byte nonce and a 64-bit block counter."""

    DROUNDS = 10
    NONCE_SIZE = 8


class ChaCha12(ChaCha):
    """ChaCha with 12 rounds and an 8-byte nonce."""

    DROUNDS = 6
    NONCE_SIZE = 8


class ChaCha8(ChaCha):
    """ChaCha with 8 rounds and an 8-byte nonce."""

    DROUNDS = 4
    NONCE_SIZE = 8


class Ietf(ChaCha):
    """RFC 7539 ChaCha20 with a 12-byte nonce; at most 256 GiB per nonce."""

    DROUNDS = 10
    NONCE_SIZE = 12


class XChaCha20(ChaCha):
    """ChaCha20 with a 24-byte nonce and a 64-bit block counter."""

    DROUNDS = 10
    NONCE_SIZE = 24
    EXTENDED = True