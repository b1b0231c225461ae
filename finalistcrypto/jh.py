"""JH hash functions (224, 256, 384 and 512-bit outputs)."""

from __future__ import annotations

import struct
from typing import ClassVar

__all__ = ["Compressor", "Jh", "Jh224", "Jh256", "Jh384", "Jh512"]

_M128 = (1 << 128) - 1

_ROUND_CONSTANT_HEX = (
    "72d5dea2df15f8677b84150ab723155781abd6904d5a87f64e9f4fc5c3d12b40",
    "ea983ae05c45fa9c03c5d29966b2999a660296b4f2bb538ab556141a88dba231",
    "03a35a5c9a190edb403fb20a87c144101c051980849e951d6f33ebad5ee7cddc",
    "10ba139202bf6b41dc786515f7bb27d00a2c813937aa78503f1abfd2410091d3",
    "422d5a0df6cc7e90dd629f9c92c097ce185ca70bc72b44acd1df65d663c6fc23",
    "976e6c039ee0b81a2105457e446ceca8eef103bb5d8e61fafd9697b294838197",
    "4a8e8537db03302f2a678d2dfb9f6a958afe7381f8b8696c8ac77246c07f4214",
    "c5f4158fbdc75ec475446fa78f11bb8052de75b7aee488bc82b8001e98a6a3f4",
    "8ef48f33a9a36315aa5f5624d5b7f989b6f1ed207c5ae0fd36cae95a06422c36",
    "ce2935434efe983d533af974739a4ba7d0f51f596f4e81860e9dad81afd85a9f",
    "a7050667ee34626a8b0b28be6eb9172747740726c680103fe0a07e6fc67e487b",
    "0d550aa54af8a4c091e3e79f978ef19e8676728150608dd47e9e5a41f3e5b062",
    "fc9f1fec4054207ae3e41a00cef4c9844fd794f59dfa95d8552e7e1124c354a5",
    "5bdf7228bdfe6e2878f57fe20fa5c4b205897cefee49d32e447e9385eb28597f",
    "705f6937b324314a5e8628f11dd6e465c71b770451b920e774fe43e823d4878a",
    "7d29e8a3927694f2ddcb7a099b30d9c11d1b30fb5bdc1be0da24494ff29c82bf",
    "a4e7ba31b470bfff0d324405def8bc483baefc3253bbd339459fc3c1e0298ba0",
    "e5c905fdf7ae090f947034124290f134a271b701e344ed95e93b8e364f2f984a",
    "88401d63a06cf61547c1444b8752afff7ebb4af1e20ac6304670b6c5cc6e8ce6",
    "a4d5a456bd4fca00da9d844bc83e18ae7357ce453064d1ade8a6ce68145c2567",
    "a3da8cf2cb0ee11633e906589a94999a1f60b220c26f847bd1ceac7fa0d18518",
    "32595ba18ddd19d3509a1cc0aaa5b4469f3d6367e4046bbaf6ca19ab0b56ee7e",
    "1fb179eaa9282174e9bdf7353b3651ee1d57ac5a7550d3763a46c2fea37d7001",
    "f735c1af98a4d84278edec209e6b677941836315ea3adba8fac33b4d32832c83",
    "a7403b1f1c2747f35940f034b72d769ae73e4e6cd2214ffdb8fd8d39dc5759ef",
    "8d9b0c492b49ebda5ba2d74968f3700d7d3baed07a8d5584f5a5e9f0e4f88e65",
    "a0b8a2f436103b530ca8079e753eec5a9168949256e8884f5bb05c55f8babc4c",
    "e3bb3b99f387947b75daf4d6726b1c5d64aeac28dc34b36d6c34a550b828db71",
    "f861e2f2108d512ae3db643359dd75fc1cacbcf143ce3fa267bbd13c02e843b0",
    "330a5bca8829a1757f34194db416535c923b94c30e794d1e797475d7b6eeaf3f",
    "eaa8d4f7be1a39215cf47e094c23275126a32453ba323cd244a3174a6da6d5ad",
    "b51d3ea6aff2c90883593d98916b3c564cf87ca17286604d46e23ecc086ec7f6",
    "2f9833b3b1bc765e2bd666a5efc4e62a06f4b6e8bec1d43674ee8215bcef2163",
    "fdc14e0df453c969a77d5ac4065858267ec1141606e0fa167e90af3d28639d3f",
    "d2c9f2e3009bd20c5faace30b7d40c30742a5116f2e032980deb30d8e3cef89a",
    "4bc59e7bb5f17992ff51e66e048668d39b234d57e6966731cce6a6f3170a7505",
    "b17681d913326cce3c175284f805a262f42bcbb378471547ff46548223936a48",
    "38df58074e5e6565f2fc7c89fc86508e31702e44d00bca86f04009a23078474e",
    "65a0ee39d1f73883f75ee937e42c3abd2197b2260113f86fa344edd1ef9fdee7",
    "8ba0df15762592d93c85f7f612dc42bed8a7ec7cab27b07e538d7ddaaa3ea8de",
    "aa25ce93bd0269d85af643fd1a7308f9c05fefda174a19a5974d66334cfd216a",
    "35b49831db411570ea1e0fbbedcd549b9ad063a151974072f6759dbf91476fe2",
)

_H0_HEX = {
    224: (
        "2dfedd62f99a98acae7cacd619d634e7a4831005bc301216b86038c6c9661494"
        "66d9899f2580706fce9ea31b1d9b1adc11e8325f7b366e10f994857f02fa06c1"
        "1b4f1b5cd8c840b397f6a17f6e738099dcdf93a5adeaa3d3a431e8dec9539a68"
        "22b4a98aec86a1e4d574ac959ce56cf015960deab5ab2bbf9611dcf0dd64ea6e"
    ),
    256: (
        "eb98a3412c20d3eb92cdbe7b9cb245c11c93519160d4c7fa260082d67e508a03"
        "a4239e267726b945e0fb1a48d41a9477cdb5ab26026b177a56f024420fff2fa8"
        "71a396897f2e4d751d144908f77de262277695f776248f9487d5b6574780296c"
        "5c5e272dac8e0d6c518450c657057a0f7be4d367702412ea89e3ab13d31cd769"
    ),
    384: (
        "481e3bc6d813398a6d3b5e894ade879b63faea68d480ad2e332ccb21480f8267"
        "98aec84d9082b928d455ea304111424936f555b2924847ecc7250a93baf43ce1"
        "569b7f8a27db454c9efcbd496397af0e589fc27d26aa80cd80c08b8c9deb2eda"
        "8a7981e8f8d5373af43967adddd17a71a9b4d3bda475d394976c3fba9842737f"
    ),
    512: (
        "6fd14b963e00aa17636a2e057a15d5438a225e8d0c97ef0be9341259f2b3c361"
        "891da0c1536f801e2aa9056bea2b6d80588eccdb2075baa6a90f3a76baf83bf7"
        "0169e60541e34a6946b58a8e2e6fe65a1047a7d0c1843c243b6e71b12d5ac199"
        "cf57f6ec9db1f856a706887c5716b156e3c2fcdfe68517fb545a4678cc8cdd4b"
    ),
}


def _words(data: bytes) -> list[int]:
    """Split bytes into little-endian 128-bit words."""
    return [
        int.from_bytes(data[offset : offset + 16], "little")
        for offset in range(0, len(data), 16)
    ]


_ROUND_CONSTANTS = tuple(
    tuple(_words(bytes.fromhex(rc))) for rc in _ROUND_CONSTANT_HEX
)


def _swap_mask(width: int) -> int:
    group = (1 << width) - 1
    mask = 0
    for shift in range(0, 128, 2 * width):
        mask |= group << shift
    return mask


# Swap adjacent groups of 1, 2, 4, ... 64 bits, one width per round of seven.
_SWAPS = tuple((width, _swap_mask(width)) for width in (1, 2, 4, 8, 16, 32, 64))


def _swap(x: int, width: int, mask: int) -> int:
    return ((x & mask) << width) | ((x >> width) & mask)


def _sbox(m0: int, m1: int, m2: int, m3: int, k: int) -> tuple[int, int, int, int]:
    """Bitsliced S-box; each constant bit selects S0 or S1."""
    m3 ^= _M128
    m0 ^= ~m2 & k
    k ^= m0 & m1
    m0 ^= m3 & m2
    m3 ^= ~m1 & m2
    m1 ^= m0 & m2
    m2 ^= ~m3 & m0
    m0 ^= m1 | m3
    m3 ^= m1 & m2
    m2 ^= k
    m1 ^= k & m0
    return m0, m1, m2, m3


def _e8(y: list[int]) -> list[int]:
    y0, y1, y2, y3, y4, y5, y6, y7 = y
    for r, (k0, k1) in enumerate(_ROUND_CONSTANTS):
        y0, y2, y4, y6 = _sbox(y0, y2, y4, y6, k0)
        y1, y3, y5, y7 = _sbox(y1, y3, y5, y7, k1)
        # linear transformation
        y1 ^= y2
        y3 ^= y4
        y5 ^= y6 ^ y0
        y7 ^= y0
        y0 ^= y3
        y2 ^= y5
        y4 ^= y7 ^ y1
        y6 ^= y1
        width, mask = _SWAPS[r % 7]
        y1 = _swap(y1, width, mask)
        y3 = _swap(y3, width, mask)
        y5 = _swap(y5, width, mask)
        y7 = _swap(y7, width, mask)
    return [y0, y1, y2, y3, y4, y5, y6, y7]


class Compressor:
    """The JH compression function F8 over a 1024-bit state."""

    STATE_SIZE: ClassVar[int] = 128
    BLOCK_SIZE: ClassVar[int] = 64

    def __init__(self, state: bytes) -> None:
        state = bytes(state)
        if len(state) != self.STATE_SIZE:
            raise ValueError(f"state must be {self.STATE_SIZE} bytes, got {len(state)}")
        self._state = _words(state)

    def update(self, block: bytes) -> None:
        """Compress one 64-byte message block into the state."""
        block = bytes(block)
        if len(block) != self.BLOCK_SIZE:
            raise ValueError(f"block must be {self.BLOCK_SIZE} bytes, got {len(block)}")
        data = _words(block)
        y = [w ^ d for w, d in zip(self._state[:4], data)] + self._state[4:]
        y = _e8(y)
        self._state = y[:4] + [w ^ d for w, d in zip(y[4:], data)]

    def finalize(self) -> bytes:
        """Return the current state as bytes."""
        return b"".join(w.to_bytes(16, "little") for w in self._state)


class Jh:
    """Base class for JH hashers; use one of the sized subclasses."""

    digest_size: ClassVar[int] = 0
    block_size: ClassVar[int] = 64
    name: ClassVar[str] = "jh"
    H0: ClassVar[bytes] = b""

    def __init__(self, data: bytes = b"") -> None:
        if not self.digest_size:
            raise TypeError("Jh must be used through a sized subclass")
        self.reset()
        if data:
            self.update(data)

    def reset(self) -> None:
        """Return the hasher to its freshly created state."""
        self._compressor = Compressor(self.H0)
        self._buffer = bytearray()
        self._length = 0

    def update(self, data: bytes) -> None:
        """Absorb more message bytes."""
        self._length += len(data)
        self._buffer.extend(data)
        full = len(self._buffer) - len(self._buffer) % self.block_size
        for offset in range(0, full, self.block_size):
            self._compressor.update(bytes(self._buffer[offset : offset + self.block_size]))
        del self._buffer[:full]

    def digest(self) -> bytes:
        """Return the digest of everything absorbed so far."""
        compressor = Compressor(self._compressor.finalize())
        length = struct.pack(">Q", (self._length * 8) & ((1 << 64) - 1))
        if not self._buffer:
            compressor.update(b"\x80" + bytes(55) + length)
        else:
            compressor.update(bytes(self._buffer + b"\x80").ljust(self.block_size, b"\0"))
            compressor.update(bytes(56) + length)
        return compressor.finalize()[-self.digest_size :]

    def hexdigest(self) -> str:
        """Return the digest as a lower-case hex string."""
        return self.digest().hex()

    def copy(self) -> Jh:
        """Return an independent copy of this hasher."""
        other = type(self).__new__(type(self))
        other._compressor = Compressor(self._compressor.finalize())
        other._buffer = bytearray(self._buffer)
        other._length = self._length
        return other


class Jh224(Jh):
    """JH with a 224-bit digest."""

    digest_size = 28
    name = "jh224"
    H0 = bytes.fromhex(_H0_HEX[224])


class Jh256(Jh):
    """JH with a 256-bit digest."""

    digest_size = 32
    name = "jh256"
    H0 = bytes.fromhex(_H0_HEX[256])


class Jh384(Jh):
    """JH with a 384-bit digest."""

    digest_size = 48
    name = "jh384"
    H0 = bytes.fromhex(_H0_HEX[384])


class Jh512(Jh):
    """JH with a 512-bit digest."""

    digest_size = 64
    name = "jh512"
    H0 = bytes.fromhex(_H0_HEX[512])