import pytest

from finalistcrypto.threefish import (
    Threefish,
    Threefish256,
    Threefish512,
    Threefish1024,
)

T0 = 0x0706050403020100
T1 = 0x0F0E0D0C0B0A0908


def h(s: str) -> bytes:
    return bytes.fromhex("".join(s.split()))


def test_256_zero():
    fish = Threefish256(bytes(32))
    block = fish.encrypt_block(bytes(32))
    assert block == h("84da2a1f8beaee947066ae3e3103f1ad536db1f4a1192495116b9f3ce6133fd8")
    assert Threefish256(bytes(32)).decrypt_block(block) == bytes(32)


def test_256_tweaked():
    key = h("101112131415161718191a1b1c1d1e1f202122232425262728292a2b2c2d2e2f")
    data = h("FFFEFDFCFBFAF9F8F7F6F5F4F3F2F1F0EFEEEDECEBEAE9E8E7E6E5E4E3E2E1E0")
    fish = Threefish256(key, T0, T1)
    block = fish.encrypt_block(data)
    assert block == h("e0d091ff0eea8fdfc98192e62ed80ad59d865d08588df476657056b5955e97df")
    assert Threefish256(key, T0, T1).decrypt_block(block) == data


def test_512_zero():
    fish = Threefish512(bytes(64))
    block = fish.encrypt_block(bytes(64))
    assert block == h(
        """
        b1a2bbc6ef6025bc40eb3822161f36e375d1bb0aee3186fbd19e47c5d479947b
        7bc2f8586e35f0cff7e7f03084b0b7b1f1ab3961a580a3e97eb41ea14a6d7bbe
        """
    )
    assert Threefish512(bytes(64)).decrypt_block(block) == bytes(64)


def test_512_tweaked():
    key = h(
        """
        101112131415161718191a1b1c1d1e1f202122232425262728292a2b2c2d2e2f
        303132333435363738393a3b3c3d3e3f404142434445464748494a4b4c4d4e4f
        """
    )
    data = h(
        """
        fffefdfcfbfaf9f8f7f6f5f4f3f2f1f0efeeedecebeae9e8e7e6e5e4e3e2e1e0
        dfdedddcdbdad9d8d7d6d5d4d3d2d1d0cfcecdcccbcac9c8c7c6c5c4c3c2c1c0
        """
    )
    fish = Threefish512(key, T0, T1)
    block = fish.encrypt_block(data)
    assert block == h(
        """
        e304439626d45a2cb401cad8d636249a6338330eb06d45dd8b36b90e97254779
        272a0a8d99463504784420ea18c9a725af11dffea10162348927673d5c1caf3d
        """
    )
    assert Threefish512(key, T0, T1).decrypt_block(block) == data


def test_1024_zero():
    fish = Threefish1024(bytes(128))
    block = fish.encrypt_block(bytes(128))
    assert block == h(
        """
        f05c3d0a3d05b304f785ddc7d1e036015c8aa76e2f217b06c6e1544c0bc1a90d
        f0accb9473c24e0fd54fea68057f43329cb454761d6df5cf7b2e9b3614fbd5a2
        0b2e4760b40603540d82eabc5482c171c832afbe68406bc39500367a592943fa
        9a5b4a43286ca3c4cf46104b443143d560a4b230488311df4feef7e1dfe8391e
        """
    )
    assert Threefish1024(bytes(128)).decrypt_block(block) == bytes(128)


def test_1024_tweaked():
    key = h(
        """
        101112131415161718191a1b1c1d1e1f202122232425262728292a2b2c2d2e2f
        303132333435363738393a3b3c3d3e3f404142434445464748494a4b4c4d4e4f
        505152535455565758595a5b5c5d5e5f606162636465666768696a6b6c6d6e6f
        707172737475767778797a7b7c7d7e7f808182838485868788898a8b8c8d8e8f
        """
    )
    data = h(
        """
        fffefdfcfbfaf9f8f7f6f5f4f3f2f1f0efeeedecebeae9e8e7e6e5e4e3e2e1e0
        dfdedddcdbdad9d8d7d6d5d4d3d2d1d0cfcecdcccbcac9c8c7c6c5c4c3c2c1c0
        bfbebdbcbbbab9b8b7b6b5b4b3b2b1b0afaeadacabaaa9a8a7a6a5a4a3a2a1a0
        9f9e9d9c9b9a999897969594939291908f8e8d8c8b8a89888786858483828180
        """
    )
    fish = Threefish1024(key, T0, T1)
    block = fish.encrypt_block(data)
    assert block == h(
        """
        a6654ddbd73cc3b05dd777105aa849bce49372eaaffc5568d254771bab85531c
        94f780e7ffaae430d5d8af8c70eebbe1760f3b42b737a89cb363490d670314bd
        8aa41ee63c2e1f45fbd477922f8360b388d6125ea6c7af0ad7056d01796e90c8
        3313f4150a5716b30ed5f569288ae974ce2b4347926fce57de44512177dd7cde
        """
    )
    assert Threefish1024(key, T0, T1).decrypt_block(block) == data


@pytest.mark.parametrize("cls,size", [(Threefish256, 32), (Threefish512, 64), (Threefish1024, 128)])
def test_roundtrip_ones(cls, size):
    fish = cls(bytes(range(size)), 1, 2)
    data = bytes([1]) * size
    enc = fish.encrypt_block(data)
    assert len(enc) == size
    assert fish.block_size == size
    assert fish.decrypt_block(enc) == data


def test_tweak_changes_output():
    key = bytes(32)
    assert Threefish256(key, 0, 0).encrypt_block(bytes(32)) != Threefish256(key, 1, 0).encrypt_block(bytes(32))
    assert Threefish256(key).encrypt_block(bytes(32)) == Threefish256(key, 0, 0).encrypt_block(bytes(32))


def test_accepts_bytearray():
    fish = Threefish256(bytearray(32))
    assert fish.encrypt_block(bytearray(32)) == h(
        "84da2a1f8beaee947066ae3e3103f1ad536db1f4a1192495116b9f3ce6133fd8"
    )


def test_bad_key_length():
    with pytest.raises(ValueError):
        Threefish256(bytes(31))


def test_bad_block_length():
    fish = Threefish512(bytes(64))
    with pytest.raises(ValueError):
        fish.encrypt_block(bytes(32))
    with pytest.raises(ValueError):
        fish.decrypt_block(bytes(65))


def test_bad_tweak():
    with pytest.raises(ValueError):
        Threefish256(bytes(32), 1 << 64, 0)
    with pytest.raises(ValueError):
        Threefish256(bytes(32), 0, -1)


def test_base_class_unusable():
    with pytest.raises(TypeError):
        Threefish(bytes(32))