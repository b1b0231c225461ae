import pytest

from finalistcrypto.chacha_core import ChaChaCore, derive_xchacha

RFC_KEY = bytes(range(32))
RFC_NONCE = bytes.fromhex("000000090000004a00000000")
RFC_BLOCK1 = bytes.fromhex(
    "10f1e7e4d13b5915500fdd1fa32071c4c7d1f4c733c068030422aa9ac3d46c4e"
    "d2826446079faa0914c2d705d98b02a2b5129cd1de164eb9cbd083e8a2503c4e"
)

CASE1_KEY = bytes.fromhex("fa44478c59ca70538e3549096ce8b523232c50d9e8e8d10c203ef6c8d07098a5")
CASE1_NONCE = bytes.fromhex("8d3a0d6d7827c007")
CASE1_EXPECTED = bytes.fromhex(
    "1546a547ff77c5c964e44fd039e913c6395c8f19d43efaa880750f6687b4e6e2d8f42f63546da2d133b5aa2f1ef3f218b6c72943089e4012"
    "210c2cbed0e8e93498a6825fc8ff7a504f26db33b6cbe36299436244c9b2eff88302c55933911b7d5dea75f2b6d4761ba44bb6f814c9879d"
    "2ba2ac8b178fa1104a368694872339738ffb960e33db39efb8eaef885b910eea078e7a1feb3f8185dafd1455b704d76da3a0ce4760741841"
    "217bba1e4ece760eaf68617133431feb806c061173af6b8b2a23be90c5d145cc258e3c119aab2800f0c7bc1959dae75481712cab731b7dfd"
    "783fa3a228f9968aaea68f36a92f43c9b523337a55b97bcaf5f5774447bf41e8"
)


def test_rfc7539_second_block_after_refill():
    core = ChaChaCore(RFC_KEY, RFC_NONCE)
    core.refill(10)
    assert core.refill(10) == RFC_BLOCK1


def test_rfc7539_second_block_after_seek32():
    core = ChaChaCore(RFC_KEY, RFC_NONCE)
    core.seek32(1)
    assert core.refill(10) == RFC_BLOCK1


def test_chacha20_counter_carries_into_high_word():
    core = ChaChaCore(CASE1_KEY, CASE1_NONCE)
    offset = 0x3FFFFFFF70
    core.seek64(offset // 64)
    stream = core.refill4(10) + core.refill(10)
    start = offset % 64
    assert stream[start : start + 256] == CASE1_EXPECTED


def test_chacha12_case():
    core = ChaChaCore(
        bytes.fromhex("27fc120b013b829f1faeefd1ab417e8662f43e0d73f98de866e346353180fdb7"),
        bytes.fromhex("db4b4a41d8df18aa"),
    )
    expected = bytes.fromhex(
        "5f3c8c190a78ab7fe808cae9cbcb0a9837c893492d963a1c2eda6c1558b02c83fc02a44cbbb7e6204d51d1c2430e9c0b58f2937bf593840c"
        "850bda9051a1f051ddf09d2a03ebf09f01bdba9da0b6da791b2e645641047d11ebf85087d4de5c015fddd044"
    )
    assert (core.refill(6) + core.refill(6))[:100] == expected


def test_chacha8_case():
    core = ChaChaCore(
        bytes.fromhex("641aeaeb08036b617a42cf14e8c5d2d115f8d7cb6ea5e28b9bfaf83e038426a7"),
        bytes.fromhex("a14a1168271d459b"),
    )
    expected = bytes.fromhex(
        "1721c044a8a6453522dddb3143d0be3512633ca3c79bf8ccc3594cb2c2f310f7bd544f55ce0db38123412d6c45207d5cf9af0c6c680cce1f"
        "7e43388d1b0346b7133c59fd6af4a5a568aa334ccdc38af5ace201df84d0a3ca225494ca6209345fcf30132e"
    )
    assert (core.refill(4) + core.refill(4))[:100] == expected


def test_xchacha20_case():
    core = derive_xchacha(
        bytes.fromhex("82f411a074f656c66e7dbddb0a2c1b22760b9b2105f4ffdbb1d4b1e824e21def"),
        bytes.fromhex("3b07ca6e729eb44a510b7a1be51847838a804f8b106b38bd"),
        10,
    )
    expected = bytes.fromhex(
        "201863970b8e081f4122addfdf32f6c03e48d9bc4e34a59654f49248b9be59d3eaa106ac3376e7e7d9d1251f2cbf61ef27000f3d19afb76b"
        "9c247151e7bc26467583f520518eccd2055ccd6cc8a195953d82a10c2065916778db35da2be44415d2f5efb0"
    )
    assert (core.refill(10) + core.refill(10))[:100] == expected


def test_xchacha_counter_starts_at_zero_with_nonce_tail():
    nonce = bytes(range(24))
    core = derive_xchacha(bytes(32), nonce, 10)
    assert core.get_stream_param(0) == 0
    assert core.get_stream_param(1) == int.from_bytes(nonce[16:], "little")


def test_refill4_matches_four_refills():
    wide = ChaChaCore(CASE1_KEY, CASE1_NONCE)
    narrow = ChaChaCore(CASE1_KEY, CASE1_NONCE)
    wide.seek64(123)
    narrow.seek64(123)
    assert wide.refill4(10) == b"".join(narrow.refill(10) for _ in range(4))
    assert wide.get_stream_param(0) == narrow.get_stream_param(0) == 127


def test_refill_advances_counter():
    core = ChaChaCore(CASE1_KEY, CASE1_NONCE)
    first = core.refill(10)
    assert len(first) == 64
    assert core.get_stream_param(0) == 1
    core.seek64(0)
    assert core.refill(10) == first


def test_stream_param_round_trip():
    core = ChaChaCore(CASE1_KEY, CASE1_NONCE)
    core.set_stream_param(0, 0x0123456789ABCDEF)
    core.set_stream_param(1, 0xFEDCBA9876543210)
    assert core.get_stream_param(0) == 0x0123456789ABCDEF
    assert core.get_stream_param(1) == 0xFEDCBA9876543210


def test_eight_byte_nonce_is_stream_param_one():
    core = ChaChaCore(CASE1_KEY, CASE1_NONCE)
    assert core.get_stream_param(1) == int.from_bytes(CASE1_NONCE, "little")
    assert core.get_stream_param(0) == 0


def test_twelve_byte_nonce_layout():
    core = ChaChaCore(RFC_KEY, RFC_NONCE)
    assert core.get_stream_param(0) == int.from_bytes(RFC_NONCE[:4], "little") << 32
    assert core.get_stream_param(1) == int.from_bytes(RFC_NONCE[4:], "little")


def test_seek32_keeps_nonce_word():
    core = ChaChaCore(RFC_KEY, RFC_NONCE)
    before = core.get_stream_param(0) >> 32
    core.seek32(7)
    assert core.get_stream_param(0) == (before << 32) | 7


@pytest.mark.parametrize("key", [bytes(31), bytes(33), b""])
def test_bad_key_length(key):
    with pytest.raises(ValueError):
        ChaChaCore(key, bytes(8))


@pytest.mark.parametrize("nonce", [bytes(7), bytes(10), bytes(24)])
def test_bad_nonce_length(nonce):
    with pytest.raises(ValueError):
        ChaChaCore(bytes(32), nonce)


def test_bad_xchacha_nonce_length():
    with pytest.raises(ValueError):
        derive_xchacha(bytes(32), bytes(12), 10)


def test_bad_stream_param_index():
    core = ChaChaCore(bytes(32), bytes(8))
    with pytest.raises(ValueError):
        core.get_stream_param(2)
    with pytest.raises(ValueError):
        core.set_stream_param(2, 0)


def test_seek_out_of_range():
    core = ChaChaCore(bytes(32), bytes(8))
    with pytest.raises(ValueError):
        core.seek32(1 << 32)
    with pytest.raises(ValueError):
        core.seek64(1 << 64)
    with pytest.raises(ValueError):
        core.seek64(-1)