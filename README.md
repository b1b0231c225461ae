# finalistcrypto

Pure-Python implementations of the Skein and JH hash functions. The package also
has the Threefish tweakable block cipher that Skein is built on, and the ChaCha
family of stream ciphers. It also provides the compression function and output
transformation that Groestl uses over its 1024-bit state. Only the standard
library is needed. The code is written for test vectors, interoperability and
study. It is not fast.

## Installation

```
pip install finalistcrypto
```

## Modules

| Module | Contents |
| --- | --- |
| `finalistcrypto.threefish` | `Threefish256`, `Threefish512`, `Threefish1024` |
| `finalistcrypto.skein` | `Skein256`, `Skein512`, `Skein1024` |
| `finalistcrypto.jh` | `Jh224`, `Jh256`, `Jh384`, `Jh512`, and the `Compressor` (F8) |
| `finalistcrypto.groestl_large` | `compress`, `output_transform`, `BLOCK_SIZE` |
| `finalistcrypto.chacha` | `ChaCha20`, `ChaCha12`, `ChaCha8`, `Ietf`, `XChaCha20`, `KeystreamExhausted` |
| `finalistcrypto.chacha_core` | `ChaChaCore` (the block function and counter), `derive_xchacha` |

## Hashing

The Skein and JH classes behave like `hashlib` objects. They provide `update`,
`digest`, `hexdigest` and `copy`. They also provide `reset`, which returns the
object to its freshly created state. Calling `digest` does not consume the
object, so you can keep feeding it data afterwards.

```python
from finalistcrypto.jh import Jh256

h = Jh256(b"hello ")
h.update(b"world")
print(h.hexdigest())
```

The Skein classes take the output length in bytes as their first argument. If it
is left out, it defaults to the state size: 32, 64 or 128 bytes. Output is
produced in counter mode, so any length from one byte upwards is allowed.

```python
from finalistcrypto.skein import Skein256, Skein1024

print(Skein256(32, b"abc").hexdigest())
print(Skein1024(64, b"abc").hexdigest())
```

## Threefish

`Threefish256`, `Threefish512` and `Threefish1024` take a key the size of their
block: 32, 64 or 128 bytes. They also take two optional 64-bit tweak words.
`encrypt_block` and `decrypt_block` each take one block and return one block.

```python
from finalistcrypto.threefish import Threefish256

cipher = Threefish256(bytes(32), 0x0706050403020100, 0x0F0E0D0C0B0A0908)
ct = cipher.encrypt_block(bytes(32))
assert cipher.decrypt_block(ct) == bytes(32)
```

A key or block of the wrong length raises `ValueError`. So does a tweak word
that does not fit in 64 bits.

## ChaCha

All the ChaCha ciphers take a 32-byte key. The nonce length depends on the
variant:

| Variant | Nonce length |
| --- | --- |
| `ChaCha20`, `ChaCha12`, `ChaCha8` | 8 bytes |
| `Ietf` (RFC 7539) | 12 bytes |
| `XChaCha20` | 24 bytes |

`apply_keystream` XORs the next keystream bytes into the data and returns the
result. `seek` moves to an absolute byte position in the keystream.

```python
from finalistcrypto.chacha import ChaCha20

cipher = ChaCha20(b"0123456789abcdef0123456789abcdef", b"my nonce")
ct = cipher.apply_keystream(b"attack at dawn")
cipher.seek(0)
assert cipher.apply_keystream(ct) == b"attack at dawn"
```

`apply_keystream` raises `KeystreamExhausted` if a request would make the block
counter wrap. For `Ietf` the counter is 32 bits, which limits it to 256 GiB per
nonce. For the other variants the counter is 64 bits. With `Ietf`, seeking past
the end of the keystream raises `ValueError`.

`ChaChaCore` gives lower-level access. It turns out 64-byte keystream blocks
with `refill(drounds)` and four blocks at a time with `refill4(drounds)`. Here
`drounds` counts double rounds, so ChaCha20 uses 10. The block counter is set
with `seek64` or `seek32`. The counter and nonce word pairs can be read and set
with `get_stream_param` and `set_stream_param`.

`derive_xchacha(key, nonce, rounds)` does the XChaCha sub-key derivation from a
24-byte nonce. It returns a ready `ChaChaCore`.

## Groestl building blocks

`finalistcrypto.groestl_large` works on 128-byte values:

- `compress(h, block)` returns the new chaining value after one message block.
- `output_transform(h)` returns `P(h) xor h`. The digest is the tail of this
  value.

```python
from finalistcrypto import groestl_large

h = groestl_large.compress(bytes(128), bytes(128))
tail = groestl_large.output_transform(h)[-64:]
```

## What the package does not do

- It has no BLAKE hash functions.
- It has no ready-made Groestl hasher: no message padding, no initial values
  and no 224/256/384/512-bit hash objects. Only the compression function and
  output transformation for the 1024-bit state are provided. Building a complete
  Groestl hash from them is left to the caller.
- There is no command-line tool. Everything is used as a library.

## Development

```
pip install -e .[test]
pytest
```