"""Threefish, Skein, JH, ChaCha and Groestl large-state compression in pure Python."""

__version__ = "0.1.0"

__all__ = ["chacha", "chacha_core", "groestl_large", "jh", "skein", "threefish"]