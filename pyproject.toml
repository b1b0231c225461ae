[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "finalistcrypto"
version = "0.1.0"
description = "Pure-Python Threefish, Skein, JH, ChaCha and the Groestl large-state compression function"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "cryptography",
    "hash",
    "sha3-finalists",
    "skein",
    "jh",
    "groestl",
    "threefish",
    "chacha",
    "xchacha",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["finalistcrypto"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
