[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mixinkit"
version = "0.1.0"
description = "Mixin Network toolkit: keys, ghost outputs, transaction encoding, addresses, NFO memos and API helpers"
requires-python = ">=3.10"
dependencies = [
    "msgpack",
]
keywords = [
    "mixin",
    "blockchain",
    "ed25519",
    "utxo",
    "multisig",
    "transaction",
    "nft",
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["mixinkit"]

[tool.hatch.build.targets.sdist]
include = [
    "mixinkit",
    "tests",
    "pyproject.toml",
]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
