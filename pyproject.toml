[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "flockcrypt"
version = "0.0.0"
description = "Password-based file encryption with Argon2id key derivation and AES-256-GCM"
requires-python = ">=3.10"
dependencies = [
    "cryptography>=44",
]
keywords = ["encryption", "aes-gcm", "argon2", "argon2id", "file", "password"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security :: Cryptography",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["flockcrypt"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
