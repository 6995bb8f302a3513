[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "envchain"
version = "0.1.0"
description = "Layered environment-variable contexts: resolve, diff, export, encrypt and organise them"
requires-python = ">=3.10"
dependencies = [
    "pyyaml",
    "cryptography",
]
keywords = ["environment", "dotenv", "configuration", "contexts", "cli"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
envchain = "envchain.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["envchain"]

[tool.pytest.ini_options]
addopts = "-ra"
