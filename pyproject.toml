[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tokenprog"
version = "0.1.0"
description = "An in-memory fungible-token program: mints, token accounts, multisig owners and the instructions that act on them"
requires-python = ">=3.10"
dependencies = []
keywords = ["token", "mint", "multisig", "ledger", "instruction processor"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Office/Business :: Financial",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["tokenprog"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
