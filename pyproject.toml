[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "stakepool"
version = "0.1.0"
description = "An in-memory token staking pool with lockup-weighted stakes and reward distributors"
requires-python = ">=3.10"
dependencies = []
keywords = ["staking", "token", "pool", "rewards", "lockup", "program-derived-address"]
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
    "Topic :: Office/Business :: Financial :: Investment",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["stakepool"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
