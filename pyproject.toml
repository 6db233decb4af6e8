[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "leaguelink"
version = "0.1.0"
description = "Helpers for the local League of Legends client and in-game APIs: lockfile parsing, summoner, ranking and post-match queries, plus small threading utilities."
requires-python = ">=3.10"
keywords = ["league of legends", "lcu", "riot", "lockfile", "summoner", "overlay"]
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
    "Topic :: Games/Entertainment",
    "Typing :: Typed",
]
dependencies = [
    "psutil",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["leaguelink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
