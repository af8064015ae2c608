[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "visindigo"
version = "1.2.0"
description = "Application framework toolkit: console styling, command host, translations, RIFF reading, line diffs, behaviour ticking and a small remote call protocol"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "framework",
    "console",
    "ansi",
    "commands",
    "translation",
    "behavior",
    "tick-loop",
    "riff",
    "diff",
    "rpc",
    "arcp",
    "asyncio",
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
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries :: Application Frameworks",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["visindigo"]

[tool.hatch.build.targets.sdist]
include = [
    "visindigo",
    "tests",
    "README.md",
]

[tool.pytest.ini_options]
addopts = "-ra"
