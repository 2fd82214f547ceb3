[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "blockrules"
version = "0.1.0"
description = "Filter line classification, URL hostname extraction, request tokenization and redirect resources for content blocking"
requires-python = ">=3.10"
dependencies = [
    "idna",
]
keywords = ["adblock", "filter-list", "url", "hostname", "tokenizer", "content-blocking"]
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
    "Topic :: Internet :: WWW/HTTP",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["blockrules"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
