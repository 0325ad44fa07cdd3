[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "querysmith"
version = "0.1.0"
description = "Random SQL schema and SELECT query generator for fuzzing SQL engines"
requires-python = ">=3.10"
dependencies = []
keywords = ["sql", "fuzzing", "query-generation", "sqlite", "testing"]
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
    "Topic :: Database",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["querysmith"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
