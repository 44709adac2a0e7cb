[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "scilink"
version = "0.1.0"
description = "SCI-P and SCI-LS telegram encoding, decoding and dispatch for railway signalling interfaces"
requires-python = ">=3.10"
dependencies = []
keywords = ["sci", "scip", "scils", "rasta", "railway", "signalling", "telegram"]
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
    "Topic :: Communications",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["scilink"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
