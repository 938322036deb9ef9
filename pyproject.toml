[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "secrets-searcher"
version = "0.1.0"
description = "Helpers for locating, filtering and reporting secrets found in source code"
requires-python = ">=3.10"
keywords = ["secrets", "security", "scanning", "report", "code-context"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]
dependencies = [
    "pyyaml",
    "jinja2",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["secrets_searcher"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
