[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "autometrics"
version = "0.1.0"
description = "Prometheus query links, result-label overrides, span exemplars and Sloth SLO file generation for function-level metrics"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "metrics",
    "prometheus",
    "observability",
    "slo",
    "monitoring",
    "sloth",
    "exemplars",
]
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
    "Topic :: System :: Monitoring",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
autometrics = "autometrics.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["autometrics"]

[tool.hatch.build.targets.sdist]
include = ["autometrics", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
