[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "zonetime"
version = "0.1.0"
description = "Calendar arithmetic, POSIX TZ strings, TZif zone files and sunrise/sunset calculations"
requires-python = ">=3.10"
dependencies = []
keywords = ["timezone", "tzif", "zoneinfo", "posix", "calendar", "iso-week", "sunrise", "sunset"]
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
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
zonetime-show-tzinfo = "zonetime.dump:main"

[tool.hatch.build.targets.wheel]
packages = ["zonetime"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
