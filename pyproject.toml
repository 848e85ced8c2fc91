[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "escargot"
version = "0.1.0"
description = "Drive cargo builds from Python and work with their JSON messages"
requires-python = ">=3.10"
dependencies = []
keywords = ["cargo", "build", "compiler", "json", "test-runner"]
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
    "Topic :: Software Development :: Build Tools",
    "Topic :: Software Development :: Testing",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
escargot-fixture = "escargot.fixture:main"

[tool.hatch.build.targets.wheel]
packages = ["escargot"]

[tool.pytest.ini_options]
addopts = "-ra"
