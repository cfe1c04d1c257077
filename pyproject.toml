[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pairchat"
version = "0.1.0"
description = "A minimal two-person TCP chat: a relay server and a terminal client"
requires-python = ">=3.10"
dependencies = []
keywords = ["chat", "tcp", "socket", "terminal", "relay"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
pairchat-server = "pairchat.server:main"
pairchat-client = "pairchat.client:main"

[tool.hatch.build.targets.wheel]
packages = ["pairchat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
