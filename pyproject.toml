[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "mpdclient"
version = "0.1.0"
description = "Client library for the Music Player Daemon protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["mpd", "music", "player", "daemon", "client", "protocol"]
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
    "Topic :: Multimedia :: Sound/Audio :: Players",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["mpdclient"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
