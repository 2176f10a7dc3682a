[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "asionet"
version = "0.1.0"
description = "Small TCP networking toolkit: echo server, connect/accept probes, line chat and ordered asynchronous sessions"
requires-python = ">=3.10"
dependencies = []
keywords = ["tcp", "socket", "asyncio", "echo-server", "networking"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Framework :: AsyncIO",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
asionet = "asionet.cli:main"

[tool.setuptools.packages.find]
include = ["asionet*"]

[tool.pytest.ini_options]
addopts = "-ra"
