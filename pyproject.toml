[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "spocklink"
version = "0.1.0"
description = "Compact binary records, collections, and length-prefixed TCP chat and broadcast tools"
requires-python = ">=3.10"
dependencies = []
keywords = ["serialization", "binary", "sockets", "tcp", "chat", "framing", "linked-list", "queue"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Communications :: Chat",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
spocklink-chat-server = "spocklink.chat:server_main"
spocklink-chat-client = "spocklink.chat:client_main"
spocklink-broadcast-server = "spocklink.broadcast:server_main"
spocklink-broadcast-client = "spocklink.broadcast:client_main"

[tool.setuptools.packages.find]
include = ["spocklink*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
