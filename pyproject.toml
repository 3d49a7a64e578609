[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "udpchat"
version = "0.1.0"
description = "A small UDP chat toolkit: a length-prefixed message frame, an echo server that tracks its clients, and a one-shot client."
requires-python = ">=3.10"
dependencies = []
keywords = ["udp", "chat", "asyncio", "echo", "protocol"]
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
    "Topic :: Communications :: Chat",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[project.scripts]
udpchat-server = "udpchat.server:main"
udpchat-client = "udpchat.client:main"

[tool.hatch.build.targets.wheel]
packages = ["udpchat"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
