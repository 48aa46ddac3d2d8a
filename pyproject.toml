[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "asterproxy"
version = "0.1.0"
description = "Routing core for a Redis and Memcache proxy: slot tables, ketama rings, hashing and health tracking"
requires-python = ">=3.10"
dependencies = []
keywords = ["redis", "memcache", "proxy", "ketama", "cluster", "crc16", "fnv", "consistent-hashing"]
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
    "Topic :: Internet :: Proxy Servers",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["asterproxy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
