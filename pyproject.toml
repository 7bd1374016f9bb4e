[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "tlsblock"
version = "0.1.0"
description = "Block TLS connections whose Server Name Indication matches a target host by injecting TCP resets"
requires-python = ">=3.10"
dependencies = []
keywords = ["tls", "sni", "tcp", "rst", "firewall", "packet"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking :: Firewalls",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
tls-block = "tlsblock.blocker:main"

[tool.hatch.build.targets.wheel]
packages = ["tlsblock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
