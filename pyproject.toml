[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "netifcfg"
version = "0.1.0"
description = "Configure and inspect IPv4 addresses of network interfaces through a small TCP control protocol"
requires-python = ">=3.10"
dependencies = []
keywords = ["network", "interface", "ipv4", "netmask", "ioctl", "tcp"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Networking",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
netifcfg-applier = "netifcfg.applier:main"
netifcfg-interactive = "netifcfg.interactive:main"

[tool.hatch.build.targets.wheel]
packages = ["netifcfg"]

[tool.pytest.ini_options]
addopts = "-ra"
