[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "csopesy"
version = "0.1.0"
description = "A command-line process scheduler emulator with FCFS and round-robin policies, process screens and a bouncing marquee console"
requires-python = ">=3.10"
dependencies = []
keywords = ["scheduler", "emulator", "fcfs", "round-robin", "operating-systems", "cli", "marquee"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Emulators",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
csopesy = "csopesy.cli:main"
csopesy-marquee = "csopesy.marquee:main"

[tool.hatch.build.targets.wheel]
packages = ["csopesy"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
