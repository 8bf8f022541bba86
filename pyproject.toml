[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "layerfs"
version = "0.5.1"
description = "A virtual file system layer that merges directories and zip archives into one hierarchy."
requires-python = ">=3.10"
dependencies = []
keywords = ["vfs", "filesystem", "overlay", "zip", "resources"]
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
    "Topic :: System :: Filesystems",
    "Topic :: Software Development :: Libraries :: Python Modules",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["layerfs"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
