[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "msfpdb"
version = "0.1.0"
description = "Read MSF stream blocks, the DBI stream and CodeView records of PDB debug-information files"
requires-python = ">=3.10"
dependencies = []
keywords = ["pdb", "msf", "codeview", "debug-information", "dbi", "symbols"]
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
    "Topic :: Software Development :: Debuggers",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["msfpdb"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
strict = true
