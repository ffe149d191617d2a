[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "passtek"
version = "0.1.0"
description = "Statistics and plain-text reports on cracked password lists and pwdump hash files"
requires-python = ">=3.10"
keywords = ["password", "audit", "ntlm", "pwdump", "statistics", "report"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Information Technology",
    "Intended Audience :: System Administrators",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Security",
]
dependencies = [
    "pycryptodome",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
passtek = "passtek.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["passtek"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
