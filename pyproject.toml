[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvkit"
version = "0.1.0"
description = "Sv39 page tables over simulated memory, a free-list heap, a shell command parser and small Unix utilities"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-system",
    "risc-v",
    "sv39",
    "page-table",
    "virtual-memory",
    "shell-parser",
    "grep",
    "malloc",
    "teaching",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Operating System",
    "Topic :: Education",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
rvkit-cat = "rvkit.cat:main"
rvkit-echo = "rvkit.cat:echo_main"
rvkit-grep = "rvkit.grep:main"
rvkit-wc = "rvkit.wc:main"
rvkit-kill = "rvkit.tools:kill_main"
rvkit-ln = "rvkit.tools:ln_main"
rvkit-mkdir = "rvkit.tools:mkdir_main"
rvkit-rm = "rvkit.tools:rm_main"

[tool.hatch.build.targets.wheel]
packages = ["rvkit"]

[tool.hatch.build.targets.sdist]
include = ["rvkit", "tests", "pyproject.toml", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
