[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rvsix"
version = "0.1.0"
description = "Sv39 page tables over simulated memory, ELF headers, a shell command parser and small Unix-style tools"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating-system",
    "risc-v",
    "sv39",
    "page-table",
    "elf",
    "shell",
    "grep",
    "malloc",
    "teaching",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: System :: Operating System",
]

[project.optional-dependencies]
test = [
    "pytest",
    "hypothesis",
]

[project.scripts]
rvsix-grep = "rvsix.grep:main"
rvsix-cat = "rvsix.coreutils:cat_main"
rvsix-echo = "rvsix.coreutils:echo_main"
rvsix-wc = "rvsix.coreutils:wc_main"
rvsix-ls = "rvsix.ls:main"
rvsix-kill = "rvsix.fileutils:kill_main"
rvsix-ln = "rvsix.fileutils:ln_main"
rvsix-mkdir = "rvsix.fileutils:mkdir_main"
rvsix-rm = "rvsix.fileutils:rm_main"
rvsix-schedtest = "rvsix.schedtest:main"

[tool.hatch.build.targets.wheel]
packages = ["rvsix"]

[tool.hatch.build.targets.sdist]
include = ["rvsix", "tests"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 88
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
warn_unused_ignores = true
warn_redundant_casts = true
