[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "crabdrill"
version = "0.1.0"
description = "A terminal coach that walks learners through small Rust exercises, checks their progress and watches their edits."
requires-python = ">=3.11"
keywords = ["education", "exercises", "rust", "learning", "watch"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education :: Computer Aided Instruction (CAI)",
]
dependencies = [
    "rich",
    "watchdog",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
crabdrill = "crabdrill.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["crabdrill"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
