[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cliforge"
version = "0.1.0"
description = "Render project templates and drive local AI agent CLIs with agent-friendly JSON output"
requires-python = ">=3.11"
dependencies = [
    "tomli-w",
    "httpx",
]
keywords = ["scaffold", "template", "code-generator", "agent", "json", "subprocess"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Operating System :: MacOS",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Code Generators",
    "Typing :: Typed",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[tool.hatch.build.targets.wheel]
packages = ["cliforge"]

[tool.hatch.build.targets.sdist]
include = ["cliforge", "tests", "README.md"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py311"

[tool.ruff.lint]
select = ["E", "F", "W", "I", "B", "UP", "SIM"]

[tool.mypy]
python_version = "3.11"
warn_unused_ignores = true
warn_redundant_casts = true
