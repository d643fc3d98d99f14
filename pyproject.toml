[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "jupswap"
version = "0.1.0"
description = "Async client for the Jupiter swap aggregator HTTP API: quotes, swap transactions and swap instructions"
requires-python = ">=3.10"
keywords = ["solana", "jupiter", "swap", "dex", "aggregator", "api-client", "async"]
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
    "Framework :: AsyncIO",
    "Topic :: Software Development :: Libraries :: Python Modules",
]
dependencies = [
    "httpx>=0.24",
]

[project.optional-dependencies]
test = [
    "pytest>=7",
    "pytest-asyncio>=0.21",
    "respx>=0.20",
]

[project.scripts]
jupswap = "jupswap.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["jupswap"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]

[tool.mypy]
python_version = "3.10"
strict = true
