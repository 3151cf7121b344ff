[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "pyrhouse"
version = "0.1.0"
description = "Warehouse inventory services: assets, categories, item lookup, audit entries, CSV reports, Jira and spreadsheet helpers"
requires-python = ">=3.10"
keywords = ["warehouse", "inventory", "assets", "jira", "spreadsheet", "duty schedule", "csv"]
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
    "Topic :: Office/Business",
]
dependencies = [
    "requests",
    "python-dotenv",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["pyrhouse"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.ruff.lint]
select = ["E", "F", "I", "B", "UP"]
