[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "padtext"
version = "0.8.17"
description = "Text-file handling for a simple editor: charset and line-ending detection, indentation, statistics and case-insensitive search"
requires-python = ">=3.10"
dependencies = []
keywords = ["text editor", "charset detection", "line endings", "indentation", "search"]
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
    "Topic :: Text Editors",
    "Topic :: Text Processing",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["padtext"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
