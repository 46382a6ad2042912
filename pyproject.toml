[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gomplekity"
version = "0.1.0"
description = "Measure the cyclomatic complexity of Go code and draw it as a tree"
requires-python = ">=3.10"
dependencies = [
    "pillow",
]
keywords = ["go", "cyclomatic complexity", "code quality", "visualization", "svg", "png"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Software Development :: Quality Assurance",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
gomplekity = "gomplekity.cli:main"

[tool.hatch.build.targets.wheel]
packages = ["gomplekity"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
