[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "glyphraster"
version = "0.1.0"
description = "Glyph outline flattening, glyph metric records, kern table parsing and single-precision float helpers"
requires-python = ">=3.10"
dependencies = []
keywords = ["font", "glyph", "outline", "bezier", "truetype", "opentype", "kerning", "float32"]
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
    "Topic :: Text Processing :: Fonts",
]

[project.optional-dependencies]
test = ["pytest", "hypothesis"]

[tool.hatch.build.targets.wheel]
packages = ["glyphraster"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"

[tool.mypy]
python_version = "3.10"
