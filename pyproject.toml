[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "keysynth"
version = "0.1.0"
description = "A small keyboard-played synthesizer with sine and square voices"
requires-python = ">=3.10"
dependencies = [
    "pygame",
]
keywords = ["synthesizer", "audio", "keyboard", "sine", "square wave"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: End Users/Desktop",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Multimedia :: Sound/Audio :: Sound Synthesis",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
keysynth = "keysynth.app:main"

[tool.hatch.build.targets.wheel]
packages = ["keysynth"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
