[build-system]
requires = ["setuptools>=64"]
build-backend = "setuptools.build_meta"

[project]
name = "clinisim"
version = "1.0.0"
description = "Discrete time-step simulation of a physiotherapy clinic's patients, devices and rooms"
requires-python = ">=3.10"
dependencies = []
keywords = ["simulation", "scheduling", "clinic", "queue", "discrete-time"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Medical Science Apps.",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
clinisim = "clinisim.scheduler:main"

[tool.setuptools.packages.find]
include = ["clinisim*"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
