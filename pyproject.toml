[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "curvework"
version = "0.1.0"
description = "Elliptic curve arithmetic, extension-field polynomials, key agreement, signatures, QAP building blocks and pairing-friendly parameter searches"
requires-python = ">=3.10"
dependencies = [
    "pycryptodome",
]
keywords = [
    "elliptic curve",
    "finite field",
    "polynomial",
    "ecdsa",
    "schnorr",
    "diffie-hellman",
    "mqv",
    "pairing",
    "snark",
    "qap",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Mathematics",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
curvework-pairing-gen = "curvework.pairing_search:gen_main"
curvework-pairing-phi6 = "curvework.pairing_search:phi6_main"
curvework-pairing-sweep = "curvework.pairing_search:sweep_main"
curvework-pull-curves = "curvework.curves:main"

[tool.hatch.build.targets.wheel]
packages = ["curvework"]

[tool.hatch.build.targets.sdist]
include = [
    "curvework",
    "tests",
]

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
