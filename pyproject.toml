[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "prostgen"
version = "0.1.0"
description = "Building blocks for generating typed message code from Protocol Buffers descriptors"
requires-python = ">=3.10"
keywords = ["protobuf", "protocol-buffers", "code-generation", "protoc", "descriptor"]
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
    "Topic :: Software Development :: Code Generators",
]
dependencies = [
    "protobuf",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[tool.hatch.build.targets.wheel]
packages = ["prostgen"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
