[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "rpanel"
version = "0.1.0"
description = "A small Linux server panel: CPU, memory and swap statistics, directory listing and image storage over HTTP, plus task queue data types"
requires-python = ">=3.10"
dependencies = [
    "flask",
]
keywords = ["monitoring", "system", "panel", "procfs", "http", "images", "tasks"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = [
    "pytest",
    "pytest-asyncio",
]

[project.scripts]
rpanel = "rpanel.server:main"

[tool.hatch.build.targets.wheel]
packages = ["rpanel"]

[tool.pytest.ini_options]
addopts = "-ra"
