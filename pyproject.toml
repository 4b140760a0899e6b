[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "fontinstaller"
version = "1.0.0"
description = "Install and uninstall user fonts in a managed font directory with a JSON registry"
requires-python = ">=3.10"
dependencies = []
keywords = ["fonts", "ttf", "otf", "ttc", "font-installation", "font-registry"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Console",
    "Intended Audience :: Developers",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Fonts",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
fontinstaller = "fontinstaller.client:main"

[tool.hatch.build.targets.wheel]
packages = ["fontinstaller"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
