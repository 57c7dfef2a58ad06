[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "dynmenu"
version = "5.0"
description = "A dynamic menu that reads lines from standard input, filters them as you type and prints the chosen one"
requires-python = ">=3.10"
dependencies = []
keywords = ["menu", "launcher", "filter", "stdin", "desktop", "tk"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: X11 Applications",
    "Intended Audience :: End Users/Desktop",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment",
    "Topic :: Utilities",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
dynmenu = "dynmenu.gui:main"
dynmenu-stest = "dynmenu.stest:main"

[tool.hatch.build.targets.wheel]
packages = ["dynmenu"]

[tool.pytest.ini_options]
addopts = "-ra"
