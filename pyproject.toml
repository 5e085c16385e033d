[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "hypripc"
version = "0.4.0"
description = "Client for the Hyprland compositor and hyprpaper IPC sockets"
requires-python = ">=3.10"
dependencies = []
keywords = ["hyprland", "ipc", "wayland", "hyprpaper", "compositor", "events"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Developers",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Desktop Environment :: Window Managers",
]

[project.optional-dependencies]
test = ["pytest", "pytest-asyncio"]

[tool.hatch.build.targets.wheel]
packages = ["hypripc"]

[tool.pytest.ini_options]
addopts = "-ra"

[tool.ruff]
line-length = 100
target-version = "py310"
