[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ostep-demos"
version = "0.1.0"
description = "Small runnable demonstrations of operating-system concepts: processes, scheduling, threads, locks, condition variables, semaphores, UDP messaging and persistence."
requires-python = ">=3.10"
dependencies = []
keywords = [
    "operating systems",
    "threads",
    "concurrency",
    "semaphores",
    "condition variables",
    "scheduling",
    "education",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Developers",
    "Operating System :: POSIX",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
ostep-cpu = "ostep_demos.intro:cpu_main"
ostep-mem = "ostep_demos.intro:mem_main"
ostep-threads = "ostep_demos.intro:threads_main"
ostep-io = "ostep_demos.intro:io_main"
ostep-processes = "ostep_demos.processes:main"
ostep-lottery = "ostep_demos.lottery:main"
ostep-pstack = "ostep_demos.pstack:main"
ostep-udp-client = "ostep_demos.udp:client_main"
ostep-udp-server = "ostep_demos.udp:server_main"
ostep-counter = "ostep_demos.thread_api:t1_main"
ostep-va = "ostep_demos.thread_api:va_main"
ostep-cas = "ostep_demos.atomic:main"
ostep-atomicity = "ostep_demos.bugs:atomicity_main"
ostep-deadlock = "ostep_demos.bugs:deadlock_main"
ostep-ordering = "ostep_demos.bugs:ordering_main"
ostep-condvars = "ostep_demos.condvars:main"
ostep-semaphores = "ostep_demos.semaphores:main"
ostep-zemaphore = "ostep_demos.zemaphore:main"
ostep-dining = "ostep_demos.dining:main"

[tool.hatch.build.targets.wheel]
packages = ["ostep_demos"]

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
