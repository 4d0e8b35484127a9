#!/usr/bin/env python3
# Copyright 2026 ArchSync Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run the ArchSync CI pipeline locally.

Steps run in order and every step runs even after an earlier failure, so
one invocation reports the full picture. Use ``--only`` or ``--skip`` with
step keys (``format``, ``lint``, ``types``, ``tests``, ``build``) to run a
subset.
"""

import argparse
import subprocess
import sys
import time
from dataclasses import dataclass
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

COVERAGE_THRESHOLD = 85


@dataclass(frozen=True)
class Step:
    """A single CI step."""

    key: str
    title: str
    command: list[str]


STEPS: list[Step] = [
    Step("format", "Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/", "tools/"]),
    Step("lint", "Lint", ["uv", "run", "ruff", "check", "src/", "tests/", "tools/"]),
    Step("types", "Type check", ["uv", "run", "ty", "check", "src/"]),
    Step(
        "tests",
        "Tests",
        [
            "uv",
            "run",
            "pytest",
            "--cov=archsync",
            "--cov-report=term-missing",
            f"--cov-fail-under={COVERAGE_THRESHOLD}",
        ],
    ),
    Step("build", "Build", ["uv", "build"]),
]


def main() -> int:
    """Run the selected CI steps and print a summary."""
    parser = argparse.ArgumentParser(description="Run ArchSync CI checks")
    keys = [step.key for step in STEPS]
    parser.add_argument("--only", nargs="+", choices=keys, help="Run only these steps")
    parser.add_argument("--skip", nargs="+", choices=keys, default=[], help="Skip these steps")
    args = parser.parse_args()

    selected = [s for s in STEPS if (args.only is None or s.key in args.only) and s.key not in args.skip]
    results = [_run_step(step) for step in selected]
    return _print_summary(results)


# ################
# Implementation
# ################


def _run_step(step: Step) -> tuple[Step, bool, float]:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(step.title))
    print(sep)
    start = time.monotonic()
    proc = subprocess.run(step.command, cwd=Path(__file__).resolve().parent.parent)
    return step, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[Step, bool, float]]) -> int:
    sep = "=" * 60
    print(f"\n{chalk.blue(sep)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(sep))
    for step, passed, elapsed in results:
        paint = chalk.green if passed else chalk.red
        print(paint(f"  {'PASS' if passed else 'FAIL'}  {step.title} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


if __name__ == "__main__":
    sys.exit(main())
