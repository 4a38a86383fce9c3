"""Running a single exercise and resetting it."""

from __future__ import annotations

import subprocess
from collections.abc import Iterator
from contextlib import contextmanager

from rich.console import Console

from crabdrill.exercise import Exercise, ExerciseFailed, Mode
from crabdrill.ui import success, warn
from crabdrill.verify import VerificationFailed, test

__all__ = ["run", "reset"]


def _console() -> Console:
    return Console(highlight=False, markup=False, emoji=False)


@contextmanager
def _spinner(message: str) -> Iterator[None]:
    with Console(stderr=True, highlight=False).status(message):
        yield


def run(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run one exercise; raise VerificationFailed if it fails."""
    if exercise.mode is Mode.TEST:
        test(exercise, verbose)
    else:
        _compile_and_run(exercise)


def reset(exercise: Exercise) -> subprocess.Popen:
    """Stash the changes to the exercise file with git; raise OSError if git cannot start."""
    return subprocess.Popen(["git", "stash", "--", str(exercise.path)])


def _compile_and_run(exercise: Exercise) -> None:
    try:
        with _spinner(f"Compiling {exercise}..."):
            compiled = exercise.compile()
    except ExerciseFailed as failure:
        warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
        _console().print(failure.output.stderr, soft_wrap=True)
        raise VerificationFailed(exercise) from failure

    with compiled:
        try:
            with _spinner(f"Running {exercise}..."):
                output = compiled.run()
        except ExerciseFailed as failure:
            console = _console()
            console.print(failure.output.stdout, soft_wrap=True)
            console.print(failure.output.stderr, soft_wrap=True)
            warn(f"Ran {exercise} with errors")
            raise VerificationFailed(exercise) from failure

    _console().print(output.stdout, soft_wrap=True)
    success(f"Successfully ran {exercise}")