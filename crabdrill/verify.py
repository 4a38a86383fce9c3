"""Checking exercises in order and reporting the learner's progress."""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.text import Text

from crabdrill.exercise import CompiledExercise, Exercise, ExerciseFailed, Mode
from crabdrill.ui import success, warn

__all__ = ["VerificationFailed", "verify", "test"]

_BAR_WIDTH = 60
_SEPARATOR = "===================="


class VerificationFailed(Exception):
    """An exercise did not compile, did not pass, or is still marked pending."""

    def __init__(self, exercise: Exercise):
        super().__init__(f"{exercise} is not finished")
        self.exercise = exercise


def _console() -> Console:
    return Console(highlight=False, markup=False, emoji=False)


@contextmanager
def _spinner(message: str) -> Iterator[None]:
    with Console(stderr=True, highlight=False).status(message):
        yield


def _show_progress(position: int, total: int, percentage: float) -> None:
    filled = min(_BAR_WIDTH, _BAR_WIDTH * position // total) if total else 0
    if filled >= _BAR_WIDTH:
        done, rest = "#" * _BAR_WIDTH, ""
    else:
        done, rest = "#" * filled, ">" + "-" * (_BAR_WIDTH - filled - 1)
    line = Text.assemble(
        "Progress: [",
        (done, "green"),
        (rest, "red"),
        f"] {position}/{total} ({percentage:.1f} %)",
    )
    Console(stderr=True, highlight=False).print(line, soft_wrap=True)


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int],
    verbose: bool = False,
    success_hints: bool = False,
) -> None:
    """Check exercises in order; raise VerificationFailed at the first unfinished one."""
    num_done, total = progress
    step = 100.0 / total if total else 0.0
    percentage = num_done * step
    position = num_done
    _show_progress(position, total, percentage)

    for exercise in exercises:
        if exercise.mode is Mode.TEST:
            finished = _compile_and_test(exercise, True, verbose, success_hints)
        elif exercise.mode is Mode.COMPILE:
            finished = _compile_and_run_interactively(exercise, success_hints)
        else:
            finished = _compile_only(exercise, success_hints)
        if not finished:
            raise VerificationFailed(exercise)
        percentage += step
        position += 1
        _show_progress(position, total, percentage)


def test(exercise: Exercise, verbose: bool = False) -> None:
    """Compile and run the exercise's tests; raise VerificationFailed on failure."""
    if not _compile_and_test(exercise, False, verbose, False):
        raise VerificationFailed(exercise)


# Tell pytest this is not a test function when the module is imported by tests.
test.__test__ = False  # type: ignore[attr-defined]


def _compile(exercise: Exercise, message: str) -> CompiledExercise | None:
    try:
        with _spinner(message):
            return exercise.compile()
    except ExerciseFailed as failure:
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        _console().print(failure.output.stderr, soft_wrap=True)
        return None


def _compile_only(exercise: Exercise, success_hints: bool) -> bool:
    compiled = _compile(exercise, f"Compiling {exercise}...")
    if compiled is None:
        return False
    compiled.close()
    return _prompt_for_completion(exercise, None, success_hints)


def _compile_and_run_interactively(exercise: Exercise, success_hints: bool) -> bool:
    compiled = _compile(exercise, f"Compiling {exercise}...")
    if compiled is None:
        return False
    with compiled:
        try:
            with _spinner(f"Running {exercise}..."):
                output = compiled.run()
        except ExerciseFailed as failure:
            warn(f"Ran {exercise} with errors")
            console = _console()
            console.print(failure.output.stdout, soft_wrap=True)
            console.print(failure.output.stderr, soft_wrap=True)
            return False
        return _prompt_for_completion(exercise, output.stdout, success_hints)


def _compile_and_test(
    exercise: Exercise, interactive: bool, verbose: bool, success_hints: bool
) -> bool:
    compiled = _compile(exercise, f"Testing {exercise}...")
    if compiled is None:
        return False
    with compiled:
        try:
            with _spinner(f"Testing {exercise}..."):
                output = compiled.run()
        except ExerciseFailed as failure:
            warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
            _console().print(failure.output.stdout, soft_wrap=True)
            return False
        if verbose:
            _console().print(output.stdout, soft_wrap=True)
        if interactive:
            return _prompt_for_completion(exercise, None, success_hints)
        return True


def _prompt_for_completion(
    exercise: Exercise, prompt_output: str | None, success_hints: bool
) -> bool:
    state = exercise.state()
    if state.done():
        return True

    verbs = {Mode.COMPILE: "ran", Mode.TEST: "tested", Mode.CLIPPY: "compiled"}
    success(f"Successfully {verbs[exercise.mode]} {exercise}!")

    no_emoji = "NO_EMOJI" in os.environ
    if exercise.mode is Mode.COMPILE:
        message = "The code is compiling!"
    elif exercise.mode is Mode.TEST:
        message = "The code is compiling, and the tests pass!"
    elif no_emoji:
        message = "The code is compiling, and Clippy is happy!"
    else:
        message = "The code is compiling, and 📎 Clippy 📎 is happy!"

    console = _console()
    separator = Text(_SEPARATOR, style="bold")
    console.print()
    if no_emoji:
        console.print(f"~*~ {message} ~*~", soft_wrap=True)
    else:
        console.print(f"🎉 🎉  {message} 🎉 🎉", soft_wrap=True)
    console.print()

    if prompt_output is not None:
        console.print("Output:")
        console.print(separator)
        console.print(prompt_output, soft_wrap=True)
        console.print(separator)
        console.print()
    if success_hints:
        console.print("Hints:")
        console.print(separator)
        console.print(exercise.hint, soft_wrap=True)
        console.print(separator)
        console.print()

    console.print("You can keep working on this exercise,")
    console.print(
        Text.assemble(
            "or jump into the next one by removing the ",
            ("`I AM NOT DONE`", "bold"),
            " comment:",
        ),
        soft_wrap=True,
    )
    console.print()
    for context_line in state.context:
        body = Text(context_line.line, style="bold" if context_line.important else "")
        console.print(
            Text.assemble(
                (f"{context_line.number:>2}", "bold blue"),
                " ",
                ("|", "blue"),
                "  ",
                body,
            ),
            soft_wrap=True,
        )
    return False