"""Exercise descriptions, compilation and completion state."""

from __future__ import annotations

import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

__all__ = [
    "Mode",
    "ContextLine",
    "State",
    "ExerciseOutput",
    "ExerciseFailed",
    "CompiledExercise",
    "Exercise",
    "load_exercises",
]

RUSTC_COLOR_ARGS = ("--color", "always")
RUSTC_EDITION_ARGS = ("--edition", "2021")
RUSTC_NO_DEBUG_ARGS = ("-C", "strip=debuginfo")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/clippy/Cargo.toml"


def _temp_file() -> str:
    """A binary name unique to this process and thread."""
    return f"./temp_{os.getpid()}_ThreadId{threading.get_ident()}"


def _clean() -> None:
    try:
        os.remove(_temp_file())
    except OSError:
        pass


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _source_lines(source: str) -> list[str]:
    parts = source.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


class Mode(Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """A source line shown around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class State:
    """Completion state; an empty context means the exercise is done."""

    context: tuple[ContextLine, ...] = ()

    def done(self) -> bool:
        return not self.context


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured output of a finished process."""

    stdout: str
    stderr: str


class ExerciseFailed(Exception):
    """Compiling or running an exercise ended unsuccessfully."""

    def __init__(self, output: ExerciseOutput):
        super().__init__(output.stderr or output.stdout)
        self.output = output


class CompiledExercise:
    """A built exercise whose binary is removed on close."""

    def __init__(self, exercise: Exercise, binary: str):
        self.exercise = exercise
        self.binary = binary
        self._closed = False

    def run(self) -> ExerciseOutput:
        """Run the binary; raise ExerciseFailed if it exits unsuccessfully."""
        args = [self.binary]
        if self.exercise.mode is Mode.TEST:
            args.append("--show-output")
        completed = subprocess.run(args, capture_output=True, check=False)
        output = ExerciseOutput(_decode(completed.stdout), _decode(completed.stderr))
        if completed.returncode != 0:
            raise ExerciseFailed(output)
        return output

    def close(self) -> None:
        if not self._closed:
            self._closed = True
            _clean()

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, *args) -> None:
        self.close()


def _rustc_command(path: str, binary: str, test: bool = False) -> list[str]:
    command = ["rustc"]
    if test:
        command.append("--test")
    command += [path, "-o", binary]
    command += [*RUSTC_COLOR_ARGS, *RUSTC_EDITION_ARGS, *RUSTC_NO_DEBUG_ARGS]
    return command


@dataclass
class Exercise:
    """An exercise as described in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self.mode = Mode(self.mode)

    def _write_clippy_manifest(self) -> None:
        manifest = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2021"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        if "NO_EMOJI" in os.environ:
            message = "Failed to write Clippy Cargo.toml file."
        else:
            message = "Failed to write 📎 Clippy 📎 Cargo.toml file."
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(manifest, encoding="utf-8")
        except OSError as error:
            raise OSError(f"{message} {error}") from error

    def compile(self) -> CompiledExercise:
        """Build the exercise; raise ExerciseFailed with the compiler output."""
        binary = _temp_file()
        path = str(self.path)
        if self.mode is Mode.COMPILE:
            completed = subprocess.run(
                _rustc_command(path, binary), capture_output=True, check=False
            )
        elif self.mode is Mode.TEST:
            completed = subprocess.run(
                _rustc_command(path, binary, test=True),
                capture_output=True,
                check=False,
            )
        else:
            self._write_clippy_manifest()
            # A build failure here is reported again by clippy below.
            subprocess.run(_rustc_command(path, binary), capture_output=True, check=False)
            subprocess.run(
                ["cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH, *RUSTC_COLOR_ARGS],
                capture_output=True,
                check=False,
            )
            completed = subprocess.run(
                [
                    "cargo",
                    "clippy",
                    "--manifest-path",
                    CLIPPY_CARGO_TOML_PATH,
                    *RUSTC_COLOR_ARGS,
                    "--",
                    "-D",
                    "warnings",
                    "-D",
                    "clippy::float_cmp",
                ],
                capture_output=True,
                check=False,
            )
        if completed.returncode == 0:
            return CompiledExercise(self, binary)
        _clean()
        raise ExerciseFailed(
            ExerciseOutput(_decode(completed.stdout), _decode(completed.stderr))
        )

    def state(self) -> State:
        """Inspect the source for the pending marker."""
        try:
            source = self.path.read_text(encoding="utf-8")
        except OSError as error:
            raise OSError(
                f"We were unable to read the exercise file {self.path}! {error}"
            ) from error

        if not I_AM_DONE_REGEX.search(source):
            return State()

        lines = _source_lines(source)
        matched = next(
            (index for index, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)),
            None,
        )
        if matched is None:
            raise RuntimeError(
                f"the pending marker in {self.path} does not sit on a single line"
            )

        first = max(matched - CONTEXT, 0)
        last = matched + CONTEXT
        context = tuple(
            ContextLine(line=line, number=index + 1, important=index == matched)
            for index, line in enumerate(lines[first : last + 1], start=first)
        )
        return State(context)

    def looks_done(self) -> bool:
        """True when the source no longer carries the pending marker."""
        return self.state().done()

    def __str__(self) -> str:
        return str(self.path)


def load_exercises(path: str | os.PathLike = "info.toml") -> list[Exercise]:
    """Read the list of exercises from an info.toml file."""
    with open(path, "rb") as handle:
        data = tomllib.load(handle)
    try:
        entries = data["exercises"]
    except KeyError as error:
        raise ValueError(f"{path}: missing `exercises` list") from error
    exercises = []
    for entry in entries:
        try:
            exercises.append(
                Exercise(
                    name=entry["name"],
                    path=Path(entry["path"]),
                    mode=Mode(entry["mode"]),
                    hint=entry["hint"],
                )
            )
        except (KeyError, ValueError, TypeError) as error:
            raise ValueError(f"{path}: invalid exercise entry {entry!r}: {error}") from error
    return exercises