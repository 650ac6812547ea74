"""Exercise descriptions, their completion state, and compiling and running them."""

from __future__ import annotations

import enum
import os
import re
import subprocess
import threading
import tomllib
from dataclasses import dataclass
from pathlib import Path

RUSTC_COLOR_ARGS = ("--color", "always")
RUSTC_EDITION_ARGS = ("--edition", "2021")
RUSTC_NO_DEBUG_ARGS = ("-C", "strip=debuginfo")
I_AM_DONE_REGEX = re.compile(r"^\s*///?\s*I\s+AM\s+NOT\s+DONE", re.MULTILINE)
CONTEXT = 2
CLIPPY_CARGO_TOML_PATH = "./exercises/22_clippy/Cargo.toml"


def temp_file() -> str:
    """Name of the binary built for this process and thread."""
    return f"./temp_{os.getpid()}_{threading.get_ident()}"


def clean() -> None:
    """Remove the built binary, if there is one."""
    try:
        os.remove(temp_file())
    except OSError:
        pass


class Mode(enum.Enum):
    """How an exercise is checked."""

    COMPILE = "compile"
    TEST = "test"
    CLIPPY = "clippy"


@dataclass(frozen=True)
class ContextLine:
    """One source line shown around the pending marker."""

    line: str
    number: int
    important: bool


@dataclass(frozen=True)
class State:
    """Completion state: done when there is no pending context."""

    context: tuple[ContextLine, ...] = ()

    @property
    def done(self) -> bool:
        return not self.context


@dataclass(frozen=True)
class ExerciseOutput:
    """Captured output of a compiler or exercise run."""

    stdout: str
    stderr: str


class ExerciseFailed(Exception):
    """Compiling or running an exercise did not succeed."""

    def __init__(self, output: ExerciseOutput) -> None:
        super().__init__(output.stderr or output.stdout)
        self.output = output


def _decode(data: bytes | None) -> str:
    return (data or b"").decode("utf-8", errors="replace")


def _output(completed: subprocess.CompletedProcess) -> ExerciseOutput:
    return ExerciseOutput(_decode(completed.stdout), _decode(completed.stderr))


def _execute(args: list[str]) -> subprocess.CompletedProcess:
    return subprocess.run(args, capture_output=True, check=False)


def _lines(text: str) -> list[str]:
    parts = text.split("\n")
    if parts and parts[-1] == "":
        parts.pop()
    return [part[:-1] if part.endswith("\r") else part for part in parts]


class CompiledExercise:
    """A successfully built exercise; closing it removes the binary."""

    def __init__(self, exercise: Exercise) -> None:
        self.exercise = exercise

    def run(self) -> ExerciseOutput:
        """Run the binary; raise ExerciseFailed when it exits unsuccessfully."""
        args = [temp_file()]
        if self.exercise.mode is Mode.TEST:
            args.append("--show-output")
        completed = _execute(args)
        output = _output(completed)
        if completed.returncode != 0:
            raise ExerciseFailed(output)
        return output

    def close(self) -> None:
        clean()

    def __enter__(self) -> CompiledExercise:
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@dataclass(frozen=True)
class Exercise:
    """One exercise as described in info.toml."""

    name: str
    path: Path
    mode: Mode
    hint: str

    def __str__(self) -> str:
        return str(self.path)

    def _rustc(self, target: str, *, test: bool = False) -> list[str]:
        args = ["rustc"]
        if test:
            args.append("--test")
        args += [str(self.path), "-o", target]
        args += [*RUSTC_COLOR_ARGS, *RUSTC_EDITION_ARGS, *RUSTC_NO_DEBUG_ARGS]
        return args

    def _clippy(self, target: str) -> subprocess.CompletedProcess:
        cargo_toml = (
            "[package]\n"
            f'name = "{self.name}"\n'
            'version = "0.0.1"\n'
            'edition = "2021"\n'
            "[[bin]]\n"
            f'name = "{self.name}"\n'
            f'path = "{self.name}.rs"'
        )
        if os.environ.get("NO_EMOJI") is not None:
            error_message = "Failed to write Clippy Cargo.toml file."
        else:
            error_message = "Failed to write 📎 Clippy 📎 Cargo.toml file."
        try:
            Path(CLIPPY_CARGO_TOML_PATH).write_text(cargo_toml, encoding="utf-8")
        except OSError as error:
            raise OSError(error_message) from error
        # Build a binary too, so clippy exercises can be run; a failure here
        # shows up again when clippy compiles.
        _execute(self._rustc(target))
        # A clean is needed for clippy to report every lint.
        _execute(["cargo", "clean", "--manifest-path", CLIPPY_CARGO_TOML_PATH, *RUSTC_COLOR_ARGS])
        return _execute(
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
            ]
        )

    def compile(self) -> CompiledExercise:
        """Build the exercise; raise ExerciseFailed with the compiler output on failure."""
        target = temp_file()
        if self.mode is Mode.CLIPPY:
            completed = self._clippy(target)
        else:
            completed = _execute(self._rustc(target, test=self.mode is Mode.TEST))
        if completed.returncode == 0:
            return CompiledExercise(self)
        clean()
        raise ExerciseFailed(_output(completed))

    def state(self) -> State:
        """Read the source and report whether the pending marker is still there."""
        source = self.path.read_text(encoding="utf-8")
        if not I_AM_DONE_REGEX.search(source):
            return State()
        lines = _lines(source)
        matched = next(
            (index for index, line in enumerate(lines) if I_AM_DONE_REGEX.search(line)),
            None,
        )
        if matched is None:
            raise RuntimeError(f"pending marker in {self.path} is not on a single line")
        low, high = max(matched - CONTEXT, 0), matched + CONTEXT
        return State(
            tuple(
                ContextLine(line=line, number=index + 1, important=index == matched)
                for index, line in enumerate(lines)
                if low <= index <= high
            )
        )

    def looks_done(self) -> bool:
        """True when the pending marker has been removed from the source."""
        return self.state().done


def load_exercises(text: str) -> list[Exercise]:
    """Parse the TOML exercise list."""
    data = tomllib.loads(text)
    if "exercises" not in data:
        raise ValueError("missing field `exercises`")
    exercises = []
    for entry in data["exercises"]:
        missing = [key for key in ("name", "path", "mode", "hint") if key not in entry]
        if missing:
            raise ValueError(f"missing field `{missing[0]}`")
        exercises.append(
            Exercise(
                name=str(entry["name"]),
                path=Path(entry["path"]),
                mode=Mode(entry["mode"]),
                hint=str(entry["hint"]),
            )
        )
    return exercises


def load_exercise_list(path: str | os.PathLike) -> list[Exercise]:
    """Read and parse an exercise list file such as info.toml."""
    return load_exercises(Path(path).read_text(encoding="utf-8"))