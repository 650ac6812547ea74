"""Running a single exercise, and resetting one to its original state."""

from __future__ import annotations

import subprocess

from rich.console import Console
from rich.status import Status

from rustlings.exercise import Exercise, ExerciseFailed, Mode
from rustlings.ui import success, warn
from rustlings.verify import VerifyFailed, test


def _spinner(message: str) -> Status:
    return Console(stderr=True).status(message)


def run(exercise: Exercise, verbose: bool) -> None:
    """Build and run (or test) one exercise; raise VerifyFailed when it fails."""
    if exercise.mode is Mode.TEST:
        test(exercise, verbose)
    else:
        _compile_and_run(exercise)


def reset(exercise: Exercise) -> subprocess.Popen:
    """Start `git stash` on the exercise file, restoring its original contents."""
    return subprocess.Popen(["git", "stash", "--", str(exercise.path)])


def _compile_and_run(exercise: Exercise) -> None:
    with _spinner(f"Compiling {exercise}...") as spinner:
        try:
            compiled = exercise.compile()
        except ExerciseFailed as error:
            spinner.stop()
            warn(f"Compilation of {exercise} failed!, Compiler error message:\n")
            print(error.output.stderr)
            raise VerifyFailed(exercise) from error

        with compiled:
            spinner.update(f"Running {exercise}...")
            try:
                output = compiled.run()
            except ExerciseFailed as error:
                spinner.stop()
                print(error.output.stdout)
                print(error.output.stderr)
                warn(f"Ran {exercise} with errors")
                raise VerifyFailed(exercise) from error
            spinner.stop()

    print(output.stdout)
    success(f"Successfully ran {exercise}")