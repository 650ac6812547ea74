"""Checking exercises in order and reporting how far along the learner is."""

from __future__ import annotations

import os
from collections.abc import Iterable

from rich.console import Console
from rich.status import Status
from rich.text import Text

from rustlings.exercise import CompiledExercise, Exercise, ExerciseFailed, Mode
from rustlings.ui import success, warn

BAR_WIDTH = 60
SEPARATOR = "=" * 20

_SUCCESS_VERBS = {
    Mode.COMPILE: "Successfully ran",
    Mode.TEST: "Successfully tested",
    Mode.CLIPPY: "Successfully compiled",
}


class VerifyFailed(Exception):
    """An exercise did not compile, did not run cleanly, or is still pending."""

    def __init__(self, exercise: Exercise) -> None:
        super().__init__(str(exercise))
        self.exercise = exercise


def _console(stderr: bool = False) -> Console:
    return Console(highlight=False, soft_wrap=True, stderr=stderr)


def _spinner(message: str) -> Status:
    return _console(stderr=True).status(message)


def _draw_bar(position: int, total: int, percentage: float) -> None:
    filled = min(BAR_WIDTH * position // total, BAR_WIDTH) if total else BAR_WIDTH
    rest = "" if filled >= BAR_WIDTH else ">" + "-" * (BAR_WIDTH - filled - 1)
    line = Text("Progress: [")
    line.append("#" * filled, style="green")
    line.append(rest, style="red")
    line.append(f"] {position}/{total} ({percentage:.1f} %)")
    _console(stderr=True).print(line)


def verify(
    exercises: Iterable[Exercise],
    progress: tuple[int, int],
    verbose: bool,
    success_hints: bool,
) -> None:
    """Check each exercise in turn; raise VerifyFailed at the first one not finished."""
    num_done, total = progress
    percentage = num_done / total * 100.0 if total else float("nan")
    _draw_bar(num_done, total, percentage)

    for exercise in exercises:
        try:
            if exercise.mode is Mode.TEST:
                finished = _compile_and_test(exercise, True, verbose, success_hints)
            elif exercise.mode is Mode.COMPILE:
                finished = _compile_and_run_interactively(exercise, success_hints)
            else:
                finished = _compile_only(exercise, success_hints)
        except ExerciseFailed as error:
            raise VerifyFailed(exercise) from error
        if not finished:
            raise VerifyFailed(exercise)
        num_done += 1
        if total:
            percentage += 100.0 / total
        _draw_bar(num_done, total, percentage)


def test(exercise: Exercise, verbose: bool) -> None:
    """Build and run an exercise's tests without asking for completion."""
    try:
        _compile_and_test(exercise, False, verbose, False)
    except ExerciseFailed as error:
        raise VerifyFailed(exercise) from error


def _compile(exercise: Exercise, spinner: Status) -> CompiledExercise:
    try:
        return exercise.compile()
    except ExerciseFailed as error:
        spinner.stop()
        warn(f"Compiling of {exercise} failed! Please try again. Here's the output:")
        print(error.output.stderr)
        raise


def _compile_only(exercise: Exercise, success_hints: bool) -> bool:
    with _spinner(f"Compiling {exercise}...") as spinner:
        _compile(exercise, spinner).close()
        spinner.stop()
    return _prompt_for_completion(exercise, None, success_hints)


def _compile_and_run_interactively(exercise: Exercise, success_hints: bool) -> bool:
    with _spinner(f"Compiling {exercise}...") as spinner:
        with _compile(exercise, spinner) as compiled:
            spinner.update(f"Running {exercise}...")
            try:
                output = compiled.run()
            except ExerciseFailed as error:
                spinner.stop()
                warn(f"Ran {exercise} with errors")
                print(error.output.stdout)
                print(error.output.stderr)
                raise
            spinner.stop()
    return _prompt_for_completion(exercise, output.stdout, success_hints)


def _compile_and_test(
    exercise: Exercise, interactive: bool, verbose: bool, success_hints: bool
) -> bool:
    with _spinner(f"Testing {exercise}...") as spinner:
        with _compile(exercise, spinner) as compiled:
            try:
                output = compiled.run()
            except ExerciseFailed as error:
                spinner.stop()
                warn(f"Testing of {exercise} failed! Please try again. Here's the output:")
                print(error.output.stdout)
                raise
            spinner.stop()
    if verbose:
        print(output.stdout)
    if interactive:
        return _prompt_for_completion(exercise, None, success_hints)
    return True


def _print_separator(console: Console) -> None:
    console.print(Text(SEPARATOR, style="bold"))


def _prompt_for_completion(
    exercise: Exercise, prompt_output: str | None, success_hints: bool
) -> bool:
    state = exercise.state()
    if state.done:
        return True
    success(f"{_SUCCESS_VERBS[exercise.mode]} {exercise}!")

    no_emoji = os.environ.get("NO_EMOJI") is not None
    if exercise.mode is Mode.COMPILE:
        success_msg = "The code is compiling!"
    elif exercise.mode is Mode.TEST:
        success_msg = "The code is compiling, and the tests pass!"
    elif no_emoji:
        success_msg = "The code is compiling, and Clippy is happy!"
    else:
        success_msg = "The code is compiling, and 📎 Clippy 📎 is happy!"

    console = _console()
    print()
    if no_emoji:
        print(f"~*~ {success_msg} ~*~")
    else:
        print(f"🎉 🎉  {success_msg} 🎉 🎉")
    print()

    if prompt_output is not None:
        print("Output:")
        _print_separator(console)
        print(prompt_output)
        _print_separator(console)
        print()
    if success_hints:
        print("Hints:")
        _print_separator(console)
        print(exercise.hint)
        _print_separator(console)
        print()

    print("You can keep working on this exercise,")
    notice = Text("or jump into the next one by removing the ")
    notice.append("`I AM NOT DONE`", style="bold")
    notice.append(" comment:")
    console.print(notice)
    print()
    for context_line in state.context:
        line = Text(f"{context_line.number:>2}", style="bold blue")
        line.append(" ")
        line.append("|", style="blue")
        line.append("  ")
        line.append(context_line.line, style="bold" if context_line.important else "")
        console.print(line)

    return False