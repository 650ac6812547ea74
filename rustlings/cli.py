"""Command-line interface: listing, running, verifying and watching exercises."""

from __future__ import annotations

import argparse
import enum
import itertools
import os
import queue
import subprocess
import sys
import threading
import time
from collections.abc import Iterator, Sequence
from pathlib import Path

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from rustlings.exercise import Exercise, load_exercise_list
from rustlings.project import RustAnalyzerProject
from rustlings.run import reset, run
from rustlings.verify import VerifyFailed, verify

VERSION = "5.6.1"
INFO_FILE = "info.toml"
EXERCISES_DIR = "./exercises"
DEBOUNCE_SECONDS = 1.0
_RELEVANT_EVENTS = frozenset({"created", "modified", "moved", "deleted", "closed"})


class WatchStatus(enum.Enum):
    """How watch mode ended."""

    FINISHED = "finished"
    UNFINISHED = "unfinished"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rustlings",
        description=(
            "Rustlings is a collection of small exercises to get you used to "
            "writing and reading Rust code"
        ),
    )
    parser.add_argument("--version", action="version", version=f"rustlings {VERSION}")
    parser.add_argument(
        "--nocapture", action="store_true", help="Show outputs from the test exercises"
    )
    commands = parser.add_subparsers(dest="command")

    commands.add_parser("verify", help="Verify all exercises according to the recommended order")

    watch_parser = commands.add_parser("watch", help="Rerun `verify` when files were edited")
    watch_parser.add_argument(
        "--success-hints", action="store_true", help="Show hints on success"
    )

    for name, help_text in (
        ("run", "Run/Test a single exercise"),
        ("reset", 'Reset a single exercise using "git stash -- <filename>"'),
        ("hint", "Return a hint for the given exercise"),
    ):
        sub = commands.add_parser(name, help=help_text)
        sub.add_argument("name", help="The name of the exercise")

    list_parser = commands.add_parser("list", help="List the exercises available in Rustlings")
    list_parser.add_argument(
        "-p", "--paths", action="store_true", help="Show only the paths of the exercises"
    )
    list_parser.add_argument(
        "-n", "--names", action="store_true", help="Show only the names of the exercises"
    )
    list_parser.add_argument(
        "-f",
        "--filter",
        default=None,
        help="Provide a string to match exercise names. Comma separated patterns are accepted",
    )
    list_parser.add_argument(
        "-u", "--unsolved", action="store_true", help="Display only exercises not yet solved"
    )
    list_parser.add_argument(
        "-s", "--solved", action="store_true", help="Display only exercises that have been solved"
    )

    commands.add_parser("lsp", help="Enable rust-analyzer for exercises")
    return parser


def rustc_exists() -> bool:
    """True when `rustc --version` can be started and succeeds."""
    try:
        completed = subprocess.run(
            ["rustc", "--version"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError:
        return False
    return completed.returncode == 0


def find_exercise(name: str, exercises: Sequence[Exercise]) -> Exercise:
    """Look an exercise up by name; "next" means the first one still pending."""
    if name == "next":
        found = next((exercise for exercise in exercises if not exercise.looks_done()), None)
        if found is None:
            raise LookupError(
                "🎉 Congratulations! You have done all the exercises!\n"
                "🔚 There are no more exercises to do next!"
            )
        return found
    found = next((exercise for exercise in exercises if exercise.name == name), None)
    if found is None:
        raise LookupError(f"No exercise found for '{name}'!")
    return found


def _percent(done: int, total: int) -> str:
    if total == 0:
        return "NaN"
    return f"{done / total * 100.0:.1f}"


def _list_exercises(exercises: Sequence[Exercise], args: argparse.Namespace) -> int:
    if not args.paths and not args.names:
        print(f"{'Name':<17}\t{'Path':<46}\t{'Status':<7}")
    filters = (args.filter or "").lower()
    patterns = [pattern for pattern in filters.split(",") if pattern.strip()]
    exercises_done = 0
    for exercise in exercises:
        fname = str(exercise.path)
        filter_cond = any(p in exercise.name or p in fname for p in patterns)
        done = exercise.looks_done()
        if done:
            exercises_done += 1
        status = "Done" if done else "Pending"
        solve_cond = (
            (done and args.solved)
            or (not done and args.unsolved)
            or (not args.solved and not args.unsolved)
        )
        if not (solve_cond and (filter_cond or args.filter is None)):
            continue
        if args.paths:
            line = f"{fname}\n"
        elif args.names:
            line = f"{exercise.name}\n"
        else:
            line = f"{exercise.name:<17}\t{fname:<46}\t{status:<7}\n"
        try:
            sys.stdout.write(line)
            sys.stdout.flush()
        except BrokenPipeError:
            return 0
        except OSError:
            return 1
    print(
        f"Progress: You completed {exercises_done} / {len(exercises)} exercises "
        f"({_percent(exercises_done, len(exercises))} %)."
    )
    return 0


def _lsp() -> int:
    project = RustAnalyzerProject()
    try:
        project.get_sysroot_src()
    except OSError:
        print("Couldn't find toolchain path, do you have `rustc` installed?")
        return 1
    try:
        project.exercises_to_json()
    except OSError:
        print("Couldn't parse rustlings exercises files")
        return 1
    if not project.crates:
        print("Failed find any exercises, make sure you're in the `rustlings` folder")
        return 0
    try:
        project.write_to_disk()
    except OSError:
        print("Failed to write rust-project.json to disk for rust-analyzer")
        return 0
    print("Successfully generated rust-project.json")
    print("rust-analyzer will now parse exercises, restart your language server or editor")
    return 0


def _celebration_mark() -> str:
    encoding = getattr(sys.stdout, "encoding", None) or "utf-8"
    try:
        "🎉".encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return "★"
    return "🎉"


def _watch_command(exercises: Sequence[Exercise], verbose: bool, success_hints: bool) -> int:
    try:
        status = watch(exercises, verbose, success_hints)
    except OSError as error:
        print(f"Error: Could not watch your progress. Error message was {error!r}.")
        print(
            "Most likely you've run out of disk space or your 'inotify limit' has been reached."
        )
        return 1
    if status is WatchStatus.FINISHED:
        mark = _celebration_mark()
        print(f"{mark} All exercises completed! {mark}")
        print(f"\n{FENISH_LINE}\n")
    else:
        print("We hope you're enjoying learning about Rust!")
        print(
            "If you want to continue working on the exercises at a later point, "
            "you can simply run `rustlings watch` again"
        )
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point of the rustlings command; returns the exit status."""
    args = _parser().parse_args(argv)

    if args.command is None:
        print(f"\n{WELCOME}\n")

    if not Path(INFO_FILE).exists():
        print(f"{os.path.abspath(sys.argv[0])} must be run from the rustlings directory")
        print("Try `cd rustlings/`!")
        return 1

    if not rustc_exists():
        print("We cannot find `rustc`.")
        print("Try running `rustc --version` to diagnose your problem.")
        print("For instructions on how to install Rust, check the README.")
        return 1

    exercises = load_exercise_list(INFO_FILE)
    verbose = args.nocapture

    if args.command is None:
        print(f"{DEFAULT_OUT}\n")
        return 0

    if args.command == "list":
        return _list_exercises(exercises, args)

    if args.command in ("run", "reset", "hint"):
        try:
            exercise = find_exercise(args.name, exercises)
        except LookupError as error:
            print(error.args[0])
            return 1
        if args.command == "hint":
            print(exercise.hint)
            return 0
        if args.command == "run":
            try:
                run(exercise, verbose)
            except VerifyFailed:
                return 1
            return 0
        try:
            reset(exercise).wait()
        except OSError:
            return 1
        return 0

    if args.command == "verify":
        try:
            verify(exercises, (0, len(exercises)), verbose, False)
        except VerifyFailed:
            return 1
        return 0

    if args.command == "lsp":
        return _lsp()

    return _watch_command(exercises, verbose, args.success_hints)


class _ChangeCollector(FileSystemEventHandler):
    """Queues the paths of files that changed below the exercises directory."""

    def __init__(self, changes: queue.Queue[str]) -> None:
        super().__init__()
        self._changes = changes

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _RELEVANT_EVENTS:
            return
        self._changes.put(os.fsdecode(event.src_path))
        destination = getattr(event, "dest_path", "")
        if destination:
            self._changes.put(os.fsdecode(destination))


class _WatchShell:
    """Reads commands typed while watch mode runs."""

    def __init__(self, hint: str | None) -> None:
        self.hint = hint
        self.should_quit = threading.Event()

    def start(self) -> None:
        print(
            "Welcome to watch mode! You can type 'help' to get an overview of "
            "the commands you can use here."
        )
        threading.Thread(target=self._loop, daemon=True).start()

    def _loop(self) -> None:
        while True:
            try:
                line = sys.stdin.readline()
            except (OSError, ValueError) as error:
                print(f"error reading command: {error}")
                return
            if not line:
                return
            self.handle(line)

    def handle(self, line: str) -> None:
        command = line.strip()
        if command == "hint":
            if self.hint is not None:
                print(self.hint)
        elif command == "clear":
            print("\x1b[2J\x1b[1;1H")
        elif command == "quit":
            self.should_quit.set()
            print("Bye!")
        elif command == "help":
            print("Commands available to you in watch mode:")
            print("  hint   - prints the current exercise's hint")
            print("  clear  - clears the screen")
            print("  quit   - quits watch mode")
            print("  !<cmd> - executes a command, like `!rustc --explain E0381`")
            print("  help   - displays this help message")
            print()
            print("Watch mode automatically re-evaluates the current exercise")
            print("when you edit a file's contents.")
        elif command.startswith("!"):
            cmd = command[1:]
            parts = cmd.split()
            if not parts:
                print("no command provided")
                return
            try:
                subprocess.run(parts, check=False)
            except OSError as error:
                print(f"failed to execute command `{cmd}`: {error}")
        else:
            print(f"unknown command: {command}")


def _clear_screen() -> None:
    print("\x1bc")


def _ends_with(path: Path, suffix: Path) -> bool:
    parts = suffix.parts
    return bool(parts) and len(parts) <= len(path.parts) and path.parts[-len(parts):] == parts


def _reverify(
    raw: str,
    exercises: Sequence[Exercise],
    verbose: bool,
    success_hints: bool,
    shell: _WatchShell,
) -> bool:
    path = Path(raw)
    if path.suffix != ".rs" or not path.exists():
        return False
    filepath = path.resolve()
    current = next((e for e in exercises if _ends_with(filepath, e.path)), None)
    others = [e for e in exercises if not _ends_with(filepath, e.path)]
    pending: Iterator[Exercise] = itertools.chain(
        [current] if current is not None else [],
        (e for e in others if not e.looks_done()),
    )
    num_done = sum(1 for e in others if e.looks_done())
    _clear_screen()
    try:
        verify(pending, (num_done, len(exercises)), verbose, success_hints)
    except VerifyFailed as failure:
        shell.hint = failure.exercise.hint
        return False
    return True


def _gather(changes: queue.Queue[str], pending: dict[str, float]) -> None:
    try:
        raw = changes.get(timeout=DEBOUNCE_SECONDS)
    except queue.Empty:
        return
    pending[raw] = time.monotonic()
    while True:
        try:
            raw = changes.get_nowait()
        except queue.Empty:
            return
        pending[raw] = time.monotonic()


def watch(exercises: Sequence[Exercise], verbose: bool, success_hints: bool) -> WatchStatus:
    """Verify, then re-verify whenever an exercise file changes, until done or quit."""
    changes: queue.Queue[str] = queue.Queue()
    observer = Observer()
    observer.schedule(_ChangeCollector(changes), EXERCISES_DIR, recursive=True)
    observer.start()
    try:
        _clear_screen()
        try:
            verify(exercises, (0, len(exercises)), verbose, success_hints)
        except VerifyFailed as failure:
            shell = _WatchShell(failure.exercise.hint)
        else:
            return WatchStatus.FINISHED
        shell.start()

        pending: dict[str, float] = {}
        while True:
            _gather(changes, pending)
            now = time.monotonic()
            ready = [raw for raw, seen in pending.items() if now - seen >= DEBOUNCE_SECONDS]
            for raw in ready:
                del pending[raw]
            for raw in ready:
                if _reverify(raw, exercises, verbose, success_hints, shell):
                    return WatchStatus.FINISHED
            if shell.should_quit.is_set():
                return WatchStatus.UNFINISHED
    finally:
        observer.stop()
        observer.join()


DEFAULT_OUT = """Thanks for installing Rustlings!

Is this your first time? Don't worry, Rustlings was made for beginners! We are
going to teach you a lot of things about Rust, but before we can get
started, here's a couple of notes about how Rustlings operates:

1. The central concept behind Rustlings is that you solve exercises. These
   exercises usually have some sort of syntax error in them, which will cause
   them to fail compilation or testing. Sometimes there's a logic error instead
   of a syntax error. No matter what error, it's your job to find it and fix it!
   You'll know when you fixed it because then, the exercise will compile and
   Rustlings will be able to move on to the next exercise.
2. If you run Rustlings in watch mode (which we recommend), it'll automatically
   start with the first exercise. Don't get confused by an error message popping
   up as soon as you run Rustlings! This is part of the exercise that you're
   supposed to solve, so open the exercise file in an editor and start your
   detective work!
3. If you're stuck on an exercise, there is a helpful hint you can view by typing
   'hint' (in watch mode), or running `rustlings hint exercise_name`.
4. If an exercise doesn't make sense to you, feel free to open an issue on the
   project's issue tracker. We look at every issue, and sometimes, other
   learners do too so you can help each other out!
5. If you want to use `rust-analyzer` with exercises, which provides features like
   autocompletion, run the command `rustlings lsp`.

Got all that? Great! To get started, run `rustlings watch` in order to get the first
exercise. Make sure to have your editor open!"""

FENISH_LINE = """+----------------------------------------------------+
|          You made it to the Fe-nish line!          |
+--------------------------  ------------------------+
                           \\/\x1b[31m
     ▒▒          ▒▒▒▒▒▒▒▒      ▒▒▒▒▒▒▒▒          ▒▒
   ▒▒▒▒  ▒▒    ▒▒        ▒▒  ▒▒        ▒▒    ▒▒  ▒▒▒▒
   ▒▒▒▒  ▒▒  ▒▒            ▒▒            ▒▒  ▒▒  ▒▒▒▒
 ░░▒▒▒▒░░▒▒  ▒▒            ▒▒            ▒▒  ▒▒░░▒▒▒▒
   ▓▓▓▓▓▓▓▓  ▓▓      ▓▓██  ▓▓  ▓▓██      ▓▓  ▓▓▓▓▓▓▓▓
     ▒▒▒▒    ▒▒      ████  ▒▒  ████      ▒▒░░  ▒▒▒▒
       ▒▒  ▒▒▒▒▒▒        ▒▒▒▒▒▒        ▒▒▒▒▒▒  ▒▒
         ▒▒▒▒▒▒▒▒▒▒▓▓▓▓▓▓▒▒▒▒▒▒▒▒▓▓▒▒▓▓▒▒▒▒▒▒▒▒
           ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒
             ▒▒▒▒▒▒▒▒▒▒██▒▒▒▒▒▒██▒▒▒▒▒▒▒▒▒▒
           ▒▒  ▒▒▒▒▒▒▒▒▒▒██████▒▒▒▒▒▒▒▒▒▒  ▒▒
         ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒
       ▒▒    ▒▒    ▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒▒    ▒▒    ▒▒
       ▒▒  ▒▒    ▒▒                  ▒▒    ▒▒  ▒▒
           ▒▒  ▒▒                      ▒▒  ▒▒\x1b[0m

We hope you enjoyed learning about the various aspects of Rust!
If you noticed any issues, please don't hesitate to report them to our repo.
You can also contribute your own exercises to help the greater community!

Before reporting an issue or contributing, please read our contributing
guidelines in CONTRIBUTING.md."""

WELCOME = r"""       welcome to...
                 _   _ _
  _ __ _   _ ___| |_| (_)_ __   __ _ ___
 | '__| | | / __| __| | | '_ \ / _` / __|
 | |  | |_| \__ \ |_| | | | | | (_| \__ \
 |_|   \__,_|___/\__|_|_|_| |_|\__, |___/
                               |___/"""


if __name__ == "__main__":
    sys.exit(main())