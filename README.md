# rustlings

A runner for small Rust exercises. Every exercise is a single `.rs` file that
fails to compile or to pass its tests until you fix it. The runner compiles and
runs each one with `rustc`, lints the Clippy ones with `cargo clippy`, shows you
what went wrong and tracks how far you have got.

## Requirements

- `rustc` on your `PATH` (the runner checks for it and stops if it is missing)
- `cargo` with Clippy, for the Clippy exercises
- `git`, for resetting an exercise
- an `info.toml` in the directory you run from, listing the exercises

The runner does not ship the exercises themselves; it works on whatever
`info.toml` and exercise files are in the current directory.

## The exercise list

`info.toml` holds one `[[exercises]]` table per exercise, in the order you are
meant to solve them:

```toml
[[exercises]]
name = "intro1"
path = "exercises/00_intro/intro1.rs"
mode = "compile"
hint = "Remove the I AM NOT DONE comment to move on."
```

All four keys are required. `mode` is one of:

- `compile`: build the file as a program and run it
- `test`: build the file as a test harness and run its tests
- `clippy`: build the file and lint it with Clippy, treating warnings as errors

## Progress markers

An exercise counts as done once it compiles (and its tests pass) **and** the
line `// I AM NOT DONE` has been removed from it. While the marker is still
there, the runner shows you the lines around it so you can decide whether to
move on.

## Commands

Run from the directory that holds `info.toml`:

```
rustlings                    # welcome text and how to get started
rustlings watch              # verify in order, re-run whenever a file changes
rustlings watch --success-hints
rustlings verify             # verify every exercise in order, stop at the first failure
rustlings run intro1         # compile and run (or test) one exercise
rustlings run next           # the first exercise that is not done yet
rustlings hint intro1        # print an exercise's hint
rustlings reset intro1       # put an exercise back with `git stash -- <file>`
rustlings list               # name, path and status of every exercise
rustlings lsp                # write rust-project.json for rust-analyzer
rustlings --version
```

The command exits with status 1 when it is not run next to an `info.toml`,
when `rustc` cannot be found, when the named exercise does not exist, and when
`run` or `verify` meets an exercise that fails.

`--nocapture` (before the subcommand) shows the output of test exercises:

```
rustlings --nocapture run iterators1
```

`list` accepts filters:

| option             | effect                                        |
|--------------------|-----------------------------------------------|
| `-p`, `--paths`    | print only paths                              |
| `-n`, `--names`    | print only names                              |
| `-f`, `--filter`   | comma-separated substrings of names or paths  |
| `-u`, `--unsolved` | only exercises still pending                  |
| `-s`, `--solved`   | only exercises that are done                  |

It ends with a line such as
`Progress: You completed 12 / 94 exercises (12.8 %).`

### Watch mode

Watch mode verifies the exercises in order and stops at the first one that
fails. Save a change under `exercises/` and it checks again, starting with the
file you edited. While it waits you can type:

- `hint`: the current exercise's hint
- `clear`: clear the screen
- `quit`: leave watch mode
- `!<cmd>`: run a command, such as `!rustc --explain E0381`
- `help`: list these commands

### rust-analyzer

`rustlings lsp` finds every `.rs` file under `exercises/` and writes
`rust-project.json`, so that rust-analyzer treats each one as its own crate
with `cfg(test)` switched on. The sysroot comes from `RUST_SRC_PATH` if it is
set, and from `rustc --print sysroot` otherwise.

## Environment

Set `NO_EMOJI` to get plain-text markers instead of emoji in the output.

## Using it from Python

The pieces behind the command can be used directly:

```python
from rustlings.exercise import load_exercise_list

for exercise in load_exercise_list("info.toml"):
    print(exercise.name, "done" if exercise.looks_done() else "pending")
```

`rustlings.verify.verify` and `rustlings.run.run` raise
`rustlings.verify.VerifyFailed` for an exercise that does not pass, and
`Exercise.compile` raises `rustlings.exercise.ExerciseFailed` carrying the
compiler output.

## Reference solutions

The `rustlings.lessons` package holds worked solutions to a selection of the
exercises, written as plain Python modules: `basics`, `text`, `report_card`,
`scores`, `structs`, `errors`, `traits`, `iterators`, `baskets`, `pointers`,
`geometry` and `colors`. For example:

```python
from rustlings.lessons.basics import calculate_price_of_apples
from rustlings.lessons.colors import color_from

calculate_price_of_apples(41)   # 41
color_from([183, 65, 14])       # Color(red=183, green=65, blue=14)
```

Not every exercise has a solution here: there are none for the type
conversion exercises other than colours, nor for the reference-counting and
thread exercises.