import os
import subprocess
from pathlib import Path
from unittest import mock

import pytest

from rustlings.exercise import (
    CLIPPY_CARGO_TOML_PATH,
    CompiledExercise,
    ContextLine,
    Exercise,
    ExerciseFailed,
    ExerciseOutput,
    Mode,
    State,
    clean,
    load_exercise_list,
    load_exercises,
    temp_file,
)

PENDING = "// fake_exercise\n\n// I AM NOT DONE\n\nfn main() {\n\n}\n"
FINISHED = "// fake_exercise\n\nfn main() {\n\n}\n"

INFO = """
[[exercises]]
name = "intro1"
path = "exercises/00_intro/intro1.rs"
mode = "compile"
hint = "No hints this time ;)"

[[exercises]]
name = "if1"
path = "exercises/03_if/if1.rs"
mode = "test"
hint = "Use an if."
"""


def make_exercise(tmp_path, content, name="example", mode=Mode.COMPILE):
    path = tmp_path / f"{name}.rs"
    path.write_text(content, encoding="utf-8")
    return Exercise(name=name, path=path, mode=mode, hint="")


def completed(code=0, stdout=b"", stderr=b""):
    return subprocess.CompletedProcess(args=[], returncode=code, stdout=stdout, stderr=stderr)


def test_pending_state(tmp_path):
    exercise = make_exercise(tmp_path, PENDING, "pending_exercise")
    expected = (
        ContextLine("// fake_exercise", 1, False),
        ContextLine("", 2, False),
        ContextLine("// I AM NOT DONE", 3, True),
        ContextLine("", 4, False),
        ContextLine("fn main() {", 5, False),
    )
    assert exercise.state() == State(expected)
    assert not exercise.looks_done()


def test_finished_exercise(tmp_path):
    exercise = make_exercise(tmp_path, FINISHED, "finished_exercise")
    assert exercise.state() == State()
    assert exercise.state().done
    assert exercise.looks_done()


def test_triple_slash_marker_is_pending(tmp_path):
    exercise = make_exercise(tmp_path, "fn a() {}\n   ///  I  AM NOT DONE\n")
    state = exercise.state()
    assert [line.number for line in state.context] == [1, 2]
    assert [line.important for line in state.context] == [False, True]


def test_context_clipped_at_start(tmp_path):
    exercise = make_exercise(tmp_path, "// I AM NOT DONE\na\nb\nc\nd\n")
    assert [line.line for line in exercise.state().context] == ["// I AM NOT DONE", "a", "b"]


def test_marker_is_case_sensitive(tmp_path):
    exercise = make_exercise(tmp_path, "// i am not done\nfn main() {}\n")
    assert exercise.looks_done()


def test_crlf_lines_are_stripped(tmp_path):
    path = tmp_path / "crlf.rs"
    path.write_bytes(b"// I AM NOT DONE\r\nfn main() {}\r\n")
    exercise = Exercise("crlf", path, Mode.COMPILE, "")
    assert [line.line for line in exercise.state().context] == ["// I AM NOT DONE", "fn main() {}"]


def test_missing_file_raises(tmp_path):
    exercise = Exercise("gone", tmp_path / "gone.rs", Mode.COMPILE, "")
    with pytest.raises(FileNotFoundError):
        exercise.state()


def test_load_exercises():
    exercises = load_exercises(INFO)
    assert [e.name for e in exercises] == ["intro1", "if1"]
    assert exercises[0].path == Path("exercises/00_intro/intro1.rs")
    assert exercises[0].mode is Mode.COMPILE
    assert exercises[1].mode is Mode.TEST
    assert exercises[1].hint == "Use an if."


def test_load_exercise_list(tmp_path):
    info = tmp_path / "info.toml"
    info.write_text(INFO, encoding="utf-8")
    assert load_exercise_list(info) == load_exercises(INFO)


def test_load_rejects_unknown_mode():
    with pytest.raises(ValueError):
        load_exercises('[[exercises]]\nname = "a"\npath = "a.rs"\nmode = "run"\nhint = ""\n')


def test_load_rejects_missing_field():
    with pytest.raises(ValueError, match="hint"):
        load_exercises('[[exercises]]\nname = "a"\npath = "a.rs"\nmode = "test"\n')


def test_str_is_path():
    exercise = Exercise("a", Path("exercises/a.rs"), Mode.TEST, "")
    assert str(exercise) == str(Path("exercises/a.rs"))


def test_temp_file_mentions_process():
    assert temp_file().startswith(f"./temp_{os.getpid()}_")
    assert temp_file() == temp_file()


def test_clean(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    Path(temp_file()).touch()
    clean()
    assert not Path(temp_file()).exists()
    clean()
    assert not Path(temp_file()).exists()


def test_compiled_exercise_close_removes_binary(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = make_exercise(tmp_path, PENDING)
    Path(temp_file()).touch()
    with CompiledExercise(exercise):
        assert Path(temp_file()).exists()
    assert not Path(temp_file()).exists()


def test_compile_failure_reports_output_and_cleans(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = make_exercise(tmp_path, PENDING)
    Path(temp_file()).touch()
    with mock.patch("subprocess.run", return_value=completed(1, b"", b"error: oops")):
        with pytest.raises(ExerciseFailed) as info:
            exercise.compile()
    assert info.value.output == ExerciseOutput("", "error: oops")
    assert not Path(temp_file()).exists()


def test_compile_and_run_test_mode(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = make_exercise(tmp_path, PENDING, mode=Mode.TEST)
    runs = [completed(0), completed(0, b"THIS TEST TOO SHALL PASS\n", b"")]
    with mock.patch("subprocess.run", side_effect=runs) as run:
        output = exercise.compile().run()
    assert "THIS TEST TOO SHALL PASS" in output.stdout
    compile_args = run.call_args_list[0].args[0]
    assert compile_args[:2] == ["rustc", "--test"]
    assert "--edition" in compile_args and "2021" in compile_args
    assert run.call_args_list[1].args[0] == [temp_file(), "--show-output"]


def test_compile_mode_runs_without_arguments(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = make_exercise(tmp_path, PENDING)
    with mock.patch("subprocess.run", side_effect=[completed(0), completed(0, b"hi")]) as run:
        output = exercise.compile().run()
    assert output.stdout == "hi"
    assert "--test" not in run.call_args_list[0].args[0]
    assert run.call_args_list[1].args[0] == [temp_file()]


def test_run_failure_raises(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    exercise = make_exercise(tmp_path, PENDING)
    with mock.patch("subprocess.run", return_value=completed(101, b"out", b"panicked")):
        with pytest.raises(ExerciseFailed) as info:
            CompiledExercise(exercise).run()
    assert info.value.output == ExerciseOutput("out", "panicked")


def test_clippy_writes_cargo_toml(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "exercises" / "22_clippy").mkdir(parents=True)
    exercise = Exercise("clippy1", Path("exercises/22_clippy/clippy1.rs"), Mode.CLIPPY, "")
    with mock.patch("subprocess.run", return_value=completed(0)) as run:
        compiled = exercise.compile()
    assert compiled.exercise is exercise
    toml_text = Path(CLIPPY_CARGO_TOML_PATH).read_text(encoding="utf-8")
    assert 'name = "clippy1"' in toml_text
    assert 'path = "clippy1.rs"' in toml_text
    commands = [call.args[0][:2] for call in run.call_args_list]
    assert commands == [["rustc", str(exercise.path)], ["cargo", "clean"], ["cargo", "clippy"]]
    assert run.call_args_list[2].args[0][-4:] == ["-D", "warnings", "-D", "clippy::float_cmp"]