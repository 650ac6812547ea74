"""Building rust-project.json so rust-analyzer understands the exercises."""

from __future__ import annotations

import dataclasses
import glob
import json
import os
import subprocess
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_FILE = "./rust-project.json"


@dataclass
class Crate:
    """One exercise file, treated by rust-analyzer as a crate."""

    root_module: str
    edition: str = "2021"
    deps: list[str] = field(default_factory=list)
    # Lets rust-analyzer work inside test blocks.
    cfg: list[str] = field(default_factory=lambda: ["test"])


@dataclass
class RustAnalyzerProject:
    """Contents of rust-project.json."""

    sysroot_src: str = ""
    crates: list[Crate] = field(default_factory=list)

    def to_json(self) -> str:
        """Serialise the project as compact JSON."""
        return json.dumps(dataclasses.asdict(self), separators=(",", ":"), ensure_ascii=False)

    def write_to_disk(self) -> None:
        """Write rust-project.json into the current directory."""
        Path(PROJECT_FILE).write_text(self.to_json(), encoding="utf-8")

    def _path_to_json(self, path: str) -> None:
        if Path(path).suffix == ".rs":
            self.crates.append(Crate(root_module=path))

    def exercises_to_json(self) -> None:
        """Add a crate for every .rs file below ./exercises."""
        for path in sorted(glob.glob("./exercises/**/*", recursive=True)):
            self._path_to_json(path)

    def get_sysroot_src(self) -> None:
        """Find the standard library sources, from RUST_SRC_PATH or rustc."""
        from_env = os.environ.get("RUST_SRC_PATH")
        if from_env is not None:
            self.sysroot_src = from_env
            return
        completed = subprocess.run(
            ["rustc", "--print", "sysroot"], capture_output=True, check=False
        )
        text = completed.stdout.decode("utf-8", errors="replace")
        words = text.split()
        toolchain = words[0] if words else text
        print(f"Determined toolchain: {toolchain}\n")
        self.sysroot_src = os.path.join(toolchain, "lib", "rustlib", "src", "rust", "library")