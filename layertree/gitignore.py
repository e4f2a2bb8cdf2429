"""

ignore rules for directory scans:
hard-coded excludes plus every .gitignore
from the scan root up to the filesystem root
"""

from __future__ import annotations
from pathlib import Path
from typing import List, Tuple

import pathspec


# Excludes that *always* apply when ignore rules are enabled
HARDCODED = [".git", ".gitignore", "*.egg-info", "__pycache__"]


def _load_gitignore_specs(start_dir: Path) -> List[Tuple[Path, pathspec.GitIgnoreSpec]]:
    """Return (directory, spec) pairs for every .gitignore found between
    `start_dir` and the filesystem root, nearest first."""
    specs: List[Tuple[Path, pathspec.GitIgnoreSpec]] = []
    for parent in (start_dir, *start_dir.parents):
        gitignore = parent / ".gitignore"
        if gitignore.is_file():
            with gitignore.open(encoding="utf-8") as fh:
                lines = [ln.rstrip() for ln in fh if ln.strip() and not ln.startswith("#")]
            specs.append((parent, pathspec.GitIgnoreSpec.from_lines(lines)))
    return specs


class IgnoreRules:
    """Callable that answers: *should this path be left out of the tree?*"""

    def __init__(self, root: Path):
        self.root = root
        self.hardcoded = pathspec.GitIgnoreSpec.from_lines(HARDCODED)
        self.git_specs = _load_gitignore_specs(root)

    @staticmethod
    def _match(spec: pathspec.GitIgnoreSpec, rel: str, is_dir: bool) -> bool:
        # directory-only patterns such as "build/" need the trailing slash to match
        if is_dir:
            return spec.match_file(rel + "/")
        return spec.match_file(rel)

    def __call__(self, path: Path) -> bool:
        """Return True if the path should be *excluded*."""
        is_dir = path.is_dir()
        if self._match(self.hardcoded, path.relative_to(self.root).as_posix(), is_dir):
            return True
        for base, spec in self.git_specs:
            if self._match(spec, path.relative_to(base).as_posix(), is_dir):
                return True
        return False
