import logging
import os
from pathlib import Path
from typing import List, Optional, Tuple, Union

from layertree.gitignore import IgnoreRules
from layertree.renderer import Sink
from layertree.tree import LayeredTree, LayeredTreeBuilder

logger = logging.getLogger(__name__)


class DirectoryScanner:
    """
    Supplies the root values and the expansion function for a directory tree.

    Entries are listed in sorted order. Hidden entries and anything matched by
    the ignore rules are skipped; symlinked directories are not followed.
    """
    def __init__(self, root: Union[str, Path], ignore_hidden: bool = True, respect_gitignore: bool = True):
        self.root = Path(root).resolve()
        self.ignore_hidden = ignore_hidden
        self.ignore_rules: Optional[IgnoreRules] = IgnoreRules(self.root) if respect_gitignore else None

    def roots(self) -> List[Path]:
        """Entries directly under the scan root, or the root itself for a file."""
        if self.root.is_dir():
            return self._entries(self.root)
        return [self.root]

    def expand(self, path: Path) -> Optional[List[Path]]:
        """Children of a directory; None for files and symlinks."""
        if path.is_symlink() or not path.is_dir():
            return None
        return self._entries(path)

    def _entries(self, directory: Path) -> List[Path]:
        try:
            names = sorted(os.listdir(directory))
        except PermissionError:
            logger.warning("Permission denied while listing %s", directory)
            return []
        return [directory / name for name in names if not self._should_skip(directory / name)]

    def _should_skip(self, path: Path) -> bool:
        if self.ignore_hidden and path.name.startswith('.'):
            return True
        if self.ignore_rules is not None and self.ignore_rules(path):
            return True
        return False


def format_path(sink: Sink, path: Path) -> None:
    """Write the entry name, with a trailing slash for directories."""
    suffix = "/" if path.is_dir() else ""
    sink.write(f"{path.name or path}{suffix}")


def build_directory_tree(
    root: Union[str, Path],
    max_depth: Optional[int] = None,
    ignore_hidden: bool = True,
    respect_gitignore: bool = True,
) -> LayeredTree[Path]:
    """
    Scan ``root`` into a frozen layered tree.

    ``max_depth`` counts the entries of ``root`` as level 1, like ``tree -L``;
    None descends until no directory has anything left to list.
    """
    scanner = DirectoryScanner(root, ignore_hidden=ignore_hidden, respect_gitignore=respect_gitignore)
    builder: LayeredTreeBuilder[Path] = LayeredTreeBuilder(scanner.roots())
    if max_depth is None:
        builder.add_layers_recursively(scanner.expand)
    else:
        for _ in range(max_depth - 1):
            if not builder.add_layer(scanner.expand):
                break
    logger.info("Scanned %s: %d entries", scanner.root, len(builder))
    return builder.freeze()


def count_entries(tree: LayeredTree[Path]) -> Tuple[int, int]:
    """Return (directories, files) among the scanned entries."""
    directories = sum(1 for node in tree if node.value.is_dir())
    return directories, len(tree) - directories
