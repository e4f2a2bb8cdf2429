# main.py
import logging

import click

from layertree.models import ASCII_GLYPHS, HEAVY_GLYPHS
from layertree.renderer import TreeRenderer
from layertree.scanner import build_directory_tree, count_entries, format_path


@click.command()
@click.argument("path", type=click.Path(exists=True), default='.')
@click.option("-L", "--max-depth", type=click.IntRange(min=1), default=None,
              help="Descend at most this many levels below PATH.")
@click.option("--ascii", "use_ascii", is_flag=True,
              help="Draw connectors with light box characters like `tree` does.")
@click.option("-a", "--all", "show_hidden", is_flag=True,
              help="Include hidden files and directories.")
@click.option("-g", "--ignore-gitignore", is_flag=True,
              help="Do not apply .gitignore rules or the built-in excludes.")
@click.option("-v", "--verbose", is_flag=True,
              help="Log scan progress to stderr.")
def cli(path, max_depth, use_ascii, show_hidden, ignore_gitignore, verbose):
    """
    Renders the directory tree under PATH.

    The tree is built one layer at a time and drawn with connector glyphs,
    followed by a count of directories and files.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format='%(asctime)s - %(levelname)s - %(message)s'
        )

    tree = build_directory_tree(
        path,
        max_depth=max_depth,
        ignore_hidden=not show_hidden,
        respect_gitignore=not ignore_gitignore,
    )

    renderer = TreeRenderer(tree, ASCII_GLYPHS if use_ascii else HEAVY_GLYPHS)
    click.echo(renderer.render_tree(format_path), nl=False)

    directories, files = count_entries(tree)
    click.echo(f"\n{directories} directories, {files} files")


if __name__ == "__main__":
    cli()
