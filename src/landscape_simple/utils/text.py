"""Output file naming for the CLI."""

import re
from pathlib import Path

_SEPARATORS = re.compile(r"[^a-z0-9]+")


def default_output_path(space_file: Path, m: int, seed: int, suffix: str, max_stem: int = 64) -> Path:
    """Default output path ``<stem>-m<m>-s<seed><suffix>`` in the working directory.

    The stem is the space file's name in lowercase with every run of other
    characters collapsed into one hyphen. Names with nothing usable left
    become ``landscape``.
    """
    words = [word for word in _SEPARATORS.split(Path(space_file).stem.lower()) if word]
    stem = "-".join(words)[:max_stem].rstrip("-") or "landscape"
    return Path(f"{stem}-m{m}-s{seed}{suffix}")
