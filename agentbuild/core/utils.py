"""File I/O and path helpers."""

import os
from pathlib import Path


def read_text(path: str) -> str:
    # newline='' keeps CRLF sources byte-for-byte
    with open(path, 'r', encoding='utf-8', newline='') as f:
        return f.read()


def write_file(path: str, content: str) -> None:
    os.makedirs(os.path.dirname(path) or '.', exist_ok=True)
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)


def output_name(filename: str, source_suffix: str, output_suffix: str) -> str:
    """Map `agent.src.md` to `agent.md`. Names without the suffix pass through."""
    if filename.endswith(source_suffix):
        return filename[:-len(source_suffix)] + output_suffix
    return filename


def list_sources(source_dir: str, suffix: str) -> list[str]:
    """Absolute paths of files in source_dir ending with suffix, sorted by name.

    Raises OSError if the directory cannot be listed.
    """
    entries = sorted(os.listdir(source_dir))
    return [
        os.path.abspath(os.path.join(source_dir, name))
        for name in entries
        if name.endswith(suffix) and os.path.isfile(os.path.join(source_dir, name))
    ]


def list_skill_dirs(skills_dir: str, source_name: str) -> list[str]:
    """Sub-directories of skills_dir that hold a `source_name` file."""
    skills = []
    for entry in sorted(Path(skills_dir).iterdir()):
        if entry.is_dir() and (entry / source_name).is_file():
            skills.append(os.path.abspath(entry))
    return skills
