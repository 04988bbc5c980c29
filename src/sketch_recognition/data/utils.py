"""Filesystem helpers for the folder-per-label dataset layout."""

from pathlib import Path

from sketch_recognition.errors import DatasetError


def _check_dir(root: Path) -> None:
    if not root.exists():
        raise FileNotFoundError(f"Dataset root does not exist: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Dataset root is not a directory: {root}")


def get_label_dirs(root: Path) -> list[Path]:
    """Immediate subdirectories of ``root``, sorted by name.

    Sorting makes label indices independent of the platform's directory
    listing order.

    Raises:
        FileNotFoundError: ``root`` does not exist.
        NotADirectoryError: ``root`` is a file.
        DatasetError: ``root`` cannot be listed or holds no subdirectories.
    """
    _check_dir(root)
    try:
        dirs = [p for p in root.iterdir() if p.is_dir()]
    except OSError as exc:
        raise DatasetError(f"Cannot list dataset root {root}: {exc}") from exc
    if not dirs:
        raise DatasetError(f"No label folders found under {root}")
    return sorted(dirs, key=lambda p: p.name)


def get_files(folder: Path) -> list[Path]:
    """Regular files directly inside ``folder``, sorted by name.

    Raises:
        DatasetError: ``folder`` cannot be listed.
    """
    try:
        files = [p for p in folder.iterdir() if p.is_file()]
    except OSError as exc:
        raise DatasetError(f"Cannot list label folder {folder}: {exc}") from exc
    return sorted(files, key=lambda p: p.name)
