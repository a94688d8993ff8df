"""Data file lookup and YAML loading for calendar presets and user calendars.

Missing files produce a FileNotFoundError that lists every place searched and
how to fix it.
"""

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple, Union


def _candidate_dirs(module_file: str, subdirectory: str, module_local_data: bool) -> List[Path]:
    module_dir = Path(module_file).parent
    dirs = [module_dir / "data"] if module_local_data else []
    dirs.append(module_dir.parent / "data" / subdirectory)
    return dirs


def find_data_file(
    module_file: str,
    subdirectory: str,
    filenames: Sequence[str],
    module_local_data: bool = True,
) -> Optional[Path]:
    """Locate a bundled data file.

    Directories are tried in order, and within each directory the filenames
    in the order given:
      1. {module_dir}/data/                (when module_local_data=True)
      2. {package_dir}/data/{subdirectory}/

    Args:
        module_file: ``__file__`` of the calling module
        subdirectory: Data family, e.g. 'calendar'
        filenames: Acceptable file names, most preferred first
        module_local_data: Search next to the calling module first

    Returns:
        Path of the first existing file, or None

    Examples:
        >>> find_data_file(__file__, 'calendar', ['presets.yaml']).name
        'presets.yaml'
    """
    for directory in _candidate_dirs(module_file, subdirectory, module_local_data):
        hits = [directory / name for name in filenames if (directory / name).exists()]
        if hits:
            return hits[0]
    return None


def format_not_found_error(
    subdirectory: str,
    searched_locations: Iterable[Tuple[str, Path]],
    fix_instructions: Iterable[str],
) -> str:
    """Build the message for a missing data file.

    Examples:
        >>> print(format_not_found_error(
        ...     "calendar", [("Module-local data", Path("data"))], ["Reinstall."]))
        No calendar data found in standard locations.
        <BLANKLINE>
        Searched:
          1. Module-local data: data
        <BLANKLINE>
        To fix:
          • Reinstall.
    """
    searched = "\n".join(
        f"  {n}. {label}: {path}" for n, (label, path) in enumerate(searched_locations, 1)
    )
    fixes = "\n".join(f"  • {step}" for step in fix_instructions)
    return (
        f"No {subdirectory} data found in standard locations.\n\n"
        f"Searched:\n{searched}\n\n"
        f"To fix:\n{fixes}"
    )


def load_yaml_file(path: Union[str, Path]) -> dict:
    """
    Parse a YAML file with ``yaml.safe_load``.

    Args:
        path: YAML file

    Returns:
        Parsed content; an empty file gives {}

    Raises:
        FileNotFoundError: If the file does not exist
        yaml.YAMLError: If the content is not valid YAML

    Examples:
        >>> load_yaml_file("my_calendar.yaml")["year_start_period"]
        'Fall'
    """
    import yaml

    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Required file not found: {path}")

    with path.open("r", encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


__all__ = [
    "find_data_file",
    "format_not_found_error",
    "load_yaml_file",
]
