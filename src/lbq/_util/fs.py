from pathlib import Path


def ensure_dir(path: Path) -> None:
    """Create a directory (and parents) if it doesn't exist."""
    path.mkdir(parents=True, exist_ok=True)


def tildify(path: Path | str) -> str:
    """Return *path* as a string with the home directory shortened to ``~``."""
    p = Path(path)
    home = Path.home()
    if home == Path(home.anchor):
        return str(p)
    try:
        rel = p.relative_to(home)
    except ValueError:
        return str(p)
    if rel == Path("."):
        return "~"
    return str(Path("~") / rel)
