import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from filelock import FileLock

logger = logging.getLogger(__name__)

CACHE_FILENAME = "cache.txt"


class ChangeCache:
    """
    Modification-time cache of exercise files, one `name:mtime` per line.

    Later lines win, so recording only ever appends.
    """

    def __init__(self, cache_dir: Path, filename: str = CACHE_FILENAME):
        self.cache_dir = Path(cache_dir)
        self.path = self.cache_dir / filename

    def _lock(self) -> FileLock:
        return FileLock(str(self.path) + ".lock")

    def load(self) -> dict[str, float]:
        entries: dict[str, float] = {}
        if not self.path.exists():
            return entries

        with self.path.open("r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line == "":
                    continue
                name, sep, mtime = line.rpartition(":")
                try:
                    if not sep:
                        raise ValueError("missing ':'")
                    entries[name] = float(mtime)
                except ValueError as e:
                    logger.warning("Cache line %s could not be read: %s", line, str(e))
                    continue
        return entries

    def changed(self, paths: Iterable[Path]) -> list[Path]:
        """Paths with no cache entry, a newer mtime, or no longer on disk."""
        entries = self.load()
        out = []
        for path in paths:
            cached = entries.get(path.name)
            try:
                mtime = path.stat().st_mtime
            except OSError:
                out.append(path)
                continue
            if cached is None or mtime > cached:
                out.append(path)
        return out

    def record(self, paths: Iterable[Path]) -> int:
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        lines = [f"{path.name}:{path.stat().st_mtime}\n" for path in paths]
        with self._lock():
            with self.path.open("a", encoding="utf-8") as f:
                f.writelines(lines)
        logger.debug("Recorded %d cache entries in %s", len(lines), self.path)
        return len(lines)

    def clear(self) -> None:
        if self.cache_dir.exists():
            shutil.rmtree(self.cache_dir)
            logger.debug("Cleared cache directory %s", self.cache_dir)
