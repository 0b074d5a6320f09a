"""FileScanner — collect the files of a scoring batch in processing order."""

from __future__ import annotations

from pathlib import Path

from iscore.io.models import ScanResult


def _normalize_extension(extension: str) -> str:
    extension = extension.strip().lower()
    if extension and not extension.startswith("."):
        extension = "." + extension
    return extension


class FileScanner:
    """Find the images to score.

    A selected file always comes first, followed by the other files of its
    directory that share its extension, sorted by name. A directory yields
    all its TIFF files (or those with the given extension), sorted by name.
    """

    TIFF_EXTENSIONS = {".tif", ".tiff"}

    def scan(
        self,
        path: Path,
        extension: str | None = None,
        batch: bool = True,
    ) -> ScanResult:
        """Scan a file or directory for images.

        Args:
            path: A selected image file, or a directory.
            extension: Only include files with this extension. Defaults to
                the selected file's extension, or TIFF for a directory.
            batch: When False and ``path`` is a file, only that file is
                returned.

        Returns:
            ScanResult with files in processing order.

        Raises:
            FileNotFoundError: If path does not exist.
            ValueError: If no matching files are found.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Source path does not exist: {path}")

        if path.is_file():
            ext = _normalize_extension(extension or path.suffix)
            if not batch:
                return ScanResult(source_path=path, files=[path], extension=ext)
            siblings = [
                p for p in self._list_files(path.parent, {ext})
                if p.resolve() != path.resolve()
            ]
            return ScanResult(source_path=path, files=[path] + siblings, extension=ext)

        if extension:
            exts = {_normalize_extension(extension)}
        else:
            exts = set(self.TIFF_EXTENSIONS)
        files = self._list_files(path, exts)
        if not files:
            raise ValueError(f"No {'/'.join(sorted(exts))} files found in: {path}")
        return ScanResult(
            source_path=path, files=files, extension=",".join(sorted(exts)),
        )

    def _list_files(self, directory: Path, extensions: set[str]) -> list[Path]:
        """Regular files directly in ``directory`` matching ``extensions``.

        Hidden files and symlinks are skipped.
        """
        results = []
        for child in sorted(directory.iterdir()):
            if child.is_symlink() or child.name.startswith("."):
                continue
            if child.is_file() and child.suffix.lower() in extensions:
                results.append(child)
        return results
