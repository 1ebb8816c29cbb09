from pathlib import Path
from typing import BinaryIO, Protocol


class ImportFile(Protocol):
    """An uploaded file handed to the importer."""

    @property
    def file_name(self) -> str: ...

    @property
    def length(self) -> int: ...

    def open_read_stream(self) -> BinaryIO: ...


class PathImportFile:
    def __init__(self, path: Path | str) -> None:
        self.path = Path(path)

    @property
    def file_name(self) -> str:
        return self.path.name

    @property
    def length(self) -> int:
        return self.path.stat().st_size

    def open_read_stream(self) -> BinaryIO:
        return self.path.open("rb")


def is_csv_file(file: ImportFile) -> bool:
    return file.file_name.lower().endswith(".csv")
