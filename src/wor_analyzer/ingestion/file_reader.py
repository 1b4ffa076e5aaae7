"""Log file reader with encoding tolerance."""

from __future__ import annotations

from pathlib import Path

from wor_analyzer.ingestion.models import FileMetadata


def extract_file_metadata(file_path: str) -> FileMetadata:
    p = Path(file_path)
    return FileMetadata(
        file_path=str(p.resolve()),
        file_name=p.name,
        file_size=p.stat().st_size if p.exists() else 0,
    )


class FileReader:
    """Reads a server log from disk, replacing undecodable bytes."""

    def __init__(self, file_path: str) -> None:
        self.file_path = file_path
        self.metadata = extract_file_metadata(file_path)

    def read_text(self) -> str:
        """Return the whole file as text for batch parsing."""
        with open(self.file_path, "r", encoding="utf-8", errors="replace", newline="") as f:
            text = f.read()
        self.metadata.line_count = text.count("\n") + (0 if text.endswith("\n") or not text else 1)
        return text
