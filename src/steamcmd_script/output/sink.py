"""
Output sink for the generated script.

Writes to a file when a path is configured, otherwise to standard
output. Standard output is never closed.
"""

import sys
from pathlib import Path
from typing import TextIO

from steamcmd_script.logger import get_logger


class OutputSink:
    """
    Single destination shared by every section of the script.

    Example:
        >>> sink = OutputSink.resolve("update_games.txt")
        >>> sink.write("app_update 570\\n")
        >>> sink.close()
    """

    def __init__(self, stream: TextIO, *, path: Path | None = None, owns_stream: bool = False) -> None:
        """
        Initialize output sink.

        Args:
            stream: Text stream to write to
            path: File path behind the stream, if any
            owns_stream: Close the stream when the sink is closed
        """
        self._stream = stream
        self._path = path
        self._owns_stream = owns_stream
        self._closed = False
        self._logger = get_logger(__name__, component="output_sink")

    @classmethod
    def resolve(cls, output_file: str | Path | None = None) -> "OutputSink":
        """
        Open the configured destination.

        Args:
            output_file: Path of a file to create (standard output if None)

        Returns:
            OutputSink: Sink over a new UTF-8 file or over standard output
        """
        if not output_file:
            return cls(sys.stdout)

        path = Path(output_file)
        stream = path.open("w", encoding="utf-8")
        return cls(stream, path=path, owns_stream=True)

    @property
    def stream(self) -> TextIO:
        """Underlying text stream."""
        return self._stream

    @property
    def path(self) -> Path | None:
        """File path, or None for standard output."""
        return self._path

    @property
    def is_file(self) -> bool:
        """Check if the sink writes to a file it opened."""
        return self._owns_stream

    @property
    def closed(self) -> bool:
        """Check if close() has been called."""
        return self._closed

    def write(self, text: str) -> None:
        """Append raw text to the destination."""
        if self._closed:
            raise ValueError("write to closed output sink")
        self._stream.write(text)

    def close(self) -> None:
        """Close the destination; safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        if self._owns_stream:
            self._stream.close()
            self._logger.info("Script written", path=str(self._path))
        else:
            self._stream.flush()
