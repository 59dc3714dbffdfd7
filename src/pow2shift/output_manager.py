# output_manager.py

import os
import sys

# Text is decoded with surrogateescape on the way in, so undecodable input
# bytes are written back out unchanged.
ENCODING = "utf-8"
ERRORS = "surrogateescape"


def read_text(path: str) -> str:
    """Read a whole file as text, keeping line endings and odd bytes intact."""
    with open(path, encoding=ENCODING, errors=ERRORS, newline="") as fh:
        return fh.read()


def resolve_output_path(path: str) -> str:
    """
    Resolve user-provided output path.

    Rules:
    - '~' expanded to user home
    - Absolute paths unchanged
    - Relative paths are relative to the current directory
    """
    if not path:
        raise ValueError("Output path is empty")
    return os.path.abspath(os.path.expanduser(path))


class OutputManager:
    """
    Sends the rewritten text to the screen or to a file.

    Usage:
        om = OutputManager(output_file=None)     # stdout
        om = OutputManager(output_file="out.c")  # create/truncate out.c
        om.write(text)
        om.close()                               # nothing hits a file before close()
    """

    def __init__(self, output_file: str | None = None):
        """
        Parameters:
            output_file:
                None or ""       => standard output
                path/to/file.txt => file is created or truncated on close()
        """
        self.output_file = output_file or ""
        self._buffer: list[str] = []
        self._closed = False
        self.path: str | None = resolve_output_path(self.output_file) if self.output_file else None

    @property
    def to_file(self) -> bool:
        return self.path is not None

    def write(self, *args, sep: str = "", end: str = "") -> None:
        self._buffer.append(sep.join(str(a) for a in args) + end)

    def getvalue(self) -> str:
        return "".join(self._buffer)

    def _write_screen(self, text: str) -> None:
        out = sys.stdout
        buf = getattr(out, "buffer", None)
        if buf is None:
            out.write(text)
        else:
            out.flush()
            buf.write(text.encode(ENCODING, ERRORS))
        out.flush()

    def _write_file(self, text: str) -> None:
        # parent directory must already exist
        with open(self.path, "w", encoding=ENCODING, errors=ERRORS, newline="") as fh:
            fh.write(text)

    def close(self) -> None:
        """Flush everything written so far. I/O errors propagate to the caller."""
        if self._closed:
            return
        self._closed = True
        text = self.getvalue()
        if self.to_file:
            self._write_file(text)
        else:
            self._write_screen(text)
