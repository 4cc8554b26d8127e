import os
from typing import Optional

from minic.errors import BuiltinError

SEEK_WHENCE = {0: os.SEEK_SET, 1: os.SEEK_CUR, 2: os.SEEK_END}


class FileHandle:
    """A host file plus the sticky end-of-file and error flags of C stdio."""
    def __init__(self, file, path: str = ''):
        self.file = file
        self.path = path
        self.eof = False
        self.error = False

    def __repr__(self) -> str:
        return f"<FileHandle {self.path!r} eof={self.eof} error={self.error}>"


class BasicIO:
    def open_file(self, path: str, mode: str) -> FileHandle:
        # "w" creates or truncates; every other mode opens for reading
        host_mode = 'wb' if mode == 'w' else 'rb'
        try:
            return FileHandle(open(path, host_mode), path)
        except OSError as e:
            raise BuiltinError(f"fopen failed: {e}")

    def delete_file(self, path: str):
        try:
            os.remove(path)
        except OSError as e:
            raise BuiltinError(f"remove failed: {e}")

    def rename_file(self, old_path: str, new_path: str):
        try:
            os.rename(old_path, new_path)
        except OSError as e:
            raise BuiltinError(f"rename failed: {e}")

    def write(self, handle: FileHandle, data: str, name: Optional[str] = None):
        """Write `data` as UTF-8. A failure is reported as `<name> failed`, or
        as a bare `write error` when no name is given.
        """
        try:
            handle.file.write(data.encode('utf-8'))
            # written data reaches the file at once; fclose does not flush
            handle.file.flush()
        except (OSError, ValueError) as e:
            handle.error = True
            raise BuiltinError(f"{name} failed: {e}" if name else 'write error')

    def _read_byte(self, handle: FileHandle) -> Optional[str]:
        data = handle.file.read(1)
        if not data:
            handle.eof = True
            return None
        return chr(data[0])

    def read_char(self, handle: FileHandle) -> Optional[str]:
        """Read one byte; None at end of input or on a read error."""
        try:
            return self._read_byte(handle)
        except (OSError, ValueError):
            handle.error = True
            return None

    def read_line(self, handle: FileHandle) -> Optional[str]:
        """Read up to and including a newline.

        Returns None only when end of input is reached before any byte
        was read.
        """
        chars = []
        while True:
            try:
                c = self._read_byte(handle)
            except (OSError, ValueError) as e:
                handle.error = True
                raise BuiltinError(f"fgets error: {e}")
            if c is None:
                break
            chars.append(c)
            if c == '\n':
                break
        if not chars and handle.eof:
            return None
        return ''.join(chars)

    def tell(self, handle: FileHandle) -> int:
        try:
            return handle.file.tell()
        except (OSError, ValueError):
            return -1

    def seek(self, handle: FileHandle, offset: int, whence: int) -> int:
        if whence not in SEEK_WHENCE:
            raise BuiltinError("invalid whence")
        try:
            handle.file.seek(offset, SEEK_WHENCE[whence])
        except (OSError, ValueError, OverflowError):
            handle.error = True
            return -1
        handle.eof = False
        return 0

    def rewind(self, handle: FileHandle):
        try:
            handle.file.seek(0)
        except (OSError, ValueError):
            # like C rewind, a failed seek is not reported
            pass
        handle.eof = False
        handle.error = False
