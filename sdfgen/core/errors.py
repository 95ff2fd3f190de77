"""
Errors raised while reading and writing image files
"""

from pathlib import Path
from typing import Optional, Union


class ImageIOError(OSError):
    """An image file could not be opened, decoded, created or encoded"""

    def __init__(self, operation: str, path: Union[str, Path], cause: Optional[BaseException] = None):
        self.operation = operation
        self.path = Path(path)
        self.cause = cause
        message = f'file "{self.path}" could not be {_past_tense(operation)}'
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


class ImageFormatError(ValueError):
    """File extension is not a supported image format"""


def _past_tense(operation: str) -> str:
    return operation + ('d' if operation.endswith('e') else 'ed')
