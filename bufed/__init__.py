"""bufed - a small terminal line editor."""

from .buffer import Buffer, BufCursor
from .buffer_editor import BufEditor
from .errors import ContractViolation
from .screen import Position, RecordingScreen, Screen, Size
from .window import Window, WindowHandle, WindowManager

__all__ = [
    'Buffer',
    'BufCursor',
    'BufEditor',
    'ContractViolation',
    'Position',
    'RecordingScreen',
    'Screen',
    'Size',
    'Window',
    'WindowHandle',
    'WindowManager',
]
