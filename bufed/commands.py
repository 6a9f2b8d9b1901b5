"""Command pattern implementation for editor-level actions.

Editing keys go straight to :class:`bufed.buffer_editor.BufEditor`; the
registry only holds commands that act on the session (save, quit, redraw).
"""

from abc import ABC, abstractmethod
from typing import Dict, Tuple, Optional, TYPE_CHECKING
from .keyboard import KeyType

if TYPE_CHECKING:
    from .editor import Editor
    from .keyboard import KeyEvent


class EditorCommand(ABC):
    """Base class for editor commands."""

    @abstractmethod
    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> None:
        """Execute the command.

        Args:
            editor: Editor instance
            key_event: The key event that triggered this command
        """


class SaveCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.handle_save()


class QuitCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.handle_quit()


class RedrawCommand(EditorCommand):
    def execute(self, editor, key_event):
        editor.status_message = None


class CommandRegistry:
    """Maps key combinations to session commands."""

    def __init__(self):
        self._commands: Dict[Tuple[KeyType, str], EditorCommand] = {}
        self._register_default_commands()

    def _register_default_commands(self):
        self.register((KeyType.CTRL, 's'), SaveCommand())
        self.register((KeyType.CTRL, 'q'), QuitCommand())
        self.register((KeyType.CTRL, 'l'), RedrawCommand())

    def register(self, key: Tuple[KeyType, str], command: EditorCommand):
        """Register a command for a key combination."""
        self._commands[key] = command

    def get_command(self, key_type: KeyType, value: str) -> Optional[EditorCommand]:
        return self._commands.get((key_type, value))

    def execute(self, editor: 'Editor', key_event: 'KeyEvent') -> bool:
        """Run the command bound to ``key_event``.

        Returns:
            True if a command handled the event
        """
        command = self.get_command(key_event.key_type, key_event.value)
        if command is None:
            return False
        command.execute(editor, key_event)
        return True
