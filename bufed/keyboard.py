"""Keyboard input handling using curtsies-style tokens."""

from typing import Iterator, Optional
from dataclasses import dataclass
from enum import Enum


class KeyType(Enum):
    """Types of key events."""
    REGULAR = "regular"
    ALT = "alt"
    CTRL = "ctrl"
    SPECIAL = "special"


@dataclass
class KeyEvent:
    """Represents a parsed keyboard event."""
    key_type: KeyType
    value: str  # The base key (e.g., 'a', 'left', 'backspace')
    raw: str = ''  # The raw key token
    is_alt: bool = False
    is_ctrl: bool = False
    is_sequence: bool = False

    @classmethod
    def char(cls, ch: str) -> 'KeyEvent':
        return cls(key_type=KeyType.REGULAR, value=ch, raw=ch)

    @classmethod
    def special(cls, name: str) -> 'KeyEvent':
        return cls(key_type=KeyType.SPECIAL, value=name, raw=f'<{name.upper()}>', is_sequence=True)

    @classmethod
    def ctrl(cls, ch: str) -> 'KeyEvent':
        return cls(key_type=KeyType.CTRL, value=ch, raw=f'<Ctrl-{ch}>', is_ctrl=True)

    def is_special(self, name: str) -> bool:
        return self.key_type == KeyType.SPECIAL and self.value == name


# Special key names understood by the editor
SPECIAL_KEYS = {
    'left', 'right', 'up', 'down', 'home', 'end', 'enter', 'backspace',
    'delete', 'page_up', 'page_down', 'insert',
}


class KeyboardHandler:
    """Turns terminal key tokens into KeyEvents."""

    def __init__(self, terminal_interface):
        """Initialize with a terminal interface."""
        self.terminal = terminal_interface

    def get_key_event(self, timeout: Optional[float] = None) -> Optional[KeyEvent]:
        """Get next key event, or None on timeout or end of input."""
        key = self.terminal.get_key(timeout)
        if not key:
            return None
        return self.parse_key(key)

    def events(self) -> Iterator[KeyEvent]:
        """Yield key events, blocking for each, until input ends."""
        while True:
            event = self.get_key_event(timeout=None)
            if event is None:
                return
            yield event

    def parse_key(self, key) -> KeyEvent:
        """Parse a curtsies token or raw character into a KeyEvent.

        Args:
            key: curtsies key name such as '<LEFT>' or '<Ctrl-s>', or a
                raw character string

        Returns:
            Parsed KeyEvent
        """
        key_str = str(key)

        # Curtsies-style key names like '<LEFT>', '<Ctrl-x>', '<Esc+b>'
        if len(key_str) > 2 and key_str.startswith('<') and key_str.endswith('>'):
            return self._parse_token(key_str)

        if len(key_str) == 1:
            o = ord(key_str)
            # DEL and Ctrl-H are what terminals send for backspace
            if o in (0x7f, 0x08):
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str)
            if 1 <= o <= 26:  # Ctrl-A .. Ctrl-Z (exclude ESC=27)
                ch = chr(ord('a') + o - 1)
                # Map Ctrl-J/Ctrl-M to enter, consistent with terminals
                if ch in ('j', 'm'):
                    return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str)
                return KeyEvent(key_type=KeyType.CTRL, value=ch, raw=key_str, is_ctrl=True)
            if key_str == '\x1b':
                return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw=key_str)

        return KeyEvent(key_type=KeyType.REGULAR, value=key_str, raw=key_str)

    def _parse_token(self, key_str: str) -> KeyEvent:
        name = key_str[1:-1]
        # Support both '-' and '+' as modifier separators (e.g., '<Esc+u>')
        lower = name.lower().replace('+', '-')
        parts = lower.split('-') if len(lower) > 1 else [lower]
        base = parts[-1]
        mods = set(parts[:-1])
        if base == '' and len(parts) > 1:
            # '<Ctrl-->' style tokens end in the separator itself
            base = '-'
            mods = set(parts[:-2])
        if 'meta' in mods or 'esc' in mods:
            mods.add('alt')
        if base in ('pageup', 'page_up'):
            base = 'page_up'
        elif base in ('pagedown', 'page_down'):
            base = 'page_down'

        if base in ('space', 'spacebar', 'spc') and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value=' ', raw=' ')
        if base == 'tab' and not mods:
            return KeyEvent(key_type=KeyType.REGULAR, value='\t', raw='\t')
        if 'ctrl' in mods and len(base) == 1:
            if base in ('j', 'm'):
                return KeyEvent(key_type=KeyType.SPECIAL, value='enter', raw=key_str, is_sequence=True)
            if base == 'h':
                return KeyEvent(key_type=KeyType.SPECIAL, value='backspace', raw=key_str, is_sequence=True)
            return KeyEvent(key_type=KeyType.CTRL, value=base, raw=key_str, is_ctrl=True)
        if 'alt' in mods and (base in SPECIAL_KEYS or len(base) == 1):
            return KeyEvent(key_type=KeyType.ALT, value=base, raw=key_str, is_alt=True)
        if base in SPECIAL_KEYS:
            return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
        if base in ('esc', 'escape'):
            return KeyEvent(key_type=KeyType.SPECIAL, value='escape', raw='\x1b')
        # Unknown tokens (function keys, etc.) stay special
        return KeyEvent(key_type=KeyType.SPECIAL, value=base, raw=key_str, is_sequence=True)
