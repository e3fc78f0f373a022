"""
Display Module - Stone Forge

Output sinks for rendered screens. The state machine writes through this
interface and never touches the terminal directly.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional, TextIO
import sys


# =============================================================================
# CONFIGURATION
# =============================================================================

ANSI_CLEAR_SCREEN = '\x1b[2J\x1b[H'


# =============================================================================
# ABSTRACT BASE CLASS
# =============================================================================

class Display(ABC):
    """
    Abstract output sink.

    Supports writing one line of text and clearing what is visible.
    """

    @abstractmethod
    def write_line(self, text: str) -> None:
        """Write one line of text."""
        pass

    @abstractmethod
    def clear(self) -> None:
        """Clear the visible screen before a full render."""
        pass

    def write_lines(self, lines: Iterable[str]) -> None:
        for line in lines:
            self.write_line(line)


# =============================================================================
# CONSOLE IMPLEMENTATION
# =============================================================================

class ConsoleDisplay(Display):
    """Writes to a text stream, clearing it with ANSI escapes."""

    def __init__(self, stream: Optional[TextIO] = None, use_ansi: bool = True):
        self.stream = stream or sys.stdout
        self.use_ansi = use_ansi

    def write_line(self, text: str) -> None:
        self.stream.write(f"{text}\n")
        self.stream.flush()

    def clear(self) -> None:
        if self.use_ansi:
            self.stream.write(ANSI_CLEAR_SCREEN)
        else:
            # Dumb terminals: separate screens with a blank line
            self.stream.write('\n')
        self.stream.flush()


# =============================================================================
# BUFFERED DISPLAY (for testing without a terminal)
# =============================================================================

class BufferedDisplay(Display):
    """
    In-memory display that records everything written.

    Useful for:
    - Unit testing the state machine
    - Scripted sessions
    """

    def __init__(self):
        self.lines: List[str] = []
        self.clear_count = 0
        self.call_history: List[Dict] = []

    def _record_call(self, method: str, **kwargs):
        """Record method call for testing verification."""
        self.call_history.append({'method': method, 'args': kwargs})

    def write_line(self, text: str) -> None:
        self._record_call('write_line', text=text)
        self.lines.append(text)

    def clear(self) -> None:
        self._record_call('clear')
        self.clear_count += 1
        self.lines = []

    @property
    def screen(self) -> str:
        """Text currently visible, one line per row."""
        return "\n".join(self.lines)


# =============================================================================
# FACTORY FUNCTION
# =============================================================================

def create_display(display_type: str = 'console', **kwargs) -> Display:
    """
    Factory function to create the appropriate display.

    Args:
        display_type: 'console' or 'buffer'
        **kwargs: Display-specific configuration

    Returns:
        Configured Display instance
    """
    if display_type == 'console':
        return ConsoleDisplay(**kwargs)
    elif display_type == 'buffer':
        return BufferedDisplay(**kwargs)
    else:
        raise ValueError(f"Unknown display type: {display_type}")
