"""
Console front end for Stone Forge.

Reads single keys from the terminal and feeds them to the state machine
until the quit key is pressed.
"""

from typing import Callable, List, Optional
import argparse
import logging
import sys

from display import create_display
from model import new_model
from state_machine import StateMachine

logger = logging.getLogger(__name__)

# Platform key readers; each is None where unsupported
try:
    import msvcrt
except ImportError:
    msvcrt = None

try:
    import termios
    import tty
except ImportError:
    termios = None
    tty = None


# =============================================================================
# CONFIGURATION
# =============================================================================

QUIT_KEY = 'E'

CONSOLE_CONFIG = {
    'log_level': 'WARNING',
    'log_format': '%(asctime)s %(levelname)s %(name)s: %(message)s',
    'use_ansi': True,
}


# =============================================================================
# KEY INPUT
# =============================================================================

def read_key() -> str:
    """
    Read one character without waiting for Enter.

    End of input is reported as QUIT_KEY.
    """
    if msvcrt is not None:
        return msvcrt.getwch()

    if termios is not None and sys.stdin.isatty():
        fd = sys.stdin.fileno()
        old_settings = termios.tcgetattr(fd)
        try:
            tty.setraw(fd)
            key = sys.stdin.read(1)
        finally:
            termios.tcsetattr(fd, termios.TCSADRAIN, old_settings)
        # Raw mode swallows Ctrl+C
        if key == '\x03':
            raise KeyboardInterrupt
        return key or QUIT_KEY

    # Piped input: one key per line
    line = sys.stdin.readline()
    if not line:
        return QUIT_KEY
    return line[0]


# =============================================================================
# PROCESSOR
# =============================================================================

class Processor:
    """Runs the key loop around a StateMachine."""

    def __init__(
        self,
        state_machine: Optional[StateMachine] = None,
        key_reader: Callable[[], str] = read_key
    ):
        self.state_machine = state_machine or StateMachine()
        self.key_reader = key_reader

    def run(self) -> int:
        """
        Process keys until QUIT_KEY.

        Returns:
            Number of keys handed to the state machine
        """
        processed = 0
        while True:
            key = self.key_reader()
            if key == QUIT_KEY:
                break
            self.state_machine.process(key)
            processed += 1

        logger.info("Quit after %d keys", processed)
        sm = self.state_machine
        sm.display.write_lines(sm.renderer.render_lines('farewell.txt', {}))
        return processed


# =============================================================================
# MAIN ENTRY
# =============================================================================

def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog='stone-forge',
        description="Improve the three features of the stone, ten attempts each.",
    )
    parser.add_argument('--seed', type=int, default=None,
                        help="Seed for the attempt outcomes")
    parser.add_argument('--log-level', default=CONSOLE_CONFIG['log_level'],
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help="Logging level (logs go to stderr)")
    parser.add_argument('--no-ansi', action='store_true',
                        help="Do not clear the screen with ANSI escapes")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    logging.basicConfig(level=args.log_level, format=CONSOLE_CONFIG['log_format'])

    display = create_display('console', use_ansi=CONSOLE_CONFIG['use_ansi'] and not args.no_ansi)
    state_machine = StateMachine(model=new_model(seed=args.seed), display=display)
    Processor(state_machine).run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
