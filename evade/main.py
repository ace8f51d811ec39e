"""
Entry point for Evade.

Run the game with:
    python -m evade
    evade --difficulty hard --resolution 1600x900
"""

import argparse
import sys
from typing import List, Optional

import pygame

from evade import __version__, config
from evade.engine import GameEngine, InitializationError
from evade.logging import configure_logging, get_logger
from evade.models import Difficulty, Resolution

log = get_logger('main')

ERROR_SCREEN_SIZE = (640, 240)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='evade',
        description='Evade - outrun the 69, collect barriers, survive',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Play with stored settings
  evade

  # Hard difficulty in a bigger window
  evade --difficulty hard --resolution 1600x900

  # Fullscreen, no sound, verbose logs
  evade --fullscreen --mute --log-level DEBUG
        """
    )
    parser.add_argument(
        '--difficulty',
        choices=[d.value for d in Difficulty],
        default=None,
        help='Difficulty for this run (default: stored setting)'
    )
    parser.add_argument(
        '--resolution',
        type=Resolution.parse,
        default=None,
        help=f'Window size as WIDTHxHEIGHT (default: {config.SCREEN_WIDTH}x{config.SCREEN_HEIGHT})'
    )
    parser.add_argument(
        '--fullscreen',
        action='store_true',
        help='Run fullscreen at the desktop resolution'
    )
    parser.add_argument(
        '--mute',
        action='store_true',
        help='Disable sound for this run'
    )
    parser.add_argument(
        '--log-level',
        choices=['TRACE', 'DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL', 'OFF'],
        default=None,
        help='Default log level (overrides EVADE_LOG_LEVEL)'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )
    return parser


def show_error_screen(message: str) -> bool:
    """Show a minimal error window.

    Returns:
        True if the player pressed R to reload, False to exit
    """
    try:
        pygame.init()
        screen = pygame.display.set_mode(ERROR_SCREEN_SIZE)
    except pygame.error as e:
        log.error("No display for the error screen: %s", e)
        return False

    pygame.display.set_caption("Evade - error")
    font = pygame.font.Font(None, config.Fonts.SMALL)
    lines = ["Evade could not start.", message[:70], "", "Press R to reload or ESC to quit."]
    clock = pygame.time.Clock()

    while True:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_r:
                    return True
                if event.key == pygame.K_ESCAPE:
                    return False

        screen.fill(config.Colors.BACKGROUND)
        for i, line in enumerate(lines):
            text = font.render(line, True, config.Colors.ENEMY if i == 0 else config.Colors.UI_TEXT)
            screen.blit(text, (30, 40 + i * 36))
        pygame.display.flip()
        clock.tick(30)


def main(argv: Optional[List[str]] = None) -> int:
    """Parse arguments and run the game until it is closed."""
    args = build_parser().parse_args(argv)

    if args.log_level:
        configure_logging(level=args.log_level)

    difficulty = Difficulty(args.difficulty) if args.difficulty else None
    resolution = (args.resolution.width, args.resolution.height) if args.resolution else None

    engine = None
    while engine is None:
        try:
            engine = GameEngine(
                difficulty=difficulty,
                resolution=resolution,
                fullscreen=args.fullscreen,
                mute=args.mute,
            )
        except InitializationError as e:
            log.exception("Initialization failed")
            pygame.quit()
            reload = show_error_screen(str(e))
            pygame.quit()
            if not reload:
                return 1

    try:
        engine.run()
    finally:
        engine.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
