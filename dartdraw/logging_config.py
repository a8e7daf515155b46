"""Logging setup for the tournament tools CLI."""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

ROOT_LOGGER = 'dartdraw'


def setup_logging(
    level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    log_to_file: bool = True,
    debug_modules: Iterable[str] = (),
) -> logging.Logger:
    """
    Configure the 'dartdraw' logger tree.

    Console messages go to stderr so CLI tables on stdout stay clean. The
    optional log file keeps a dated record of draws and store writes.

    Args:
        level: Level for the whole tree (default: INFO)
        log_dir: Directory for the draw log (default: ./logs)
        log_to_file: Also write a draw log file (default: True)
        debug_modules: Child modules to force to DEBUG, e.g. ('store', 'session')

    Returns:
        The configured 'dartdraw' logger

    Example:
        from dartdraw.logging_config import setup_logging
        setup_logging(logging.WARNING, log_to_file=False, debug_modules=['store'])
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(logging.DEBUG if debug_modules else level)
    logger.handlers = []
    logger.propagate = False

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter('%(levelname)s [%(name)s]: %(message)s'))
    logger.addHandler(console_handler)

    if log_to_file:
        log_dir = Path(log_dir or 'logs')
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'draws_{datetime.now().strftime("%Y%m%d")}.log'

        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setFormatter(
            logging.Formatter(
                '%(asctime)s %(levelname)-7s %(name)s:%(lineno)d %(message)s',
                datefmt='%Y-%m-%d %H:%M:%S',
            )
        )
        logger.addHandler(file_handler)

    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG if debug_modules else level)

    # Modules not singled out stay at the requested level
    if debug_modules:
        selected = {f'{ROOT_LOGGER}.{name}' for name in debug_modules}
        for name in ('assembler', 'groups', 'payouts', 'roster', 'session', 'store',
                     'strategies', 'utils', 'excel_export'):
            child = f'{ROOT_LOGGER}.{name}'
            logging.getLogger(child).setLevel(logging.DEBUG if child in selected else level)

    return logger
