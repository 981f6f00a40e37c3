import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import Any

from colorama import Fore, Style, init

from guesthouse.config import COUNT_FILES, MAX_BYTES, settings


init(strip=False, autoreset=True)

if not sys.stdout.isatty():
    os.environ.setdefault('FORCE_COLOR', '1')
    os.environ.setdefault('CLICOLOR_FORCE', '1')
    if 'TERM' not in os.environ:
        os.environ['TERM'] = 'xterm-256color'


class ContextFilter(logging.Filter):
    """Фильтр для добавления контекста запроса в логи.

    Контекст приходит в extra={'context': ...}, например
    'PROPERTY p-1' или 'ROOM p-1/r-7'. Добавляет plain и colored версии.
    """

    CONTEXT_COLOR = {
        'PROPERTY': Fore.GREEN,
        'ROOM': Fore.YELLOW,
        'BOOKING': Fore.BLUE,
    }

    def filter(self, record: Any) -> bool:
        """Добавляет контекст в запись лога.

        Args:
            record: Запись лога

        Returns:
            True (фильтр всегда пропускает записи)

        """
        context = getattr(record, 'context', None)

        if context is None or context == 'SYSTEM' or not isinstance(
            context,
            str,
        ):
            record.context_plain = 'SYSTEM'
            record.context_colored = f'{Fore.MAGENTA}SYSTEM{Style.RESET_ALL}'
        else:
            context_clean = context.strip()
            record.context_plain = context_clean
            kind = context_clean.split(' ', 1)[0]
            color = self.CONTEXT_COLOR.get(kind, Fore.CYAN)
            record.context_colored = (
                f'{color}{context_clean}{Style.RESET_ALL}'
            )

        return True


class ColoredFormatter(logging.Formatter):
    """Форматтер с цветами ANSI для консольного вывода."""

    LEVEL_COLORS = {
        logging.INFO: Fore.GREEN,
        logging.WARNING: Fore.YELLOW,
        logging.ERROR: Fore.RED,
        logging.CRITICAL: Fore.MAGENTA,
    }

    def format(self, record: Any) -> str:
        """Добавляет цвет к record.levelname."""
        level_color = self.LEVEL_COLORS.get(record.levelno, Fore.WHITE)
        levelname = record.levelname
        record.levelname = f'{level_color}{levelname}{Style.RESET_ALL}'
        try:
            return super().format(record)
        finally:
            # Запись общая для всех хендлеров, файл получает чистый уровень
            record.levelname = levelname


logs_dir = settings.logging.DIR
os.makedirs(logs_dir, exist_ok=True)
logs_path = os.path.join(logs_dir, 'working.log')

file_handler = RotatingFileHandler(
    logs_path,
    maxBytes=MAX_BYTES,
    backupCount=COUNT_FILES,
    encoding='utf-8',
)

console_handler = logging.StreamHandler(sys.stdout)

file_formatter = logging.Formatter(
    fmt='%(asctime)s | %(levelname)s | %(context_plain)s | %(message)s',
    datefmt='%d-%m-%Y %H:%M:%S',
)

console_formatter = ColoredFormatter(
    fmt='%(asctime)s | %(levelname)s | %(context_colored)s | %(message)s',
    datefmt='%d-%m-%Y %H:%M:%S',
)

console_handler.setFormatter(console_formatter)
file_handler.setFormatter(file_formatter)

logger = logging.getLogger('app')
logger.setLevel(settings.logging.LEVEL.upper())

logger.addHandler(file_handler)
logger.addHandler(console_handler)
logger.addFilter(ContextFilter())

logger.propagate = False
