from guesthouse.common.logging.config import logger
from guesthouse.common.logging.decorators import log_action
from guesthouse.common.logging.system_logger import (
    initialize_system_logging,
    log_system_api_request,
    log_system_error,
    log_system_event,
    system_logger,
)


__all__ = [
    'logger',
    'log_action',
    'system_logger',
    'log_system_api_request',
    'log_system_error',
    'log_system_event',
    'initialize_system_logging',
]
