"""
Logging configuration and utilities.
"""

import logging
import os
from logging.handlers import RotatingFileHandler
import sys
from typing import Optional

LOGGER_NAME = 'urlfreezer'

def setup_logging(
    debug: bool = False,
    log_dir: Optional[str] = None,
    filename: str = "urlfreezer.log"
) -> logging.Logger:
    """
    Configure logging with console and optional file handlers.
    
    Args:
        debug: Enable debug logging
        log_dir: Directory for log files, no file logging when None
        filename: Log filename
        
    Returns:
        logging.Logger: Configured logger
    """
    logger = logging.getLogger(LOGGER_NAME)
    level = logging.DEBUG if debug else logging.INFO
    logger.setLevel(level)
    
    # Clear any existing handlers
    logger.handlers = []
    
    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(name)s - %(message)s'
    )
    
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
        file_handler = RotatingFileHandler(
            os.path.join(log_dir, filename),
            maxBytes=1024 * 1024,  # 1MB
            backupCount=5
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(detailed_formatter)
        logger.addHandler(file_handler)
    
    # stdout may carry CSV output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(detailed_formatter)
    logger.addHandler(console_handler)
    
    # Prevent propagation to root logger
    logger.propagate = False
    
    return logger

def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance with the given name.
    
    Args:
        name: Logger name (usually __name__)
        
    Returns:
        logging.Logger: Logger instance
    """
    if name == LOGGER_NAME or name.startswith(LOGGER_NAME + '.'):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
