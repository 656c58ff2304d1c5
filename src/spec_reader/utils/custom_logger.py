import logging
import os
from typing import Optional


# define a function that will return a logger object

def get_logger(name: str = "spec_reader", level: str = "INFO", log_file: Optional[str] = None) -> logging.Logger:
    # Set up logging configuration
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        logging.basicConfig(
            filename=log_file,
            level=level,
            format='%(asctime)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    # Create a logger instance
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
