# bnfuzzer/logger.py

import logging
import os
import sys
from logging.handlers import RotatingFileHandler

import colorlog


def setup_bnfuzzer_logger(
    log_level=logging.INFO,
    log_to_file=False,
    log_to_console=True,
    max_bytes=5 * 1024 * 1024,
    backup_count=5,
    use_color=True,
    log_dir="~/.bnfuzzer"
):
    logger = logging.getLogger("bnfuzzer")
    logger.setLevel(log_level)

    # Clear existing handlers if rerun
    if logger.hasHandlers():
        logger.handlers.clear()

    # Console goes to stderr, stdout carries the generated messages
    if log_to_console:
        ch = logging.StreamHandler(sys.stderr)
        ch.setLevel(log_level)
        if use_color:
            ch.setFormatter(colorlog.ColoredFormatter(
                fmt="%(log_color)s[%(levelname)s]%(reset)s %(name)s - %(message)s",
                log_colors={
                    "DEBUG": "cyan",
                    "INFO": "green",
                    "WARNING": "yellow",
                    "ERROR": "red",
                    "CRITICAL": "bold_red",
                },
            ))
        else:
            ch.setFormatter(logging.Formatter("[%(levelname)s] %(name)s - %(message)s"))
        logger.addHandler(ch)

    # file handler (rotating)
    if log_to_file:
        log_dir = os.path.expanduser(log_dir)
        os.makedirs(log_dir, exist_ok=True)
        fh = RotatingFileHandler(
            os.path.join(log_dir, "bnfuzzer.log"),
            maxBytes=max_bytes,
            backupCount=backup_count
        )
        fh.setLevel(log_level)
        file_fmt = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        fh.setFormatter(file_fmt)
        logger.addHandler(fh)

    logger.propagate = False
    logger.debug("BNFuzzer logger configured. Color: %s, log_to_file: %s", use_color, log_to_file)
    return logger
