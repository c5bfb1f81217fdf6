"""
Process-wide fault boundary.

An unexpected fault must not leave the service hung: it is logged as
[FATAL] and the process exits with status 1 so the process manager can
restart it.
"""

import logging
import os
import sys
import threading

logger = logging.getLogger(__name__)

EXIT_CODE = 1


def _exit(code: int = EXIT_CODE) -> None:
    logging.shutdown()
    os._exit(code)


def handle_uncaught_exception(exc_type, exc_value, exc_tb) -> None:
    if issubclass(exc_type, KeyboardInterrupt):
        sys.__excepthook__(exc_type, exc_value, exc_tb)
        return
    logger.critical("[FATAL] Uncaught Exception:", exc_info=(exc_type, exc_value, exc_tb))
    _exit()


def handle_thread_exception(args) -> None:
    if args.exc_type is SystemExit:
        return
    logger.critical(
        f"[FATAL] Uncaught Exception in thread {getattr(args.thread, 'name', '?')}:",
        exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
    )
    _exit()


def handle_loop_exception(loop, context) -> None:
    error = context.get("exception")
    message = context.get("message", "unhandled error in event loop")
    if error is not None:
        logger.critical(f"[FATAL] Unhandled Rejection: {message}", exc_info=error)
    else:
        logger.critical(f"[FATAL] Unhandled Rejection: {message}")
    _exit()


def install() -> None:
    from domgrab_core.executor import set_loop_exception_handler

    sys.excepthook = handle_uncaught_exception
    threading.excepthook = handle_thread_exception
    set_loop_exception_handler(handle_loop_exception)
