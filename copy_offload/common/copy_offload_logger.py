import logging
import sys

from copy_offload.common.config import config

logger_properties = {
    'log_level': config.logging.level,
    'entry': '%(asctime)s %(levelname)s\t[%(thread)d] [%(threadName)s] '
             '(%(filename)s:%(funcName)s:%(lineno)d) - %(message)s'
}


def get_stdout_logger():
    copy_offload_logger = logging.getLogger("copy_offload_logger")

    if not getattr(copy_offload_logger, 'handler_set', None):
        copy_offload_logger.setLevel(logger_properties['log_level'])
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(logging.DEBUG)
        formatter = logging.Formatter(logger_properties['entry'])
        handler.setFormatter(formatter)
        copy_offload_logger.addHandler(handler)

        copy_offload_logger.handler_set = True

    return copy_offload_logger


def set_log_level(log_level_to_set):
    """
    In order to set non-default log level this function should be called before first cal of get_stdout_logger
    :param log_level_to_set:
    """
    if log_level_to_set:
        logger_properties['log_level'] = log_level_to_set.upper()
        copy_offload_logger = logging.getLogger("copy_offload_logger")
        copy_offload_logger.setLevel(logger_properties['log_level'])
