import logging

import pytnseq

logging.basicConfig(
    format='[%(asctime)-15s]  %(message)s',
    level=logging.INFO,
    datefmt='%Y-%m-%d %H:%M:%S')


def print_header(logger, command=None):
    version = pytnseq.__version__

    if command is None:
        header_str = ' pytnseq ({}) '.format(version)
    else:
        header_str = ' pytnseq {} ({}) '.format(command, version)

    logger.info('{:-^60}'.format(header_str))


def print_footer(logger):
    logger.info('{:-^60}'.format(' Done! '))
