import logging

logger = logging.getLogger('cr_dynamics')
handler = logging.StreamHandler()
handler.set_name('cr_dynamics.console')
formatter = logging.Formatter('%(asctime)s %(levelname)s %(message)s')
handler.setFormatter(formatter)
handler.setLevel(logging.WARNING)
logger.addHandler(handler)
logger.setLevel(logging.INFO)


def log_to_file(file_name, level=logging.INFO, console=False):
    """ Send sweep and solver log output to a file.

    Parameters
    ----------
    file_name : str
        Path to file for storing log output
    level : int, optional
        Log level value (0-50), use logging.DEBUG to see why rows failed
    console : bool, optional
        When True, keep logging to the console
    """

    fh = logging.FileHandler(file_name)
    fh.setFormatter(formatter)
    fh.setLevel(level)
    logger.addHandler(fh)
    if not console:
        for console_handler in [h for h in logger.handlers if h.get_name() == 'cr_dynamics.console']:
            logger.removeHandler(console_handler)
    return fh
