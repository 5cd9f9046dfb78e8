import logging

from fallpy.logger import LOG_FORMAT, ModuleNameFormatter, setup_logging


def test_formatter_shows_only_the_module_name():
    formatter = ModuleNameFormatter(LOG_FORMAT, datefmt="%H:%M:%S")
    record = logging.LogRecord("fallpy.engine", logging.INFO, __file__, 1,
                               "Game over at frame %d", (32,), None)
    line = formatter.format(record)
    assert line.endswith("[I] engine: Game over at frame 32")


def test_setup_logging_installs_one_handler():
    setup_logging("debug")
    setup_logging("warning")
    root = logging.getLogger("fallpy")
    assert root.level == logging.WARNING
    assert len(root.handlers) == 1
    assert not root.propagate
