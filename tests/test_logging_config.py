import logging

from logging_config import APP_LOGGERS, setup_logging


def test_script_logger_gets_the_handlers(tmp_path):
    setup_logging("DEBUG", str(tmp_path / "app.log"))
    script = logging.getLogger("__main__")
    assert "__main__" in APP_LOGGERS
    assert script.level == logging.DEBUG
    assert len(script.handlers) == 2


def test_rerunning_setup_closes_the_old_file_handler(tmp_path):
    setup_logging("INFO", str(tmp_path / "first.log"))
    old = [h for h in logging.getLogger("main").handlers if isinstance(h, logging.FileHandler)]
    assert len(old) == 1

    setup_logging("INFO")
    handlers = logging.getLogger("main").handlers
    assert len(handlers) == 1
    assert not any(isinstance(h, logging.FileHandler) for h in handlers)
    assert old[0].stream is None
