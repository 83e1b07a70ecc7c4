# Copyright 2020 Ram Rachum and collaborators.
# This program is distributed under the MIT license.

import logging
import pathlib

from underbar import constants
from underbar import logging_setup


def test_get_logs_folder(monkeypatch, tmp_path: pathlib.Path):
    monkeypatch.setattr(constants, 'read_config', lambda: {})
    assert constants.get_logs_folder() == constants.default_logs_folder
    assert constants.get_default_log_to_file() is False

    monkeypatch.setattr(constants, 'read_config',
                        lambda: {'logs_path': str(tmp_path), 'log_to_file': True})
    assert constants.get_logs_folder() == tmp_path
    assert constants.get_default_log_to_file() is True


def test_clean_logs_folder(tmp_path: pathlib.Path):
    for i in range(logging_setup.MAX_LOG_FILES_TO_KEEP + 20):
        (tmp_path / f'{i:04d}.log').write_text('')
    logging_setup.clean_logs_folder(tmp_path)
    assert len(tuple(tmp_path.iterdir())) == logging_setup.MAX_LOG_FILES_TO_KEEP - 1


def test_setup_log_to_file(monkeypatch, tmp_path: pathlib.Path):
    monkeypatch.setattr(constants, 'get_logs_folder', lambda: tmp_path)
    monkeypatch.setattr(logging_setup, 'did_logging_setup', False)
    monkeypatch.setattr(logging_setup, 'log_file_path', None)
    root_logger = logging.getLogger()
    old_handlers = root_logger.handlers[:]
    old_level = root_logger.level
    try:
        logging_setup.setup(log_to_file=True)
        assert logging_setup.did_logging_setup
        log_file_path = logging_setup.log_file_path
        assert log_file_path.parent == tmp_path
        logging.getLogger('underbar.test').debug('Hello from the test')
        for handler in root_logger.handlers:
            handler.flush()
        assert 'Hello from the test' in log_file_path.read_text()
    finally:
        for handler in root_logger.handlers[:]:
            if handler not in old_handlers:
                root_logger.removeHandler(handler)
                handler.close()
        for handler in old_handlers:
            if handler not in root_logger.handlers:
                root_logger.addHandler(handler)
        root_logger.setLevel(old_level)
