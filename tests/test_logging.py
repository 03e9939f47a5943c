import logging
from hvacalc.logging import ModuleLogger, PACKAGE_LOGGER


def test_module_logger():
    logger = ModuleLogger.get_logger('hvacalc.tests.module')
    assert ModuleLogger.get_logger('hvacalc.tests.module') is logger
    assert logger.level == ModuleLogger.WARNING
    assert not logger.handlers
    assert len(logging.getLogger(PACKAGE_LOGGER).handlers) >= 1


def test_log_to_file(tmp_path):
    logger = ModuleLogger.get_logger('hvacalc.tests.file')
    file_path = tmp_path / 'hvacalc.log'
    handler = ModuleLogger.log_to_file(file_path)
    try:
        logger.warning('airflow too low')
    finally:
        logging.getLogger(PACKAGE_LOGGER).removeHandler(handler)
        handler.close()
    text = file_path.read_text(encoding='utf-8')
    assert '| hvacalc.tests.file | WARNING] airflow too low' in text


def test_set_level():
    logger = ModuleLogger.get_logger('hvacalc.tests.level')
    try:
        ModuleLogger.set_level(ModuleLogger.DEBUG)
        assert logger.level == ModuleLogger.DEBUG
    finally:
        ModuleLogger.set_level(ModuleLogger.WARNING)
