"""
Root-level conftest: puts the project root on sys.path for the tests
package and runs every async test on pytest-asyncio's auto mode.
"""
import logging

from token_launcher.logging_config import DEFAULT_LOG_FORMAT


def pytest_configure(config):
    config.option.asyncio_mode = "auto"
    config.addinivalue_line("markers", "asyncio: coroutine test run by pytest-asyncio")

    # Records from token_launcher show up in failure reports
    logging.basicConfig(level=logging.DEBUG, format=DEFAULT_LOG_FORMAT)
