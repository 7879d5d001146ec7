"""
Pytest conftest: keep the shared "folder-share" ErrorBuffer empty between
tests so /status assertions do not see warnings logged by earlier tests.
"""
import pytest

from folder_share.logging_utils import error_buffer


@pytest.fixture(autouse=True)
def _clear_error_buffer():
    error_buffer.clear()
    yield
    error_buffer.clear()
