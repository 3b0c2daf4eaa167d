import pytest

from solcbind.ffi import CompilerAdapter
from solcbind.utilities.logging import GlobalLoggerSettings
from tests.constants import MOCK_RELEASE_INDEX
from tests.mock.compiler import MockCompilerModule


@pytest.fixture(autouse=True)
def reset_logging_settings():
    yield
    GlobalLoggerSettings.stop_console_logging()
    GlobalLoggerSettings.set_log_level("info")


@pytest.fixture(scope='function')
def mock_compiler_module():
    return MockCompilerModule()


@pytest.fixture(scope='function')
def compiler(mock_compiler_module):
    return CompilerAdapter(mock_compiler_module)


@pytest.fixture(scope='function')
def mock_release_index(mocker):
    """Patches requests so the release index is served from memory."""
    response = mocker.Mock(status_code=200)
    response.json.return_value = MOCK_RELEASE_INDEX
    return mocker.patch("requests.get", return_value=response)
