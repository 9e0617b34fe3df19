import logging
from unittest.mock import MagicMock

import pytest

from tests.helpers import make_csr_pem
from zerossl import ZeroSSLClient


@pytest.fixture
def csr_pem():
    return make_csr_pem()


@pytest.fixture
def logger():
    log = logging.getLogger("zerossl.test")
    log.addHandler(logging.NullHandler())
    return log


@pytest.fixture
def session():
    return MagicMock()


@pytest.fixture
def client(session, logger):
    return ZeroSSLClient("secret-key", "https://api.zerossl.test", logger=logger, session=session)
