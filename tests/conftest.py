# RC5 Core Test Configuration
# This file contains test settings and fixtures

import pytest
import sys
import os

# Add python-core to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'python-core'))


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return os.path.dirname(os.path.dirname(__file__))


@pytest.fixture
def rc5_32_engine():
    """RC5-32/12/16 engine, the reference parameters."""
    from rc5_core.crypto.engine import RC5Engine
    return RC5Engine(word_size=32, num_rounds=12, key_size=16)


@pytest.fixture
def reference_key():
    """Key of the first RC5-32/12/16 reference vector."""
    return bytes(range(16))
