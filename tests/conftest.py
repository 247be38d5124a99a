from unittest.mock import Mock

import pytest

from sqlshape import MetaRegistry, Session
from sqlshape.engine import BufferedRows
from sqlshape.protocols import QueryExecutor
from sqlshape.settings import DialectSettings


@pytest.fixture
def registry():
    """A fresh registry so tests never share cached descriptors."""
    return MetaRegistry()


@pytest.fixture
def session(registry):
    return Session(dialect=DialectSettings(), registry=registry)


@pytest.fixture
def executor():
    executor = Mock(spec=QueryExecutor)
    executor.query.return_value = BufferedRows([], [])
    return executor


@pytest.fixture
def db_session(executor, registry):
    """Session backed by a mocked executor."""
    return Session(executor=executor, dialect=DialectSettings(), registry=registry)
