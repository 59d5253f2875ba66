from __future__ import annotations

from typing import Any

import hypothesis.strategies as st
import pytest
from hypothesis import HealthCheck, given, settings

from storage_helper import (
    DatabaseConfig,
    DatabaseStorage,
    PreferencesStorage,
    StorageLogger,
    StorageManager,
)

json_values = st.recursive(
    st.none()
    | st.booleans()
    | st.integers(min_value=-(2**53), max_value=2**53)
    | st.text(max_size=20),
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(st.text(max_size=8), children, max_size=4),
    max_leaves=12,
)
keys = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc")), min_size=1, max_size=16
)


@pytest.fixture(scope="module", params=["preferences", "database"])
def shared_manager(request):
    logger = StorageLogger(enabled=False)
    if request.param == "preferences":
        manager = StorageManager(PreferencesStorage(), logger=logger)
    else:
        manager = StorageManager(DatabaseStorage(DatabaseConfig()), logger=logger)
    yield manager
    manager.close()


@given(value=json_values, key=keys)
@settings(
    max_examples=40,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
def test_save_then_fetch_returns_value(shared_manager, value: Any, key: str):
    shared_manager.save(value, key)

    assert shared_manager.fetch(key, Any) == value


@given(first=json_values, second=json_values, key=keys)
@settings(
    max_examples=30,
    deadline=None,
    suppress_health_check=[HealthCheck.function_scoped_fixture],
)
def test_last_write_wins(shared_manager, first: Any, second: Any, key: str):
    shared_manager.save(first, key)
    shared_manager.save(second, key)

    assert shared_manager.fetch(key, Any) == second
