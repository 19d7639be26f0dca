"""
Shared fixtures

Record is a minimal in-memory entity implementing the StreamableEntity
protocol, and `views` is a ViewRegistry with the partials used across tests.
"""

from typing import Any, Optional

import pytest

from turbostream.lib.views import ViewRegistry


class Record:
    """In-memory entity with controllable lifecycle flags"""

    def __init__(
        self,
        type_name: str = "TestModel",
        pk: Optional[Any] = 1,
        persisted: bool = True,
        trashed: bool = False,
        just_created: bool = False,
        name: str = "hello",
    ) -> None:
        self.type_name = type_name
        self.pk = pk
        self.persisted = persisted
        self.trashed = trashed
        self.just_created = just_created
        self.name = name

    def exists(self) -> bool:
        return self.persisted

    def isSoftDeleted(self) -> bool:
        return self.trashed

    def wasJustCreated(self) -> bool:
        return self.just_created

    def primaryKey(self) -> Any:
        return self.pk

    def typeName(self) -> str:
        return self.type_name


@pytest.fixture
def record_make():
    """Factory for Record entities"""
    return Record


@pytest.fixture
def views():
    """View registry with the test_model partial"""
    registry = ViewRegistry()

    @registry.view_register('test_models/_test_model')
    def test_model(data):
        model = data['testModel']
        return f'<div id="test_model_{model.pk}">{model.name}</div>'

    @registry.view_register('flash', aliases=['layouts/_flash'])
    def flash(data):
        return f"<p>{data.get('message', '')}</p>"

    return registry


FOUR_STREAMS = """
<turbo-stream action="append" target="item_1">
    <template>
        <h1>First Item</h1>
    </template>
</turbo-stream>

<turbo-stream action="append" target="item_2">
    <template>
        <h1>Second Item</h1>
    </template>
</turbo-stream>

<turbo-stream action="remove" target="item_3">
</turbo-stream>

<turbo-stream action="replace" targets=".items">
    <template>
        <h1>new Item</h1>
    </template>
</turbo-stream>
"""


@pytest.fixture
def four_streams():
    """Response body with two appends, a remove and a multi-target replace"""
    return FOUR_STREAMS
