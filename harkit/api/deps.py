"""
FastAPI dependencies for shared resources.

The store is opened once per process (see ``harkit.api.main.lifespan``)
so an ephemeral store keeps its contents across requests.
"""

from fastapi import Request

from harkit.codegen.headers import HeaderFilterSettings
from harkit.core.store import KeyValueStore
from harkit.services.page_map import PageMapRepository


def get_store(request: Request) -> KeyValueStore:
    return request.app.state.store


def get_header_settings(request: Request) -> HeaderFilterSettings:
    return HeaderFilterSettings(get_store(request))


def get_page_map(request: Request) -> PageMapRepository:
    return PageMapRepository(get_store(request))
