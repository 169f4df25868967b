from __future__ import annotations

from typing import Callable, Iterable, Iterator, Sequence

import pytest

from datastore.factory import build_default_store
from services.sync import build_default_sync_service
from settings import get_settings

_HEADER_ROWS = (
    "<tr><td colspan='4'>J0102466 - Kaptármérleg</td></tr>"
    "<tr><th>Dátum</th><th>Súly (kg)</th><th>Akku (V)</th><th>Hőm. (°C)</th></tr>"
)

_LAYOUT_TABLE = (
    "<table><tr><td>Menu</td><td>Home</td><td>Scales</td><td>Logout</td></tr>"
    "<tr><td>2020.01.01. 00:00:00</td><td>1</td><td>2</td><td>3</td></tr>"
    "<tr><td>2020.01.02. 00:00:00</td><td>1</td><td>2</td><td>3</td></tr></table>"
)


def _data_row(cells: Sequence[str]) -> str:
    return "<tr>" + "".join(f"<td> {cell} </td>" for cell in cells) + "</tr>"


def render_page(rows: Iterable[Sequence[str]], with_layout_table: bool = True) -> str:
    body = "".join(_data_row(cells) for cells in rows)
    layout = _LAYOUT_TABLE if with_layout_table else ""
    return (
        "<html><head><title>Mérleg</title></head><body>"
        f"{layout}<table>{_HEADER_ROWS}{body}</table>"
        "</body></html>"
    )


@pytest.fixture
def page_builder() -> Callable[..., str]:
    return render_page


@pytest.fixture(autouse=True)
def clear_factory_caches() -> Iterator[None]:
    caches = (get_settings, build_default_store, build_default_sync_service)
    for cache in caches:
        cache.cache_clear()
    yield
    for cache in caches:
        cache.cache_clear()
