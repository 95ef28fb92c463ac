from __future__ import annotations
import logging
from dash import Output, Input
from urllib.parse import unquote
from app_instance import app
from api import get_client
from common import not_found_layout
from pages import page_records, page_record_form

logger = logging.getLogger(__name__)


def layout_for_path(pathname: str | None):
    path = (pathname or "").rstrip("/")

    if path in ("", "/"):
        return page_records()

    if path == "/create":
        return page_record_form()

    if path.startswith("/edit/"):
        rid = unquote(path.split("/edit/", 1)[-1])
        record = get_client().get_record(rid) if rid else None
        if not record:
            logger.warning("Record with id %s not found", rid)
            return page_records()
        return page_record_form(record)

    return not_found_layout()


@app.callback(Output("root", "children"), Input("url-router", "pathname"))
def route(pathname: str):
    return layout_for_path(pathname)
