# file: callbacks_pkg/record_form.py
from __future__ import annotations
import logging
from dash import Output, Input, State
from dash.exceptions import PreventUpdate
from app_instance import app
from api import get_client

logger = logging.getLogger(__name__)


def form_payload(name, position, level) -> dict:
    return {"name": (name or "").strip(), "position": (position or "").strip(), "level": level}


@app.callback(
    Output("url-router", "pathname"),
    Input("btn-save-record", "n_clicks"),
    State("form-record-id", "data"),
    State("form-name", "value"),
    State("form-position", "value"),
    State("form-level", "value"),
    prevent_initial_call=True
)
def save_record(n, record_id, name, position, level):
    if not n:
        raise PreventUpdate
    client = get_client()
    payload = form_payload(name, position, level)
    if record_id:
        ok = client.update_record(record_id, payload)
    else:
        ok = client.create_record(payload)
    if not ok:
        logger.error("A problem occurred adding or updating a record")
    # back to the list either way
    return "/"
