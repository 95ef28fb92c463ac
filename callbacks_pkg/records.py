# file: callbacks_pkg/records.py
from __future__ import annotations
import logging
from dash import Output, Input, State, no_update
from dash.dependencies import ALL
from dash.exceptions import PreventUpdate
from app_instance import app
try:
    from dash import ctx
except ImportError:
    from dash import callback_context as ctx
from api import get_client
from common import preview_frame
from pages.records_page import records_table
from records_core import (
    ALL_LEVELS, filter_records, toggle_select, toggle_select_all, prune_selection,
    all_selected, delete_records, decode_upload, read_workbook, insert_preview, record_ids,
)

logger = logging.getLogger(__name__)


@app.callback(
    Output("global-loading", "data", allow_duplicate=True),
    Input("btn-confirm-insert", "n_clicks"),
    Input("btn-delete-selected", "n_clicks"),
    State("preview-store", "data"),
    State("selected-store", "data"),
    State("records-store", "data"),
    prevent_initial_call=True,
)
def _records_show_loader(_n_confirm, _n_delete, preview, selected, records):
    # only when the handler will run and bump records-action-tick
    trig = getattr(ctx, "triggered_id", None)
    if not trig:
        raise PreventUpdate
    triggered_value = ctx.triggered[0].get("value") if ctx.triggered else None
    if trig.startswith("btn-") and triggered_value in (None, 0):
        raise PreventUpdate
    if trig == "btn-confirm-insert" and not preview:
        raise PreventUpdate
    if trig == "btn-delete-selected" and not set(selected or []) & set(record_ids(records)):
        raise PreventUpdate
    return True


@app.callback(
    Output("global-loading", "data", allow_duplicate=True),
    Input("records-action-tick", "data"),
    prevent_initial_call=True,
)
def _records_hide_loader(*_):
    return False


# ---------------------- load ----------------------

@app.callback(
    Output("records-store", "data"),
    Output("records-count", "data"),
    Input("records-store", "data"),
    State("records-count", "data"),
    prevent_initial_call=False
)
def load_records(records, count):
    """Fetch the list on mount and whenever the number of held records changes."""
    n = len(records or [])
    if count is not None and n == count:
        raise PreventUpdate
    fetched = get_client().list_records()
    if fetched is None:
        # failure already logged; keep what we have
        return no_update, n
    return fetched, len(fetched)


@app.callback(
    Output("selected-store", "data", allow_duplicate=True),
    Input("records-store", "data"),
    State("selected-store", "data"),
    prevent_initial_call=True
)
def sync_selection(records, selected):
    pruned = prune_selection(selected, records)
    if pruned == list(selected or []):
        raise PreventUpdate
    return pruned


# ---------------------- render ----------------------

@app.callback(
    Output("records-table", "children"),
    Input("records-store", "data"),
    Input("selected-store", "data"),
    Input("records-search", "value"),
    Input("records-level", "value"),
    prevent_initial_call=False
)
def render_records(records, selected, query, level):
    records = records or []
    filtered = filter_records(records, query or "", level or ALL_LEVELS)
    return records_table(filtered, records, selected or [])


@app.callback(
    Output("btn-delete-selected", "disabled"),
    Output("records-selected-msg", "children"),
    Input("selected-store", "data"),
    prevent_initial_call=False
)
def show_selection(selected):
    n = len(selected or [])
    return n == 0, (f"{n} selected" if n else "")


# ---------------------- selection ----------------------

@app.callback(
    Output("selected-store", "data", allow_duplicate=True),
    Input({"type": "rec-select", "rid": ALL}, "value"),
    State({"type": "rec-select", "rid": ALL}, "id"),
    State("selected-store", "data"),
    prevent_initial_call=True
)
def on_toggle_select(values, ids, selected):
    # re-rendered checkboxes fire this too; only ids whose box disagrees with the store flip
    current = list(selected or [])
    out = current
    for cid, checked in zip(ids or [], values or []):
        rid = cid.get("rid")
        if bool(checked) != (rid in out):
            out = toggle_select(out, rid)
    if out == current:
        raise PreventUpdate
    return out


@app.callback(
    Output("selected-store", "data", allow_duplicate=True),
    Input("records-select-all", "value"),
    State("selected-store", "data"),
    State("records-store", "data"),
    prevent_initial_call=True
)
def on_toggle_select_all(value, selected, records):
    if value is None or bool(value) == all_selected(selected, records):
        raise PreventUpdate
    return toggle_select_all(selected or [], records or [])


# ---------------------- delete ----------------------

def _delete(ids, records, selected, tick):
    remaining, failed = delete_records(get_client(), ids, records or [])
    logger.info("Deleted %d record(s) (%d failed on the server)", len(ids), len(failed))
    gone = set(ids)
    return remaining, [s for s in (selected or []) if s not in gone], int(tick or 0) + 1


@app.callback(
    Output("records-store", "data", allow_duplicate=True),
    Output("selected-store", "data", allow_duplicate=True),
    Output("records-action-tick", "data", allow_duplicate=True),
    Input({"type": "rec-delete", "rid": ALL}, "n_clicks"),
    State("records-store", "data"),
    State("selected-store", "data"),
    State("records-action-tick", "data"),
    prevent_initial_call=True
)
def on_delete_one(ns, records, selected, tick):
    trig_id = getattr(ctx, "triggered_id", None)
    if isinstance(trig_id, dict) and trig_id.get("type") == "rec-delete" and any(ns or []):
        return _delete([trig_id.get("rid")], records, selected, tick)
    raise PreventUpdate


@app.callback(
    Output("records-store", "data", allow_duplicate=True),
    Output("selected-store", "data", allow_duplicate=True),
    Output("records-action-tick", "data", allow_duplicate=True),
    Input("btn-delete-selected", "n_clicks"),
    State("selected-store", "data"),
    State("records-store", "data"),
    State("records-action-tick", "data"),
    prevent_initial_call=True
)
def on_delete_selected(n, selected, records, tick):
    if not n or not selected:
        raise PreventUpdate
    chosen = set(selected)
    # record-list order, not click order
    ids = [rid for rid in record_ids(records) if rid in chosen]
    if not ids:
        raise PreventUpdate
    return _delete(ids, records, selected, tick)


# ---------------------- import ----------------------

@app.callback(
    Output("preview-store", "data", allow_duplicate=True),
    Output("preview-collapse", "is_open", allow_duplicate=True),
    Input("up-records", "contents"),
    State("up-records", "filename"),
    prevent_initial_call=True
)
def on_upload_records(contents, filename):
    if not contents:
        raise PreventUpdate
    rows = read_workbook(decode_upload(contents))
    logger.info("Parsed %s: %d preview row(s)", filename or "upload", len(rows))
    return rows, True


@app.callback(
    Output("tbl-preview", "data"),
    Input("preview-store", "data"),
    prevent_initial_call=False
)
def render_preview(rows):
    return preview_frame(rows).to_dict("records")


@app.callback(
    Output("records-store", "data", allow_duplicate=True),
    Output("preview-store", "data", allow_duplicate=True),
    Output("preview-collapse", "is_open", allow_duplicate=True),
    Output("records-action-tick", "data", allow_duplicate=True),
    Input("btn-confirm-insert", "n_clicks"),
    State("preview-store", "data"),
    State("records-store", "data"),
    State("records-action-tick", "data"),
    prevent_initial_call=True
)
def on_confirm_insert(n, preview, records, tick):
    if not n or not preview:
        raise PreventUpdate
    tick = int(tick or 0) + 1
    updated = insert_preview(get_client(), preview, records or [])
    if updated is None:
        return no_update, no_update, no_update, tick
    logger.info("Inserted %d record(s)", len(preview))
    return updated, [], False, tick
