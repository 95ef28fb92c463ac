from __future__ import annotations
from dash import html, dcc
import dash_bootstrap_components as dbc
from common import header_bar, level_options


def page_record_form(record: dict | None = None):
    """Create form when ``record`` is None, otherwise an edit form pre-filled from it."""
    record = record or {}
    editing = bool(record.get("id"))
    title = "Update Employee Record" if editing else "Create Employee Record"
    return html.Div(dbc.Container([
        header_bar(),
        dcc.Store(id="form-record-id", data=record.get("id")),
        html.H4(title, className="mb-3"),
        dbc.Card(dbc.CardBody([
            dbc.Label("Name", html_for="form-name"),
            dbc.Input(id="form-name", type="text", value=record.get("name", ""), placeholder="First Last"),
            dbc.Label("Position", html_for="form-position", className="mt-3"),
            dbc.Input(id="form-position", type="text", value=record.get("position", ""), placeholder="Developer Advocate"),
            dbc.Label("Level", className="mt-3"),
            dcc.RadioItems(
                id="form-level",
                options=level_options(include_all=False),
                value=record.get("level"),
                inline=True,
                inputStyle={"marginRight": "4px", "marginLeft": "12px"},
            ),
            dbc.Button("Save Employee Record", id="btn-save-record", color="primary", className="mt-4"),
        ]), className="mb-3"),
    ], fluid=True), className="loading-page")
