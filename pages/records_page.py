from __future__ import annotations
from dash import html, dcc, dash_table
import dash_bootstrap_components as dbc
from common import header_bar, level_options, pretty_columns, RECORD_COLUMNS
from config import PREVIEW_LIMIT
from records_core import ALL_LEVELS, record_id, all_selected


def _record_row(rec: dict, selected: list):
    rid = record_id(rec)
    if rid is None:
        # appended by an import and not reloaded yet: no id to act on
        check = dbc.Checkbox(value=False, disabled=True)
        actions = html.Span("pending", className="text-muted small")
    else:
        check = dbc.Checkbox(id={"type": "rec-select", "rid": rid}, value=rid in selected)
        actions = html.Div([
            dcc.Link("Edit", href=f"/edit/{rid}", className="btn btn-outline-secondary btn-sm"),
            dbc.Button("Delete", id={"type": "rec-delete", "rid": rid}, color="danger",
                       outline=True, size="sm", n_clicks=0),
        ], className="d-flex gap-2")
    return html.Tr([
        html.Td(check),
        html.Td(rec.get("name", "")),
        html.Td(rec.get("position", "")),
        html.Td(rec.get("level", "")),
        html.Td(actions),
    ])


def records_table(filtered: list, records: list, selected: list):
    """Main table: header select-all checkbox plus one row per filtered record."""
    head = html.Thead(html.Tr([
        html.Th(dbc.Checkbox(id="records-select-all", value=all_selected(selected, records))),
        html.Th("Name"), html.Th("Position"), html.Th("Level"), html.Th("Action"),
    ]))
    if filtered:
        body = [_record_row(r, selected or []) for r in filtered]
    else:
        body = [html.Tr(html.Td("No records found", colSpan=5, className="text-center p-4"))]
    return dbc.Table([head, html.Tbody(body)], hover=True, size="sm", className="mb-0")


def page_records():
    return html.Div(dbc.Container([
        header_bar(),

        dcc.Store(id="records-store", data=[]),
        dcc.Store(id="records-count"),
        dcc.Store(id="selected-store", data=[]),
        dcc.Store(id="preview-store", data=[]),
        dcc.Store(id="records-action-tick", data=0),

        html.H4("Employee Records", className="mb-3"),

        dbc.Row([
            dbc.Col(dbc.Input(id="records-search", type="text", value="",
                              placeholder="Search by Name or Position"), md=8),
            dbc.Col(dcc.Dropdown(id="records-level", options=level_options(),
                                 value=ALL_LEVELS, clearable=False), md=4),
        ], className="g-2 mb-3"),

        dbc.Card(dbc.CardBody([
            html.H5("Import from Excel"),
            dcc.Upload(
                id="up-records",
                children=html.Div(["⬆️ Drag & drop or click to upload .xlsx / .xls"]),
                accept=".xlsx, .xls", multiple=False, className="upload-box",
                style={"border": "1px dashed #adb5bd", "borderRadius": "6px", "padding": "12px",
                       "textAlign": "center", "cursor": "pointer"},
            ),
            dbc.Collapse(html.Div([
                html.H6(f"Preview (First {PREVIEW_LIMIT} Records)", className="mt-3"),
                dash_table.DataTable(
                    id="tbl-preview",
                    data=[],
                    columns=pretty_columns(RECORD_COLUMNS),
                    page_size=PREVIEW_LIMIT,
                    style_table={"overflowX": "auto"},
                    style_as_list_view=True,
                    style_header={"textTransform": "none"},
                ),
                dbc.Button("Confirm Insert", id="btn-confirm-insert", color="success", className="mt-3"),
            ]), id="preview-collapse", is_open=False),
        ]), className="mb-3"),

        dbc.Row([
            dbc.Col(dbc.Button("Delete Selected", id="btn-delete-selected", color="danger",
                               outline=True, disabled=True), width="auto"),
            dbc.Col(html.Span(id="records-selected-msg", className="text-muted small"), className="align-self-center"),
        ], className="mb-2"),

        html.Div(html.Div(id="records-table"), className="border rounded loading-block"),
    ], fluid=True), className="loading-page")
