# file: common.py
from __future__ import annotations
import pandas as pd
from dash import html, dcc
import dash_bootstrap_components as dbc

from records_core import LEVELS, ALL_LEVELS


# ---------------------- UI helpers ----------------------

GLOBAL_LOADING_STYLE = {
    "position": "fixed",
    "inset": "0",
    "background": "rgba(0,0,0,0.6)",
    "display": "none",
    "alignItems": "center",
    "justifyContent": "center",
    "flexDirection": "column",
    "zIndex": 9999,
}


def global_loading_overlay():
    """Shared global loading overlay (spinner + label)."""
    return html.Div(
        id="global-loading-overlay",
        children=[
            dbc.Spinner(color="light", spinner_style={"width": "4rem", "height": "4rem"}),
            html.Div("Working...", style={"color": "white", "marginTop": "10px"}),
        ],
        style=GLOBAL_LOADING_STYLE.copy(),
    )


RECORD_COLUMNS = ["name", "position", "level"]
COLUMN_LABELS = {"name": "Name", "position": "Position", "level": "Level"}


def pretty_columns(df_or_cols) -> list[dict]:
    cols = list(df_or_cols.columns) if hasattr(df_or_cols, "columns") else list(df_or_cols)
    return [{"name": COLUMN_LABELS.get(c, c), "id": c} for c in cols]


def level_options(include_all: bool = True) -> list[dict]:
    opts = [{"label": lvl, "value": lvl} for lvl in LEVELS]
    if include_all:
        opts = [{"label": "All Levels", "value": ALL_LEVELS}] + opts
    return opts


def preview_frame(rows) -> pd.DataFrame:
    """Preview rows as a frame with the record columns first (missing ones blank)."""
    df = pd.DataFrame(rows or [])
    for c in RECORD_COLUMNS:
        if c not in df.columns:
            df[c] = ""
    return df[RECORD_COLUMNS].fillna("")


# ---------------------- UI Fragments ----------------------
def header_bar():
    return dbc.Navbar(
        dbc.Container([
            dcc.Link(html.Span("Employee Records", style={"fontSize": "22px", "fontWeight": 800}),
                     href="/", className="navbar-brand"),
            dbc.Nav([
                dcc.Link("Create Employee", href="/create", className="nav-link"),
            ], className="ms-auto"),
        ], fluid=True),
        className="mb-3", sticky="top", style={"backgroundColor": "white"}
    )


def not_found_layout():
    return dbc.Container([dbc.Alert("Page not found.", color="warning"), dcc.Link("← Home", href="/")], fluid=True)
