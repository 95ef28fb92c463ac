from __future__ import annotations
import logging
import dash
from dash import html, dcc, Output, Input
import config
from api import configure_client

if not logging.getLogger().handlers:
    logging.basicConfig(level=config.LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

configure_client()

from app_instance import app, server  # noqa: E402
from common import global_loading_overlay, GLOBAL_LOADING_STYLE  # noqa: E402
import router  # noqa: E402,F401  registers the route callback
from callbacks_pkg import *  # noqa: E402,F401,F403  registers callbacks


# ---- Main Layout ----
app.layout = html.Div([
    dcc.Location(id="url-router"),
    dcc.Store(id="global-loading", data=False),
    html.Div(id="root"),
    global_loading_overlay(),
])

# Global loading overlay visibility toggler
@app.callback(Output("global-loading-overlay", "style"), Input("global-loading", "data"))
def _toggle_global_loading(is_on):
    base = GLOBAL_LOADING_STYLE.copy()
    base["display"] = "flex" if bool(is_on) else "none"
    return base

# Show/hide global overlay during navigation
@app.callback(
    Output("global-loading", "data", allow_duplicate=True),
    Input("url-router", "pathname"),
    Input("root", "children"),
    prevent_initial_call=True,
)
def _toggle_nav_loading(_path, _children):
    triggered = [t["prop_id"].split(".")[0] for t in (dash.callback_context.triggered or [])]
    if "root" in triggered:
        return False
    if "url-router" in triggered:
        return True
    return False


# ---------------------- Main ----------------------
if __name__ == "__main__":
    app.run(debug=config.DEBUG)
