# dashboard/app/services/renderer.py
from __future__ import annotations

from html import escape
from typing import List

from dashboard.app.core.theme import other_mode
from dashboard.app.models.order import DashboardState, OrderRow
from dashboard.app.services.formatting import PALETTE, STATUS_STYLES, to_row

TITLE = "Order Lifecycle Dashboard"
SUBTITLE = "View and track orders across Created, Delivered, and Invoiced statuses."
LEGEND = "Created = Blue, Delivered = Amber, Invoiced = Gray"
EMPTY_TEXT = "No orders found."
LOADING_TEXT = "Loading…"
COLUMNS = ("Order ID", "Customer", "Total", "Status", "Updated")

MONO = 'ui-monospace, SFMono-Regular, Menlo, Monaco, Consolas, "Liberation Mono", "Courier New", monospace'

_CSS = f"""
      :root {{
        --bg:{PALETTE["background"]}; --surface:{PALETTE["surface"]}; --text:{PALETTE["text"]};
        --muted:#6B7280; --sub:#4B5563; --border:rgba(17,24,39,0.06); --th:#F3F4F6;
      }}
      [data-theme="dark"] {{
        --bg:#0f172a; --surface:#111827; --text:#F9FAFB;
        --muted:#9CA3AF; --sub:#D1D5DB; --border:rgba(249,250,251,0.08); --th:#1F2937;
      }}
      * {{ box-sizing: border-box; }}
      html,body{{margin:0}}
      body{{background:var(--bg);color:var(--text);min-height:100vh;font-family:system-ui,-apple-system,Segoe UI,Roboto,Helvetica,Arial,sans-serif}}
      header{{background:linear-gradient(135deg, rgba(37,99,235,0.06), rgba(249,250,251,0.04));border-bottom:1px solid var(--border)}}
      .container{{max-width:1100px;margin:0 auto;padding:24px}}
      .bar{{display:flex;align-items:center;justify-content:space-between;gap:16px}}
      h1{{margin:0;font-size:22px}}
      .subtitle{{margin:6px 0 0 0;color:var(--sub);font-size:14px}}
      .theme-toggle{{background:#111827;color:#F9FAFB;border:1px solid rgba(255,255,255,0.08);border-radius:8px;padding:8px 12px;font-size:14px;cursor:pointer}}
      .card{{background:var(--surface);border:1px solid var(--border);border-radius:12px;box-shadow:0 4px 14px rgba(17,24,39,0.06);overflow:hidden}}
      .card-head{{padding:16px;border-bottom:1px solid var(--border);display:flex;justify-content:space-between;align-items:center}}
      .card-head h2{{margin:0;font-size:18px}}
      .meta{{font-size:12px;color:var(--muted)}}
      .error{{padding:16px;color:#ffffff;background:{PALETTE["error"]}}}
      table{{width:100%;border-collapse:separate;border-spacing:0}}
      th,td{{padding:14px 16px;text-align:left;border-bottom:1px solid var(--border);color:var(--text);font-size:14px}}
      th{{font-weight:600;background:var(--th)}}
      td{{background:var(--surface);font-weight:400}}
      .mono{{font-family:{MONO}}}
      .chip{{display:inline-block;padding:6px 10px;border-radius:999px;font-size:12px;font-weight:600;letter-spacing:0.2px;text-transform:uppercase}}
      .legend{{padding:14px;display:flex;justify-content:flex-end;gap:8px}}
"""

# Flips the mode in the page only; the order list is not fetched again.
_TOGGLE_JS = """
      (function () {
        var btn = document.querySelector(".theme-toggle");
        btn.addEventListener("click", function () {
          var root = document.documentElement;
          var next = root.dataset.theme === "dark" ? "light" : "dark";
          root.dataset.theme = next;
          btn.textContent = next === "light" ? "🌙 Dark" : "☀️ Light";
          btn.setAttribute("aria-label", "Switch to " + (next === "light" ? "dark" : "light") + " mode");
        });
      })();
    """


def _chip(row: OrderRow) -> str:
    sty = STATUS_STYLES[row.status_style]
    label = escape(row.status_label)
    return (
        f'<span class="chip chip-{row.status_style}" '
        f'style="background:{sty["chip_bg"]};color:{sty["chip_text"]};border:{sty["border"]}" '
        f'aria-label="Order status: {label}">{label}</span>'
    )


def _row_html(row: OrderRow) -> str:
    return (
        f'<tr data-key="{escape(row.key)}">'
        f'<td><span class="mono">{escape(row.order_id)}</span></td>'
        f"<td>{escape(row.customer)}</td>"
        f"<td>{escape(row.total)}</td>"
        f"<td>{_chip(row)}</td>"
        f"<td>{escape(row.updated)}</td>"
        "</tr>"
    )


def render_rows(state: DashboardState) -> List[str]:
    """Table body rows; the empty-state row only when nothing else can show."""
    body: List[str] = []
    if state.is_empty:
        body.append(f'<tr class="empty"><td colspan="{len(COLUMNS)}">{EMPTY_TEXT}</td></tr>')
    body.extend(_row_html(to_row(o)) for o in state.orders)
    return body


def render_dashboard(state: DashboardState) -> str:
    """Full HTML page for one dashboard state. Same state in, same bytes out."""
    theme = state.theme
    target = other_mode(theme)
    toggle_label = "🌙 Dark" if theme == "light" else "☀️ Light"

    status_line = LOADING_TEXT if state.loading else f"{len(state.orders)} total"
    error_html = f'<div class="error" role="alert">Error: {escape(state.error)}</div>' if state.error else ""
    head_cells = "".join(f"<th>{c}</th>" for c in COLUMNS)
    body_html = "\n              ".join(render_rows(state))

    return f"""<!doctype html>
<html lang="en" data-theme="{theme}">
  <head>
    <meta charset="utf-8" />
    <title>{TITLE}</title>
    <meta name="viewport" content="width=device-width, initial-scale=1" />
    <style>{_CSS}    </style>
  </head>
  <body>
    <div class="App">
      <header>
        <div class="container bar">
          <div>
            <h1>{TITLE}</h1>
            <p class="subtitle">{SUBTITLE}</p>
          </div>
          <button type="button" class="theme-toggle" aria-label="Switch to {target} mode">{toggle_label}</button>
        </div>
      </header>
      <main class="container">
        <div class="card">
          <div class="card-head">
            <h2>Orders</h2>
            <div class="meta status-line">{status_line}</div>
          </div>
          {error_html}
          <div style="overflow-x:auto">
            <table>
              <thead><tr>{head_cells}</tr></thead>
              <tbody>
              {body_html}
              </tbody>
            </table>
          </div>
          <div class="legend"><span class="meta">{LEGEND}</span></div>
        </div>
      </main>
    </div>
    <script>{_TOGGLE_JS}</script>
  </body>
</html>
"""
