# scaleadvisor/utils/export.py
from __future__ import annotations
import io
import logging
from typing import Any, Dict, List

import xlsxwriter

logger = logging.getLogger(__name__)

# Theme
THEME = {
    "header_bg": "#BDD7EE",
    "zebra1": "#FFFFFF",
    "zebra2": "#E1E9EE",
    "total_bg": "#C6E0B4",
}

OVERVIEW_FIELDS = [
    ("Project Name", "name"),
    ("Description", "description"),
    ("Tech Stack", "tech_stack"),
    ("Current Phase", "current_phase"),
    ("Target Phase", "target_phase"),
    ("Current Infrastructure", "current_infra"),
    ("Status", "status"),
]


def _write_rows(ws, rows: List[List[Any]], fmt_z1, fmt_z2, start_row: int = 1) -> None:
    for r, row in enumerate(rows, start=start_row):
        zfmt = fmt_z1 if r % 2 else fmt_z2
        for c, value in enumerate(row):
            ws.write(r, c, value, zfmt)


# Excel Export
def generate_xlsx(report: Dict[str, Any]) -> io.BytesIO:
    """
    Render a project report (as produced by `schemas.ProjectReport.model_dump(mode="json")`)
    into an in-memory workbook with one sheet per artifact kind.
    """
    project = report.get("project", {})
    buf = io.BytesIO()
    wb = xlsxwriter.Workbook(buf, {"in_memory": True})

    # ---------- Formats ----------
    fmt_th = wb.add_format({
        "bold": True, "bg_color": THEME["header_bg"],
        "border": 1, "align": "center", "text_wrap": True
    })
    fmt_z1 = wb.add_format({"border": 1, "bg_color": THEME["zebra1"], "text_wrap": True})
    fmt_z2 = wb.add_format({"border": 1, "bg_color": THEME["zebra2"], "text_wrap": True})
    fmt_money = wb.add_format({"border": 1, "num_format": "$#,##0"})
    fmt_total = wb.add_format({"bold": True, "border": 1, "bg_color": THEME["total_bg"], "num_format": "$#,##0"})

    # --------- Overview ----------
    ws_ov = wb.add_worksheet("Overview")
    ws_ov.write_row("A1", ["Field", "Value"], fmt_th)
    overview = [[label, str(project.get(key) or "")] for label, key in OVERVIEW_FIELDS]
    overview.append(["Scaling Goals", "\n".join(project.get("scaling_goals") or [])])
    _write_rows(ws_ov, overview, fmt_z1, fmt_z2)
    ws_ov.set_column("A:A", 24)
    ws_ov.set_column("B:B", 100)

    # -------- Recommendations ----------
    ws_rec = wb.add_worksheet("Recommendations")
    ws_rec.write_row("A1", ["Title", "Category", "Priority", "Impact", "Time", "Done"], fmt_th)
    _write_rows(ws_rec, [
        [r["title"], r["category"], r["priority"], r["estimated_impact"],
         r["implementation_time"], "Yes" if r["is_completed"] else "No"]
        for r in report.get("recommendations", [])
    ], fmt_z1, fmt_z2)
    ws_rec.set_column("A:A", 35)
    ws_rec.set_column("B:F", 18)

    # -------- Roadmap ----------
    ws_rm = wb.add_worksheet("Roadmap")
    ws_rm.write_row("A1", ["#", "Step", "Description", "Duration", "Depends On", "Resources"], fmt_th)
    _write_rows(ws_rm, [
        [s["order"], s["title"], s["description"], s["estimated_duration"],
         ", ".join(s.get("dependencies") or []),
         "\n".join(f'{res["title"]}: {res["url"]}' for res in s.get("resources") or [])]
        for s in report.get("roadmap", [])
    ], fmt_z1, fmt_z2)
    ws_rm.set_column("A:A", 5)
    ws_rm.set_column("B:B", 28)
    ws_rm.set_column("C:C", 45)
    ws_rm.set_column("D:E", 18)
    ws_rm.set_column("F:F", 60)

    # -------- Compliance ----------
    ws_cc = wb.add_worksheet("Compliance")
    ws_cc.write_row("A1", ["Check", "Category", "Severity", "Standard", "Remediation", "Passed"], fmt_th)
    _write_rows(ws_cc, [
        [c["title"], c["category"], c["severity"], c["standard"], c["remediation"],
         "Yes" if c["is_passed"] else "No"]
        for c in report.get("compliance_checks", [])
    ], fmt_z1, fmt_z2)
    ws_cc.set_column("A:A", 40)
    ws_cc.set_column("B:D", 14)
    ws_cc.set_column("E:E", 70)

    # -------- Costs ----------
    ws_cost = wb.add_worksheet("Costs")
    estimate = report.get("cost_estimate", {})
    vendors = list(estimate.keys())
    ws_cost.write_row("A1", ["Line Item"] + [v.upper() for v in vendors], fmt_th)
    labels = [item["label"] for item in estimate[vendors[0]]["items"]] if vendors else []
    for r, label in enumerate(labels, start=1):
        ws_cost.write(r, 0, label, fmt_z1 if r % 2 else fmt_z2)
        for c, vendor in enumerate(vendors, start=1):
            ws_cost.write_number(r, c, estimate[vendor]["items"][r - 1]["cost"], fmt_money)
    total_row = len(labels) + 1
    ws_cost.write(total_row, 0, "Total (monthly)", fmt_total)
    for c, vendor in enumerate(vendors, start=1):
        ws_cost.write_number(total_row, c, estimate[vendor]["total"], fmt_total)
    ws_cost.set_column("A:A", 26)
    ws_cost.set_column(1, max(len(vendors), 1), 12)

    wb.close()
    buf.seek(0)
    logger.info(f"Built Excel report for project {project.get('id')}")
    return buf
