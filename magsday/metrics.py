from __future__ import annotations

import pandas as pd

PAYMENT_COLUMNS = ["id", "title", "amount", "dueDate", "isPaid"]


def _amount(value):
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def format_amount(amount, symbol):
    return f"{symbol}{_amount(amount):,.2f}"


def sort_schedules(schedules):
    return sorted(
        schedules,
        key=lambda row: (str(row.get("date") or "9999-12-31"), str(row.get("time") or "99:99")),
    )


def schedules_for_day(schedules, day_iso):
    return sort_schedules([row for row in schedules if row.get("date") == day_iso])


def sort_accomplishments(accomplishments):
    return sorted(
        accomplishments,
        key=lambda row: (str(row.get("date") or ""), str(row.get("createdAt") or "")),
        reverse=True,
    )


def payments_frame(payments):
    if not payments:
        return pd.DataFrame(columns=PAYMENT_COLUMNS)
    frame = pd.DataFrame([{column: row.get(column) for column in PAYMENT_COLUMNS} for row in payments])
    frame["amount"] = frame["amount"].apply(_amount)
    frame["isPaid"] = frame["isPaid"].fillna(False).astype(bool)
    return frame


def payment_totals(payments):
    frame = payments_frame(payments)
    if frame.empty:
        return {"total": 0.0, "paid": 0.0, "outstanding": 0.0, "unpaid_count": 0}
    paid = float(frame.loc[frame["isPaid"], "amount"].sum())
    outstanding = float(frame.loc[~frame["isPaid"], "amount"].sum())
    return {
        "total": paid + outstanding,
        "paid": paid,
        "outstanding": outstanding,
        "unpaid_count": int((~frame["isPaid"]).sum()),
    }


def amounts_by_due_date(payments):
    frame = payments_frame(payments)
    frame = frame[frame["dueDate"].notna()] if not frame.empty else frame
    if frame.empty:
        return pd.DataFrame(columns=["dueDate", "paid", "outstanding"])
    frame = frame.assign(
        paid=frame["amount"].where(frame["isPaid"], 0.0),
        outstanding=frame["amount"].where(~frame["isPaid"], 0.0),
    )
    grouped = frame.groupby("dueDate", as_index=False)[["paid", "outstanding"]].sum()
    return grouped.sort_values("dueDate").reset_index(drop=True)


def dashboard_summary(mirrors, today_iso):
    today_schedules = schedules_for_day(mirrors.schedules, today_iso)
    totals = payment_totals(mirrors.payments)
    accomplished_today = [row for row in mirrors.accomplishments if row.get("date") == today_iso]
    return {
        "today_schedules": today_schedules,
        "schedule_count": len(mirrors.schedules),
        "unpaid_count": totals["unpaid_count"],
        "outstanding": totals["outstanding"],
        "accomplishment_count": len(mirrors.accomplishments),
        "accomplished_today": len(accomplished_today),
    }
