from datetime import date

import streamlit as st
from pydantic import ValidationError

from magsday.constants import PAYMENTS
from magsday.data import repositories
from magsday.metrics import amounts_by_due_date, format_amount, payment_totals
from magsday.schemas import PaymentCreate
from magsday.theme import get_theme
from magsday.visualizations import payments_by_due_date_chart


def _add_payment(runtime):
    try:
        payload = PaymentCreate(
            title=st.session_state.get("form.payment.title", ""),
            amount=st.session_state.get("form.payment.amount") or 0,
            due_date=st.session_state.get("form.payment.due_date"),
        )
    except ValidationError as exc:
        st.session_state["form.payment.error"] = "; ".join(error.get("msg", "") for error in exc.errors())
        return
    st.session_state.pop("form.payment.error", None)
    if runtime.write(repositories.add_entry, PAYMENTS, payload.to_document()):
        st.session_state["form.payment.title"] = ""
        st.session_state["form.payment.amount"] = 0.0


def _toggle_paid(runtime, entry_id, widget_key):
    runtime.write(
        repositories.update_entry,
        PAYMENTS,
        entry_id,
        {"isPaid": bool(st.session_state.get(widget_key, False))},
    )


def render_payments_tab(ctx):
    runtime = ctx["runtime"]
    settings = runtime.mirrors.settings
    symbol = settings.currency_symbol
    payments = runtime.mirrors.payments

    st.markdown("<div class='section-title'>Payments</div>", unsafe_allow_html=True)

    add_cols = st.columns([3, 1.3, 1.3, 0.8])
    with add_cols[0]:
        st.text_input("Payment", key="form.payment.title", placeholder="Rent, electricity…")
    with add_cols[1]:
        st.number_input(f"Amount ({symbol})", key="form.payment.amount", min_value=0.0, step=100.0)
    with add_cols[2]:
        st.date_input("Due", key="form.payment.due_date", value=date.fromisoformat(runtime.sync.today))
    with add_cols[3]:
        st.button("Add", key="form.payment.add", type="primary", on_click=_add_payment, args=(runtime,))
    error = st.session_state.get("form.payment.error")
    if error:
        st.warning(error)

    totals = payment_totals(payments)
    total_cols = st.columns(3)
    total_cols[0].metric("Outstanding", format_amount(totals["outstanding"], symbol))
    total_cols[1].metric("Paid", format_amount(totals["paid"], symbol))
    total_cols[2].metric("Total", format_amount(totals["total"], symbol))

    if not payments:
        st.caption("No payments yet.")
        return

    ordered = sorted(payments, key=lambda row: (bool(row.get("isPaid")), str(row.get("dueDate") or "9999-12-31")))
    for row in ordered:
        entry_id = row["id"]
        widget_key = f"form.payment.paid.{entry_id}"
        st.session_state[widget_key] = bool(row.get("isPaid"))
        cols = st.columns([0.6, 3, 1.4, 1.4, 0.5])
        with cols[0]:
            st.checkbox(
                "Paid",
                key=widget_key,
                label_visibility="collapsed",
                on_change=_toggle_paid,
                args=(runtime, entry_id, widget_key),
            )
        with cols[1]:
            st.markdown(row.get("title") or "Untitled")
        with cols[2]:
            st.markdown(format_amount(row.get("amount"), symbol))
        with cols[3]:
            st.caption(row.get("dueDate") or "No due date")
        with cols[4]:
            st.button(
                "✕",
                key=f"form.payment.delete.{entry_id}",
                type="tertiary",
                on_click=runtime.write,
                args=(repositories.delete_entry, PAYMENTS, entry_id),
            )

    grouped = amounts_by_due_date(payments)
    if not grouped.empty:
        _, theme = get_theme(settings.theme)
        st.plotly_chart(payments_by_due_date_chart(grouped, symbol, theme), use_container_width=True)
