import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import logging
from datetime import date

import streamlit as st
import pandas as pd
import plotly.express as px

from tracker.aggregates import MONTH_LABELS
from tracker.config import configure_logging, currency_symbol, data_file
from tracker.domain import FilterCriteria, Kind, MonthMode
from tracker.errors import InvalidTransactionError, TransactionNotFoundError
from tracker.events import SAVE_FAILED, EventBus
from tracker.export import EXPORT_FILENAME
from tracker.services import TrackerService
from tracker.storage import JsonFileStorage
from tracker.store import TransactionStore

configure_logging()
logger = logging.getLogger("tracker.app")

st.set_page_config(page_title="Expense Tracker", layout="wide")

CUR = currency_symbol()

MONTH_MODE_LABELS = {
    MonthMode.ALL: "All time",
    MonthMode.THIS_MONTH: "This month",
    MonthMode.PREVIOUS_MONTH: "Previous month",
    MonthMode.LAST_3_MONTHS: "Last 3 months",
    MonthMode.THIS_YEAR: "This year",
}


def _on_save_failed(event, payload):
    st.session_state.tx_alerts.append(
        f"Changes may not be saved ({payload.get('operation')} at {event.ts[11:19]})"
    )
    return {}


if "tx_service" not in st.session_state:
    bus = EventBus()
    bus.subscribe(SAVE_FAILED, _on_save_failed)
    store = TransactionStore(JsonFileStorage(data_file()), bus=bus)
    store.load()
    st.session_state.tx_service = TrackerService(store)
    st.session_state.tx_alerts = []
    st.session_state.edit_id = None
    st.session_state.pending_confirm = None

service: TrackerService = st.session_state.tx_service


def confirmed(message):
    # destructive actions run on a second click, after the user ticks the box
    return bool(st.session_state.get("confirm_box"))


# ---------------- sidebar: filters & bulk actions ----------------
st.sidebar.markdown("### 🔎 Filters")
search = st.sidebar.text_input("Search title", key="searchInput")
category_opts = ["All"] + service.categories()
category = st.sidebar.selectbox("Category", category_opts, key="filterCategory")
kind_label = st.sidebar.selectbox("Type", ["All", "Income", "Expense"], key="filterType")
use_from = st.sidebar.checkbox("From date", key="useFrom")
date_from = st.sidebar.date_input("From", key="filterFrom") if use_from else None
use_to = st.sidebar.checkbox("To date", key="useTo")
date_to = st.sidebar.date_input("To", key="filterTo") if use_to else None
month_mode = st.sidebar.selectbox(
    "Period",
    list(MONTH_MODE_LABELS),
    format_func=lambda m: MONTH_MODE_LABELS[m],
    key="monthFilter",
)

criteria = FilterCriteria(
    search_text=search,
    category=None if category == "All" else category,
    kind=None if kind_label == "All" else Kind(kind_label.lower()),
    date_from=date_from,
    date_to=date_to,
    month_mode=month_mode,
)

st.sidebar.markdown("---")
st.sidebar.markdown("### 🗃 Data")
if st.sidebar.button("Load sample data", key="btnSampleData"):
    service.load_sample_data()
    st.rerun()

if st.sidebar.button("Clear all", key="btnClearAll"):
    st.session_state.pending_confirm = ("clear", None)

csv = service.export_csv()
if csv is None:
    if st.sidebar.button("⬇️ Export CSV", key="btnExportCSV"):
        st.sidebar.warning("No data!")
else:
    st.sidebar.download_button(
        "⬇️ Export CSV", csv, file_name=EXPORT_FILENAME, mime="text/csv", key="btnExportCSV"
    )

# ---------------- pending confirmation ----------------
pending = st.session_state.pending_confirm
if pending:
    action, target = pending
    prompt = "Delete?" if action == "delete" else "Clear all?"
    with st.container(border=True):
        st.warning(prompt)
        st.checkbox("Yes, I am sure", key="confirm_box")
        c_ok, c_cancel = st.columns(2)
        if c_ok.button("Confirm", key="btn_confirm"):
            if action == "delete":
                done = service.delete(target, confirmed)
            else:
                done = service.clear_all(confirmed)
            if done:
                st.session_state.pending_confirm = None
                if st.session_state.edit_id == target or action == "clear":
                    st.session_state.edit_id = None
                st.rerun()
            else:
                st.info("Tick the box to confirm, or cancel.")
        if c_cancel.button("Cancel", key="btn_cancel"):
            st.session_state.pending_confirm = None
            st.rerun()

for alert in st.session_state.tx_alerts[-3:]:
    st.error(f"⚠️ {alert}")

# ---------------- summary ----------------
report = service.dashboard(date.today())
result = report["result"]
summary = result.get("summary")

st.title("💸 Expense Tracker")
if summary is not None:
    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Total Income", f"{CUR}{summary.total_income:,}")
    k2.metric("Total Expense", f"{CUR}{summary.total_expense:,}")
    k3.metric("Balance", f"{CUR}{summary.balance:,}")
    k4.metric("This Month", f"{CUR}{summary.current_month_expense:,}")

for step in report["steps"]:
    if "error" in step:
        st.warning(f"{step['calculator']} failed: {step['error']}")

# ---------------- add / edit form ----------------
editing = None
if st.session_state.edit_id:
    try:
        editing = service.edit_target(st.session_state.edit_id)
    except TransactionNotFoundError as e:
        st.error(str(e))
        st.session_state.edit_id = None

st.subheader("✏️ Edit Transaction" if editing else "➕ Add Transaction")
with st.form("expenseForm", clear_on_submit=True):
    col1, col2 = st.columns(2)
    with col1:
        title = st.text_input("Title", value=editing.title if editing else "")
        description = st.text_input("Description", value=editing.description if editing else "")
        amount = st.number_input(
            f"Amount ({CUR})", min_value=0.0, step=100.0,
            value=float(editing.amount) if editing else 0.0,
        )
    with col2:
        kind = st.selectbox(
            "Type", [Kind.EXPENSE, Kind.INCOME],
            index=1 if editing and editing.is_income else 0,
            format_func=lambda k: k.value.title(),
        )
        category_in = st.text_input("Category", value=editing.category if editing else "")
        when = st.date_input("Date", value=editing.date if editing else date.today())
    submitted = st.form_submit_button("Save")

    if submitted:
        form = {
            "title": title,
            "description": description,
            "amount": int(amount) if float(amount).is_integer() else amount,
            "kind": kind,
            "category": category_in,
            "date": when,
        }
        try:
            service.submit(form, tx_id=st.session_state.edit_id)
        except InvalidTransactionError as e:
            st.error(e.details["message"])
        except TransactionNotFoundError as e:
            st.error(str(e))
            st.session_state.edit_id = None
        else:
            st.session_state.edit_id = None
            st.rerun()

if editing and st.button("Cancel edit", key="btn_cancel_edit"):
    st.session_state.edit_id = None
    st.rerun()

# ---------------- table ----------------
st.subheader("🧾 Transactions")
rows = service.view(criteria)
if not rows:
    if criteria.is_active():
        st.info("No transactions match the selected filters")
    else:
        st.info("No transactions yet. Add one or load the sample data.")
else:
    header = st.columns([0.5, 3, 1, 1.5, 1.5, 1.5, 1])
    for col, name in zip(header, ["#", "Title", "Type", "Amount", "Category", "Date", ""]):
        col.markdown(f"**{name}**")
    for i, t in enumerate(rows, start=1):
        c = st.columns([0.5, 3, 1, 1.5, 1.5, 1.5, 1])
        c[0].write(i)
        c[1].markdown(f"**{t.title}**  \n{t.description}")
        c[2].write(t.kind.value)
        color = "green" if t.is_income else "red"
        c[3].markdown(f":{color}[{CUR}{t.amount:,}]")
        c[4].write(t.category)
        c[5].write(t.date.strftime("%d/%m/%Y"))
        b_edit, b_del = c[6].columns(2)
        if b_edit.button("✏️", key=f"edit_{t.id}"):
            st.session_state.edit_id = t.id
            st.rerun()
        if b_del.button("✖", key=f"del_{t.id}"):
            st.session_state.pending_confirm = ("delete", t.id)
            st.rerun()

# ---------------- charts ----------------
st.subheader("📊 Analytics")
chart_cols = st.columns(3)

by_category = result.get("by_category", {})
with chart_cols[0]:
    if by_category:
        df_cat = pd.DataFrame({"Category": list(by_category), "Total": list(by_category.values())})
        fig_cat = px.pie(df_cat, values="Total", names="Category", title="Spending by Category")
        st.plotly_chart(fig_cat, use_container_width=True)
    else:
        st.info("No expenses yet")

by_month = result.get("by_month", (0,) * 12)
with chart_cols[1]:
    fig_month = px.bar(
        x=list(MONTH_LABELS),
        y=list(by_month),
        labels={"x": "Month", "y": f"Expense ({CUR})"},
        title="Monthly Expenses",
    )
    st.plotly_chart(fig_month, use_container_width=True)

trend = result.get("trend")
with chart_cols[2]:
    if trend is not None and trend.values:
        df_trend = pd.DataFrame(list(trend.points()), columns=["Date", "Cumulative"])
        fig_trend = px.line(df_trend, x="Date", y="Cumulative", title="Spending Trend", markers=True)
        fig_trend.update_traces(line_shape="spline")
        st.plotly_chart(fig_trend, use_container_width=True)
    else:
        st.info("No spending trend yet")
