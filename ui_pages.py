import streamlit as st
import pandas as pd

from break_catalog import break_details, priority_badge_text
from break_reasons import synthesize
from firestore_client import STATE_CONNECTED, STATE_UNCONFIGURED, StoreStatus
from helpers import _fmt_pct, build_trades_display_frame, fmt_display_date, trade_option_labels
from trade_models import EQUITY_CONFIRMATION_STATUSES, FX_TRADE_STATUSES, has_break, trade_key, trade_status_of
from workflow_analytics import (
    escalation_list,
    escalation_requirements,
    filter_trades,
    next_action_owner,
    next_action_owner_stats,
    product_type_stats,
    settlement_gap_stats,
    summary_stats,
    trade_stage_stats,
    workflow_stage_stats,
)


def render_store_status(status: StoreStatus, using_sample: bool = False) -> None:
    """Compact store badge for the sidebar."""
    if using_sample:
        st.sidebar.info("Showing bundled sample trades")
        return
    if status.state == STATE_CONNECTED:
        st.sidebar.success("Firestore: Connected")
    elif status.state == STATE_UNCONFIGURED:
        st.sidebar.warning("Firestore: Not Configured")
    else:
        st.sidebar.error(f"Firestore: {status.message or 'Unavailable'}")


def page_overview(status: StoreStatus):
    st.header("Trade Confirmations Back Office")
    st.markdown(
        "Monitor equity and FX trade confirmations, track workflow stages and "
        "owners, and review break details for failed or cancelled trades."
    )
    if status.state == STATE_UNCONFIGURED:
        st.subheader("Connect Firestore")
        st.markdown(
            """
1. Run `python scripts/seed_unified_data.py --init-env` to create a `.env` template
2. Create a Firebase project at the [Firebase Console](https://console.firebase.google.com/)
3. Enable the Firestore database
4. Create a collection named `unified_data`
5. Fill in `FIREBASE_API_KEY` and `FIREBASE_PROJECT_ID` in `.env`
6. Run `python scripts/seed_unified_data.py` to add sample documents
"""
        )
    elif status.state == STATE_CONNECTED:
        st.success(status.message)
    else:
        st.error(status.message)


def _render_error(dataset) -> bool:
    if dataset.error:
        st.error(f"Error loading data: {dataset.error}")
        st.caption("Use Refresh in the sidebar to try again.")
        return True
    return False


def _render_break_details(trade) -> None:
    status = trade_status_of(trade)
    st.markdown(f"**Trade {trade.trade_id}** · {trade.counterparty} · {status}")
    if not has_break(trade):
        st.info("No break on this trade.")
        return

    # Regenerate only when the selection changes
    key = trade_key(trade)
    cache = st.session_state.setdefault("break_reason_cache", {})
    reason = cache.get(key)
    if reason is None:
        reason = synthesize(trade)
        cache[key] = reason

    c1, c2, c3 = st.columns(3)
    c1.metric("Break Field", reason.field)
    c2.metric("Our Value", reason.authoritative_value)
    c3.metric("Counterparty Value", reason.counterparty_value)
    if not reason.is_discrepancy:
        st.warning(f"{reason.field} cannot diverge for this trade type; both sides report the same value.")
    if st.button("Regenerate break reason", key=f"__regen_{key}"):
        cache[key] = synthesize(trade)
        st.rerun()

    details = break_details(status)
    if details:
        st.markdown(
            f"**{details.get('type', '')}** · Priority {priority_badge_text(details.get('priority'))} · "
            f"Assigned to {details.get('assigned_to', '')} · SLA {details.get('sla', '')}"
        )
        st.write(details.get("description", ""))
        st.caption(f"Impact: {details.get('impact', '')}")
        for i, step in enumerate(details.get("next_steps", []), start=1):
            st.markdown(f"{i}. {step}")


def page_trade_confirmations(dataset) -> None:
    st.header("Trade Confirmations")
    if _render_error(dataset):
        return
    trades = dataset.all_trades

    stats = summary_stats(trades)
    col1, col2, col3, col4 = st.columns(4)
    with col1: st.metric("Total Trades", f"{stats['total']:,}")
    with col2: st.metric("In Progress", f"{stats['in_progress']:,}")
    with col3: st.metric("Completed", f"{stats['completed']:,}")
    with col4: st.metric("Completion Rate", _fmt_pct(stats["completion_rate"]))

    statuses = ["all"] + sorted(set(EQUITY_CONFIRMATION_STATUSES) | set(FX_TRADE_STATUSES))
    counterparties = ["all"] + sorted({t.counterparty for t in trades if t.counterparty})
    f1, f2, f3, f4, f5 = st.columns(5)
    search = f1.text_input("Search", placeholder="Trade ID or counterparty")
    status_choice = f2.selectbox("Status", statuses)
    type_choice = f3.selectbox("Trade Type", ["all", "equity", "fx"])
    cpty_choice = f4.selectbox("Counterparty", counterparties)
    date_choice = f5.text_input("Trade Date", placeholder="YYYY-MM-DD")

    filtered = filter_trades(
        trades,
        search=search,
        status=status_choice,
        trade_type=type_choice,
        counterparty=cpty_choice,
        trade_date=date_choice,
    )
    st.caption(f"Showing {len(filtered)} of {len(trades)} trades")
    if not filtered:
        st.info("No trades match the current filters.")
        return
    st.dataframe(build_trades_display_frame(filtered), hide_index=True, use_container_width=True)

    broken = [t for t in filtered if has_break(t)]
    st.subheader("Break Details")
    if not broken:
        st.info("No failed or cancelled trades in the current view.")
        return
    by_key = {trade_key(t): t for t in broken}
    labels = trade_option_labels(broken)
    selected = st.selectbox("Trade with break", list(by_key.keys()), format_func=labels.get)
    if selected:
        _render_break_details(by_key[selected])


def _chart(title: str, counts: dict) -> None:
    st.markdown(f"**{title}**")
    df = pd.DataFrame({"Count": list(counts.values())}, index=list(counts.keys()))
    if df["Count"].sum() == 0:
        st.caption("No data")
        return
    st.bar_chart(df)


def page_workflow_management(dataset) -> None:
    st.header("Workflow Management")
    st.caption("Monitor and analyze trade processing workflow across all stages")
    if _render_error(dataset):
        return

    type_filter = st.radio("Trade type", ["all", "equity", "fx"], horizontal=True, key="__wf_type")
    trades = filter_trades(dataset.all_trades, trade_type=type_filter)
    records = dataset.records
    if type_filter != "all":
        ids = {t.trade_id for t in trades}
        records = [r for r in records if str(r.get("TradeID") or "") in ids]

    stages = trade_stage_stats(trades)
    c1, c2, c3, c4 = st.columns(4)
    c1.metric("Matching", stages["matching"])
    c2.metric("Drafting", stages["drafting"])
    c3.metric("Pending Client Confirmation", stages["pending_client_confirmation"])
    c4.metric("CCNR", stages["ccnr"])

    left, right = st.columns(2)
    with left:
        _chart("Next Action Owner", next_action_owner_stats(trades))
        _chart("Trade / Settlement Gap", settlement_gap_stats(trades))
    with right:
        _chart("Workflow Stage", workflow_stage_stats(trades))
        products = product_type_stats(trades)
        _chart("Product Breakdown", {
            "Equity Buy": products["equity"]["buy"],
            "Equity Sell": products["equity"]["sell"],
            "FX Spot": products["fx"]["spot"],
            "FX Forward": products["fx"]["forward"],
            "FX Swap": products["fx"]["swap"],
        })

    st.subheader("Escalations")
    esc = escalation_requirements(records)
    e1, e2, e3, e4 = st.columns(4)
    e1.metric("Legal", esc["legal"])
    e2.metric("Trading", esc["trading"])
    e3.metric("Sales", esc["sales"])
    e4.metric("Middle Office", esc["middle_office"])

    labels = {"all": "All", "legal": "Legal", "trading": "Trading", "sales": "Sales", "middleOffice": "Middle Office"}
    esc_key = st.selectbox("Escalation filter", list(labels.keys()), format_func=labels.get)
    rows = escalation_list(records, esc_key)
    st.caption(f"{len(rows)} trades")
    if not rows:
        st.info("No trades found. Try adjusting your filters.")
        return
    table = pd.DataFrame([
        {
            "Trade ID": r.get("TradeID", ""),
            "Trade Date": fmt_display_date(r.get("TradeDate"), default=""),
            "Settlement Date": fmt_display_date(r.get("SettlementDate"), default=""),
            "Counterparty": r.get("Counterparty", ""),
            "Status": r.get("TradeStatus", ""),
            "Next Action Owner": next_action_owner(r.get("TradeStatus", "")),
        }
        for r in rows
    ])
    st.dataframe(table, hide_index=True, use_container_width=True)
