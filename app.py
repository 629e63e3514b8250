import os
import logging
from datetime import datetime

import streamlit as st
from dotenv import load_dotenv

from firestore_client import FirestoreConfig, StoreStatus, TradeStore
from sample_trades import get_sample_records
from trade_data import TradeDataset, load_trade_dataset
from ui_pages import (
    page_overview,
    page_trade_confirmations,
    page_workflow_management,
    render_store_status,
)

# Load environment variables from .env if present
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

st.set_page_config(page_title="Trade Confirmations Back Office", page_icon="✅", layout="wide", initial_sidebar_state="expanded")


@st.cache_resource(show_spinner=False)
def get_trade_store() -> TradeStore:
    return TradeStore(FirestoreConfig.from_env())


def _load_dataset(store: TradeStore, use_sample: bool) -> TradeDataset:
    if use_sample:
        records = sorted(get_sample_records(), key=lambda r: r.get("TradeDate", ""), reverse=True)
        return TradeDataset.from_records(records)
    with st.spinner("Loading trade data from Firestore..."):
        return load_trade_dataset(store)


def render_footer() -> None:
    """Render the footer with the last load time."""
    ds = st.session_state.get("trade_dataset")
    loaded_at = ds.loaded_at if ds is not None else None
    stamp = loaded_at.strftime("%d %b %Y %H:%M") if loaded_at else "never"
    st.caption(f"App Version 1.0 | Data loaded {stamp} | {datetime.now().strftime('%B %Y')}")


store = get_trade_store()

# Sidebar navigation
st.sidebar.title("Navigation")
selected_page = st.sidebar.radio(
    "Go to",
    [
        "Overview",
        "Trade Confirmations",
        "Workflow Management",
    ],
    index=1,
    key="nav",
)

st.sidebar.markdown("---")
use_sample = st.sidebar.toggle("Use bundled sample trades", value=not store.config.is_configured, key="use_sample")
refresh = st.sidebar.button("Refresh data")

# Reload on first run, on Refresh, or when the data source changes
if (
    refresh
    or "trade_dataset" not in st.session_state
    or st.session_state.get("__dataset_source") != use_sample
):
    st.session_state["store_status"] = store.probe()
    st.session_state["trade_dataset"] = _load_dataset(store, use_sample)
    st.session_state["__dataset_source"] = use_sample
    st.session_state["break_reason_cache"] = {}

status: StoreStatus = st.session_state["store_status"]
dataset: TradeDataset = st.session_state["trade_dataset"]
render_store_status(status, using_sample=use_sample)

if selected_page == "Overview":
    page_overview(status)
elif selected_page == "Trade Confirmations":
    page_trade_confirmations(dataset)
elif selected_page == "Workflow Management":
    page_workflow_management(dataset)

render_footer()
