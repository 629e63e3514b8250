"""
Read trade documents from the Cloud Firestore ``unified_data`` collection.

Access goes through the Firestore REST API (v1) with a plain API key, the
same credentials the web dashboard uses. The store is built from an explicit
``FirestoreConfig``; an unconfigured store never touches the network and
reports itself as such from ``probe()``.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import requests
from dotenv import load_dotenv
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from classifier import filter_records_by_trade_type, is_fx_record
from trade_models import RawTradeRecord

logger = logging.getLogger(__name__)

FIRESTORE_BASE_URL = "https://firestore.googleapis.com/v1"
DEFAULT_COLLECTION = "unified_data"
ORDER_FIELD = "TradeDate"

FETCH_ERROR_MESSAGE = "Failed to fetch trade data from Firestore"

STATE_UNCONFIGURED = "unconfigured"
STATE_CONNECTED = "connected"
STATE_ERROR = "error"


class TradeStoreError(RuntimeError):
    """Raised when the document store cannot be read or written."""


@dataclass(frozen=True)
class FirestoreConfig:
    api_key: str = ""
    project_id: str = ""
    collection: str = DEFAULT_COLLECTION
    database: str = "(default)"
    timeout: float = 15.0
    base_url: str = FIRESTORE_BASE_URL

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key.strip()) and bool(self.project_id.strip())

    @property
    def documents_url(self) -> str:
        return f"{self.base_url}/projects/{self.project_id}/databases/{self.database}/documents"

    @classmethod
    def from_env(cls) -> "FirestoreConfig":
        """Build a config from FIREBASE_* environment variables (.env honoured)."""
        load_dotenv()
        timeout_raw = os.getenv("FIREBASE_TIMEOUT", "")
        try:
            timeout = float(timeout_raw) if timeout_raw else 15.0
        except ValueError:
            logger.warning("Ignoring invalid FIREBASE_TIMEOUT=%r", timeout_raw)
            timeout = 15.0
        return cls(
            api_key=(os.getenv("FIREBASE_API_KEY") or "").strip(),
            project_id=(os.getenv("FIREBASE_PROJECT_ID") or "").strip(),
            collection=(os.getenv("FIREBASE_COLLECTION") or DEFAULT_COLLECTION).strip(),
            timeout=timeout,
        )


@dataclass(frozen=True)
class StoreStatus:
    state: str
    message: str = ""

    @property
    def is_connected(self) -> bool:
        return self.state == STATE_CONNECTED


READ_RETRY_METHODS = ("GET", "POST")  # runQuery is a read even though it is a POST
WRITE_RETRY_METHODS = ("GET",)  # a re-sent create would add a second document


def _make_session(total_retries: int = 3, backoff: float = 0.25, allowed_methods=READ_RETRY_METHODS) -> requests.Session:
    s = requests.Session()
    retry = Retry(
        total=total_retries,
        backoff_factor=backoff,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=allowed_methods,
        raise_on_status=False,
    )
    s.headers.update({"Connection": "keep-alive", "Accept": "application/json"})
    s.mount("https://", HTTPAdapter(max_retries=retry, pool_maxsize=10))
    return s


# ===================== Firestore typed JSON =====================

def decode_value(value: Dict[str, Any]) -> Any:
    """Convert one Firestore ``Value`` object to a plain Python value."""
    if not isinstance(value, dict):
        return value
    if "stringValue" in value:
        return value["stringValue"]
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "nullValue" in value:
        return None
    if "timestampValue" in value:
        return value["timestampValue"]
    if "referenceValue" in value:
        return value["referenceValue"]
    if "mapValue" in value:
        return decode_fields(value["mapValue"].get("fields") or {})
    if "arrayValue" in value:
        return [decode_value(v) for v in value["arrayValue"].get("values") or []]
    return None


def decode_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    return {k: decode_value(v) for k, v in fields.items()}


def encode_value(value: Any) -> Dict[str, Any]:
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, dict):
        return {"mapValue": {"fields": {k: encode_value(v) for k, v in value.items()}}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(v) for v in value]}}
    return {"stringValue": str(value)}


def document_to_record(document: Dict[str, Any]) -> RawTradeRecord:
    name = str(document.get("name") or "")
    record: RawTradeRecord = {"id": name.rsplit("/", 1)[-1] if name else ""}
    record.update(decode_fields(document.get("fields") or {}))
    return record


def _equals_filter(field: str, value: str) -> Dict[str, Any]:
    return {
        "fieldFilter": {
            "field": {"fieldPath": field},
            "op": "EQUAL",
            "value": encode_value(value),
        }
    }


def _active(value: Optional[str]) -> bool:
    return bool(value) and str(value).strip().lower() != "all"


class TradeStore:
    """Data-access collaborator for the trade collection."""

    def __init__(
        self,
        config: FirestoreConfig,
        session: Optional[requests.Session] = None,
        write_session: Optional[requests.Session] = None,
    ):
        self.config = config
        self._session = session
        # An injected read session serves writes too unless one is given
        self._write_session = write_session if write_session is not None else session

    @property
    def session(self) -> requests.Session:
        if self._session is None:
            self._session = _make_session()
        return self._session

    @property
    def write_session(self) -> requests.Session:
        """Session for document creates; POST is never retried on it."""
        if self._write_session is None:
            self._write_session = _make_session(allowed_methods=WRITE_RETRY_METHODS)
        return self._write_session

    def _structured_query(self, filters: Optional[List[Dict[str, Any]]] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        query: Dict[str, Any] = {
            "from": [{"collectionId": self.config.collection}],
            "orderBy": [{"field": {"fieldPath": ORDER_FIELD}, "direction": "DESCENDING"}],
        }
        if filters:
            if len(filters) == 1:
                query["where"] = filters[0]
            else:
                query["where"] = {"compositeFilter": {"op": "AND", "filters": filters}}
        if limit is not None:
            query["limit"] = int(limit)
        return {"structuredQuery": query}

    def _run_query(self, filters: Optional[List[Dict[str, Any]]] = None, limit: Optional[int] = None) -> List[RawTradeRecord]:
        url = f"{self.config.documents_url}:runQuery"
        body = self._structured_query(filters, limit)
        try:
            r = self.session.post(url, params={"key": self.config.api_key}, json=body, timeout=self.config.timeout)
            if not r.ok:
                logger.error("Firestore runQuery returned HTTP %s: %s", r.status_code, r.text[:300])
                raise TradeStoreError(FETCH_ERROR_MESSAGE)
            rows = r.json()
            if not isinstance(rows, list):
                logger.error("Unexpected runQuery payload type: %s", type(rows).__name__)
                raise TradeStoreError(FETCH_ERROR_MESSAGE)
            # Rows without a "document" only carry readTime / progress info
            return [document_to_record(row["document"]) for row in rows if isinstance(row, dict) and row.get("document")]
        except TradeStoreError:
            raise
        except (requests.RequestException, ValueError, TypeError, AttributeError) as e:
            logger.error("Error fetching unified trade data: %s", e)
            raise TradeStoreError(FETCH_ERROR_MESSAGE) from e

    def probe(self) -> StoreStatus:
        """Report whether the store is configured and reachable."""
        if not self.config.is_configured:
            return StoreStatus(STATE_UNCONFIGURED, "Firestore is not configured. Set FIREBASE_API_KEY and FIREBASE_PROJECT_ID.")
        try:
            self._run_query(limit=1)
        except TradeStoreError as e:
            return StoreStatus(STATE_ERROR, str(e))
        return StoreStatus(STATE_CONNECTED, f"Connected to {self.config.project_id}/{self.config.collection}")

    def fetch_unified_trade_data(self) -> List[RawTradeRecord]:
        """All trade documents, newest trade date first."""
        if not self.config.is_configured:
            logger.warning("Firestore not configured, returning empty list")
            return []
        records = self._run_query()
        logger.info("Fetched %d trade documents from %s", len(records), self.config.collection)
        return records

    def fetch_filtered_trade_data(
        self,
        status: Optional[str] = None,
        trade_type: Optional[str] = None,
        counterparty: Optional[str] = None,
        trade_date: Optional[str] = None,
    ) -> List[RawTradeRecord]:
        """Exact-match filters run server-side; trade type is applied in memory."""
        if not self.config.is_configured:
            logger.warning("Firestore not configured, returning empty list")
            return []
        filters = []
        if _active(status):
            filters.append(_equals_filter("TradeStatus", status))
        if _active(counterparty):
            filters.append(_equals_filter("Counterparty", counterparty))
        if trade_date:
            filters.append(_equals_filter("TradeDate", trade_date))
        records = self._run_query(filters)
        if _active(trade_type):
            records = filter_records_by_trade_type(records, trade_type)
        return records

    def fetch_fx_trades_only(self) -> List[RawTradeRecord]:
        records = self.fetch_unified_trade_data()
        fx = [r for r in records if is_fx_record(r)]
        logger.info("FX trades found: %d out of %d total trades", len(fx), len(records))
        return fx

    def add_trade_record(self, record: RawTradeRecord) -> str:
        """Create one document from a plain record; returns the new document id."""
        if not self.config.is_configured:
            raise TradeStoreError("Firestore is not configured")
        url = f"{self.config.documents_url}/{self.config.collection}"
        fields = {k: encode_value(v) for k, v in record.items() if k != "id"}
        try:
            r = self.write_session.post(url, params={"key": self.config.api_key}, json={"fields": fields}, timeout=self.config.timeout)
            if not r.ok:
                logger.error("Firestore create returned HTTP %s: %s", r.status_code, r.text[:300])
                raise TradeStoreError("Failed to write trade data to Firestore")
            created = r.json()
        except TradeStoreError:
            raise
        except (requests.RequestException, ValueError) as e:
            raise TradeStoreError("Failed to write trade data to Firestore") from e
        return document_to_record(created)["id"]
