"""Tests for DashboardController and load_quote.

The gateway is an AsyncMock; persistence is an InMemoryStore. No network.
"""

from __future__ import annotations

import asyncio
import datetime
import json
from decimal import Decimal
from pathlib import Path
from typing import Any
from unittest.mock import AsyncMock

import httpx
import pytest

from Stock_Pulse.dashboard.controller import (
    EMPTY_SYMBOL_MESSAGE,
    FAVORITES_STORAGE_KEY,
    FETCH_ERROR_MESSAGE,
    GATEWAY_FAILED_MESSAGE,
    HISTORY_STORAGE_KEY,
    NO_SERIES_MESSAGE,
    DashboardController,
    load_quote,
)
from Stock_Pulse.dashboard.derive import change_indicator
from Stock_Pulse.data.store import InMemoryStore
from Stock_Pulse.models.enums import ChangeDirection
from Stock_Pulse.utils.exceptions import FetchError, NoDataError, SymbolValidationError


def _gateway(status: int = 200, payload: Any = None) -> AsyncMock:
    gateway = AsyncMock()
    gateway.get_stock = AsyncMock(return_value=(status, payload))
    return gateway


# ---------------------------------------------------------------------------
# load_quote
# ---------------------------------------------------------------------------


class TestLoadQuote:
    @pytest.mark.asyncio()
    async def test_empty_symbol_makes_no_call(self) -> None:
        gateway = _gateway()
        with pytest.raises(SymbolValidationError, match=EMPTY_SYMBOL_MESSAGE):
            await load_quote(gateway, "")
        gateway.get_stock.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_success(self, two_day_payload: dict[str, Any]) -> None:
        snapshot, series = await load_quote(_gateway(200, two_day_payload), "IBM")
        assert snapshot.date == datetime.date(2024, 1, 2)
        assert snapshot.close == 11
        assert snapshot.previous_close == Decimal("9.5")
        assert len(series) == 2

    @pytest.mark.asyncio()
    async def test_error_status_uses_envelope_message(self) -> None:
        with pytest.raises(NoDataError, match="rate limited") as exc_info:
            await load_quote(_gateway(429, {"error": "rate limited"}), "IBM")
        assert exc_info.value.http_status == 429

    @pytest.mark.asyncio()
    async def test_error_status_without_message(self) -> None:
        with pytest.raises(NoDataError, match=GATEWAY_FAILED_MESSAGE):
            await load_quote(_gateway(500, {}), "IBM")

    @pytest.mark.asyncio()
    async def test_missing_series_key(self) -> None:
        with pytest.raises(NoDataError, match=NO_SERIES_MESSAGE):
            await load_quote(_gateway(200, {"Meta Data": {}}), "IBM")

    @pytest.mark.asyncio()
    async def test_empty_series_is_fetch_error(self) -> None:
        with pytest.raises(FetchError, match=FETCH_ERROR_MESSAGE):
            await load_quote(_gateway(200, {"Time Series (Daily)": {}}), "IBM")

    @pytest.mark.asyncio()
    async def test_null_series_is_no_data(self) -> None:
        with pytest.raises(NoDataError, match=NO_SERIES_MESSAGE):
            await load_quote(_gateway(200, {"Time Series (Daily)": None}), "IBM")

    @pytest.mark.asyncio()
    async def test_non_mapping_series_is_fetch_error(self) -> None:
        with pytest.raises(FetchError):
            await load_quote(_gateway(200, {"Time Series (Daily)": "oops"}), "IBM")

    @pytest.mark.asyncio()
    async def test_network_error(self) -> None:
        gateway = AsyncMock()
        gateway.get_stock = AsyncMock(side_effect=httpx.ConnectError("down"))
        with pytest.raises(FetchError, match=FETCH_ERROR_MESSAGE):
            await load_quote(gateway, "IBM")

    @pytest.mark.asyncio()
    async def test_malformed_day_is_fetch_error(self) -> None:
        payload = {"Time Series (Daily)": {"2024-01-02": {"1. open": "x"}}}
        with pytest.raises(FetchError):
            await load_quote(_gateway(200, payload), "IBM")


# ---------------------------------------------------------------------------
# DashboardController
# ---------------------------------------------------------------------------


class TestFetch:
    @pytest.mark.asyncio()
    async def test_empty_symbol_sets_error_without_call(self) -> None:
        gateway = _gateway()
        controller = DashboardController(gateway, InMemoryStore())
        state = await controller.fetch()
        assert state.error == EMPTY_SYMBOL_MESSAGE
        assert state.loading is False
        gateway.get_stock.assert_not_awaited()

    @pytest.mark.asyncio()
    async def test_success_updates_state_and_history(
        self, two_day_payload: dict[str, Any]
    ) -> None:
        store = InMemoryStore()
        controller = DashboardController(_gateway(200, two_day_payload), store)
        controller.set_symbol("ibm")
        state = await controller.fetch()

        assert state.snapshot is not None
        assert state.snapshot.date == datetime.date(2024, 1, 2)
        assert state.snapshot.close == 11
        assert state.snapshot.previous_close == Decimal("9.5")
        assert state.loading is False
        assert state.error == ""
        assert state.history == ("IBM",)
        assert json.loads(store.get(HISTORY_STORAGE_KEY) or "[]") == ["IBM"]

        indicator = change_indicator(state.snapshot.close, state.snapshot.previous_close)
        assert indicator is not None
        assert indicator.delta == Decimal("1.50")
        assert indicator.percent == Decimal("15.79")
        assert indicator.direction == ChangeDirection.UP

    @pytest.mark.asyncio()
    async def test_failure_sets_message_and_keeps_history(self) -> None:
        store = InMemoryStore({HISTORY_STORAGE_KEY: '["MSFT"]'})
        controller = DashboardController(_gateway(429, {"error": "rate limited"}), store)
        controller.restore()
        controller.set_symbol("IBM")
        state = await controller.fetch()
        assert state.error == "rate limited"
        assert state.snapshot is None
        assert state.history == ("MSFT",)

    @pytest.mark.asyncio()
    async def test_gateway_called_with_symbol(self, two_day_payload: dict[str, Any]) -> None:
        gateway = _gateway(200, two_day_payload)
        controller = DashboardController(gateway, InMemoryStore())
        controller.set_symbol("aapl")
        await controller.fetch()
        gateway.get_stock.assert_awaited_once_with("AAPL")

    @pytest.mark.asyncio()
    async def test_stale_result_is_discarded(self, payload_factory: Any) -> None:
        """A slow first fetch finishing after a second one must not win."""
        release_first = asyncio.Event()
        first_payload = payload_factory(3)
        second_payload = payload_factory(5)

        async def get_stock(symbol: str) -> tuple[int, Any]:
            if symbol == "SLOW":
                await release_first.wait()
                return 200, first_payload
            return 200, second_payload

        gateway = AsyncMock()
        gateway.get_stock = AsyncMock(side_effect=get_stock)
        controller = DashboardController(gateway, InMemoryStore())

        controller.set_symbol("SLOW")
        first = asyncio.create_task(controller.fetch())
        await asyncio.sleep(0)
        controller.set_symbol("FAST")
        await controller.fetch()
        release_first.set()
        await first

        state = controller.state
        assert state.snapshot is not None
        assert state.snapshot.symbol == "FAST"
        assert len(state.series) == 5
        assert state.history == ("FAST",)

    @pytest.mark.asyncio()
    async def test_empty_symbol_fetch_supersedes_inflight_fetch(
        self, payload_factory: Any
    ) -> None:
        release_first = asyncio.Event()

        async def get_stock(symbol: str) -> tuple[int, Any]:
            await release_first.wait()
            return 200, payload_factory(3)

        gateway = AsyncMock()
        gateway.get_stock = AsyncMock(side_effect=get_stock)
        controller = DashboardController(gateway, InMemoryStore())

        controller.set_symbol("SLOW")
        first = asyncio.create_task(controller.fetch())
        await asyncio.sleep(0)
        controller.set_symbol("")
        await controller.fetch()
        release_first.set()
        await first

        state = controller.state
        assert state.error == EMPTY_SYMBOL_MESSAGE
        assert state.snapshot is None
        assert state.history == ()
        gateway.get_stock.assert_awaited_once_with("SLOW")

    @pytest.mark.asyncio()
    async def test_select_history_refetches(self, two_day_payload: dict[str, Any]) -> None:
        gateway = _gateway(200, two_day_payload)
        controller = DashboardController(gateway, InMemoryStore())
        state = await controller.select_history("MSFT")
        assert state.symbol == "MSFT"
        assert state.history == ("MSFT",)


class TestPersistence:
    def test_restore_reads_both_lists(self) -> None:
        store = InMemoryStore(
            {
                HISTORY_STORAGE_KEY: '["AAPL", "MSFT"]',
                FAVORITES_STORAGE_KEY: '["TSLA"]',
            }
        )
        controller = DashboardController(_gateway(), store)
        state = controller.restore()
        assert state.history == ("AAPL", "MSFT")
        assert state.favorites == ("TSLA",)

    @pytest.mark.parametrize("raw", ["{broken", '{"a": 1}', "42", '[1, null, ""]'])
    def test_restore_tolerates_bad_values(self, raw: str) -> None:
        store = InMemoryStore({HISTORY_STORAGE_KEY: raw, FAVORITES_STORAGE_KEY: raw})
        state = DashboardController(_gateway(), store).restore()
        assert state.history == ()
        assert state.favorites == ()

    def test_toggle_favorite_persists(self) -> None:
        store = InMemoryStore()
        controller = DashboardController(_gateway(), store)
        controller.set_symbol("aapl")
        controller.toggle_favorite()
        assert json.loads(store.get(FAVORITES_STORAGE_KEY) or "[]") == ["AAPL"]
        controller.toggle_favorite("AAPL")
        assert json.loads(store.get(FAVORITES_STORAGE_KEY) or "[]") == []

    def test_toggle_without_symbol_is_noop(self) -> None:
        store = InMemoryStore()
        controller = DashboardController(_gateway(), store)
        controller.toggle_favorite()
        assert store.get(FAVORITES_STORAGE_KEY) is None


class TestInitialLoad:
    @pytest.mark.asyncio()
    async def test_symbol_in_url_is_fetched(self, two_day_payload: dict[str, Any]) -> None:
        gateway = _gateway(200, two_day_payload)
        controller = DashboardController(gateway, InMemoryStore())
        task = controller.schedule_initial_fetch("http://localhost:3000/?symbol=ibm", delay=0)
        assert task is not None
        assert controller.state.symbol == "IBM"
        state = await task
        assert state.snapshot is not None
        gateway.get_stock.assert_awaited_once_with("IBM")

    @pytest.mark.asyncio()
    async def test_no_symbol_schedules_nothing(self) -> None:
        gateway = _gateway()
        controller = DashboardController(gateway, InMemoryStore())
        assert controller.schedule_initial_fetch("http://localhost:3000/") is None
        gateway.get_stock.assert_not_awaited()


class TestExport:
    @pytest.mark.asyncio()
    async def test_writes_csv(self, tmp_path: Path, two_day_payload: dict[str, Any]) -> None:
        controller = DashboardController(_gateway(200, two_day_payload), InMemoryStore())
        controller.set_symbol("IBM")
        await controller.fetch()
        path = controller.export_csv(tmp_path)
        assert path == tmp_path / "IBM_data.csv"
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "Date,Open,High,Low,Close,Volume"
        assert lines[1] == "2024-01-02,10,12,9,11,100"

    def test_empty_series_writes_nothing(self, tmp_path: Path) -> None:
        controller = DashboardController(_gateway(), InMemoryStore())
        assert controller.export_csv(tmp_path) is None
        assert list(tmp_path.iterdir()) == []

    def test_share_link(self) -> None:
        controller = DashboardController(_gateway(), InMemoryStore())
        controller.set_symbol("aapl")
        assert controller.share_link("http://localhost:3000") == "http://localhost:3000?symbol=AAPL"
