"""
Tests for PennyWise transaction history sources
"""
import sys
from datetime import date
from pathlib import Path

import httpx

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tools.transaction_source import (
    FallbackTransactionSource,
    LiveTransactionSource,
    get_transaction_source,
)


API_URL = "https://api.example.test/transactions"


def mock_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_fallback_source_serves_fixed_history():
    records = FallbackTransactionSource().fetch()

    assert len(records) == 5
    assert records[0].date == date(2025, 2, 20)
    assert records[0].amount == 500
    assert {r.category for r in records} >= {"Food", "Bills"}

    print(f"✓ Fallback history: {len(records)} records")


def test_fallback_source_returns_copies():
    source = FallbackTransactionSource()
    source.fetch()[0].amount = 0

    assert source.fetch()[0].amount == 500
    print("✓ Fallback records are copies")


def test_live_source_parses_list():
    def handler(request):
        assert str(request.url) == API_URL
        return httpx.Response(200, json=[
            {"date": "2025-03-01", "amount": 250, "category": "Food"},
            {"date": "2025-02-27", "amount": 99.5},
        ])

    source = LiveTransactionSource(API_URL, client=mock_client(handler))
    records = source.fetch()
    source.close()

    assert [r.amount for r in records] == [250, 99.5]
    assert records[1].category is None

    print(f"✓ Live source returned {len(records)} records")


def test_live_source_parses_wrapped_payload():
    def handler(request):
        return httpx.Response(200, json={"transactions": [
            {"date": "2025-03-01", "amount": 40, "category": "Transport"},
        ]})

    records = LiveTransactionSource(API_URL, client=mock_client(handler)).fetch()

    assert len(records) == 1
    assert records[0].category == "Transport"
    print("✓ Wrapped payload parsed")


def test_live_source_skips_malformed_rows():
    def handler(request):
        return httpx.Response(200, json=[
            {"date": "2025-03-01", "amount": 40},
            {"date": "not a date", "amount": 10},
            {"amount": 5},
            "garbage",
        ])

    records = LiveTransactionSource(API_URL, client=mock_client(handler)).fetch()

    assert len(records) == 1
    print("✓ Malformed rows skipped")


def test_live_source_falls_back_on_server_error():
    def handler(request):
        return httpx.Response(500, text="boom")

    source = LiveTransactionSource(
        API_URL,
        fallback=FallbackTransactionSource(),
        client=mock_client(handler),
    )
    records = source.fetch()

    assert len(records) == 5
    print("✓ HTTP 500 → fallback history")


def test_live_source_falls_back_on_network_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    source = LiveTransactionSource(
        API_URL,
        fallback=FallbackTransactionSource(),
        client=mock_client(handler),
    )

    assert len(source.fetch()) == 5
    print("✓ Network error → fallback history")


def test_live_source_falls_back_on_bad_payload():
    def handler(request):
        return httpx.Response(200, json={"unexpected": True})

    source = LiveTransactionSource(
        API_URL,
        fallback=FallbackTransactionSource(),
        client=mock_client(handler),
    )

    assert len(source.fetch()) == 5
    print("✓ Unexpected payload → fallback history")


def test_live_source_falls_back_when_every_row_is_malformed():
    def handler(request):
        return httpx.Response(200, json=[
            {"date": "not a date", "amount": 10},
            {"amount": 5},
            "garbage",
        ])

    source = LiveTransactionSource(
        API_URL,
        fallback=FallbackTransactionSource(),
        client=mock_client(handler),
    )
    records = source.fetch()

    assert len(records) == 5
    assert records[0].category == "Food"
    print("✓ No usable rows → fallback history")


def test_live_source_empty_list_is_not_replaced():
    """An empty list is a valid answer, not a failure"""
    def handler(request):
        return httpx.Response(200, json=[])

    source = LiveTransactionSource(
        API_URL,
        fallback=FallbackTransactionSource(),
        client=mock_client(handler),
    )

    assert source.fetch() == []
    print("✓ Empty history passed through")


def test_live_source_without_fallback_returns_empty():
    def handler(request):
        return httpx.Response(503)

    records = LiveTransactionSource(API_URL, client=mock_client(handler)).fetch()

    assert records == []
    print("✓ No fallback → empty history")


def test_source_selected_from_environment(monkeypatch):
    monkeypatch.delenv("PENNYWISE_TRANSACTIONS_URL", raising=False)
    assert isinstance(get_transaction_source(), FallbackTransactionSource)

    monkeypatch.setenv("PENNYWISE_TRANSACTIONS_URL", API_URL)
    monkeypatch.setenv("PENNYWISE_HTTP_TIMEOUT", "5")
    source = get_transaction_source()

    assert isinstance(source, LiveTransactionSource)
    assert source.url == API_URL
    assert isinstance(source.fallback, FallbackTransactionSource)
    source.close()

    print("✓ Source chosen from PENNYWISE_TRANSACTIONS_URL")


if __name__ == "__main__":
    print("\n🧪 Running PennyWise Transaction Source Tests\n")
    print("-" * 50)

    test_fallback_source_serves_fixed_history()
    test_fallback_source_returns_copies()
    test_live_source_parses_list()
    test_live_source_parses_wrapped_payload()
    test_live_source_skips_malformed_rows()

    print("\n--- Fallback Tests ---")
    test_live_source_falls_back_on_server_error()
    test_live_source_falls_back_on_network_error()
    test_live_source_falls_back_on_bad_payload()
    test_live_source_falls_back_when_every_row_is_malformed()
    test_live_source_empty_list_is_not_replaced()
    test_live_source_without_fallback_returns_empty()

    print("-" * 50)
    print("\n✅ All tests passed!\n")
