"""Tests for the checkout command line."""

import io

import pytest

from pos_checkout.cli import FLOWS, main, parse_args


@pytest.fixture(autouse=True)
def default_env(monkeypatch):
    for name in ("POS_CURRENCY", "POS_LOG_LEVEL", "POS_LOG_FILE", "POS_REVENUE_LOG", "POS_OFFLINE_ITEM_IDS"):
        monkeypatch.delenv(name, raising=False)


def run(*argv: str) -> str:
    out = io.StringIO()
    assert main(list(argv), out=out) == 0
    return out.getvalue()


class TestParseArgs:
    def test_defaults(self) -> None:
        args = parse_args([])
        assert args.flows == []
        assert args.revenue_log is None
        assert not args.no_revenue_log

    def test_unknown_flow(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            parse_args(["refund"])
        assert exc_info.value.code == 2


class TestMain:
    def test_basic_flow(self) -> None:
        output = run("basic", "--no-revenue-log")
        assert "[basic]" in output
        assert "New sale started." in output
        assert "Total cost (incl VAT): 37.50 SEK" in output
        assert "Sale ended. Total price: 37.50 SEK" in output
        assert "Begin receipt" in output
        assert "Change to give the customer: 62.50 SEK" in output

    def test_missing_item_flow(self) -> None:
        """Unknown and unreachable items are reported and the sale goes on."""
        output = run("missing-item", "--no-revenue-log")
        assert "No item found with ID: 99. Please try another item." in output
        assert "Could not connect to the inventory database. Please try again later." in output
        assert "Sale ended. Total price: 25.00 SEK" in output
        assert "Change to give the customer: 75.00 SEK" in output

    def test_discount_flow(self) -> None:
        output = run("discount", "--no-revenue-log")
        assert "Sale ended. Total price: 175.00 SEK" in output
        assert "Discounts requested and applied." in output
        assert "New total price: 114.82 SEK" in output
        assert "Change to give the customer: 5.18 SEK" in output

    def test_all_flows_by_default(self) -> None:
        output = run("--no-revenue-log")
        for name in FLOWS:
            assert f"[{name}]" in output
        assert output.count("Begin receipt") == len(FLOWS)

    def test_revenue_log_file(self, tmp_path) -> None:
        path = tmp_path / "revenue.log"
        run("basic", "bulk", "--revenue-log", str(path))

        content = path.read_text(encoding="utf-8")
        assert "Total Revenue: 37.50 SEK" in content
        assert "Total Revenue: 212.50 SEK" in content

    def test_currency_from_environment(self, monkeypatch) -> None:
        monkeypatch.setenv("POS_CURRENCY", "EUR")
        output = run("basic", "--no-revenue-log")
        assert "Change to give the customer: 62.50 EUR" in output
