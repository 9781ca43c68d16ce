"""
Unit Tests for the Output Builder

Each payout field carries its value and a plain-English description.
"""

import pytest
from payout_engine import PayoutInput, compute
from payout_engine.output import OutputBuilder, currency


def _build(kind, deals, ppw, watts):
    payout_input = PayoutInput.create(deals, ppw, watts, kind)
    return OutputBuilder().build(payout_input, compute(kind, deals, ppw, watts))


class TestOutputBuilder:
    """Test the response built for a loan and a TPO payout."""

    def test_loan_descriptions(self):
        output = _build("loan", 7, 3.6, 14000)
        payout = output["payout"]

        assert payout["base"]["description"] == "Base payout for 7 deals this month"
        assert payout["ppw_bonus"]["description"] == "$100/kW at PPW $3.60 × 14 kW = $1,400"
        assert payout["big_system_bonus"]["description"].endswith("14 kW = $400")
        assert payout["total"]["description"] == "base ($2,500) + ppw ($1,400) + system ($400) = $4,300"

    def test_ppw_outside_tiers(self):
        output = _build("loan", 1, 2.5, 8000)
        assert output["payout"]["ppw_bonus"]["description"] == "PPW $2.50 is outside the bonus tiers"
        assert output["payout"]["big_system_bonus"]["description"] == "8 kW is under the 10 kW floor"

    def test_tpo_descriptions(self):
        output = _build("tpo", 7, 3.6, 20000)
        payout = output["payout"]

        assert payout["ppw_bonus"]["value"] == 0
        assert "not applied" in payout["ppw_bonus"]["description"]
        assert "not applied" in payout["big_system_bonus"]["description"]
        assert payout["total"]["description"] == "TPO/PPA total equals base ($2,500)"
        assert output["inputs"]["sale_kind_label"] == "TPO/PPA"

    def test_inputs_echoed_as_plain_numbers(self):
        inputs = _build("loan", 1, 3.05, 8400)["inputs"]
        assert inputs == {
            "deals": 1,
            "ppw": 3.05,
            "watts": 8400,
            "sale_kind": "loan",
            "kw": 8.4,
            "sale_kind_label": "Loan/Cash",
        }

    @pytest.mark.parametrize("total,celebrate", [(2200, False), (4300, True)])
    def test_celebrate_flag(self, total, celebrate):
        output = _build("loan", 7, 3.6, 14000) if celebrate else _build("loan", 1, 3.0, 8000)
        assert output["payout"]["total"]["value"] == total
        assert output["celebrate"] is celebrate


class TestCurrency:

    def test_thousands_separator(self):
        assert currency(5450) == "5,450"
        assert currency(0) == "0"
