"""Tests for event record validation, JSONL loading and checked integer helpers."""

import json

import pytest
from pydantic import ValidationError

from indexer.engine.ingest import read_event_file
from indexer.errors import NarrowingError, Uint256OverflowError
from indexer.schemas.events import EventRecord, Purchased
from indexer.utils.constants import UINT256_MAX
from indexer.utils.numeric import checked_add_u256, to_i32

from factories import ACCOUNT, INSTRUMENT, UNDERLYING, tx


def _payload(**overrides) -> dict:
    payload = {
        "event": "Purchased",
        "address": INSTRUMENT,
        "block_number": 12,
        "tx_hash": tx(12),
        "log_index": 2,
        "params": {
            "caller": ACCOUNT,
            "underlying": UNDERLYING,
            "optionType": 1,
            "amount": "1000",
            "premium": "25",
            "optionID": 3,
        },
    }
    payload.update(overrides)
    return payload


# ---------------------------------------------------------------------------
# 1. EventRecord
# ---------------------------------------------------------------------------

class TestEventRecord:
    def test_decodes_camel_case_params(self):
        event = EventRecord.model_validate(_payload()).decode()
        assert isinstance(event, Purchased)
        assert event.premium == 25
        assert event.option_id == 3
        assert event.option_type == 1

    def test_meta_carries_tx_metadata(self):
        meta = EventRecord.model_validate(_payload()).meta()
        assert meta.tx_hash == tx(12)
        assert meta.log_index == 2
        assert meta.block_number == 12
        assert meta.address == INSTRUMENT
        assert meta.event_id == f"{tx(12)}-2"

    def test_addresses_are_lowercased(self):
        upper = "0x" + "AB" * 20
        params = {**_payload()["params"], "caller": upper}
        record = EventRecord.model_validate(_payload(address=upper, params=params))
        assert record.address == upper.lower()
        assert record.decode().caller == upper.lower()

    def test_rejects_malformed_address(self):
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_payload(address="0x1234"))

    def test_rejects_short_tx_hash(self):
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_payload(tx_hash="0xabc"))

    def test_rejects_negative_log_index(self):
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_payload(log_index=-1))

    def test_rejects_premium_above_uint256(self):
        params = {**_payload()["params"], "premium": str(UINT256_MAX + 1)}
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_payload(params=params))

    def test_rejects_missing_param(self):
        params = dict(_payload()["params"])
        del params["premium"]
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_payload(params=params))

    def test_unknown_event_is_accepted_without_decoding(self):
        record = EventRecord.model_validate(_payload(event="Transfer", params={"value": 1}))
        assert record.decode() is None

    @pytest.mark.parametrize("field", ["optionType", "amount", "premium", "optionID"])
    def test_rejects_boolean_integers(self, field):
        params = {**_payload()["params"], field: True}
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_payload(params=params))

    @pytest.mark.parametrize("value", ["0x19", "2.5e1", "-25", "", 25.0])
    def test_rejects_non_decimal_premium(self, value):
        params = {**_payload()["params"], "premium": value}
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_payload(params=params))

    def test_rejects_boolean_block_number(self):
        with pytest.raises(ValidationError):
            EventRecord.model_validate(_payload(block_number=True))

    def test_wide_ids_pass_schema_and_are_narrowed_later(self):
        params = {**_payload()["params"], "optionID": str(2**64)}
        assert EventRecord.model_validate(_payload(params=params)).decode().option_id == 2**64


# ---------------------------------------------------------------------------
# 2. JSONL loading
# ---------------------------------------------------------------------------

def test_read_event_file_skips_blanks_and_comments(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(
        "# exported from block 12\n"
        + json.dumps(_payload()) + "\n"
        + "\n"
        + json.dumps(_payload(log_index=3)) + "\n"
    )
    records = list(read_event_file(path))
    assert [r.log_index for r in records] == [2, 3]


def test_read_event_file_is_utf8(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_bytes(("# export für Block 12, Zürich\n" + json.dumps(_payload()) + "\n").encode("utf-8"))
    assert [r.block_number for r in read_event_file(path)] == [12]


def test_read_event_file_reports_line_number(tmp_path):
    path = tmp_path / "events.jsonl"
    path.write_text(json.dumps(_payload()) + "\n{not json\n")
    with pytest.raises(ValueError, match=r"events.jsonl:2"):
        list(read_event_file(path))


# ---------------------------------------------------------------------------
# 3. Checked integers
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value", [0, 5, 2**31 - 1, -(2**31)])
def test_to_i32_accepts_range(value):
    assert to_i32(value) == value


@pytest.mark.parametrize("value", [2**31, 2**32, 2**255, -(2**31) - 1])
def test_to_i32_refuses_to_wrap(value):
    with pytest.raises(NarrowingError):
        to_i32(value, "positionID")


def test_checked_add_u256():
    assert checked_add_u256(UINT256_MAX - 1, 1) == UINT256_MAX
    with pytest.raises(Uint256OverflowError):
        checked_add_u256(UINT256_MAX, 1)
    with pytest.raises(Uint256OverflowError):
        checked_add_u256(-1, 1)
