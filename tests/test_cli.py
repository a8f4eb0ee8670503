"""Tests for the admin CLI."""

import json
import sys

import pytest
from sqlmodel import Session

from indexer import cli
from indexer.config import settings
from indexer.database import create_db_and_tables
from indexer.models.position import InstrumentPosition

from factories import FACTORY, instrument_created, position_created, purchased, tx


@pytest.fixture
def cli_engine(engine, monkeypatch):
    monkeypatch.setattr(cli, "engine", engine)
    monkeypatch.setattr(cli, "create_db_and_tables", lambda: create_db_and_tables(engine))
    monkeypatch.setattr(settings, "factory_addresses", [FACTORY])
    monkeypatch.setattr(settings, "start_block", 0)
    return engine


def _write(path, *records):
    path.write_text("".join(json.dumps(r.model_dump()) + "\n" for r in records))
    return str(path)


def test_ingest_file(cli_engine, tmp_path, capsys):
    path = _write(
        tmp_path / "events.jsonl",
        purchased(2, 1, premium=9),
        instrument_created(1, 0),
        position_created(2, 0, position_id=3),
    )
    cli.ingest(path)

    assert "3 events processed, 0 skipped" in capsys.readouterr().out
    with Session(cli_engine) as session:
        assert session.get(InstrumentPosition, tx(2)).cost == 9


def test_ingest_halts_with_exit_code_2(cli_engine, tmp_path, capsys):
    path = _write(tmp_path / "events.jsonl", instrument_created(1, 0), purchased(2, 0, premium=1, option_id=2**31))
    with pytest.raises(SystemExit) as exc:
        cli.ingest(path)
    assert exc.value.code == 2
    assert "halted after 1 events" in capsys.readouterr().out


def test_ingest_missing_file_exits(cli_engine, tmp_path):
    with pytest.raises(SystemExit) as exc:
        cli.ingest(str(tmp_path / "nope.jsonl"))
    assert exc.value.code == 1


def test_sources_lists_registered_instruments(cli_engine, tmp_path, capsys):
    cli.ingest(_write(tmp_path / "events.jsonl", instrument_created(4, 0)))
    capsys.readouterr()

    cli.list_sources()
    assert "Instrument  block=4" in capsys.readouterr().out


def test_main_without_command_prints_usage(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["indexer.cli"])
    with pytest.raises(SystemExit):
        cli.main()
    assert "Usage" in capsys.readouterr().out
