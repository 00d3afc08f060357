#!/usr/bin/env python3
"""
Tests for the keno odds HTTP API

Validates:
1. /api/payouts lists CSV files only
2. /api/payouts/<file> returns the parsed payout table
3. Missing files and directory escapes return 404 JSON
4. Unreadable files return 500 JSON
5. /api/report/<file> returns the full odds / EV report
6. /api/outcome/<file> validates picks/hits
7. Static files are served from PUBLIC_DIR, plain 404 otherwise
"""

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

SAMPLE_CSV = """Picks,0,1,2,3,4,5,6,7,8,9,10
1,,3.8,,,,,,,,,
2,,,15,,,,,,,,
10,,,,,,,,,,,100000
"""


@pytest.fixture
def client(tmp_path):
    from web_app import app

    payouts = tmp_path / "payouts"
    public = tmp_path / "public"
    payouts.mkdir()
    public.mkdir()
    (payouts / "sample.csv").write_text(SAMPLE_CSV)
    (payouts / "readme.txt").write_text("not a table")
    (payouts / "broken.csv").write_bytes(b"\xff\xfe\x00bad")
    (public / "index.html").write_text("<h1>Keno</h1>")
    (tmp_path / "secret.csv").write_text(SAMPLE_CSV)

    old = {k: app.config[k] for k in ("PAYOUTS_DIR", "PUBLIC_DIR")}
    app.config.update(TESTING=True, PAYOUTS_DIR=str(payouts), PUBLIC_DIR=str(public))
    yield app.test_client()
    app.config.update(old)


# ============================================================
# Payout files
# ============================================================

def test_list_payouts(client):
    resp = client.get("/api/payouts")
    assert resp.status_code == 200
    assert resp.get_json() == [
        {"filename": "broken.csv", "name": "broken"},
        {"filename": "sample.csv", "name": "sample"},
    ]


def test_payout_table(client):
    resp = client.get("/api/payouts/sample.csv")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["1"] == {"1": 3.8}
    assert data["2"] == {"2": 15}
    assert data["10"] == {"10": 100000}


def test_payout_table_missing(client):
    resp = client.get("/api/payouts/nope.csv")
    assert resp.status_code == 404
    assert resp.get_json() == {"error": "File not found"}


def test_payout_table_rejects_escape(client):
    from web_app import _payout_path

    assert _payout_path("../secret.csv") is None
    assert _payout_path("sample.csv") is not None
    assert client.get("/api/payouts/..%2Fsecret.csv").status_code == 404


def test_payout_table_unreadable(client):
    resp = client.get("/api/payouts/broken.csv")
    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to parse file"}


# ============================================================
# Reports
# ============================================================

def test_report(client):
    resp = client.get("/api/report/sample.csv")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["source"] == "sample.csv"
    assert data["game"] == {"pool_size": 80, "drawn_count": 20,
                            "not_drawn_count": 60, "max_picks": 10}
    assert [p["picks"] for p in data["picks"]] == list(range(1, 11))

    pick1 = data["picks"][0]
    assert pick1["rtp"] == pytest.approx(0.95)
    assert pick1["house_edge_pct"] == pytest.approx(5.0)
    assert pick1["best_odds_to_win"] == "1 in 4"
    assert [o["hits"] for o in pick1["outcomes"]] == [0, 1]

    pick10 = data["picks"][9]
    assert pick10["best_odds_to_win"] == "1 in 8,911,711.18"
    assert data["picks"][2]["best_odds_to_win"] == "impossible"
    assert data["summary"]["best_rtp_picks"] == 1


def test_report_missing(client):
    assert client.get("/api/report/nope.csv").status_code == 404


def test_outcome(client):
    resp = client.get("/api/outcome/sample.csv?picks=2&hits=2")
    assert resp.status_code == 200
    data = resp.get_json()
    assert data["odds"] == "1 in 16.63"
    assert data["payout"] == 15
    assert data["ev_contribution"] == pytest.approx(190 / 3160 * 15)


@pytest.mark.parametrize("query", [
    "picks=0&hits=0",
    "picks=11&hits=1",
    "picks=3&hits=-1",
    "picks=x&hits=1",
    "picks=3",
])
def test_outcome_bad_params(client, query):
    resp = client.get(f"/api/outcome/sample.csv?{query}")
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_outcome_impossible_hits(client):
    data = client.get("/api/outcome/sample.csv?picks=3&hits=5").get_json()
    assert data["probability"] == 0
    assert data["odds"] == "impossible"


# ============================================================
# Static UI
# ============================================================

def test_index(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert b"Keno" in resp.data


def test_static_missing(client):
    resp = client.get("/missing.js")
    assert resp.status_code == 404
    assert resp.data == b"Not Found"
