"""
KENOBRAIN — Keno Odds Web Server

JSON API over the payout files plus the static web UI.

    GET /api/payouts                     list payout CSVs
    GET /api/payouts/<file>              parsed payout table
    GET /api/report/<file>               full odds / EV report
    GET /api/outcome/<file>?picks=&hits= one (picks, hits) row
    GET /, /<path>                       static files from PUBLIC_DIR
"""
import logging
from pathlib import Path

from flask import Flask, jsonify, request, send_from_directory
from werkzeug.exceptions import NotFound
from werkzeug.security import safe_join
from rich.console import Console
from rich.panel import Panel

from config.settings import PAYOUTS_DIR, PUBLIC_DIR, ReportConfig, ServerConfig
from keno_engine import DomainError, KenoError, compute_game_report, compute_outcome
from keno_engine.odds import validate_places
from tools.payout_loader import list_payout_files, parse_payouts_csv

# ── Structured logging ──
logging.basicConfig(
    level=ReportConfig.LOG_LEVEL,
    format=ReportConfig.LOG_FORMAT,
    datefmt=ReportConfig.LOG_DATEFMT,
)
logger = logging.getLogger("kenobrain.web")

app = Flask(__name__, static_folder=None)
app.config["PAYOUTS_DIR"] = str(PAYOUTS_DIR)
app.config["PUBLIC_DIR"] = str(PUBLIC_DIR)
app.config["ODDS_DECIMALS"] = validate_places(ReportConfig.ODDS_DECIMALS)


def _json_error(message: str, status: int):
    return jsonify({"error": message}), status


def _payout_path(filename: str):
    """Absolute path of a payout file, or None if missing / outside the directory."""
    joined = safe_join(app.config["PAYOUTS_DIR"], filename)
    if joined is None:
        return None
    path = Path(joined)
    return path if path.is_file() else None


def _load_table(filename: str):
    """(table, None) on success, (None, error_response) otherwise."""
    path = _payout_path(filename)
    if path is None:
        return None, _json_error("File not found", 404)
    try:
        return parse_payouts_csv(path), None
    except KenoError as e:
        logger.warning(f"Failed to parse {filename}: {e}")
        return None, _json_error("Failed to parse file", 500)


# ============================================================
# API
# ============================================================

@app.route("/api/payouts")
def api_list_payouts():
    return jsonify(list_payout_files(app.config["PAYOUTS_DIR"]))


@app.route("/api/payouts/<path:filename>")
def api_payout_table(filename):
    table, err = _load_table(filename)
    if err:
        return err
    return jsonify(table.to_dict())


@app.route("/api/report/<path:filename>")
def api_report(filename):
    """API: Full odds & EV report for a payout file."""
    table, err = _load_table(filename)
    if err:
        return err
    report = compute_game_report(table, odds_places=app.config["ODDS_DECIMALS"])
    data = report.to_dict()
    data["source"] = filename
    return jsonify(data)


@app.route("/api/outcome/<path:filename>")
def api_outcome(filename):
    """API: Probability, odds and EV contribution of one (picks, hits) pair.

    Query params:
        picks — spots picked (1-10)
        hits  — matches (0..picks)
    """
    try:
        picks = int(request.args["picks"])
        hits = int(request.args["hits"])
    except KeyError as e:
        return _json_error(f"Missing query parameter: {e.args[0]}", 400)
    except ValueError:
        return _json_error("picks and hits must be integers", 400)

    table, err = _load_table(filename)
    if err:
        return err
    try:
        outcome = compute_outcome(picks, hits, table, odds_places=app.config["ODDS_DECIMALS"])
    except DomainError as e:
        return _json_error(str(e), 400)
    return jsonify(outcome.to_dict())


# ============================================================
# Static UI
# ============================================================

@app.route("/", defaults={"asset": "index.html"})
@app.route("/<path:asset>")
def static_files(asset):
    try:
        return send_from_directory(app.config["PUBLIC_DIR"], asset)
    except NotFound:
        return "Not Found", 404, {"Content-Type": "text/plain"}


@app.errorhandler(500)
def internal_error(e):
    logger.error(f"Unhandled error on {request.path}: {e}")
    if request.path.startswith("/api/"):
        return _json_error("Internal Server Error", 500)
    return "Internal Server Error", 500, {"Content-Type": "text/plain"}


def _banner():
    url = f"http://{ServerConfig.HOST}:{ServerConfig.PORT}"
    Console().print(Panel(
        f"[bold]🎰  Keno Odds Simulator[/bold]\n\n"
        f"Server running at:  {url}\n"
        f"Payouts: {app.config['PAYOUTS_DIR']}\n\n"
        f"Press Ctrl+C to stop",
        border_style="cyan",
    ))


def main():
    _banner()
    app.run(host=ServerConfig.HOST, port=ServerConfig.PORT, debug=ServerConfig.DEBUG)


if __name__ == "__main__":
    main()
