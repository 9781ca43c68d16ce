from flask import Flask, request, jsonify
from flask_cors import CORS
from payout_engine import PayoutInput, PayoutProcessor
from payout_engine.coaching import current_quote
from payout_engine.storage import JsonFileStore, Preferences, RecomputeTracker, SavedDealBook
from payout_engine.validators import InputNormalizer
from auth import setup_auth
import os
import secrets
import logging

# Configure logging
logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

# Environment (dev, staging, prod)
ENVIRONMENT = os.environ.get("ENVIRONMENT", "dev")
DATA_PATH = os.environ.get("CALCULATOR_DATA_PATH", "calculator_store.json")

app = Flask(__name__)
app.config["SECRET_KEY"] = os.environ.get("SECRET_KEY") or secrets.token_hex(32)
app.config["CALCULATOR_USERNAME"] = os.environ.get("CALCULATOR_USERNAME")
app.config["CALCULATOR_PASSWORD"] = os.environ.get("CALCULATOR_PASSWORD")

# Enable CORS so a separately served calculator page can call the API
CORS(app)

setup_auth(app)

# Initialize the payout processor and the local store
processor = PayoutProcessor()
normalizer = InputNormalizer()
store = JsonFileStore(DATA_PATH)


def _validation_failed(e: Exception):
    logger.error(f"Validation error: {str(e)}")
    return jsonify({
        "error": f"Validation error: {str(e)}",
        "status": "validation_failed"
    }), 400


def _unexpected(e: Exception):
    logger.error(f"Unexpected processing error: {str(e)}", exc_info=True)
    return jsonify({
        "error": "An unexpected error occurred during processing",
        "status": "failed"
    }), 500


def _not_found(deal_id: str):
    return jsonify({"error": f"Saved deal not found: {deal_id}", "status": "not_found"}), 404


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _compute_from_request():
    """Parse the request body and compute; sale kind falls back to the stored preference."""
    input_data = request.get_json(silent=True)
    if not input_data or not isinstance(input_data, dict):
        raise ValueError("No input data provided")
    default_kind = Preferences(store).sale_kind
    return processor.process_from_dict(input_data, default_sale_kind=default_kind)


@app.route("/", methods=["GET"])
@app.route("/api", methods=["GET"])
def api_info():
    """API information endpoint"""
    return jsonify({
        "status": "ok",
        "message": "Solar Commission Payout Calculator API",
        "version": "1.0",
        "environment": ENVIRONMENT,
        "endpoints": {
            "compute": "/compute [POST]",
            "recompute": "/recompute [POST]",
            "normalize": "/normalize [POST]",
            "quote": "/quote [GET]",
            "preferences": "/preferences [GET, PUT]",
            "tracker": "/tracker [GET, DELETE]",
            "saved_deals": "/saved_deals [GET, POST]",
            "saved_deal": "/saved_deals/<id> [GET, PATCH, DELETE]",
            "login": "/login [POST]",
            "logout": "/logout [POST]",
            "health": "/health [GET]"
        }
    }), 200


@app.route("/health", methods=["GET"])
def health():
    """Health check for monitoring"""
    return jsonify({"status": "healthy", "environment": ENVIRONMENT}), 200


@app.route("/compute", methods=["POST"])
def compute():
    """
    Compute a payout for the current inputs. Called on every input change.
    """
    try:
        result = _compute_from_request()
        logger.info(
            f"Computed {result['inputs']['sale_kind']} payout: "
            f"total={result['payout']['total']['value']}"
        )
        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        return _validation_failed(e)

    except Exception as e:
        return _unexpected(e)


@app.route("/recompute", methods=["POST"])
def recompute():
    """
    Explicit recompute: compute again and count it on the personal tracker.
    """
    try:
        result = _compute_from_request()
        tracker = RecomputeTracker(store)
        tracker.record(result["payout"]["total"]["value"])
        result["tracker"] = tracker.to_dict()
        logger.info(
            f"Recomputed payout: total={result['payout']['total']['value']}, "
            f"celebrate={result['celebrate']}"
        )
        return jsonify(result), 200

    except (ValueError, KeyError, TypeError) as e:
        return _validation_failed(e)

    except Exception as e:
        return _unexpected(e)


@app.route("/normalize", methods=["POST"])
def normalize():
    """Commit typed entries into the calculator's editing ranges."""
    data = _json_body()
    committed = {}
    if "ppw" in data:
        committed["ppw"] = float(normalizer.commit_ppw(data["ppw"]))
    if "watts" in data:
        committed["watts"] = int(normalizer.commit_watts(data["watts"]))
    if "deals" in data:
        deals = normalizer.clamp_deals(data["deals"])
        committed["deals"] = int(deals) if deals == deals.to_integral_value() else float(deals)
    return jsonify(committed), 200


@app.route("/quote", methods=["GET"])
def quote():
    return jsonify({"quote": current_quote()}), 200


@app.route("/preferences", methods=["GET", "PUT"])
def preferences():
    prefs = Preferences(store)
    if request.method == "GET":
        return jsonify(prefs.to_dict()), 200

    data = _json_body()
    try:
        updated = prefs.update(
            mode=data.get("mode"),
            accent=data.get("accent"),
            sale_kind=data.get("sale_kind", data.get("saleKind")),
        )
    except ValueError as e:
        return _validation_failed(e)
    return jsonify(updated), 200


@app.route("/tracker", methods=["GET", "DELETE"])
def tracker():
    recompute_tracker = RecomputeTracker(store)
    if request.method == "DELETE":
        recompute_tracker.reset()
        logger.info("Tracker reset")
    return jsonify(recompute_tracker.to_dict()), 200


@app.route("/saved_deals", methods=["GET"])
def list_saved_deals():
    book = SavedDealBook(store)
    deals = book.search(request.args.get("q"))
    return jsonify({"saved_deals": [d.to_dict() for d in deals]}), 200


@app.route("/saved_deals", methods=["POST"])
def save_deal():
    """Snapshot the current inputs and total under a name."""
    try:
        input_data = request.get_json(silent=True)
        if not input_data or not isinstance(input_data, dict):
            raise ValueError("No input data provided")
        payout_input = PayoutInput.from_dict(input_data, default_sale_kind=Preferences(store).sale_kind)
        result = processor.process(payout_input)
        saved = SavedDealBook(store).save(payout_input, result, name=input_data.get("name"))
        logger.info(f"Saved deal: {saved.name}")
        return jsonify(saved.to_dict()), 201

    except (ValueError, KeyError, TypeError) as e:
        return _validation_failed(e)

    except Exception as e:
        return _unexpected(e)


@app.route("/saved_deals/<deal_id>", methods=["GET"])
def load_saved_deal(deal_id):
    """Load a saved deal: its inputs with a freshly recomputed payout."""
    try:
        saved = SavedDealBook(store).get(deal_id)
    except KeyError:
        return _not_found(deal_id)

    result = processor.process_to_dict(saved.to_input())
    result["saved_deal"] = saved.to_dict()
    return jsonify(result), 200


@app.route("/saved_deals/<deal_id>", methods=["PATCH"])
def rename_saved_deal(deal_id):
    data = _json_body()
    try:
        saved = SavedDealBook(store).rename(deal_id, data.get("name") or "")
    except KeyError:
        return _not_found(deal_id)
    return jsonify(saved.to_dict()), 200


@app.route("/saved_deals/<deal_id>", methods=["DELETE"])
def delete_saved_deal(deal_id):
    try:
        SavedDealBook(store).delete(deal_id)
    except KeyError:
        return _not_found(deal_id)
    logger.info(f"Deleted saved deal: {deal_id}")
    return jsonify({"status": "deleted", "id": deal_id}), 200


if __name__ == "__main__":
    port = int(os.environ.get("PORT", 8080))
    host = os.environ.get("HOST", "127.0.0.1")
    app.run(host=host, port=port, debug=False)
