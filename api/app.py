import logging
from collections import OrderedDict

from flask import Flask, jsonify, request
from pydantic import ValidationError

from listening_core import check_answer
from listening_core.coaching import CoachClient, explain_event
from listening_core.config import INSIGHT_CACHE_SIZE, MAX_INPUT_TOKENS
from listening_core.errors import InputTooLongError, MissingTranscriptError
from listening_core.models import AlignmentEvent, SemanticScore

from api.schemas import CheckAnswerRequest, InsightRequest

logger = logging.getLogger(__name__)


class InsightCache:
    """Small in-process LRU of insight responses keyed by event and texts."""

    def __init__(self, max_size=INSIGHT_CACHE_SIZE):
        self.max_size = max_size
        self._items = OrderedDict()

    def get(self, key):
        if key not in self._items:
            return None
        self._items.move_to_end(key)
        return self._items[key]

    def put(self, key, value):
        self._items[key] = value
        self._items.move_to_end(key)
        while len(self._items) > self.max_size:
            self._items.popitem(last=False)

    def __len__(self):
        return len(self._items)


def _validation_error(e):
    details = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
    return jsonify({"error": "Invalid request body", "details": details}), 400


def create_app(coach_client=None, max_tokens=MAX_INPUT_TOKENS):
    app = Flask(__name__)
    app.config["COACH_CLIENT"] = coach_client
    app.config["MAX_INPUT_TOKENS"] = max_tokens
    app.config["INSIGHT_CACHE"] = InsightCache()

    # ============================================================================
    # HEALTH
    # ============================================================================
    @app.route('/health', methods=['GET'])
    def health():
        return jsonify({"status": "ok", "coach_model": app.config["COACH_CLIENT"] is not None})

    # ============================================================================
    # CHECK ANSWER
    # ============================================================================
    @app.route('/api/check-answer', methods=['POST'])
    def check_answer_route():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return jsonify({"error": "Expected a JSON object"}), 400
        try:
            payload = CheckAnswerRequest.model_validate(body)
        except ValidationError as e:
            return _validation_error(e)

        semantic = None
        if payload.semantic_score is not None:
            semantic = SemanticScore(payload.semantic_score, list(payload.missing_keywords))

        try:
            result = check_answer(
                payload.transcript,
                payload.attempt,
                skipped=payload.skipped,
                include_summary=payload.include_summary,
                semantic=semantic,
                max_tokens=app.config["MAX_INPUT_TOKENS"],
            )
        except MissingTranscriptError:
            return jsonify({"error": "Missing transcript"}), 400
        except InputTooLongError as e:
            return jsonify({"error": str(e)}), 413
        except Exception as e:
            logger.exception("check-answer failed")
            return jsonify({"error": str(e)}), 500

        logger.info(
            "check-answer: %d ref tokens, %d events, accuracy %d%%",
            len(result.ref_tokens), len(result.events), result.accuracy_percent,
        )
        return jsonify(result.to_dict())

    # ============================================================================
    # COACHING INSIGHT
    # ============================================================================
    @app.route('/api/insight', methods=['POST'])
    def insight_route():
        body = request.get_json(silent=True)
        if not isinstance(body, dict):
            return jsonify({"error": "Expected a JSON object"}), 400
        try:
            payload = InsightRequest.model_validate(body)
        except ValidationError as e:
            return _validation_error(e)

        try:
            event = AlignmentEvent.from_dict(payload.event)
        except (KeyError, TypeError, ValueError) as e:
            return jsonify({"error": f"Invalid event: {e}"}), 400

        cache = app.config["INSIGHT_CACHE"]
        cache_key = (event.event_id, payload.transcript, payload.user_text)
        cached = cache.get(cache_key)
        if cached is not None:
            return jsonify(cached)

        try:
            result = explain_event(event, payload.transcript, payload.user_text, client=app.config["COACH_CLIENT"])
        except Exception as e:
            logger.exception("insight failed for event %s", event.event_id)
            return jsonify({"error": str(e)}), 500

        response = result.to_dict()
        cache.put(cache_key, response)
        return jsonify(response)

    return app


app = create_app(CoachClient.from_env())

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO)
    app.run(debug=True, host='0.0.0.0', port=5000)
