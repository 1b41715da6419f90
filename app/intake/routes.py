from flask import Blueprint, current_app, render_template, request

from app.intake.models import Submission, ValidationError
from app.intake.storage import StoreError, SubmissionStore

bp = Blueprint("routes", __name__)


@bp.get("/")
def index():
    return render_template("public/index.html")


@bp.get("/health")
def health():
    """Health check endpoint. Returns JSON."""
    return {"ok": True}


@bp.get("/healthz")
def healthz():
    return "ok", 200


@bp.post("/api/contact")
def contact():
    payload = request.get_json(silent=True) if request.is_json else request.form.to_dict()
    if not isinstance(payload, dict):
        payload = {}

    try:
        submission = Submission.from_payload(payload)
    except ValidationError as e:
        current_app.logger.warning("Contact submission rejected: missing=%s", ",".join(e.missing))
        return {"ok": False, "error": "Missing required fields", "missing": e.missing}, 400

    store: SubmissionStore = current_app.extensions["intake_store"]
    try:
        store.append(submission)
    except StoreError:
        current_app.logger.exception("Failed to save submission")
        return {"ok": False, "error": "Failed to save submission"}, 500

    current_app.logger.info("Stored submission source=%s", submission.source)
    return {"ok": True}
