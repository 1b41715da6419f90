from datetime import datetime, timezone

from flask import Blueprint, Response, current_app, render_template

from app.intake.auth import require_basic_auth
from app.intake.dashboard import build_report
from app.intake.storage import SubmissionStore

bp = Blueprint("admin", __name__)


def _store() -> SubmissionStore:
    return current_app.extensions["intake_store"]


@bp.get("/")
@require_basic_auth
def index():
    store = _store()
    if not store.exists():
        return render_template("admin/empty.html")
    report = build_report(store.read_all())
    return render_template("admin/dashboard.html", report=report)


@bp.get("/download")
@require_basic_auth
def download():
    csv_text = _store().read_raw()
    if csv_text is None:
        return "No submissions found", 404

    filename = f"consultations-{datetime.now(timezone.utc).date().isoformat()}.csv"
    current_app.logger.info("Submissions CSV downloaded (%s)", filename)
    return Response(
        csv_text,
        mimetype="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
