"""Chart image routes."""

from __future__ import annotations

from flask import current_app, jsonify, request, send_file

from ...errors import TradeJournalError, ValidationError
from ...extensions import get_chart_store
from . import bp


@bp.errorhandler(TradeJournalError)
def _chart_error(error: TradeJournalError):
    return jsonify({"error": error.message}), error.status_code


@bp.post("/upload-chart")
def upload_chart():
    """Store a chart image and return the reference trades should carry."""

    file_storage = request.files.get("chart")
    if file_storage is None or not file_storage.filename:
        raise ValidationError("No chart image uploaded")

    store = get_chart_store()
    try:
        filename = store.save(file_storage)
    except TradeJournalError:
        raise
    except Exception as exc:
        current_app.logger.exception("Chart upload failed")
        return jsonify({"error": f"Error uploading chart: {exc}"}), 500

    return jsonify(
        {
            "success": True,
            "chartPath": store.reference_for(filename),
            "fileName": filename,
        }
    )


@bp.get("/chart/<filename>")
def serve_chart(filename: str):
    path = get_chart_store().resolve(filename)
    return send_file(path)


@bp.delete("/chart/<filename>")
def delete_chart(filename: str):
    try:
        get_chart_store().delete(filename)
    except Exception:
        current_app.logger.exception("Chart delete failed")
        return jsonify({"error": "Error deleting chart"}), 500
    return jsonify({"success": True, "message": "Chart deleted successfully"})
