"""Journal file routes: load, save, create, list, delete and download."""

from __future__ import annotations

from flask import current_app, jsonify, request, send_file

from ...errors import NoActiveFileError, TradeJournalError, ValidationError
from ...extensions import get_workspace
from ...services.workspace import LoadedJournal
from . import bp
from .forms import JournalPayloadForm


@bp.errorhandler(TradeJournalError)
def _journal_error(error: TradeJournalError):
    return jsonify({"error": error.message}), error.status_code


def _unexpected(action: str, exc: Exception):
    current_app.logger.exception("%s failed", action)
    return jsonify({"error": f"Error {action}: {exc}"}), 500


def _loaded_payload(loaded: LoadedJournal) -> dict:
    ledger = loaded.ledger
    return {
        "success": True,
        "message": "File loaded successfully",
        "fileName": loaded.file_name,
        "trades": [trade.to_payload() for trade in ledger.trades],
        "startingBalanceCrypto": ledger.starting_balance_crypto,
        "startingBalanceForex": ledger.starting_balance_forex,
    }


def _json_body() -> dict:
    body = request.get_json(silent=True)
    return body if isinstance(body, dict) else {}


@bp.post("/upload")
def upload_file():
    """Store an uploaded spreadsheet and load it as the active file."""

    file_storage = request.files.get("file")
    if file_storage is None or not file_storage.filename:
        raise ValidationError("No file uploaded")
    try:
        loaded = get_workspace().upload(file_storage)
    except TradeJournalError:
        raise
    except Exception as exc:
        return _unexpected("processing file", exc)
    return jsonify(_loaded_payload(loaded))


@bp.post("/load-file")
def load_file():
    """Load a stored journal by name."""

    file_name = _json_body().get("fileName")
    if not isinstance(file_name, str) or not file_name.strip():
        raise ValidationError("File name is required")
    try:
        loaded = get_workspace().load_file(file_name)
    except TradeJournalError:
        raise
    except Exception as exc:
        return _unexpected("loading file", exc)
    return jsonify(_loaded_payload(loaded))


@bp.post("/save")
def save_file():
    """Overwrite the active file with the posted trades."""

    workspace = get_workspace()
    if not workspace.store.has_active:
        raise NoActiveFileError()

    form = JournalPayloadForm.from_mapping(_json_body())
    if not form.validate():
        raise ValidationError(form.first_error())

    try:
        name = workspace.save(
            form.trades,
            form.starting_balance_crypto,
            form.starting_balance_forex,
        )
    except TradeJournalError:
        raise
    except Exception as exc:
        return _unexpected("saving file", exc)
    return jsonify(
        {
            "success": True,
            "message": f'File "{name}" updated successfully',
            "fileName": name,
        }
    )


@bp.post("/create-new")
def create_new_file():
    """Create a new journal file and make it active."""

    form = JournalPayloadForm.from_mapping(_json_body(), require_file_name=True)
    if not form.validate():
        raise ValidationError(form.first_error())

    try:
        name = get_workspace().create_new(
            form.file_name,
            form.trades,
            form.starting_balance_crypto,
            form.starting_balance_forex,
        )
    except TradeJournalError:
        raise
    except Exception as exc:
        return _unexpected("creating file", exc)
    return jsonify(
        {
            "success": True,
            "message": f'New file "{name}" created successfully',
            "fileName": name,
        }
    )


@bp.get("/active-file")
def active_file():
    return jsonify(get_workspace().active_file_info())


@bp.get("/files")
def list_files():
    """List stored journal files, newest first."""

    try:
        files = get_workspace().list_files()
    except Exception as exc:
        return _unexpected("listing files", exc)
    return jsonify([entry.to_payload() for entry in files])


@bp.delete("/files/<file_name>")
def delete_file(file_name: str):
    try:
        get_workspace().delete_file(file_name)
    except TradeJournalError:
        raise
    except Exception as exc:
        return _unexpected("deleting file", exc)
    return jsonify({"success": True, "message": f'File "{file_name}" deleted successfully'})


@bp.get("/download")
def download_file():
    """Send the active file as an attachment."""

    path, name = get_workspace().download_target()
    return send_file(path, as_attachment=True, download_name=name)
