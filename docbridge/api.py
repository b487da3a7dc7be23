"""
Upload boundary and language listing.

The upload route validates the form, stores the PDF in a temporary file for
the duration of one pipeline run, and returns the pipeline result as JSON.
"""
import os
import uuid
from typing import Any, Dict, Tuple

from flask import Blueprint, current_app, jsonify, render_template, request
from flask_wtf.csrf import CSRFError
from werkzeug.exceptions import RequestEntityTooLarge

from docbridge.languages import SUPPORTED_LANGUAGES, get_language, language_keys, normalize_key
from docbridge.models import now_utc_iso
from docbridge.utils.text import safe_filename

api_bp = Blueprint('api', __name__)


def error_response(message: str, status: int) -> Tuple[Any, int]:
    return jsonify({"success": False, "error": message, "timestamp": now_utc_iso()}), status


def too_large_message() -> str:
    return f"File is too large. Maximum size is {current_app.config['MAX_UPLOAD_LABEL']}"


def _upload_path(filename: str) -> str:
    folder = current_app.config['UPLOAD_FOLDER']
    os.makedirs(folder, exist_ok=True)
    return os.path.join(folder, f"{uuid.uuid4().hex}-{safe_filename(filename)}")


def _remove_upload(path: str) -> None:
    try:
        os.remove(path)
    except FileNotFoundError:
        pass
    except OSError as e:
        current_app.logger.error(f'Error cleaning up temp file {path}: {e}')


def _languages_payload() -> Dict[str, Any]:
    return {
        "success": True,
        "languages": [lang.to_dict() for lang in SUPPORTED_LANGUAGES],
        "maxFileSize": current_app.config['MAX_UPLOAD_BYTES'],
        "maxFileSizeLabel": current_app.config['MAX_UPLOAD_LABEL'],
    }


@api_bp.app_errorhandler(RequestEntityTooLarge)
def handle_too_large(e):
    return error_response(too_large_message(), 413)


@api_bp.app_errorhandler(CSRFError)
def handle_csrf_error(e):
    current_app.logger.warning(f'CSRF check failed: {e.description}')
    return error_response(e.description, 400)


@api_bp.route("/", methods=["GET"])
def index():
    return render_template("index.html", **_languages_payload())


@api_bp.route("/api/languages", methods=["GET"])
def languages():
    return jsonify(_languages_payload()), 200


@api_bp.route("/api/translate-file", methods=["POST"])
async def translate_file():
    file = request.files.get("file")
    language = normalize_key(request.form.get("language"))

    current_app.logger.info(
        'Received upload: name=%s language=%s',
        getattr(file, "filename", None), language or None,
    )

    if not file:
        return error_response("No file provided", 400)

    if not get_language(language):
        return error_response(f"Invalid language. Must be one of: {', '.join(language_keys())}", 400)

    filename = (getattr(file, "filename", "") or "").strip()
    if not filename.lower().endswith(".pdf"):
        return error_response("Only PDF files are supported", 400)

    data = file.read()
    if not data:
        return error_response("Uploaded file is empty", 400)
    if len(data) > current_app.config['MAX_UPLOAD_BYTES']:
        return error_response(too_large_message(), 413)

    upath = _upload_path(filename)
    with open(upath, "wb") as f:
        f.write(data)

    try:
        pipeline = current_app.extensions['docbridge'].pipeline()
        result = await pipeline.process(upath, language)
    finally:
        _remove_upload(upath)

    if not result.success:
        return jsonify(result.to_dict()), 500
    return jsonify(result.to_dict()), 200
