# app/api/middlewares/error_handler.py
import logging

from flask import Flask, jsonify
from pydantic import ValidationError as PydanticValidationError
from werkzeug.exceptions import HTTPException, NotFound

from app.core.exceptions import AppError, ValidationError

log = logging.getLogger("seniorble.errors")

INVALID_INPUT = "입력값이 올바르지 않습니다."
NOT_FOUND = "요청하신 엔드포인트를 찾을 수 없습니다."
SERVER_ERROR = "서버 오류가 발생했습니다."


def _pydantic_messages(err: PydanticValidationError) -> list[str]:
    messages = []
    for e in err.errors():
        loc = ".".join(str(p) for p in e.get("loc", ()) if p != "__root__")
        messages.append(f"{loc}: {e.get('msg')}" if loc else str(e.get("msg")))
    return messages


def register_error_handlers(app: Flask, *, debug: bool = False) -> None:
    @app.errorhandler(ValidationError)
    def handle_validation_error(err: ValidationError):
        return jsonify({"success": False, "message": str(err), "errors": err.errors}), 400

    @app.errorhandler(PydanticValidationError)
    def handle_schema_error(err: PydanticValidationError):
        return jsonify({"success": False, "message": INVALID_INPUT, "errors": _pydantic_messages(err)}), 400

    @app.errorhandler(AppError)
    def handle_app_error(err: AppError):
        if err.status_code >= 500:
            log.error("app error: %s", err, exc_info=err)
            return jsonify({"success": False, "message": SERVER_ERROR}), err.status_code
        return jsonify({"success": False, "message": str(err)}), err.status_code

    @app.errorhandler(NotFound)
    def handle_not_found(err: NotFound):
        return jsonify({"success": False, "message": NOT_FOUND}), 404

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        return jsonify({"success": False, "message": err.description}), err.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        log.exception("unhandled error")

        if debug:
            return jsonify({"success": False, "message": SERVER_ERROR, "error": str(err)}), 500

        return jsonify({"success": False, "message": SERVER_ERROR}), 500
