"""Blueprint routes: list, lookup, create, and append points.

Mounted under ``{API_PREFIX}/blueprints``:
- GET  /                        -> 200, all blueprints
- GET  /<author>                -> 200, blueprints of author | 404
- GET  /<author>/<name>         -> 200, filtered blueprint | 404
- POST /                        -> 201, created blueprint | 403 duplicate | 400 invalid
- PUT  /<author>/<name>/points  -> 202 | 404 | 400 invalid

Every response uses the envelope ``{code, message, data}``.
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Blueprint, current_app, jsonify, request
from pydantic import ValidationError

from blueprints_service.errors import BlueprintAlreadyExistsError, BlueprintNotFoundError
from blueprints_service.schemas import ApiResponse, BlueprintOut, NewBlueprintRequest, PointIn
from blueprints_service.services.blueprint_service import BlueprintsService


blueprints_bp = Blueprint("blueprints", __name__)


def envelope(code: int, message: str, data: Any = None):
    return jsonify(ApiResponse(code=code, message=message, data=data).model_dump()), code


def _service() -> BlueprintsService:
    return current_app.extensions["blueprints_service"]


@blueprints_bp.errorhandler(BlueprintNotFoundError)
def _not_found(e: BlueprintNotFoundError):
    logging.warning(f"Not found: {e}")
    return envelope(404, str(e))


@blueprints_bp.errorhandler(BlueprintAlreadyExistsError)
def _already_exists(e: BlueprintAlreadyExistsError):
    logging.warning(f"Rejected duplicate: {e}")
    return envelope(403, str(e))


@blueprints_bp.errorhandler(ValidationError)
def _invalid(e: ValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc']) or 'body'}: {err['msg']}" for err in e.errors()
    )
    logging.warning(f"Invalid request to {request.path}: {details}")
    return envelope(400, f"Invalid request: {details}")


@blueprints_bp.get("")
def get_all():
    bps = _service().get_all_blueprints()
    return envelope(200, "execute ok", [o.model_dump() for o in BlueprintOut.many(bps)])


@blueprints_bp.get("/<author>")
def by_author(author: str):
    bps = _service().get_blueprints_by_author(author)
    return envelope(200, "execute ok", [o.model_dump() for o in BlueprintOut.many(bps)])


@blueprints_bp.get("/<author>/<name>")
def by_author_and_name(author: str, name: str):
    bp = _service().get_blueprint(author, name)
    return envelope(200, "execute ok", BlueprintOut.from_domain(bp).model_dump())


@blueprints_bp.post("")
def create():
    payload = request.get_json(silent=True) or {}
    req = NewBlueprintRequest.model_validate(payload)
    bp = req.to_domain()
    _service().add_new_blueprint(bp)
    return envelope(201, "blueprint created", BlueprintOut.from_domain(bp).model_dump())


@blueprints_bp.put("/<author>/<name>/points")
def add_point(author: str, name: str):
    payload = request.get_json(silent=True) or {}
    p = PointIn.model_validate(payload)
    _service().add_point(author, name, p.x, p.y)
    return envelope(202, "point added")
