from flask import Blueprint, jsonify, request

from ..exceptions import AvailabilityError, ConflictError, InvalidInputError, NotFoundError
from ..services.availability_service import AvailabilityService
from ..services.fleet_service import FleetStatusService
from ..services.vehicle_service import VehicleService
from ..utils.filters import to_jsonable

bp = Blueprint("availability", __name__, url_prefix="/api/availability")


def _ok(payload, status: int = 200):
    return jsonify(to_jsonable(payload)), status


@bp.errorhandler(AvailabilityError)
def handle_availability_error(err: AvailabilityError):
    """NotFound -> 404, Conflict -> 409, InvalidInput -> 400."""
    if isinstance(err, NotFoundError):
        code = 404
    elif isinstance(err, ConflictError):
        code = 409
    elif isinstance(err, InvalidInputError):
        code = 400
    else:
        code = 422
    return jsonify({"error": err.message}), code


# ---------- Read side ----------
@bp.get("/stats")
def availability_stats():
    return _ok(AvailabilityService.get_availability_stats())


@bp.get("/summary")
def fleet_summary():
    return _ok(FleetStatusService.summary())


@bp.get("/vehicles")
def vehicles_with_availability():
    return _ok(AvailabilityService.get_all_vehicles_with_availability())


@bp.get("/vehicles/<status>")
def vehicles_by_status(status):
    return _ok(AvailabilityService.get_vehicles_by_status(status))


@bp.get("/vehicle/<vid>/calendar")
def vehicle_calendar(vid):
    return _ok(VehicleService.availability_calendar(vid))


@bp.get("/vehicle/<vid>/occupancy")
def vehicle_occupancy(vid):
    return _ok({"vehicle_id": vid, "occupancy": FleetStatusService.occupancy(vid)})


@bp.get("/blocked-periods")
def blocked_periods():
    return _ok(AvailabilityService.get_all_blocked_periods())


@bp.get("/blocked-periods/<block_id>")
def blocked_period_detail(block_id):
    return _ok(AvailabilityService.get_blocked_period(block_id))


@bp.get("/check-availability")
def check_availability():
    """GET /check-availability?vehicleId=..&startDate=YYYY-MM-DD&endDate=YYYY-MM-DD"""
    vid = (request.args.get("vehicleId") or "").strip()
    start = request.args.get("startDate")
    end = request.args.get("endDate")
    if not vid or not start or not end:
        raise InvalidInputError("vehicleId, startDate and endDate are required")
    return _ok(AvailabilityService.is_vehicle_available(vid, start, end))


# ---------- Write side ----------
@bp.post("/block")
def block_vehicle():
    data = request.get_json(silent=True) or {}
    vid = data.get("vehicleId")
    if not vid or not data.get("startDate") or not data.get("endDate"):
        raise InvalidInputError("vehicleId, startDate and endDate are required")
    period = AvailabilityService.block_vehicle(
        vehicle_id=vid,
        start=data.get("startDate"),
        end=data.get("endDate"),
        reason=data.get("reason") or "",
    )
    return _ok(period, 201)


@bp.delete("/unblock/vehicle/<vid>")
def unblock_vehicle(vid):
    AvailabilityService.unblock_vehicle(vid)
    return "", 204


@bp.delete("/unblock/period/<block_id>")
def unblock_period(block_id):
    AvailabilityService.unblock_period(block_id)
    return "", 204
