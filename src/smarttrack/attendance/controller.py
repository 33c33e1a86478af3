from __future__ import annotations

import logging
from functools import wraps

from flask import Flask, current_app, g, jsonify, request

from ..auth.tokens import decode_principal, extract_bearer
from ..common.datetime_utils import civil_date, now_utc, parse_iso_date
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, DomainError, NotFoundError, ValidationError
from ..container import Container

logger = logging.getLogger(__name__)

API_PREFIX = "/api/attendance"


def _error(message: str, status: int):
    return jsonify({"message": message}), status


def _domain_error(exc: DomainError):
    if isinstance(exc, AuthenticationError):
        return _error(str(exc), 401)
    if isinstance(exc, AuthorizationError):
        return _error(str(exc), 403)
    if isinstance(exc, NotFoundError):
        return _error(str(exc), 404)
    return _error(str(exc), 400)


def _coordinates_body() -> dict:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Coordinates are required")
    return data


def register(app: Flask, container: Container) -> None:
    def token_required(*roles: Role):
        allowed = {Role(r) for r in roles}

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                token = extract_bearer(request.headers.get("Authorization"))
                if not token:
                    return _error("No token provided", 401)
                try:
                    principal = decode_principal(
                        token,
                        secret=current_app.config["JWT_SECRET"],
                        algorithms=[current_app.config.get("JWT_ALGORITHM", "HS256")],
                    )
                except AuthenticationError as e:
                    return _error(str(e), 401)

                if allowed and principal.role not in allowed:
                    logger.warning("User %s with role %s denied %s", principal.user_id, principal.role.value, request.path)
                    return _error("Forbidden: insufficient permissions", 403)

                g.principal = principal
                return view(*args, **kwargs)

            return wrapper

        return decorator

    def _today():
        return civil_date(now_utc(), container.offset_minutes)

    @app.route(f"{API_PREFIX}/checkin", methods=["POST"], endpoint="attendance_checkin")
    @token_required()
    def checkin():
        try:
            data = _coordinates_body()
            segment = container.attendance_service.check_in(
                g.principal.user_id,
                data.get("latitude"),
                data.get("longitude"),
            )
            return jsonify({"message": "Checked in successfully", "attendance": segment.to_dict()}), 201
        except DomainError as e:
            return _domain_error(e)
        except Exception:
            logger.exception("Check-in failed for user %s", g.principal.user_id)
            return _error("Internal server error.", 500)

    @app.route(f"{API_PREFIX}/checkout", methods=["POST"], endpoint="attendance_checkout")
    @token_required()
    def checkout():
        try:
            data = _coordinates_body()
            segment = container.attendance_service.check_out(
                g.principal.user_id,
                data.get("latitude"),
                data.get("longitude"),
            )
            return jsonify({"message": "Checked out successfully", "attendance": segment.to_dict()}), 200
        except DomainError as e:
            return _domain_error(e)
        except Exception:
            logger.exception("Check-out failed for user %s", g.principal.user_id)
            return _error("Internal server error.", 500)

    @app.route(f"{API_PREFIX}/status", methods=["GET"], endpoint="attendance_status")
    @token_required()
    def status():
        try:
            state = container.attendance_service.current_status(g.principal.user_id)
            return jsonify({"status": state.value}), 200
        except Exception:
            logger.exception("Status fetch failed for user %s", g.principal.user_id)
            return _error("Internal server error.", 500)

    @app.route(f"{API_PREFIX}/logs", methods=["GET"], endpoint="attendance_logs")
    @token_required()
    def logs():
        date_s = request.args.get("date")
        if not date_s:
            return _error("Date query parameter is required", 400)

        try:
            day = parse_iso_date(date_s)
            summary = container.day_summary_service.summarize_day(g.principal.user_id, day)
            return jsonify({
                "logs": [s.to_dict() for s in summary.segments],
                "summary": summary.summary_dict(),
            }), 200
        except DomainError as e:
            return _domain_error(e)
        except Exception:
            logger.exception("Attendance log fetch failed for user %s", g.principal.user_id)
            return _error("Internal server error.", 500)

    @app.route(f"{API_PREFIX}/history", methods=["GET"], endpoint="attendance_history")
    @token_required()
    def history():
        today = _today()
        try:
            start = parse_iso_date(request.args["start"]) if request.args.get("start") else today.replace(day=1)
            end = parse_iso_date(request.args["end"]) if request.args.get("end") else today
            views = container.day_summary_service.history(g.principal.user_id, start=start, end=end)
            return jsonify({
                "start": start.isoformat(),
                "end": end.isoformat(),
                "logs": [v.to_dict() for v in views],
            }), 200
        except DomainError as e:
            return _domain_error(e)
        except Exception:
            logger.exception("Attendance history fetch failed for user %s", g.principal.user_id)
            return _error("Internal server error.", 500)

    @app.route(f"{API_PREFIX}/history/all", methods=["GET"], endpoint="attendance_history_all")
    @token_required(Role.HR, Role.ADMIN)
    def history_all():
        today = _today()
        try:
            start = parse_iso_date(request.args["start"]) if request.args.get("start") else today.replace(day=1)
            end = parse_iso_date(request.args["end"]) if request.args.get("end") else today
            log = container.attendance_log_service.list_segments(
                start=start,
                end=end,
                role=g.principal.role,
                employee_id=request.args.get("employee_id") or None,
            )
            return jsonify(log.to_dict()), 200
        except DomainError as e:
            return _domain_error(e)
        except Exception:
            logger.exception("Attendance listing failed")
            return _error("Failed to retrieve attendance data for the report.", 500)

    @app.route(f"{API_PREFIX}/status/all", methods=["GET"], endpoint="attendance_status_all")
    @token_required(Role.HR, Role.ADMIN)
    def status_all():
        date_s = request.args.get("date")
        try:
            day = parse_iso_date(date_s) if date_s else _today()
            roster = container.roster_service.roster_for_date(day, role=g.principal.role)
            return jsonify(roster.to_dict()), 200
        except DomainError as e:
            return _domain_error(e)
        except Exception:
            logger.exception("Roster fetch failed")
            return _error("Internal server error while fetching employee statuses.", 500)
