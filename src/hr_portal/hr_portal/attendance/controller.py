from __future__ import annotations

from typing import Optional

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_identity, fail, json_body, make_login_required, server_error
from ..core.exceptions import DomainError
from ..container import Container


def _optional_date(value: Optional[str]):
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    return parse_iso_date(value)


def _filters() -> dict:
    return {
        "name": request.args.get("name"),
        "role": request.args.get("role"),
        "status": request.args.get("status"),
        "work_date": _optional_date(request.args.get("date")),
    }


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.tokens)

    @app.route("/api/attendance", methods=["GET"], endpoint="api_attendance_list")
    @login_required
    def attendance_list():
        try:
            rows = container.attendance_service.list_visible(current_identity())
            return jsonify([r.to_dict() for r in rows])
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to fetch attendance")

    @app.route("/api/attendance", methods=["POST"], endpoint="api_attendance_mark")
    @login_required
    def attendance_mark():
        data = json_body()
        try:
            leave = data.get("leave") is True
            evaluation = container.attendance_service.mark(
                current_identity().user_id,
                work_date=_optional_date(data.get("date")),
                start_time=data.get("startTime"),
                end_time=data.get("endTime"),
                leave=leave,
            )
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to mark attendance")

        return jsonify(
            {
                "message": "Leave marked" if leave else "Attendance submitted",
                "attendanceType": evaluation.attendance_type.value,
                "late": evaluation.late,
            }
        )

    @app.route("/api/attendance/approve", methods=["GET"], endpoint="api_attendance_pending")
    @login_required
    def attendance_for_approval():
        try:
            rows = container.attendance_service.list_for_approval(actor=current_identity(), **_filters())
            return jsonify([r.to_dict() for r in rows])
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to fetch attendance")

    @app.route("/api/attendance/approve", methods=["POST"], endpoint="api_attendance_decide")
    @login_required
    def attendance_decide():
        data = json_body()
        try:
            container.attendance_service.decide(
                actor=current_identity(),
                attendance_id=data.get("attendanceId") or "",
                status=data.get("status") or "",
            )
            return jsonify({"message": f"Attendance {data.get('status')}"})
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to update attendance")

    @app.route("/api/attendance/admin-mark", methods=["POST"], endpoint="api_attendance_admin_mark")
    @login_required
    def attendance_admin_mark():
        data = json_body()
        try:
            evaluation = container.attendance_service.admin_mark(
                actor=current_identity(),
                user_id=data.get("userId") or "",
                work_date=_optional_date(data.get("date")),
                start_time=data.get("startTime"),
                end_time=data.get("endTime"),
            )
            return jsonify(
                {
                    "message": "Attendance marked",
                    "attendanceType": evaluation.attendance_type.value,
                    "late": evaluation.late,
                }
            )
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to mark attendance")

    @app.route("/api/attendance/my-calendar", methods=["GET"], endpoint="api_attendance_calendar")
    @login_required
    def attendance_calendar():
        try:
            return jsonify(container.attendance_service.my_calendar(current_identity().user_id))
        except Exception:
            return server_error("Failed to fetch calendar")

    @app.route("/api/attendance/export", methods=["GET"], endpoint="api_attendance_export")
    @login_required
    def attendance_export():
        try:
            body = container.attendance_service.export_csv(actor=current_identity(), **_filters())
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to export attendance")

        return Response(
            body,
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance.csv"},
        )
