from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local
from ..common.http import make_login_required, server_error
from ..container import Container
from .service import parse_year


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.tokens)

    @app.route("/api/dashboard-stats", methods=["GET"], endpoint="api_dashboard_stats")
    @login_required
    def dashboard_stats():
        try:
            stats = container.dashboard_service.stats(today=now_local().date())
            return jsonify(stats.to_dict())
        except Exception:
            return server_error("Failed to load dashboard stats")

    @app.route("/api/analytics", methods=["GET"], endpoint="api_analytics")
    @login_required
    def analytics():
        try:
            year = parse_year(request.args.get("year"), default=now_local().year)
            return jsonify(container.dashboard_service.analytics(year=year))
        except Exception:
            return server_error("Failed to load analytics")
