from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import current_identity, fail, json_body, make_login_required, server_error
from ..core.constants import AUTH_COOKIE_NAME
from ..core.enums import Role
from ..core.exceptions import AuthorizationError, DomainError, ValidationError
from ..container import Container
from .model import User


def _manager_view(u: User) -> dict:
    return {
        "id": u.user_id,
        "firstName": u.first_name,
        "lastName": u.last_name,
        "employeeId": u.employee_id,
        "role": u.role.value,
    }


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    return value.strip() if isinstance(value, str) else ""


def register(app: Flask, container: Container) -> None:
    login_required = make_login_required(container.tokens)

    @app.route("/api/login", methods=["POST"], endpoint="api_login")
    def login():
        data = json_body()
        try:
            identity = container.auth_service.authenticate(data.get("email", ""), data.get("password", ""))
            token = container.tokens.issue(identity)
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Login failed")

        resp = jsonify(
            {
                "message": "Login successful",
                "user": {
                    "id": identity.user_id,
                    "role": identity.role.value,
                    "email": identity.email,
                    "firstName": identity.first_name,
                    "lastName": identity.last_name,
                },
            }
        )
        resp.set_cookie(
            AUTH_COOKIE_NAME,
            token,
            max_age=container.tokens.max_age_seconds,
            httponly=True,
            samesite="Lax",
            secure=bool(app.config.get("SESSION_COOKIE_SECURE", False)),
        )
        return resp

    @app.route("/api/logout", methods=["POST"], endpoint="api_logout")
    def logout():
        resp = jsonify({"message": "Logged out"})
        resp.delete_cookie(AUTH_COOKIE_NAME)
        return resp

    @app.route("/api/me", methods=["GET"], endpoint="api_me")
    @login_required
    def me():
        ident = current_identity()
        return jsonify(
            {
                "userId": ident.user_id,
                "role": ident.role.value,
                "email": ident.email,
                "firstName": ident.first_name,
                "lastName": ident.last_name,
            }
        )

    @app.route("/api/profile", methods=["GET"], endpoint="api_profile")
    @login_required
    def profile():
        try:
            user = container.user_service.get_profile(current_identity().user_id)
            return jsonify(user.public_view())
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to load profile")

    @app.route("/api/signup", methods=["POST"], endpoint="api_signup")
    @login_required
    def signup():
        data = request.form.to_dict() if request.form else json_body()
        try:
            first_name = _text(data, "firstName")
            last_name = _text(data, "lastName")
            email = _text(data, "email")
            dob_s = _text(data, "dob")
            role_s = _text(data, "role")
            if not (first_name and last_name and email and dob_s and role_s):
                raise ValidationError("Missing required fields")

            try:
                role = Role(role_s)
            except ValueError:
                raise ValidationError("Invalid role")

            result = container.user_service.onboard(
                actor=current_identity(),
                first_name=first_name,
                last_name=last_name,
                email=email,
                dob=parse_iso_date(dob_s),
                role=role,
                manager_emp_id=data.get("managerEmpId") or "",
                resume=data.get("resume") or "",
                photo_id=data.get("photoId") or "",
            )
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to create user")

        return (
            jsonify(
                {
                    "message": "User created successfully",
                    "userId": result.user_id,
                    "employeeId": result.employee_id,
                    "defaultPassword": result.default_password,
                }
            ),
            201,
        )

    @app.route("/api/workers", methods=["GET"], endpoint="api_workers")
    @login_required
    def workers():
        try:
            users = container.user_service.list_workers(current_identity())
            return jsonify([u.public_view() for u in users])
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to fetch workers")

    @app.route("/api/workers/<user_id>", methods=["PUT"], endpoint="api_update_worker")
    @login_required
    def update_worker(user_id: str):
        data = json_body()
        changes = {
            "first_name": data.get("firstName"),
            "last_name": data.get("lastName"),
            "mobile": data.get("mobile"),
            "address": data.get("address"),
            "emergency_contact": data.get("emergencyContact"),
            "resume": data.get("resume"),
            "photo_id": data.get("photoId"),
            "role": data.get("role"),
            "email": data.get("email"),
            "manager_emp_id": data.get("managerEmpId"),
        }
        try:
            user = container.user_service.update_worker(actor=current_identity(), user_id=user_id, changes=changes)
            return jsonify({"message": "User updated", "user": user.public_view()})
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to update user")

    @app.route("/api/workers/<user_id>", methods=["DELETE"], endpoint="api_delete_worker")
    @login_required
    def delete_worker(user_id: str):
        try:
            container.user_service.delete_worker(actor=current_identity(), user_id=user_id)
            return jsonify({"message": "User deleted"})
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to delete user")

    @app.route("/api/managers", methods=["GET"], endpoint="api_managers")
    @login_required
    def managers():
        try:
            return jsonify([_manager_view(u) for u in container.user_service.list_managers()])
        except Exception:
            return server_error("Failed to fetch managers")

    @app.route("/api/birthdays", methods=["GET"], endpoint="api_birthdays")
    @login_required
    def birthdays():
        try:
            return jsonify(container.user_service.list_birthdays())
        except Exception:
            return server_error("Failed to fetch birthdays")

    @app.route("/api/roles", methods=["GET"], endpoint="api_roles")
    @login_required
    def roles():
        try:
            return jsonify([{"code": r.code, "name": r.name} for r in container.role_service.list_roles()])
        except Exception:
            return server_error("Failed to fetch roles")

    @app.route("/api/roles/seed", methods=["POST"], endpoint="api_seed_roles")
    @login_required
    def seed_roles():
        try:
            if current_identity().role != Role.SUPER_ADMIN:
                raise AuthorizationError("Forbidden")
            container.role_service.seed_roles()
            return jsonify({"message": "Roles seeded"})
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to seed roles")

    @app.route("/api/forgot-password", methods=["POST"], endpoint="api_forgot_password")
    def forgot_password():
        data = json_body()
        try:
            email = _text(data, "email")
            if not email:
                raise ValidationError("Email is required")
            container.password_reset_service.request_reset(email)
            return jsonify({"message": "Reset link sent to email"})
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to send reset email")

    @app.route("/api/reset-password", methods=["POST"], endpoint="api_reset_password")
    def reset_password():
        data = json_body()
        try:
            container.password_reset_service.reset_password(data.get("token") or "", data.get("password") or "")
            return jsonify({"message": "Password reset successful"})
        except DomainError as e:
            return fail(e)
        except Exception:
            return server_error("Failed to reset password")
