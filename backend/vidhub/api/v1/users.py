"""User account, session and channel endpoints."""

from __future__ import annotations

from datetime import UTC, datetime

from flask import Blueprint, current_app, request
from flask_jwt_extended import set_access_cookies, set_refresh_cookies, unset_jwt_cookies

from vidhub.api.deps import (
    account_service,
    api_response,
    auth_service,
    channel_service,
    current_token_claims,
    current_user_id,
    optional_auth,
    registration_service,
    require_auth,
    staged_upload,
    timing,
)
from vidhub.core.extensions import limiter
from vidhub.schemas import (
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateAccountSchema,
    UserSchema,
    WatchHistoryItemSchema,
)
from vidhub.services.accounts import UpdateProfileIn
from vidhub.services.auth import ChangePasswordIn, LoginIn, LogoutIn, RefreshIn
from vidhub.services.registration import RegisterIn

bp = Blueprint("users", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
login_response_schema = LoginResponseSchema()
token_pair_schema = TokenPairSchema()
refresh_schema = RefreshTokenSchema()
change_password_schema = ChangePasswordSchema()
update_account_schema = UpdateAccountSchema()
user_schema = UserSchema()
channel_schema = ChannelProfileSchema()
history_schema = WatchHistoryItemSchema(many=True)


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _with_token_cookies(response, access_token: str, refresh_token: str):
    set_access_cookies(response, access_token)
    set_refresh_cookies(response, refresh_token)
    return response


# ----------------------------- Session --------------------------------------


@bp.post("/register")
@timing
def register():
    """Create an account from a multipart form with avatar and optional cover."""

    data = register_schema.load(request.form)
    with staged_upload("avatar") as avatar_path, staged_upload("coverImage") as cover_path:
        user = registration_service().register(
            RegisterIn(
                full_name=data["full_name"],
                username=data["username"],
                email=data["email"],
                password=data["password"],
                avatar_path=avatar_path,
                cover_image_path=cover_path,
            )
        )
    return api_response(user_schema.dump(user), "User registered successfully", status=201)


@bp.post("/login")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate by username or email and issue both tokens."""

    data = login_schema.load(request.get_json(silent=True) or {})
    result = auth_service().login(
        LoginIn(password=data["password"], username=data.get("username"), email=data.get("email"))
    )
    response = api_response(login_response_schema.dump(result), "User logged in successfully")
    return _with_token_cookies(response, result.access_token, result.refresh_token)


@bp.post("/logout")
@require_auth
@timing
def logout():
    """Clear the stored refresh token, revoke this access token and drop cookies."""

    claims = current_token_claims()
    exp = claims.get("exp")
    auth_service().logout(
        LogoutIn(
            user_id=current_user_id(),
            access_jti=claims.get("jti"),
            access_expires_at=datetime.fromtimestamp(exp, tz=UTC) if exp else None,
        )
    )
    response = api_response({}, "User logged out")
    unset_jwt_cookies(response)
    return response


@bp.route("/refresh-token", methods=["GET", "POST"])
@timing
def refresh_token():
    """Rotate the refresh token read from the cookie or the JSON body."""

    cookie_name = current_app.config["JWT_REFRESH_COOKIE_NAME"]
    presented = request.cookies.get(cookie_name)
    if not presented and request.method == "POST":
        presented = refresh_schema.load(request.get_json(silent=True) or {})["refresh_token"]
    pair = auth_service().refresh(RefreshIn(refresh_token=presented))
    response = api_response(token_pair_schema.dump(pair), "Access token refreshed")
    return _with_token_cookies(response, pair.access_token, pair.refresh_token)


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = change_password_schema.load(request.get_json(silent=True) or {})
    auth_service().change_password(
        ChangePasswordIn(
            user_id=current_user_id(),
            old_password=data["old_password"],
            new_password=data["new_password"],
        )
    )
    return api_response({}, "Password changed successfully")


# ----------------------------- Account --------------------------------------


@bp.get("/current-user")
@require_auth
@timing
def current_user():
    user = account_service().get_current_user(current_user_id())
    return api_response(user_schema.dump(user), "Current user fetched successfully")


@bp.patch("/update-account")
@require_auth
@timing
def update_account():
    """Partially update ``fullName`` and/or ``email``."""

    data = update_account_schema.load(request.get_json(silent=True) or {})
    user = account_service().update_profile(
        UpdateProfileIn(
            user_id=current_user_id(),
            full_name=data.get("full_name"),
            email=data.get("email"),
        )
    )
    return api_response(user_schema.dump(user), "Account details updated successfully")


@bp.patch("/avatar")
@require_auth
@timing
def update_avatar():
    with staged_upload("avatar") as path:
        user = account_service().update_avatar(current_user_id(), path)
    return api_response(user_schema.dump(user), "Avatar updated successfully")


@bp.patch("/cover-image")
@require_auth
@timing
def update_cover_image():
    with staged_upload("coverImage") as path:
        user = account_service().update_cover_image(current_user_id(), path)
    return api_response(user_schema.dump(user), "Cover image updated successfully")


# ----------------------------- Channel --------------------------------------


@bp.get("/c/<username>")
@optional_auth
@timing
def channel_profile(username: str):
    """Channel page; ``isSubscribed`` reflects the caller when authenticated."""

    profile = channel_service().channel_profile(username, viewer_id=current_user_id())
    return api_response(channel_schema.dump(profile), "User channel fetched successfully")


@bp.get("/watch-history")
@require_auth
@timing
def watch_history():
    items = channel_service().watch_history(current_user_id())
    return api_response(history_schema.dump(items), "Watch history fetched successfully")
