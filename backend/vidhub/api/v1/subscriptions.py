"""Subscription endpoints."""

from __future__ import annotations

from flask import Blueprint

from vidhub.api.deps import api_response, channel_service, current_user_id, require_auth, timing
from vidhub.schemas import SubscriptionSchema

bp = Blueprint("subscriptions", __name__)

subscription_schema = SubscriptionSchema()


@bp.post("/c/<int:channel_id>")
@require_auth
@timing
def subscribe(channel_id: int):
    sub = channel_service().subscribe(current_user_id(), channel_id)
    return api_response(subscription_schema.dump(sub), "Subscribed successfully", status=201)


@bp.delete("/c/<int:channel_id>")
@require_auth
@timing
def unsubscribe(channel_id: int):
    channel_service().unsubscribe(current_user_id(), channel_id)
    return api_response({}, "Unsubscribed successfully")
