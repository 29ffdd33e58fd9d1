"""Factory Boy definition for :class:`vidhub.models.user.User`."""

from __future__ import annotations

import factory

from tests.factories import BaseFactory
from vidhub.models.user import User


class UserFactory(BaseFactory):
    """Build persisted users with a hashed password (default ``Passw0rd!``)."""

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    full_name = factory.LazyAttribute(lambda o: o.username.capitalize())
    avatar_url = factory.LazyAttribute(lambda o: f"https://media.test/{o.username}.png")
    cover_image_url = ""
    password_hash = factory.LazyFunction(lambda: "")  # set via postgen

    @factory.post_generation
    def password(obj, create, extracted, **kwargs):
        """Set password using model setter (ensures hashing)."""
        obj.password = extracted or "Passw0rd!"
