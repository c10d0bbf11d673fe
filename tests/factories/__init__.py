"""Factory classes for test data generation.

Model factories use factory_boy with Faker-backed attributes. The
``create_*`` helpers keep call sites short:

    user = create_user()
    create_notification(user, is_read=True)
"""

from uuid import uuid4

import factory
from factory.django import DjangoModelFactory
from faker import Faker

from core.enums import NotificationType
from core.models import ChatLink, Notification, PushSubscription, User

fake = Faker()


class UserFactory(DjangoModelFactory):
    """Factory for platform user rows."""

    class Meta:
        model = User

    user_id = factory.LazyFunction(uuid4)
    email = factory.Sequence(lambda n: f"member{n}@worktrac.test")
    name = factory.LazyAttribute(lambda _: fake.name())
    is_active = True


class NotificationFactory(DjangoModelFactory):
    """Factory for in-app notification rows."""

    class Meta:
        model = Notification

    user = factory.SubFactory(UserFactory)
    notification_type = NotificationType.TASK_ASSIGNED.value
    title = factory.LazyAttribute(lambda _: fake.sentence(nb_words=4))
    message = factory.LazyAttribute(lambda _: fake.sentence(nb_words=10))
    action_url = factory.LazyAttribute(lambda _: f"/task/{fake.uuid4()}")


class PushSubscriptionFactory(DjangoModelFactory):
    class Meta:
        model = PushSubscription

    user = factory.SubFactory(UserFactory)
    endpoint = factory.LazyAttribute(lambda _: f"https://push.example.com/{fake.uuid4()}")
    p256dh = factory.LazyAttribute(lambda _: fake.pystr(min_chars=20, max_chars=40))
    auth = factory.LazyAttribute(lambda _: fake.pystr(min_chars=10, max_chars=20))


class ChatLinkFactory(DjangoModelFactory):
    class Meta:
        model = ChatLink

    user = factory.SubFactory(UserFactory)
    chat_id = factory.LazyAttribute(
        lambda _: str(fake.random_int(min=10_000_000, max=99_999_999))
    )
    linked = True


def create_user(**overrides) -> User:
    """Create a platform user row."""
    return UserFactory(**overrides)


def create_notification(user: User, **overrides) -> Notification:
    """Create an in-app notification row for ``user``."""
    return NotificationFactory(user=user, **overrides)


def create_push_subscription(user: User, **overrides) -> PushSubscription:
    return PushSubscriptionFactory(user=user, **overrides)


def create_chat_link(user: User, **overrides) -> ChatLink:
    return ChatLinkFactory(user=user, **overrides)
