"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.metrics.booking_metrics import metrics
from src.platform.state.event_lock import EventLockRegistry
from src.service.booking.driven_adapter.notification.mock_email_service_impl import (
    MockEmailServiceImpl,
)
from src.service.booking.driven_adapter.notification.smtp_email_service_impl import (
    SmtpEmailServiceImpl,
)
from src.service.booking.driving_adapter.http_controller.auth.jwt_auth import JwtAuth


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Per-event serialization of booking critical sections (process-wide)
    event_lock_registry = providers.Singleton(EventLockRegistry)

    # Booking confirmation emails, backend chosen by EMAIL_BACKEND
    notification_service = providers.Selector(
        config_service.provided.EMAIL_BACKEND,
        mock=providers.Singleton(MockEmailServiceImpl),
        smtp=providers.Singleton(SmtpEmailServiceImpl, settings=config_service),
    )

    # Prometheus collectors are module-level singletons
    booking_metrics = providers.Object(metrics)

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()
