"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from cinema_booking.platform.config.core_setting import settings
from cinema_booking.platform.database.orm_db_setting import Database
from cinema_booking.service.reservation.driven_adapter.payment.khalti_payment_gateway_impl import (
    KhaltiPaymentGatewayImpl,
)
from cinema_booking.service.reservation.driven_adapter.payment.mock_payment_gateway_impl import (
    MockPaymentGatewayImpl,
)
from cinema_booking.service.reservation.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from cinema_booking.service.reservation.driven_adapter.repo.showtime_query_repo_impl import (
    ShowtimeQueryRepoImpl,
)
from cinema_booking.service.reservation.driving_adapter.http_controller.auth.jwt_auth import (
    JwtAuth,
)


class Container(containers.DeclarativeContainer):
    # Database (sessions come from the event-loop-aware engine manager)
    database = providers.Singleton(Database)

    # Read repositories (stateless - use session_factory per-request)
    # Writes go through the unit of work (get_unit_of_work) so they share one transaction
    booking_query_repo = providers.Singleton(
        BookingQueryRepoImpl, session_factory=database.provided.session
    )
    showtime_query_repo = providers.Singleton(
        ShowtimeQueryRepoImpl, session_factory=database.provided.session
    )

    # Payment gateway, chosen by PAYMENT_GATEWAY
    payment_gateway = providers.Selector(
        providers.Callable(lambda: settings.PAYMENT_GATEWAY),
        khalti=providers.Singleton(KhaltiPaymentGatewayImpl),
        mock=providers.Singleton(MockPaymentGatewayImpl),
    )

    # Auth service
    jwt_auth = providers.Singleton(JwtAuth)


container = Container()
