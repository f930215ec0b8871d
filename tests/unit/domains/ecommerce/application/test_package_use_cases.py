"""
Unit tests for package fulfillment use cases.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from app.core.domain import (
    AuthorizationException,
    CarrierUnavailableException,
    DuplicateEntityException,
    InvalidOperationException,
    InvalidTransitionException,
)
from app.domains.ecommerce.application.dto import (
    CreatePackageRequest,
    ShippingLabelResult,
    UpdatePackageRequest,
)
from app.domains.ecommerce.application.services import ShipmentNotifier
from app.domains.ecommerce.application.use_cases import (
    CreatePackageUseCase,
    DeletePackageUseCase,
    GenerateLabelUseCase,
    MarkPackageDeliveredUseCase,
    MarkPackageReadyUseCase,
    RecoverPackageUseCase,
    ReportPackageExceptionUseCase,
    UpdatePackageUseCase,
)
from app.domains.ecommerce.domain.value_objects import CarrierType, OrderStatus, PackageStatus
from tests.utils import FIXED_NOW, create_order, create_package, create_paid_order

SENDER = {"name": "Storefront", "street": "1 Quai de Valmy", "city": "Paris", "zip_code": "75010", "country": "FR"}


@pytest.mark.unit
class TestCreatePackageUseCase:
    @pytest.fixture
    def use_case(self, mock_package_repository, mock_order_repository):
        return CreatePackageUseCase(mock_package_repository, mock_order_repository)

    @pytest.mark.asyncio
    async def test_package_copies_order_address(self, use_case, mock_order_repository, admin):
        # Arrange
        order = create_paid_order()
        mock_order_repository.get.return_value = order
        request = CreatePackageRequest(order_id="order-1", weight=Decimal("1.5"), carrier=CarrierType.DHL)

        # Act
        package = await use_case.execute(request, admin)

        # Assert
        assert package.id == "package-new"
        assert package.status == PackageStatus.PENDING
        assert package.user_id == order.user_id
        assert package.shipping_address == order.shipping_address
        assert package.carrier == CarrierType.DHL

    @pytest.mark.asyncio
    async def test_unpaid_order_refused(self, use_case, mock_order_repository, mock_package_repository, admin):
        mock_order_repository.get.return_value = create_order()

        with pytest.raises(InvalidOperationException):
            await use_case.execute(CreatePackageRequest(order_id="order-1"), admin)

        mock_package_repository.create.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_second_package_for_order(self, use_case, mock_order_repository, mock_package_repository, admin):
        mock_order_repository.get.return_value = create_paid_order()
        mock_package_repository.create.side_effect = DuplicateEntityException("Package", "order_id", "order-1")

        with pytest.raises(DuplicateEntityException):
            await use_case.execute(CreatePackageRequest(order_id="order-1"), admin)

    @pytest.mark.asyncio
    async def test_customers_cannot_create_packages(self, use_case, mock_order_repository, customer):
        with pytest.raises(AuthorizationException):
            await use_case.execute(CreatePackageRequest(order_id="order-1"), customer)

        mock_order_repository.get.assert_not_awaited()


@pytest.mark.unit
class TestUpdatePackageUseCase:
    @pytest.fixture
    def use_case(self, mock_package_repository, mock_carrier_service):
        return UpdatePackageUseCase(mock_package_repository, mock_carrier_service)

    @pytest.mark.asyncio
    async def test_status_shipped_must_go_through_label(self, use_case, mock_package_repository, admin):
        mock_package_repository.get.return_value = create_package(status=PackageStatus.READY_TO_SHIP)

        with pytest.raises(InvalidTransitionException):
            await use_case.execute("pkg-1", UpdatePackageRequest(status=PackageStatus.SHIPPED), admin)

        mock_package_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_dimensions_promote_preparing_package(self, use_case, mock_package_repository, admin):
        mock_package_repository.get.return_value = create_package(
            status=PackageStatus.PREPARING, height=Decimal("0")
        )

        package = await use_case.execute("pkg-1", UpdatePackageRequest(height=Decimal("12")), admin)

        assert package.status == PackageStatus.READY_TO_SHIP

    @pytest.mark.asyncio
    async def test_exception_package_recovered_to_preparing(
        self, use_case, mock_package_repository, mock_carrier_service, admin
    ):
        mock_package_repository.get.return_value = create_package(status=PackageStatus.EXCEPTION)

        package = await use_case.execute("pkg-1", UpdatePackageRequest(status=PackageStatus.PREPARING), admin)

        assert package.status == PackageStatus.PREPARING
        assert package.prepared_by == admin.user_id
        mock_carrier_service.cancel_shipment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_recovering_shipped_package_voids_label(
        self, use_case, mock_package_repository, mock_carrier_service, admin
    ):
        mock_package_repository.get.return_value = create_package(
            status=PackageStatus.EXCEPTION, tracking_number="6A11111111111FR", label_url="L"
        )

        package = await use_case.execute("pkg-1", UpdatePackageRequest(status=PackageStatus.PREPARING), admin)

        assert package.tracking_number is None
        mock_carrier_service.cancel_shipment.assert_awaited_once_with("6A11111111111FR", package.carrier)


@pytest.mark.unit
class TestGenerateLabelUseCase:
    @pytest.fixture
    def label(self):
        return ShippingLabelResult(
            tracking_number="6A12345678901FR",
            label_url="https://labels.example.com/6A12345678901FR.pdf",
            carrier=CarrierType.COLISSIMO,
            shipping_cost=Decimal("6.90"),
            estimated_delivery_date=FIXED_NOW + timedelta(days=2),
        )

    @pytest.fixture
    def use_case(self, mock_package_repository, mock_order_repository, mock_carrier_service, mock_email_sender, clock):
        notifier = ShipmentNotifier(mock_email_sender, mock_carrier_service)
        return GenerateLabelUseCase(
            mock_package_repository,
            mock_order_repository,
            mock_carrier_service,
            notifier,
            sender_address=SENDER,
            clock=clock,
        )

    @pytest.mark.asyncio
    async def test_label_ships_package_and_order(
        self,
        use_case,
        label,
        mock_package_repository,
        mock_order_repository,
        mock_carrier_service,
        mock_email_sender,
        admin,
    ):
        # Arrange
        package = create_package(status=PackageStatus.READY_TO_SHIP)
        order = create_paid_order()
        mock_package_repository.get.return_value = package
        mock_order_repository.get.return_value = order
        mock_carrier_service.generate_label.return_value = label

        # Act
        result = await use_case.execute("pkg-1", admin)

        # Assert
        assert result.status == PackageStatus.SHIPPED
        assert result.tracking_number == "6A12345678901FR"
        assert result.label_url == label.label_url
        assert result.shipped_at == FIXED_NOW
        assert order.status == OrderStatus.SHIPPED
        assert order.tracking_number == "6A12345678901FR"
        assert order.carrier_name == "Colissimo"
        assert order.estimated_delivery_date == label.estimated_delivery_date
        mock_order_repository.update.assert_awaited_once_with(order)

        request = mock_carrier_service.generate_label.await_args.args[0]
        assert request.sender_address == SENDER
        assert request.recipient_address == package.shipping_address

        email = mock_email_sender.send.await_args.args[0]
        assert email.to == order.contact_email
        assert "6A12345678901FR" in email.html_body
        assert "https://track.example.com/6A12345678901FR" in email.html_body
        assert result.tracking_notification_sent is True

    @pytest.mark.asyncio
    async def test_carrier_failure_leaves_package_untouched(
        self, use_case, mock_package_repository, mock_order_repository, mock_carrier_service, admin
    ):
        # Arrange
        package = create_package(status=PackageStatus.READY_TO_SHIP)
        order = create_paid_order()
        mock_package_repository.get.return_value = package
        mock_order_repository.get.return_value = order
        mock_carrier_service.generate_label.side_effect = CarrierUnavailableException("Colissimo")

        # Act
        with pytest.raises(CarrierUnavailableException):
            await use_case.execute("pkg-1", admin)

        # Assert
        assert package.status == PackageStatus.READY_TO_SHIP
        assert package.tracking_number is None
        assert order.status == OrderStatus.PROCESSING
        mock_package_repository.update.assert_not_awaited()
        mock_order_repository.update.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_email_failure_keeps_shipment(
        self,
        use_case,
        label,
        mock_package_repository,
        mock_order_repository,
        mock_carrier_service,
        mock_email_sender,
        admin,
    ):
        mock_package_repository.get.return_value = create_package(status=PackageStatus.READY_TO_SHIP)
        mock_order_repository.get.return_value = create_paid_order()
        mock_carrier_service.generate_label.return_value = label
        mock_email_sender.send.side_effect = ConnectionError("smtp down")

        result = await use_case.execute("pkg-1", admin)

        assert result.status == PackageStatus.SHIPPED
        assert result.tracking_notification_sent is False

    @pytest.mark.asyncio
    async def test_package_must_be_ready(
        self, use_case, mock_package_repository, mock_order_repository, mock_carrier_service, admin
    ):
        mock_package_repository.get.return_value = create_package(status=PackageStatus.PREPARING)
        mock_order_repository.get.return_value = create_paid_order()

        with pytest.raises(InvalidTransitionException):
            await use_case.execute("pkg-1", admin)

        mock_carrier_service.generate_label.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsupported_carrier(
        self, use_case, mock_package_repository, mock_order_repository, mock_carrier_service, admin
    ):
        mock_package_repository.get.return_value = create_package(
            status=PackageStatus.READY_TO_SHIP, carrier=CarrierType.UPS
        )
        mock_order_repository.get.return_value = create_paid_order()
        mock_carrier_service.supports_carrier.return_value = False

        with pytest.raises(CarrierUnavailableException):
            await use_case.execute("pkg-1", admin)

        mock_carrier_service.generate_label.assert_not_awaited()


@pytest.mark.unit
class TestReshipAfterException:
    @pytest.fixture
    def new_label(self):
        return ShippingLabelResult(
            tracking_number="6A99999999999FR",
            label_url="https://labels.example.com/6A99999999999FR.pdf",
            carrier=CarrierType.COLISSIMO,
            shipping_cost=Decimal("6.90"),
            estimated_delivery_date=FIXED_NOW + timedelta(days=3),
        )

    @pytest.fixture
    def shipped_pair(self):
        package = create_package(
            status=PackageStatus.SHIPPED,
            tracking_number="6A11111111111FR",
            label_url="https://labels.example.com/6A11111111111FR.pdf",
            shipped_at=FIXED_NOW - timedelta(days=2),
            tracking_notification_sent=True,
        )
        order = create_paid_order(
            status=OrderStatus.SHIPPED,
            tracking_number="6A11111111111FR",
            carrier_name="Colissimo",
        )
        return package, order

    @pytest.mark.asyncio
    async def test_lost_parcel_ships_again_under_new_label(
        self,
        shipped_pair,
        new_label,
        mock_package_repository,
        mock_order_repository,
        mock_carrier_service,
        mock_email_sender,
        clock,
        admin,
    ):
        # Arrange
        package, order = shipped_pair
        mock_package_repository.get.return_value = package
        mock_order_repository.get.return_value = order
        mock_carrier_service.generate_label.return_value = new_label
        notifier = ShipmentNotifier(mock_email_sender, mock_carrier_service)

        # Act
        await ReportPackageExceptionUseCase(mock_package_repository).execute("pkg-1", admin, "Lost in transit")
        await RecoverPackageUseCase(mock_package_repository, mock_carrier_service, clock).execute("pkg-1", admin)
        await MarkPackageReadyUseCase(mock_package_repository).execute("pkg-1", admin)
        result = await GenerateLabelUseCase(
            mock_package_repository,
            mock_order_repository,
            mock_carrier_service,
            notifier,
            sender_address=SENDER,
            clock=clock,
        ).execute("pkg-1", admin)

        # Assert
        mock_carrier_service.cancel_shipment.assert_awaited_once_with("6A11111111111FR", CarrierType.COLISSIMO)
        assert result.status == PackageStatus.SHIPPED
        assert result.tracking_number == "6A99999999999FR"
        assert result.label_url == new_label.label_url
        assert result.tracking_notification_sent is True
        assert order.status == OrderStatus.SHIPPED
        assert order.tracking_number == "6A99999999999FR"
        assert order.estimated_delivery_date == new_label.estimated_delivery_date

    @pytest.mark.asyncio
    async def test_recover_clears_stale_label(
        self, shipped_pair, mock_package_repository, mock_carrier_service, clock, admin
    ):
        package, _ = shipped_pair
        package.report_exception("Damaged")
        mock_package_repository.get.return_value = package

        result = await RecoverPackageUseCase(mock_package_repository, mock_carrier_service, clock).execute(
            "pkg-1", admin
        )

        assert result.status == PackageStatus.PREPARING
        assert result.tracking_number is None
        assert result.label_url is None
        assert result.shipped_at is None
        assert result.tracking_notification_sent is False

    @pytest.mark.asyncio
    async def test_carrier_refusing_cancel_does_not_block_recovery(
        self, shipped_pair, mock_package_repository, mock_carrier_service, clock, admin
    ):
        package, _ = shipped_pair
        package.report_exception()
        mock_package_repository.get.return_value = package
        mock_carrier_service.cancel_shipment.side_effect = CarrierUnavailableException("Colissimo")

        result = await RecoverPackageUseCase(mock_package_repository, mock_carrier_service, clock).execute(
            "pkg-1", admin
        )

        assert result.status == PackageStatus.PREPARING
        mock_package_repository.update.assert_awaited_once_with(package)

    @pytest.mark.asyncio
    async def test_package_never_labelled_skips_carrier(
        self, mock_package_repository, mock_carrier_service, clock, admin
    ):
        mock_package_repository.get.return_value = create_package(status=PackageStatus.EXCEPTION)

        await RecoverPackageUseCase(mock_package_repository, mock_carrier_service, clock).execute("pkg-1", admin)

        mock_carrier_service.cancel_shipment.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delivered_order_cannot_be_relabelled(
        self, mock_package_repository, mock_order_repository, mock_carrier_service, mock_email_sender, admin
    ):
        mock_package_repository.get.return_value = create_package(status=PackageStatus.READY_TO_SHIP)
        mock_order_repository.get.return_value = create_paid_order(status=OrderStatus.DELIVERED)
        use_case = GenerateLabelUseCase(
            mock_package_repository,
            mock_order_repository,
            mock_carrier_service,
            ShipmentNotifier(mock_email_sender, mock_carrier_service),
            sender_address=SENDER,
        )

        with pytest.raises(InvalidTransitionException):
            await use_case.execute("pkg-1", admin)

        mock_carrier_service.generate_label.assert_not_awaited()


@pytest.mark.unit
class TestMarkPackageDeliveredUseCase:
    @pytest.mark.asyncio
    async def test_order_delivered_with_return_deadline(
        self, mock_package_repository, mock_order_repository, return_window, clock, admin
    ):
        # Arrange
        package = create_package(status=PackageStatus.SHIPPED, tracking_number="T", label_url="L")
        order = create_order(status=OrderStatus.SHIPPED)
        mock_package_repository.get.return_value = package
        mock_order_repository.get.return_value = order
        use_case = MarkPackageDeliveredUseCase(mock_package_repository, mock_order_repository, return_window, clock)

        # Act
        result = await use_case.execute("pkg-1", admin)

        # Assert
        assert result.status == PackageStatus.DELIVERED
        assert order.status == OrderStatus.DELIVERED
        assert order.delivered_at == FIXED_NOW
        assert order.return_deadline == FIXED_NOW + timedelta(days=14)


@pytest.mark.unit
class TestDeletePackageUseCase:
    @pytest.mark.asyncio
    async def test_shipped_package_cannot_be_deleted(self, mock_package_repository, admin):
        mock_package_repository.get.return_value = create_package(
            status=PackageStatus.SHIPPED, tracking_number="T", label_url="L"
        )

        with pytest.raises(InvalidOperationException):
            await DeletePackageUseCase(mock_package_repository).execute("pkg-1", admin)

        mock_package_repository.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_pending_package_deleted(self, mock_package_repository, admin):
        mock_package_repository.get.return_value = create_package()

        await DeletePackageUseCase(mock_package_repository).execute("pkg-1", admin)

        mock_package_repository.delete.assert_awaited_once_with("pkg-1")
