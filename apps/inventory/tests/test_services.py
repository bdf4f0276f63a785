import pytest
import uuid
from datetime import date
from decimal import Decimal
from apps.inventory.models import InventoryItem, MaterialConsumption
from apps.inventory.services import (
    create_inventory_item,
    update_inventory_item,
    delete_inventory_item,
    get_project_inventory,
    log_material_consumption,
    get_consumption_history,
    restock_item,
)
from apps.inventory.exceptions import (
    DuplicateInventoryItemError,
    InvalidQuantityError,
    InventoryItemNotFoundError,
)
from apps.projects.models import ActivityAction
from apps.projects.services import InsufficientPermissionsError


@pytest.fixture
def cement(project):
    return create_inventory_item(
        project_id=project.id,
        name='Cement (OPC)',
        unit='bags',
        quantity=Decimal('500'),
        threshold=Decimal('100'),
    )


@pytest.mark.django_db
class TestInventoryItems:

    def test_duplicate_name_case_insensitive(self, cement, project):
        with pytest.raises(DuplicateInventoryItemError):
            create_inventory_item(project_id=project.id, name='cement (opc)', unit='bags')

    def test_same_name_in_other_project(self, cement, other_project):
        item = create_inventory_item(project_id=other_project.id, name='Cement (OPC)', unit='bags')
        assert item.project == other_project

    def test_low_stock_filter(self, cement, project):
        create_inventory_item(
            project_id=project.id,
            name='PVC pipe',
            unit='kg',
            quantity=Decimal('0'),
            threshold=Decimal('200'),
        )

        low = get_project_inventory(project_id=project.id, low_stock_only=True)
        assert [item.name for item in low] == ['PVC pipe']

    def test_at_threshold_is_low_stock(self, cement):
        cement.quantity = Decimal('100')
        assert cement.is_low_stock

    def test_rename_clash(self, cement, project):
        sand = create_inventory_item(project_id=project.id, name='Sand', unit='cubic meters')

        with pytest.raises(DuplicateInventoryItemError):
            update_inventory_item(project_id=project.id, item_id=sand.id, name='CEMENT (OPC)')

    def test_update_threshold(self, cement, project):
        item = update_inventory_item(project_id=project.id, item_id=cement.id, threshold=Decimal('50'))
        assert item.threshold == Decimal('50')

    def test_member_cannot_delete(self, cement, project, engineer):
        with pytest.raises(InsufficientPermissionsError):
            delete_inventory_item(project_id=project.id, item_id=cement.id, user=engineer)

    def test_manager_deletes(self, cement, project, pm):
        delete_inventory_item(project_id=project.id, item_id=cement.id, user=pm)
        assert not InventoryItem.objects.filter(id=cement.id).exists()


@pytest.mark.django_db
class TestMaterialConsumption:

    def test_deducts_stock_and_logs(self, cement, project, engineer):
        consumption = log_material_consumption(
            project_id=project.id,
            item_id=cement.id,
            quantity=Decimal('20'),
            date=date(2025, 1, 10),
            logged_by=engineer,
        )

        cement.refresh_from_db()
        assert cement.quantity == Decimal('480')
        assert consumption.item_name == 'Cement (OPC)'
        assert consumption.unit == 'bags'

        entry = project.activity_logs.get(action=ActivityAction.MATERIAL_CONSUMPTION)
        assert entry.details == 'Logged usage of 20 bags of Cement (OPC).'

    def test_fractional_quantity_in_log(self, cement, project, engineer):
        log_material_consumption(
            project_id=project.id,
            item_id=cement.id,
            quantity=Decimal('2.50'),
            date=date(2025, 1, 10),
            logged_by=engineer,
        )

        entry = project.activity_logs.get(action=ActivityAction.MATERIAL_CONSUMPTION)
        assert entry.details == 'Logged usage of 2.5 bags of Cement (OPC).'

    def test_stock_may_go_negative(self, cement, project, engineer):
        log_material_consumption(
            project_id=project.id,
            item_id=cement.id,
            quantity=Decimal('600'),
            date=date(2025, 1, 10),
            logged_by=engineer,
        )

        cement.refresh_from_db()
        assert cement.quantity == Decimal('-100')

    @pytest.mark.parametrize('quantity', [Decimal('0'), Decimal('-5')])
    def test_non_positive_quantity(self, cement, project, engineer, quantity):
        with pytest.raises(InvalidQuantityError):
            log_material_consumption(
                project_id=project.id,
                item_id=cement.id,
                quantity=quantity,
                date=date(2025, 1, 10),
                logged_by=engineer,
            )
        assert MaterialConsumption.objects.count() == 0

    def test_unknown_item(self, project, engineer):
        with pytest.raises(InventoryItemNotFoundError):
            log_material_consumption(
                project_id=project.id,
                item_id=uuid.uuid4(),
                quantity=Decimal('1'),
                date=date(2025, 1, 10),
                logged_by=engineer,
            )

    def test_history_date_range(self, cement, project, engineer):
        for day in (5, 15, 25):
            log_material_consumption(
                project_id=project.id,
                item_id=cement.id,
                quantity=Decimal('1'),
                date=date(2025, 1, day),
                logged_by=engineer,
            )

        history = get_consumption_history(
            project_id=project.id,
            start_date=date(2025, 1, 10),
            end_date=date(2025, 1, 25),
        )
        assert [c.date.day for c in history] == [25, 15]


@pytest.mark.django_db
class TestRestock:

    def test_adds_to_existing_item_by_name(self, cement, project):
        restock_item(project=project, name='CEMENT (opc)', quantity=Decimal('200'), unit='bags')

        cement.refresh_from_db()
        assert cement.quantity == Decimal('700')

    def test_creates_missing_item(self, project):
        item = restock_item(project=project, name='Diesel', quantity=Decimal('500'), unit='liters')

        assert item.quantity == Decimal('500')
        assert item.threshold == Decimal('0.00')
