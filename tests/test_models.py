"""Tests for Elix record models.

Covers: camelCase aliases, extra-field passthrough, enums, id generation
and the work-order date fallback.
"""

from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from src.models.alert import AlertCreate, PredictiveAlert
from src.models.asset import Asset, AssetCreate, make_asset_id
from src.models.common import (
    PRIORITY_ORDINAL,
    AlertPriority,
    AlertStatus,
    AssetStatus,
    epoch_millis,
)
from src.models.user import DEFAULT_ROLE, SignupRequest, UserProfile
from src.models.work_order import WorkOrder, WorkOrderCreate


class TestAsset:
    def test_defaults_to_operational(self) -> None:
        asset = Asset(id="A-1", name="Pump")
        assert asset.status == AssetStatus.OPERATIONAL

    def test_legacy_healthy_status_accepted(self) -> None:
        asset = Asset.model_validate({"id": "HM-001", "status": "healthy"})
        assert asset.status == AssetStatus.HEALTHY

    def test_unknown_status_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Asset.model_validate({"id": "X", "status": "exploded"})

    def test_extra_fields_round_trip_through_record(self) -> None:
        asset = Asset.model_validate({
            "id": "HM-001",
            "name": "Excavator",
            "serialNumber": "CAT320-2024-001",
            "temperature": 31.5,
        })
        record = asset.to_record()
        assert record["serialNumber"] == "CAT320-2024-001"
        assert record["temperature"] == 31.5

    def test_to_record_omits_unset_optionals(self) -> None:
        record = Asset(id="A-1").to_record()
        assert "efficiency" not in record
        assert "location" not in record

    def test_efficiency_bounded(self) -> None:
        with pytest.raises(ValidationError):
            Asset(id="A-1", efficiency=120)

    def test_grouping_category_fallbacks(self) -> None:
        assert Asset(id="a", category="HVAC Systems", type="HVAC").grouping_category == "HVAC Systems"
        assert Asset(id="b", type="HVAC").grouping_category == "HVAC"
        assert Asset(id="c").grouping_category == "Unknown"

    def test_create_requires_name_and_type(self) -> None:
        with pytest.raises(ValidationError):
            AssetCreate.model_validate({"name": "Pump"})
        with pytest.raises(ValidationError):
            AssetCreate.model_validate({"type": "Pump"})


class TestMakeAssetId:
    def test_slugifies_type(self) -> None:
        assert make_asset_id("Heavy Machinery", 1700000000000) == "heavy-machinery-1700000000000"

    def test_collapses_whitespace(self) -> None:
        assert make_asset_id("  Power   Generation ", 5) == "power-generation-5"

    def test_epoch_millis(self) -> None:
        moment = datetime(2024, 1, 1, tzinfo=timezone.utc)
        assert epoch_millis(moment) == 1704067200000


class TestPredictiveAlert:
    def test_aliases_populate_fields(self) -> None:
        alert = PredictiveAlert.model_validate({
            "id": "PA-001", "assetId": "HM-002", "riskPercentage": 85, "priority": "high",
        })
        assert alert.asset_id == "HM-002"
        assert alert.risk_percentage == 85
        assert alert.status == AlertStatus.ACTIVE

    def test_record_uses_camel_case(self) -> None:
        record = PredictiveAlert(id="PA-1", asset_id="A", risk_percentage=10).to_record()
        assert record["assetId"] == "A"
        assert record["riskPercentage"] == 10
        assert "asset_id" not in record

    def test_addressed_status_valid(self) -> None:
        alert = PredictiveAlert.model_validate({"id": "PA-1", "status": "addressed"})
        assert alert.status == AlertStatus.ADDRESSED

    def test_risk_out_of_range_rejected(self) -> None:
        with pytest.raises(ValidationError):
            PredictiveAlert.model_validate({"id": "PA-1", "riskPercentage": 101})

    def test_priority_ordinal(self) -> None:
        assert PRIORITY_ORDINAL[AlertPriority.CRITICAL] > PRIORITY_ORDINAL[AlertPriority.HIGH]
        assert PRIORITY_ORDINAL[AlertPriority.MEDIUM] > PRIORITY_ORDINAL[AlertPriority.LOW]

    def test_is_active_critical(self) -> None:
        assert PredictiveAlert(id="a", priority="critical").is_active_critical
        assert not PredictiveAlert(id="b", priority="critical", status="resolved").is_active_critical
        assert not PredictiveAlert(id="c", priority="high").is_active_critical

    def test_create_requires_priority(self) -> None:
        with pytest.raises(ValidationError):
            AlertCreate.model_validate({"assetId": "A", "riskPercentage": 40})


class TestWorkOrder:
    def test_created_on_prefers_timestamp(self) -> None:
        wo = WorkOrder.model_validate({
            "id": "WO-1",
            "created_at": "2024-03-31T23:30:00+00:00",
            "createdDate": "2024-03-01",
        })
        assert wo.created_on() == date(2024, 3, 31)

    def test_created_on_falls_back_to_created_date(self) -> None:
        wo = WorkOrder.model_validate({"id": "WO-1", "createdDate": "2024-02-10"})
        assert wo.created_on() == date(2024, 2, 10)

    def test_created_on_none_without_dates(self) -> None:
        assert WorkOrder(id="WO-1").created_on() is None

    def test_terminal_statuses(self) -> None:
        assert WorkOrder(id="a", status="completed").is_terminal
        assert WorkOrder(id="b", status="cancelled").is_terminal
        assert not WorkOrder(id="c", status="in_progress").is_terminal

    def test_create_requires_asset(self) -> None:
        with pytest.raises(ValidationError):
            WorkOrderCreate.model_validate({"title": "Inspect"})

    def test_negative_cost_rejected(self) -> None:
        with pytest.raises(ValidationError):
            WorkOrderCreate.model_validate({"assetId": "A", "cost": -5})


class TestUser:
    def test_profile_default_role(self) -> None:
        assert UserProfile(id="u", email="a@b.c").role == DEFAULT_ROLE

    def test_signup_password_minimum(self) -> None:
        with pytest.raises(ValidationError):
            SignupRequest(email="a@b.c", password="123")


class TestUTCTimestamp:
    def test_naive_timestamp_read_as_utc(self) -> None:
        wo = WorkOrder.model_validate({"id": "WO-1", "created_at": "2024-05-01T10:00:00"})
        assert wo.created_at == datetime(2024, 5, 1, 10, tzinfo=timezone.utc)

    def test_offset_preserved(self) -> None:
        wo = WorkOrder.model_validate({"id": "WO-1", "created_at": "2024-05-01T10:00:00+03:00"})
        assert wo.created_at.utcoffset().total_seconds() == 3 * 3600
