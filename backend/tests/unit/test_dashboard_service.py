"""
Unit tests for the dashboard aggregation.
"""

from datetime import timedelta

import pytest

from unisovet.db.seed import (
    APPOINTMENTS_KEY,
    CLIENTS_KEY,
    INVENTORY_KEY,
    PETS_KEY,
    build_seed_dataset,
)
from unisovet.domain.entities import (
    UNKNOWN_LABEL,
    Appointment,
    AppointmentStatus,
    to_iso_timestamp,
)
from unisovet.services.dashboard_service import build_dashboard

pytestmark = pytest.mark.services


@pytest.fixture
def seed(fixed_now):
    return build_seed_dataset(fixed_now)


def test_seed_summary(seed, fixed_now):
    summary = build_dashboard(
        seed[CLIENTS_KEY],
        seed[PETS_KEY],
        seed[APPOINTMENTS_KEY],
        now=fixed_now,
        inventory=seed[INVENTORY_KEY],
    )

    assert summary.total_clients == 2
    assert summary.total_pets == 3
    assert summary.upcoming_count == 1
    assert summary.low_stock_count == 2

    upcoming = summary.upcoming[0]
    assert upcoming.id == "a1"
    assert upcoming.client_name == "João da Silva"
    assert upcoming.pet_name == "Rex"


def test_to_dict_uses_display_keys(seed, fixed_now):
    data = build_dashboard(
        seed[CLIENTS_KEY], seed[PETS_KEY], seed[APPOINTMENTS_KEY], now=fixed_now
    ).to_dict()

    assert data["totalClients"] == 2
    assert data["upcomingAppointments"] == 1
    assert data["upcoming"][0]["petName"] == "Rex"
    assert "lowStockItems" not in data


def test_upcoming_are_sorted_soonest_first(seed, fixed_now):
    later = Appointment(
        id="a3",
        client_id="2",
        pet_id="p3",
        date=to_iso_timestamp(fixed_now + timedelta(days=1)),
        reason="Banho",
    )
    summary = build_dashboard(
        seed[CLIENTS_KEY],
        seed[PETS_KEY],
        list(seed[APPOINTMENTS_KEY]) + [later],
        now=fixed_now,
    )
    assert [u.id for u in summary.upcoming] == ["a3", "a1"]


def test_cancelled_and_past_appointments_are_not_upcoming(seed, fixed_now):
    appointments = [
        Appointment(
            id="x1",
            date=to_iso_timestamp(fixed_now + timedelta(days=3)),
            status=AppointmentStatus.CANCELLED,
        ),
        Appointment(id="x2", date=to_iso_timestamp(fixed_now)),
        Appointment(id="x3", date="data inválida"),
    ]
    summary = build_dashboard(
        seed[CLIENTS_KEY], seed[PETS_KEY], appointments, now=fixed_now
    )
    assert summary.upcoming_count == 0


def test_missing_references_show_unknown(fixed_now):
    orphan = Appointment(
        id="a9",
        client_id="gone",
        pet_id="gone",
        date=to_iso_timestamp(fixed_now + timedelta(hours=2)),
    )
    summary = build_dashboard([], [], [orphan], now=fixed_now)

    assert summary.upcoming[0].client_name == UNKNOWN_LABEL
    assert summary.upcoming[0].pet_name == UNKNOWN_LABEL
