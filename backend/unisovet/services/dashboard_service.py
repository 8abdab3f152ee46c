"""
Read-only aggregation over clients, pets, appointments and inventory.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from unisovet.domain.entities import (
    UNKNOWN_LABEL,
    Appointment,
    Client,
    InventoryItem,
    Pet,
)


@dataclass(frozen=True)
class UpcomingAppointment:
    id: str
    date: str
    reason: str
    client_name: str
    pet_name: str

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "reason": self.reason,
            "clientName": self.client_name,
            "petName": self.pet_name,
        }


@dataclass(frozen=True)
class DashboardSummary:
    total_clients: int
    total_pets: int
    upcoming_count: int
    upcoming: List[UpcomingAppointment] = field(default_factory=list)
    low_stock_count: Optional[int] = None

    def to_dict(self) -> dict:
        data = {
            "totalClients": self.total_clients,
            "totalPets": self.total_pets,
            "upcomingAppointments": self.upcoming_count,
            "upcoming": [u.to_dict() for u in self.upcoming],
        }
        if self.low_stock_count is not None:
            data["lowStockItems"] = self.low_stock_count
        return data


def build_dashboard(
    clients: Iterable[Client],
    pets: Iterable[Pet],
    appointments: Iterable[Appointment],
    now: Optional[datetime] = None,
    inventory: Optional[Iterable[InventoryItem]] = None,
) -> DashboardSummary:
    """Summarize the collections as seen at ``now`` (defaults to current UTC time).

    Upcoming appointments are the scheduled ones dated after ``now``,
    soonest first. Names of deleted clients or pets show as "Desconhecido".
    """
    now = now or datetime.now(timezone.utc)
    clients = list(clients)
    pets = list(pets)

    client_names = {c.id: c.name for c in clients}
    pet_names = {p.id: p.name for p in pets}

    upcoming = sorted(
        (a for a in appointments if a.is_upcoming(now)),
        key=lambda a: a.scheduled_at,
    )

    low_stock_count = None
    if inventory is not None:
        low_stock_count = sum(1 for item in inventory if item.is_low_stock)

    return DashboardSummary(
        total_clients=len(clients),
        total_pets=len(pets),
        upcoming_count=len(upcoming),
        upcoming=[
            UpcomingAppointment(
                id=a.id,
                date=a.date,
                reason=a.reason,
                client_name=client_names.get(a.client_id, UNKNOWN_LABEL),
                pet_name=pet_names.get(a.pet_id, UNKNOWN_LABEL),
            )
            for a in upcoming
        ],
        low_stock_count=low_stock_count,
    )
