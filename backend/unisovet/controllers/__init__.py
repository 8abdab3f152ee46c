# Controllers package initialization
# Importing the modules registers their blueprints' routes

from . import (
    appointment_controller,
    assistant_controller,
    client_controller,
    dashboard_controller,
    inventory_controller,
    pet_controller,
    supplier_controller,
)

__all__ = [
    "appointment_controller",
    "assistant_controller",
    "client_controller",
    "dashboard_controller",
    "inventory_controller",
    "pet_controller",
    "supplier_controller",
]
