from decimal import Decimal

from django.core.management.base import BaseCommand
from django.db import transaction

from apps.menu.models import MenuItem, Topping
from apps.menu.rules import GENERAL_CATEGORY

MENU_ITEMS = [
    # name, category, price, allow_toppings, description
    ("Shrimp Salad", "Salad", "120.00", True, "Spicy Thai salad with grilled shrimp"),
    ("Papaya Salad", "Salad", "60.00", True, "Green papaya, lime, chili and peanuts"),
    ("Pad Thai", "Noodles", "80.00", True, "Rice noodles with tamarind sauce"),
    ("Boat Noodles", "Noodles", "70.00", True, "Rich dark broth with pork"),
    ("Fried Rice", "Rice", "65.00", True, "Jasmine rice wok-fried with egg"),
    ("Mango Sticky Rice", "Dessert", "90.00", False, "Sweet sticky rice with ripe mango"),
    ("Thai Iced Tea", "Drinks", "45.00", False, ""),
]

TOPPINGS = [
    # name, category, price
    ("Extra Shrimp", "Salad", "15.00"),
    ("Salted Egg", "Salad", "20.00"),
    ("Pork Meatballs", "Noodles", "15.00"),
    ("Extra Noodles", "Noodles", "10.00"),
    ("Fried Egg", GENERAL_CATEGORY, "10.00"),
    ("Extra Chili", GENERAL_CATEGORY, "0.00"),
]


class Command(BaseCommand):
    help = "Load a sample menu (items and toppings). Safe to run more than once."

    def add_arguments(self, parser):
        parser.add_argument("--reset", action="store_true", help="Delete the existing catalog first")

    @transaction.atomic
    def handle(self, *args, **options):
        if options.get("reset"):
            MenuItem.objects.all().delete()
            Topping.objects.all().delete()

        created = 0
        for name, category, price, allow_toppings, description in MENU_ITEMS:
            _, was_created = MenuItem.objects.update_or_create(
                name=name,
                category=category,
                defaults={
                    "price": Decimal(price),
                    "allow_toppings": allow_toppings,
                    "description": description,
                    "is_available": True,
                },
            )
            created += int(was_created)
        for name, category, price in TOPPINGS:
            _, was_created = Topping.objects.update_or_create(
                name=name,
                category=category,
                defaults={"price": Decimal(price), "is_available": True},
            )
            created += int(was_created)

        self.stdout.write(self.style.SUCCESS(f"Menu seeded ({created} new records)."))
