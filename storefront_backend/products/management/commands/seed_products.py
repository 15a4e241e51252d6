from django.core.management.base import BaseCommand, CommandError

from products.services import ProductService
from remote.exceptions import RemoteStoreError
from remote.factory import build_remote_client


class Command(BaseCommand):
    help = "Seed a sample catalog into the remote products table (only when empty)"

    def add_arguments(self, parser):
        parser.add_argument(
            "--force",
            action="store_true",
            help="Insert the sample catalog even if products already exist",
        )

    def handle(self, *args, **options):
        remote = build_remote_client()
        if not remote.is_configured:
            raise CommandError("Remote store is not configured (REMOTE_STORE_URL / REMOTE_STORE_ANON_KEY).")

        service = ProductService(remote)

        if service.get_all_products() and not options["force"]:
            self.stdout.write(self.style.WARNING("Products already exist; nothing to seed."))
            return

        self.stdout.write(self.style.WARNING("Seeding products..."))

        # -------------------------------
        # PRODUCTS
        # -------------------------------
        products_data = [
            ("Wireless Headphones", "Noise-cancelling over-ear headphones", "Electronics", "149.99", ["AUDIO", "WIRELESS"], 25),
            ("Stainless Cookware Set", "10-piece pots and pans set", "Home & Kitchen", "85.00", ["KITCHEN"], 40),
            ("Organic Face Serum", "Vitamin C brightening serum", "Beauty", "24.50", ["SKINCARE"], 60),
            ("Denim Jacket", "Classic fit denim jacket", "Clothing", "59.00", ["OUTERWEAR"], 15),
            ("Smart Watch", "Fitness tracking with heart-rate monitor", "Electronics", "501.00", ["WEARABLE"], 10),
        ]

        created = 0
        for title, description, category, price, tags, stock in products_data:
            try:
                service.add_product(
                    {
                        "title": title,
                        "description": description,
                        "category": category,
                        "price": price,
                        "tags": tags,
                        "stock": stock,
                        "author": "Storefront",
                        "author_handle": "@storefront",
                    }
                )
            except RemoteStoreError as exc:
                raise CommandError(f"Failed to seed '{title}': {exc}") from exc
            created += 1

        self.stdout.write(self.style.SUCCESS(f"Seeded {created} products."))
