from django.core.management.base import BaseCommand, CommandError

from common.exceptions import NotFound
from ratings.services.aggregation import recompute_store_rating
from stores.models import Store


class Command(BaseCommand):
    help = "Recompute average_rating/total_ratings for all stores or the given store ids."

    def add_arguments(self, parser):
        parser.add_argument("store_ids", nargs="*", type=int)

    def handle(self, *args, **options):
        store_ids = options["store_ids"] or list(Store.objects.values_list("id", flat=True))

        for store_id in store_ids:
            try:
                aggregate = recompute_store_rating(store_id)
            except NotFound:
                raise CommandError(f"Store {store_id} does not exist.")
            self.stdout.write(
                f"Store {store_id}: average={aggregate.average} count={aggregate.count}"
            )

        self.stdout.write(self.style.SUCCESS(f"Recomputed {len(store_ids)} store(s)."))
