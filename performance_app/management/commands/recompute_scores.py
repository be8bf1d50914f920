from django.core.management.base import BaseCommand

from performance_app.models import Evaluation
from performance_app.services.evaluation_math import calculate_evaluation_score


class Command(BaseCommand):
    help = "Recompute and persist the overall score of every stored evaluation."

    def add_arguments(self, parser):
        parser.add_argument(
            "--dry-run", action="store_true",
            help="Report the evaluations whose score would change without saving.",
        )

    def handle(self, *args, **options):
        dry_run = options["dry_run"]
        total = changed = 0
        for evaluation in Evaluation.objects.prefetch_related("criterion_scores").iterator(chunk_size=200):
            total += 1
            before = evaluation.overall_score
            after = calculate_evaluation_score(evaluation, persist=not dry_run)
            if after != before:
                changed += 1
                self.stdout.write(f"{evaluation.evaluation_id}: {before} -> {after}")

        verb = "would change" if dry_run else "updated"
        self.stdout.write(self.style.SUCCESS(f"Recomputed {total} evaluations, {changed} {verb}."))
