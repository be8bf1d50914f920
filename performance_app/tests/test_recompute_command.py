import pytest
from decimal import Decimal
from io import StringIO
from django.core.management import call_command

from performance_app.models import Evaluation
from performance_app.tests.conftest import complete_draft


@pytest.mark.django_db
class TestRecomputeScoresCommand:
    def test_restores_drifted_scores(self, create_evaluation):
        good = create_evaluation(draft=complete_draft(score=4))
        drifted = create_evaluation(draft=complete_draft(score=5))
        Evaluation.objects.filter(pk=drifted.pk).update(overall_score=Decimal('1.0'))

        out = StringIO()
        call_command("recompute_scores", stdout=out)

        drifted.refresh_from_db()
        good.refresh_from_db()
        assert drifted.overall_score == Decimal('5.0')
        assert good.overall_score == Decimal('4.0')
        assert "Recomputed 2 evaluations, 1 updated." in out.getvalue()

    def test_dry_run_leaves_scores(self, create_evaluation):
        evaluation = create_evaluation(draft=complete_draft(score=5))
        Evaluation.objects.filter(pk=evaluation.pk).update(overall_score=Decimal('1.0'))

        out = StringIO()
        call_command("recompute_scores", "--dry-run", stdout=out)

        evaluation.refresh_from_db()
        assert evaluation.overall_score == Decimal('1.0')
        assert "1 would change" in out.getvalue()
