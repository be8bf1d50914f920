from django.core.exceptions import ValidationError
from django.db.models import QuerySet
from django.db.models.signals import pre_save, pre_delete, post_save, post_delete
from django.dispatch import receiver

from performance_app.models import CriterionScore, EvalStatus, Evaluation, EvaluationApproval
from performance_app.services.evaluation_math import calculate_evaluation_score


def _evaluation_status(evaluation_id):
    return (Evaluation.objects
            .filter(pk=evaluation_id)
            .values_list("status", flat=True)
            .first())


def _deleting_evaluation(origin):
    # cascade from Evaluation.delete() or Evaluation.objects...delete()
    model = origin.model if isinstance(origin, QuerySet) else type(origin)
    return model is Evaluation


# ---------------- frozen after submission ------------------
@receiver(pre_save, sender=CriterionScore)
def _freeze_submitted_scores(sender, instance, **kwargs):
    status = _evaluation_status(instance.evaluation_id)
    if status and status != EvalStatus.DRAFT:
        raise ValidationError("Scores of a submitted evaluation cannot be changed.")


@receiver(pre_delete, sender=CriterionScore)
def _protect_submitted_scores(sender, instance, origin=None, **kwargs):
    if _deleting_evaluation(origin):
        return
    status = _evaluation_status(instance.evaluation_id)
    if status and status != EvalStatus.DRAFT:
        raise ValidationError("Scores of a submitted evaluation cannot be deleted.")


@receiver(pre_save, sender=EvaluationApproval)
def _freeze_approval(sender, instance, **kwargs):
    if instance.pk and not instance._state.adding:
        raise ValidationError("An approval cannot be changed once recorded.")


#-------------------------------------------
# Re-score whenever a criterion changes (create, update, delete)
@receiver([post_save, post_delete], sender=CriterionScore)
def _criterion_changed(sender, instance, origin=None, **kwargs):
    if _deleting_evaluation(origin):
        return
    evaluation = Evaluation.objects.filter(pk=instance.evaluation_id).first()
    if evaluation is not None:
        calculate_evaluation_score(evaluation, persist=True)
