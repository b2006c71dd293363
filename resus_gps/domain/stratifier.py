"""Partition a care plan into tiers and compute the caller's completion gates."""
import logging
from typing import AbstractSet, List

from pydantic import BaseModel

from .models import CarePlan, Intervention, InterventionTier, Priority, RequiredTest


logger = logging.getLogger(__name__)


class TieredIntervention(BaseModel):
    intervention: Intervention
    completed: bool = False
    actionable: bool = True


class StratifiedInterventions(BaseModel):
    immediate: List[TieredIntervention] = []
    urgent: List[TieredIntervention] = []
    confirmatory: List[TieredIntervention] = []
    stat_tests: List[RequiredTest] = []
    pending_stat_tests: List[str] = []
    all_immediate_complete: bool = True
    all_stat_tests_sent: bool = True


def stat_tests_for(plan: CarePlan) -> List[RequiredTest]:
    """
    Stat tests that gate the confirmatory tier.

    The plan's own stat work-up plus the stat tests attached to its
    confirmatory interventions, de-duplicated by name in first-seen order.
    """
    seen = set()
    tests: List[RequiredTest] = []
    candidates = list(plan.required_tests)
    for item in plan.interventions:
        if item.category == InterventionTier.CONFIRMATORY:
            candidates.extend(item.required_tests)
    for test in candidates:
        if test.priority == Priority.STAT and test.name not in seen:
            seen.add(test.name)
            tests.append(test)
    return tests


def stratify_interventions(
    plan: CarePlan,
    completed_interventions: AbstractSet[str] = frozenset(),
    completed_tests: AbstractSet[str] = frozenset(),
) -> StratifiedInterventions:
    """
    Split ``plan`` by authored tier and evaluate the two gates.

    ``all_immediate_complete`` is true when every immediate intervention id
    is in ``completed_interventions`` (vacuously true for none).
    ``all_stat_tests_sent`` is true when every stat test name is in
    ``completed_tests``. Confirmatory interventions stay non-actionable
    until the second gate opens. Nothing is retained between calls.
    """
    stat_tests = stat_tests_for(plan)
    pending = [t.name for t in stat_tests if t.name not in completed_tests]
    all_stat_sent = not pending

    tiers = {tier: [] for tier in InterventionTier}
    for item in plan.interventions:
        actionable = all_stat_sent if item.category == InterventionTier.CONFIRMATORY else True
        tiers[item.category].append(TieredIntervention(
            intervention=item,
            completed=item.id in completed_interventions,
            actionable=actionable,
        ))

    immediate = tiers[InterventionTier.IMMEDIATE]
    result = StratifiedInterventions(
        immediate=immediate,
        urgent=tiers[InterventionTier.URGENT],
        confirmatory=tiers[InterventionTier.CONFIRMATORY],
        stat_tests=stat_tests,
        pending_stat_tests=pending,
        all_immediate_complete=all(t.completed for t in immediate),
        all_stat_tests_sent=all_stat_sent,
    )
    logger.debug(
        "Stratified %s: immediate_complete=%s stat_tests_sent=%s",
        plan.condition_id, result.all_immediate_complete, result.all_stat_tests_sent,
    )
    return result
