"""Eval loader (``evals/<name>/eval.yml``)."""
from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

from faber.core.errors import InvalidReferenceError
from faber.core.validation import ValidationIssue

from .base import BaseConceptLoader
from .models import (
    DEFAULT_SUCCESS_THRESHOLD,
    ConceptMetadata,
    ConceptReference,
    ConceptType,
    Eval,
    Metric,
    Scenario,
)


class EvalLoader(BaseConceptLoader[Eval]):
    concept_type = ConceptType.EVAL

    def _build(self, concept_dir: Path, metadata: Dict[str, Any]) -> Eval:
        targets = metadata.get("targets")
        scenarios = metadata.get("scenarios")
        metrics = metadata.get("metrics")
        platforms = metadata.get("platforms")
        threshold = metadata.get("success_threshold")
        return Eval(
            metadata=ConceptMetadata.from_dict(metadata),
            path=concept_dir,
            targets=[str(t) for t in targets] if isinstance(targets, list) else [],
            scenarios=[Scenario.from_dict(s) for s in scenarios] if isinstance(scenarios, list) else [],
            metrics=[Metric.from_dict(m) for m in metrics] if isinstance(metrics, list) else [],
            success_threshold=(
                threshold if isinstance(threshold, (int, float)) else DEFAULT_SUCCESS_THRESHOLD
            ),
            platforms=[str(p) for p in platforms] if isinstance(platforms, list) else [],
        )

    def validate_specific(self, concept: Eval) -> List[ValidationIssue]:
        issues: List[ValidationIssue] = []
        if not concept.scenarios:
            issues.append(self.error("scenarios", "Eval must have at least one scenario"))
        if not concept.targets:
            issues.append(self.error("targets", "Eval must target at least one concept"))

        for index, target in enumerate(concept.targets):
            try:
                ConceptReference.parse(target)
            except InvalidReferenceError as exc:
                issues.append(self.error(f"targets.{index}", str(exc)))
        return issues


__all__ = ["EvalLoader"]
