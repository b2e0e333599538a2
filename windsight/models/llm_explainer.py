"""
WindSight - LLM Explanation Layer
Uses the Claude API to generate natural language explanations of:
  - A factor's actual distribution against its NBM reference
  - Fleet-level deviation status across all monitored units
"""

from typing import Optional

import anthropic

from windsight.data.factor_simulator import CorrelationFactor
from windsight.data.unit_registry import Unit
from windsight.models.distribution import DistributionSnapshot, deviation_severity


DEFAULT_MODEL = "claude-sonnet-4-5"


class FactorExplainer:
    """
    Natural language explainer for deviation scores and distributions.
    Integrates with Claude API for human-readable diagnostics.
    """

    def __init__(self, model: str = DEFAULT_MODEL, client: Optional[anthropic.Anthropic] = None):
        self.client = client if client is not None else anthropic.Anthropic()
        self.model = model

    def _build_factor_context(
        self,
        unit: Unit,
        factor: CorrelationFactor,
        snapshot: DistributionSnapshot,
    ) -> str:
        """Format unit, factor and distribution data into a structured context string."""
        recent = ", ".join(f"{p.value:.1f}" for p in factor.history[-5:])

        context = f"""
FACTOR DISTRIBUTION REPORT
==========================
Unit: {unit.name} (status: {unit.status.upper()}, yield {unit.current_yield:.1f}%)
Factor: {factor.name}
Current Value: {factor.value:.1f} {factor.unit}
Normal Range: {factor.normal_range.min:g} - {factor.normal_range.max:g} {factor.unit}
Deviation: {factor.deviation:+.1f} {factor.unit} (score {factor.deviation_score:.1f}%, {deviation_severity(factor.deviation_score).upper()})
Recent Readings: {recent or "none"}

Reference (NBM): mean {snapshot.reference_mean:.2f}, std dev {snapshot.reference_std_dev:.2f}
Actual:          mean {snapshot.actual_mean:.2f}, std dev {snapshot.actual_std_dev:.2f}
"""
        return context.strip()

    def _build_fleet_context(self, units: list[Unit], factor_sets: dict) -> str:
        lines = []
        for unit in units:
            factors = factor_sets.get(unit.id, [])
            worst = max(factors, key=lambda f: f.deviation_score, default=None)
            if worst is None:
                lines.append(f"  - {unit.name}: {unit.status.upper()} | yield {unit.current_yield:.1f}% | no readings")
                continue
            lines.append(
                f"  - {unit.name}: {unit.status.upper()} | yield {unit.current_yield:.1f}% | "
                f"worst factor {worst.name} {worst.value:.1f} {worst.unit} (score {worst.deviation_score:.1f}%)"
            )

        flagged = [u.name for u in units if u.status != "normal"]
        return (
            f"FLEET SUMMARY - {len(units)} Units\n"
            f"==============================\n"
            f"Flagged units: {', '.join(flagged) or 'none'}\n\n"
            + "\n".join(lines)
        )

    def _complete(self, prompt: str, max_tokens: int) -> str:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            messages=[{"role": "user", "content": prompt}],
        )
        return response.content[0].text

    def explain_distribution(
        self,
        unit: Unit,
        factor: CorrelationFactor,
        snapshot: DistributionSnapshot,
    ) -> str:
        """
        Explain how a factor's actual distribution departs from its reference.

        Returns:
            Human-readable diagnostic report
        """
        context = self._build_factor_context(unit, factor, snapshot)

        prompt = f"""You are an expert wind turbine performance engineer reviewing normal behaviour model (NBM) deviations.

{context}

Please provide:
1. **Assessment**: How far the actual distribution has drifted from the reference, and in which direction.
2. **Likely Causes**: Physical mechanisms that could produce this shift and spread.
3. **Recommended Actions**: Concrete operational or maintenance steps.

Keep your response concise, technical, and actionable."""

        return self._complete(prompt, max_tokens=500)

    def fleet_summary(self, units: list[Unit], factor_sets: dict) -> str:
        """
        Generate a fleet-level summary.

        Args:
            units: Units to cover, in display order
            factor_sets: unit id -> current factor set
        """
        prompt = f"""You are an operations manager for a wind farm. Here is the current status:

{self._build_fleet_context(units, factor_sets)}

Provide a concise executive briefing (4-6 sentences) covering overall fleet health,
which units need attention first, and the expected impact on yield."""

        return self._complete(prompt, max_tokens=400)
