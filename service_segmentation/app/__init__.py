"""
Segmentation Service package.

Computes which customers belong to a campaign's target audience from a
user-authored chain of filter rules. It provides:

- app.rules: Rule model, evaluator, and authoring checks.
- app.audience: Audience selection, preview, snapshots, and aggregates.

Guidelines:
- Everything here is a pure function of its inputs; customers and rules
  are never mutated and nothing is cached between calls.
- Time is injected through a clock so evaluations are reproducible.
"""
