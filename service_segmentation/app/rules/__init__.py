"""
Rules package.

Defines the customer and rule models and the evaluator that decides
whether one customer satisfies an ordered rule chain.

Modules of interest:
- models: Customer, Rule, field/operator/connector enums, boundary payloads.
- engine: Left-to-right rule folding and per-field predicates.
- validation: Authoring checks for the campaign builder.
"""
