"""
Audience package.

- filter: Audience selection, size, and preview over a customer collection.
- snapshot: Frozen campaign audiences, delivery counts, rule descriptions.
- stats: Segment breakdown and headline aggregates.
"""
