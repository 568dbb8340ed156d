"""Domain layer for eqcontract.

Value objects describing a verification run: introspected target types,
field descriptors, example value pairs, comparison strategies, violations
and the error hierarchy. Pure data and rules, no introspection machinery.

Dependency rule: do not import from `eqcontract.engine`, `eqcontract.adapters`
or `eqcontract.entrypoints`.
"""
