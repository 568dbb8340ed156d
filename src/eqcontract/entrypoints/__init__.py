"""Entrypoints (inbound adapters) for eqcontract.

Expose the verifier to the outside world through the command line. Parse and
validate inputs, call `eqcontract.engine.verifier.verify`, and present results.

Dependency rule: may import `eqcontract.engine` and `eqcontract.config`; avoid
importing `eqcontract.adapters` directly.
"""
