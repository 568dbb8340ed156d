"""Verification engine for eqcontract.

Introspection, example value synthesis, instance construction, comparison
strategy resolution, the invariant battery and reporting. The entry point is
`eqcontract.engine.verifier.verify`.
"""
