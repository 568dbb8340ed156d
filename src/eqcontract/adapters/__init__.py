"""Adapters for eqcontract.

Concrete implementations of the ports in `eqcontract.interfaces`, e.g. the
construction strategies used by the instance builder.

Dependency rule: may import `eqcontract.domain` and `eqcontract.interfaces`;
neither of those may import this package.
"""
