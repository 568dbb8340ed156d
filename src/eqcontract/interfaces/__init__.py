"""Interfaces (engine boundary) for eqcontract.

Defines the ports the engine depends on, such as the construction strategy
contract. Implementations live in `eqcontract.adapters`.

Dependency rule: may import `eqcontract.domain` only.
"""
