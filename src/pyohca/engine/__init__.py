"""Time-reconciliation and metrics engine.

Every component here is a pure function of its explicit inputs: no I/O,
no hidden state, nothing cached between evaluations.
"""
