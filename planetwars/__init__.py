"""Planet Wars match engine.

Referees a turn-based multiplayer strategy contest between independently
running player programs that talk to the engine over their standard streams.
"""

__version__ = "0.1.0"
