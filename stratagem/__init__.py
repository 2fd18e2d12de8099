"""
Stratagem - Declarative Strategy Game Definitions

Loads a turn-based strategy ruleset described as cross-referencing definition
files (game, rule, board, pieces, cards, dices) and provides:
- Validated, immutable definition models
- A generic, all-or-nothing loading pipeline
- A phase state machine driven by external result tokens
- Victory goal evaluation
"""

__version__ = "0.1.0"
