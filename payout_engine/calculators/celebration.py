"""
Celebration Policy

Decides whether a computed total earns the confetti.
"""

CELEBRATION_THRESHOLD = 2500


def should_celebrate(total: int) -> bool:
    """True when the total reaches $2,500, whatever the sale structure."""
    return total >= CELEBRATION_THRESHOLD
