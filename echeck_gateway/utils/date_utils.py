"""Date manipulation utilities"""

from datetime import date


def today_iso(today: date | None = None) -> str:
    """Issue date as stored on transactions: YYYY-MM-DD"""
    return (today or date.today()).isoformat()
