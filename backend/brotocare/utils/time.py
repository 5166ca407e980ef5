"""Time Utilities - UTC timestamps"""
from datetime import datetime, timezone


def utc_now() -> datetime:
    """
    Get current UTC datetime
    
    Truncated to milliseconds, the precision BSON dates keep, so values
    read back from the store compare equal to the ones written.
    """
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=(now.microsecond // 1000) * 1000)
