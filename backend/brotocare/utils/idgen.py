"""ID Generation Utilities"""
import uuid
from datetime import datetime, timezone
from typing import Optional


def generate_id(prefix: Optional[str] = None) -> str:
    """
    Generate a unique ID with optional prefix
    
    Examples:
        >>> generate_id('CMP')
        'CMP-a1b2c3d4e5f6'
        >>> generate_id()
        'a1b2c3d4e5f6'
    """
    unique_part = uuid.uuid4().hex[:12]
    
    if prefix:
        return f"{prefix}-{unique_part}"
    return unique_part


def generate_complaint_id() -> str:
    """Generate complaint ID"""
    return generate_id("CMP")


def generate_timeline_entry_id() -> str:
    """Generate timeline entry ID"""
    return generate_id("TLN")


def generate_comment_id() -> str:
    """Generate comment ID"""
    return generate_id("CMT")


def generate_correlation_id() -> str:
    """
    Generate a correlation ID for request tracing
    
    Returns:
        Correlation ID string with timestamp prefix
    """
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
    unique_part = uuid.uuid4().hex[:8]
    return f"COR-{timestamp}-{unique_part}"
