from dataclasses import dataclass
from datetime import datetime


@dataclass
class User:
    """Domain model representing a registered user."""
    id: str
    name: str
    email: str
    password_hash: str
    created_at: datetime
