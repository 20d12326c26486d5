from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class User:
    login: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[str] = None
    city: Optional[str] = None
    id: Optional[int] = None

    @classmethod
    def from_row(cls, row: dict) -> "User":
        """Build a User from a `users` row."""
        return cls(
            id=row["user_id"],
            login=row["login"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            birth_date=row["birth_date"],
            gender=row["gender"],
            city=row["city"],
        )


@dataclass
class Credential:
    """Login paired with the token issued at signup."""

    login: str
    token: str


@dataclass
class UserProfile:
    user: User
    hobbies: List[str] = field(default_factory=list)
